"""Catalog Loader: reads the dilemma catalog JSON file and builds the core Catalog.

Invariants:
    - Empty path means the sample catalog bundled with the package
    - Unreadable or non-JSON files raise CatalogError (startup failure, not a silent empty game)
"""

import json
import logging
from pathlib import Path

from well_of_power.core.catalog import Catalog, build_catalog
from well_of_power.core.errors import CatalogError

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = Path(__file__).resolve().parent.parent / "data" / "dilemmas.json"


def load_catalog(path: str | Path | None = None) -> Catalog:
    """Load and normalize the catalog at path (bundled sample when empty)."""
    catalog_path = Path(path) if path else BUNDLED_CATALOG
    try:
        raw = json.loads(catalog_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise CatalogError(f"cannot read {catalog_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"{catalog_path} is not valid JSON: {e}") from e

    catalog = build_catalog(raw)
    logger.info(f"Loaded {len(catalog)} dilemmas from {catalog_path.name}")
    return catalog

"""Root conftest: shared catalogs, phase bands and machines for all test layers.

Invariants:
    - Tests never touch the real save location: storage defaults to memory
    - scenario_catalog has 3 dilemmas; bands [0,1)=intern, [1,3)=junior
"""

import os

import pytest

os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

from well_of_power.core.catalog import build_catalog  # noqa: E402
from well_of_power.core.game_machine import ProgressionMachine  # noqa: E402
from well_of_power.core.phase_resolver import PhaseBands  # noqa: E402


def _dilemma(dilemma_id: int, correct_first: bool = True, options: int = 2) -> dict:
    """Dilemma record where option 0 is correct iff correct_first."""
    return {
        "id": dilemma_id,
        "situation": {"es": f"Situación {dilemma_id}", "en": f"Situation {dilemma_id}"},
        "options": [
            {
                "text": {"es": f"Opción {dilemma_id}.{i}", "en": f"Option {dilemma_id}.{i}"},
                "is_correct": (i == 0) == correct_first,
                "narrative_response": f"Response {dilemma_id}.{i}",
            }
            for i in range(options)
        ],
    }


@pytest.fixture
def make_catalog():
    """Factory: catalog of n dilemmas with ids 1..n, option 0 correct."""
    def _make(n: int):
        return build_catalog([_dilemma(i + 1) for i in range(n)])
    return _make


@pytest.fixture
def scenario_catalog(make_catalog):
    return make_catalog(3)


@pytest.fixture
def scenario_bands():
    return PhaseBands.from_starts({"intern": 0, "junior": 1})


@pytest.fixture
def machine(scenario_catalog, scenario_bands):
    return ProgressionMachine(scenario_catalog, scenario_bands)

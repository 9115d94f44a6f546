"""Save Slot ORM: one row per named save slot holding an opaque JSON blob.

Invariants:
    - name is the primary key (one row per slot)
    - payload is the exact bytes written by the persistence adapter, decoded as UTF-8
    - updated_at refreshed on every write

Design Decisions:
    - Text column, not JSON: the adapter owns encoding, and byte-identical
      rewrites must survive a round-trip through the database
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from well_of_power.db.base import Base


class SaveSlot(Base):
    """A persisted save blob."""
    __tablename__ = "save_slots"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    payload: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

"""ORM Models: SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - Imported here so Base.metadata is complete for create_all and Alembic
"""

from well_of_power.models.save_slot import SaveSlot  # noqa: F401

"""Save Record Schema: strict validation of a persisted save blob.

Invariants:
    - Unknown keys, wrong types and negative counters are rejected
    - stats.correct_count + stats.incorrect_count must equal position
    - version must be a version this build knows how to read

Design Decisions:
    - strict=True: "3" is not a position and 1 is not a boolean; a blob that
      needs coercion is treated as schema-mismatched
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from well_of_power.core.domain_types import SAVE_RECORD_VERSION


class SaveStatsPayload(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    correct_count: int = Field(ge=0)
    incorrect_count: int = Field(ge=0)


class SaveRecordPayload(BaseModel):
    """Shape of the single persisted save record."""
    model_config = ConfigDict(extra="forbid", strict=True)

    version: Literal[SAVE_RECORD_VERSION] = SAVE_RECORD_VERSION
    position: int = Field(ge=0)
    stats: SaveStatsPayload
    language: Literal["es", "en"]
    muted: bool

    @model_validator(mode="after")
    def validate_answered_matches_position(self):
        answered = self.stats.correct_count + self.stats.incorrect_count
        if answered != self.position:
            raise ValueError(
                f"stats record {answered} answers but position is {self.position}",
            )
        return self

"""Phase Resolver: maps a catalog position to a career phase.

Invariants:
    - resolve() is PURE, total and deterministic
    - Bands start at 0, starts strictly increase, phases strictly ascend
    - Band i covers [start_i, start_{i+1}); the last band runs to the end of the catalog
    - position >= catalog_length maps to the terminal (last configured) phase
    - Phase never depends on correctness, only on how far the player got

Design Decisions:
    - Boundaries are configuration (PhaseBands), never derived from stats
    - No auto-rebalancing when the catalog changes size: bands are re-specified instead
"""

from bisect import bisect_right
from collections.abc import Mapping
from dataclasses import dataclass

from well_of_power.core.domain_types import Phase
from well_of_power.core.errors import InvalidPhaseBandsError


@dataclass(frozen=True)
class PhaseBand:
    """A phase and the first catalog position it covers."""
    phase: Phase
    start: int


@dataclass(frozen=True)
class PhaseBands:
    """Validated, ascending partition of catalog positions into phases."""
    bands: tuple[PhaseBand, ...]

    def __post_init__(self):
        if not self.bands:
            raise InvalidPhaseBandsError("at least one band is required")
        if self.bands[0].start != 0:
            raise InvalidPhaseBandsError(
                f"first band must start at 0, starts at {self.bands[0].start}",
            )
        for previous, current in zip(self.bands, self.bands[1:]):
            if current.start <= previous.start:
                raise InvalidPhaseBandsError(
                    f"band starts must strictly increase ({previous.start} -> {current.start})",
                )
            if current.phase.rank <= previous.phase.rank:
                raise InvalidPhaseBandsError(
                    f"phases must ascend ({previous.phase.value} -> {current.phase.value})",
                )

    @property
    def starts(self) -> tuple[int, ...]:
        return tuple(band.start for band in self.bands)

    @property
    def terminal_phase(self) -> Phase:
        return self.bands[-1].phase

    @classmethod
    def from_starts(cls, starts: Mapping[str | Phase, int]) -> "PhaseBands":
        """Build bands from a {phase: first_position} mapping (settings shape)."""
        bands = []
        for name, start in starts.items():
            try:
                phase = Phase(name)
            except ValueError:
                raise InvalidPhaseBandsError(f"unknown phase '{name}'") from None
            if not isinstance(start, int) or isinstance(start, bool):
                raise InvalidPhaseBandsError(f"start of '{phase.value}' must be an integer")
            bands.append(PhaseBand(phase=phase, start=start))
        bands.sort(key=lambda band: band.start)
        return cls(tuple(bands))


def resolve(position: int, catalog_length: int, bands: PhaseBands) -> Phase:
    """Career phase for a position in a catalog of catalog_length dilemmas."""
    if position >= catalog_length:
        return bands.terminal_phase
    if position < 0:
        return bands.bands[0].phase
    index = bisect_right(bands.starts, position) - 1
    return bands.bands[index].phase


def describe_bands(bands: PhaseBands, catalog_length: int) -> list[dict]:
    """Render bands as [start, end) ranges clipped to the catalog, for display."""
    rendered = []
    for i, band in enumerate(bands.bands):
        end = bands.bands[i + 1].start if i + 1 < len(bands.bands) else catalog_length
        rendered.append({
            "phase": band.phase.value,
            "start": band.start,
            "end": min(end, catalog_length),
            "reachable": band.start < catalog_length,
        })
    return rendered

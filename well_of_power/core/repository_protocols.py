"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Save slot IO accessed through the SlotStore Protocol
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the progression machine that
      consumes their results is never async; the shell orchestrates the awaits
    - Opaque bytes: stores know nothing about the record shape
"""

from typing import Protocol


class SlotStore(Protocol):
    """Contract for named-blob persistence. Implemented by infrastructure/slot_stores.py."""
    async def read(self, name: str) -> bytes | None: ...
    async def write(self, name: str, blob: bytes) -> None: ...
    async def delete(self, name: str) -> None: ...
    async def ping(self) -> bool: ...

"""Infrastructure Layer: storage backends, content loading and cross-cutting concerns.

Invariants:
    - Infrastructure never contains game rules; it moves bytes and maps failures
    - All storage failures surface as typed errors from core/errors.py

Design Decisions:
    - Small adapters over raw clients (ADR: single responsibility)
"""

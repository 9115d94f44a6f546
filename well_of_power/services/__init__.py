"""Services Layer: orchestration between the pure core and IO adapters.

Invariants:
    - Services own the awaits; core functions they call stay synchronous
"""

"""Pool monitor — pure read-only projection over a reward pool.

Modules
-------
projection
    ``PoolProjection`` reads a pool and produces ``PoolSnapshot`` Pydantic
    models — a frozen, point-in-time view of stakes and accruals.
renderer
    ``PoolRenderer`` turns snapshots and journal listings into Rich
    renderables for terminal display.
"""

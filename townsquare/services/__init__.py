"""Services Layer — imperative shell around the core rules.

Invariants:
    - Services own the AsyncSession interaction (execute/commit/rollback)
    - Collaborators (allocator, resolver) injected through constructors

Design Decisions:
    - One service class per store concern; routes construct them via api/dependencies.py
"""

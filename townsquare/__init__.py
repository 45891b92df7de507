"""Townsquare — identity-scoped content and social graph store.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

"""Boundary Protocols — contracts between core rules and the persistence shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Implementations provided by services/ via constructor injection

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass lightweight fakes
    - Async in Protocol: implementations do IO
"""

from typing import Protocol

from townsquare.core.domain_types import IdentityKey


class AuthorResolver(Protocol):
    """Maps a display name to a stable identity key. Pure read."""
    async def resolve(self, display_name: str) -> IdentityKey | None: ...


class SequenceSource(Protocol):
    """Atomic, named, monotonic counters."""
    async def allocate(self, name: str) -> int: ...

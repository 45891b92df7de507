"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Article is the aggregate root for comments

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from townsquare.models.identity import Identity  # noqa: F401
from townsquare.models.profile_detail import ProfileDetail  # noqa: F401
from townsquare.models.sequence_counter import SequenceCounter  # noqa: F401
from townsquare.models.article import Article  # noqa: F401
from townsquare.models.comment import Comment  # noqa: F401
from townsquare.models.follow import Follow  # noqa: F401

"""Initial schema — identities, profiles, counters, articles, comments, follows.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "identities",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("display_name", sa.String(100), nullable=False),
        sa.Column("credential_hash", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_identities_display_name", "identities", ["display_name"], unique=True)

    op.create_table(
        "profile_details",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("identity_id", UUID(as_uuid=True), sa.ForeignKey("identities.id"), nullable=False, unique=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("dob", sa.Date, nullable=False),
        sa.Column("phone", sa.String(15), nullable=False),
        sa.Column("zipcode", sa.String(10), nullable=False),
        sa.Column("headline", sa.String(500), nullable=False),
        sa.Column("avatar", sa.String(1000), nullable=False),
    )

    op.create_table(
        "sequence_counters",
        sa.Column("name", sa.String(50), primary_key=True),
        sa.Column("value", sa.Integer, nullable=False, server_default="0"),
    )

    op.create_table(
        "articles",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("sequence", sa.Integer, nullable=False),
        sa.Column("author_id", UUID(as_uuid=True), sa.ForeignKey("identities.id"), nullable=False),
        sa.Column("text", sa.Text, nullable=False),
        sa.Column("image", sa.String(1000), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_articles_sequence", "articles", ["sequence"], unique=True)
    op.create_index("ix_articles_author_id", "articles", ["author_id"])

    op.create_table(
        "comments",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("article_id", UUID(as_uuid=True), sa.ForeignKey("articles.id"), nullable=False),
        sa.Column("sequence", sa.Integer, nullable=False),
        sa.Column("author_id", UUID(as_uuid=True), sa.ForeignKey("identities.id"), nullable=False),
        sa.Column("body", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("article_id", "sequence", name="uq_comments_article_sequence"),
    )

    op.create_table(
        "follows",
        sa.Column("follower_id", UUID(as_uuid=True), sa.ForeignKey("identities.id"), primary_key=True),
        sa.Column("followee_id", UUID(as_uuid=True), sa.ForeignKey("identities.id"), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("follower_id <> followee_id", name="ck_follows_not_self"),
    )


def downgrade() -> None:
    op.drop_table("follows")
    op.drop_table("comments")
    op.drop_index("ix_articles_author_id", table_name="articles")
    op.drop_index("ix_articles_sequence", table_name="articles")
    op.drop_table("articles")
    op.drop_table("sequence_counters")
    op.drop_table("profile_details")
    op.drop_index("ix_identities_display_name", table_name="identities")
    op.drop_table("identities")

"""Article Schemas — create/update payloads and article/comment records.

Invariants:
    - ArticleUpdate.comment_id is None (edit text), "new" (append), or a comment sequence
    - The legacy wire value -1 is normalized to "new"
    - Records expose author display names; keys only where ownership matters to clients
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from townsquare.core.domain_types import LEGACY_NEW_COMMENT, NEW_COMMENT


class ArticleCreate(BaseModel):
    """New article — text required, image is an opaque reference."""
    text: str = Field(min_length=1, max_length=10_000)
    image: str | None = Field(None, max_length=1000)


class ArticleUpdate(BaseModel):
    """Edit of an article's text, or append/edit of one of its comments."""
    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(min_length=1, max_length=10_000)
    comment_id: StrictInt | Literal["new"] | None = Field(None, alias="commentId")

    @field_validator("comment_id")
    @classmethod
    def normalize_legacy_new(cls, v):
        if v == LEGACY_NEW_COMMENT:
            return NEW_COMMENT
        return v


class CommentResponse(BaseModel):
    id: int
    author: str
    author_key: UUID
    body: str
    date: datetime

    @classmethod
    def from_model(cls, comment) -> "CommentResponse":
        return cls(
            id=comment.sequence,
            author=comment.author.display_name,
            author_key=comment.author_id,
            body=comment.body,
            date=comment.created_at,
        )


class ArticleResponse(BaseModel):
    id: int
    author: str
    text: str
    image: str | None = None
    date: datetime
    comments: list[CommentResponse] = []

    @classmethod
    def from_model(cls, article) -> "ArticleResponse":
        return cls(
            id=article.sequence,
            author=article.author.display_name,
            text=article.text,
            image=article.image,
            date=article.created_at,
            comments=[CommentResponse.from_model(c) for c in article.comments],
        )


class ArticleListResponse(BaseModel):
    articles: list[ArticleResponse]

"""Content Store — articles and their nested, per-article numbered comments.

Invariants:
    - Article sequences come from the allocator (counter "article") in the same transaction
    - Only the article's author may edit its text or touch its comments
    - Comment sequence = max(existing in article) + 1, computed by the store inside the INSERT
    - Each edit is one transaction: no partial application

Design Decisions:
    - Comment append locks the article row (FOR UPDATE; no-op on SQLite, where the
      write lock already serializes writers) and relies on the (article_id, sequence)
      unique constraint as the last line of defence; an IntegrityError rolls back and
      retries up to max_comment_attempts, then raises ConflictError
    - Reads use populate_existing so eager-loaded comments/author reflect the latest commit
"""

import logging
from uuid import UUID

from sqlalchemy import func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from townsquare.core.domain_types import (
    ArticleSequence, CommentRef, CounterName, IdentityKey, NEW_COMMENT,
)
from townsquare.core.enforce_content import (
    check_article_owner, check_comment_owner, normalize_comment_ref, require_text,
    sequence_in_range,
)
from townsquare.core.errors import ConflictError, ErrorContext, NotFoundError
from townsquare.core.repository_protocols import AuthorResolver, SequenceSource
from townsquare.models.article import Article
from townsquare.models.comment import Comment

logger = logging.getLogger(__name__)

DEFAULT_COMMENT_ATTEMPTS = 5


class ContentStore:
    """Article/comment persistence with authorship enforcement."""

    def __init__(
        self,
        db: AsyncSession,
        allocator: SequenceSource,
        resolver: AuthorResolver,
        max_comment_attempts: int = DEFAULT_COMMENT_ATTEMPTS,
    ):
        self.db = db
        self.allocator = allocator
        self.resolver = resolver
        self.max_comment_attempts = max_comment_attempts

    async def create_article(
        self, author: str, text: str, image: str | None = None,
    ) -> Article:
        """Create an article for `author` (display name) with a fresh sequence."""
        require_text(text)
        author_key = await self.resolver.resolve(author)
        if author_key is None:
            raise NotFoundError("Identity", author)

        sequence = await self.allocator.allocate(CounterName.ARTICLE.value)
        article = Article(
            sequence=sequence, author_id=author_key, text=text, image=image,
        )
        self.db.add(article)
        await self.db.commit()
        logger.info(
            "Article created",
            extra={"article_sequence": sequence, "identity_key": author_key},
        )
        return await self._get_article_or_404(ArticleSequence(sequence))

    async def list_articles(
        self,
        sequence: ArticleSequence | None = None,
        author: str | None = None,
    ) -> list[Article]:
        """Exact sequence lookup, author lookup, or everything (by sequence)."""
        query = select(Article).order_by(Article.sequence)
        if sequence is not None:
            if not sequence_in_range(sequence):
                return []
            query = query.where(Article.sequence == sequence)
        elif author is not None:
            author_key = await self.resolver.resolve(author)
            if author_key is None:
                return []
            query = query.where(Article.author_id == author_key)
        result = await self.db.execute(
            query.execution_options(populate_existing=True),
        )
        return list(result.scalars().all())

    async def edit_article_or_comment(
        self,
        article_sequence: ArticleSequence,
        editor_key: IdentityKey,
        comment_ref: CommentRef | int | str = None,
        new_text: str | None = None,
    ) -> Article:
        """Replace article text, append a comment, or replace a comment body."""
        require_text(new_text)
        ref = normalize_comment_ref(comment_ref)
        article = await self._get_article_or_404(article_sequence)
        check_article_owner(article.author_id, editor_key, article_sequence)

        if ref is None:
            article.text = new_text
            await self.db.commit()
        elif ref == NEW_COMMENT:
            await self._append_comment(article.id, article_sequence, editor_key, new_text)
        else:
            comment = next(
                (c for c in article.comments if c.sequence == ref), None,
            )
            if comment is None:
                raise NotFoundError("Comment", f"{article_sequence}/{ref}")
            check_comment_owner(comment.author_id, editor_key, article_sequence, ref)
            comment.body = new_text
            await self.db.commit()

        return await self._get_article_or_404(article_sequence)

    async def _append_comment(
        self,
        article_id: UUID,
        article_sequence: ArticleSequence,
        author_key: IdentityKey,
        body: str,
    ) -> None:
        for attempt in range(1, self.max_comment_attempts + 1):
            try:
                await self._insert_comment(article_id, author_key, body)
                await self.db.commit()
                return
            except IntegrityError:
                await self.db.rollback()
                logger.warning(
                    "Comment sequence conflict, retrying",
                    extra={"article_sequence": article_sequence, "attempt": attempt},
                )
        raise ConflictError(
            f"Could not append comment to article {article_sequence} "
            f"after {self.max_comment_attempts} attempts",
            ErrorContext(
                identity_key=str(author_key),
                article_sequence=article_sequence,
                attempt=self.max_comment_attempts,
            ),
        )

    async def _insert_comment(
        self, article_id: UUID, author_key: IdentityKey, body: str,
    ) -> None:
        await self.db.execute(
            select(Article.id).where(Article.id == article_id).with_for_update(),
        )
        next_sequence = (
            select(func.coalesce(func.max(Comment.sequence), 0) + 1)
            .where(Comment.article_id == article_id)
            .scalar_subquery()
        )
        await self.db.execute(
            insert(Comment).values(
                article_id=article_id,
                author_id=author_key,
                body=body,
                sequence=next_sequence,
            ),
        )

    async def _get_article_or_404(self, sequence: ArticleSequence) -> Article:
        if not sequence_in_range(sequence):
            raise NotFoundError("Article", str(sequence))
        result = await self.db.execute(
            select(Article)
            .where(Article.sequence == sequence)
            .execution_options(populate_existing=True),
        )
        article = result.scalar_one_or_none()
        if article is None:
            raise NotFoundError("Article", str(sequence))
        return article

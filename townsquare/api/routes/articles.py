"""Article Routes — create, list and edit articles and their comments.

Invariants:
    - Author of a new article is always the authenticated caller
    - GET /articles/{filter}: integer → sequence lookup, anything else → author lookup
    - PUT body commentId: absent → edit text, "new"/-1 → append comment, n → edit comment n
"""

from fastapi import APIRouter, Depends, status

from townsquare.api.dependencies import get_content_store, get_current_identity
from townsquare.core.domain_types import ArticleSequence, CurrentIdentity
from townsquare.core.enforce_content import parse_article_filter
from townsquare.schemas.article import (
    ArticleCreate, ArticleListResponse, ArticleResponse, ArticleUpdate,
)
from townsquare.services.content_store import ContentStore

router = APIRouter(prefix="/api/v1", tags=["articles"])


def _envelope(articles) -> ArticleListResponse:
    return ArticleListResponse(
        articles=[ArticleResponse.from_model(a) for a in articles],
    )


@router.post(
    "/article", response_model=ArticleListResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_article(
    body: ArticleCreate,
    identity: CurrentIdentity = Depends(get_current_identity),
    store: ContentStore = Depends(get_content_store),
):
    """Publish a new article as the caller."""
    article = await store.create_article(identity.display_name, body.text, body.image)
    return _envelope([article])


@router.get("/articles", response_model=ArticleListResponse)
async def list_all_articles(
    identity: CurrentIdentity = Depends(get_current_identity),
    store: ContentStore = Depends(get_content_store),
):
    return _envelope(await store.list_articles())


@router.get("/articles/{article_filter}", response_model=ArticleListResponse)
async def list_articles(
    article_filter: str,
    identity: CurrentIdentity = Depends(get_current_identity),
    store: ContentStore = Depends(get_content_store),
):
    """Articles by sequence (numeric filter) or by author display name."""
    sequence, author = parse_article_filter(article_filter)
    return _envelope(await store.list_articles(sequence=sequence, author=author))


@router.put("/articles/{sequence}", response_model=ArticleListResponse)
async def edit_article(
    sequence: int,
    body: ArticleUpdate,
    identity: CurrentIdentity = Depends(get_current_identity),
    store: ContentStore = Depends(get_content_store),
):
    """Edit article text, or append/edit a comment."""
    article = await store.edit_article_or_comment(
        ArticleSequence(sequence), identity.key, body.comment_id, body.text,
    )
    return _envelope([article])

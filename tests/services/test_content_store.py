"""Content Store — article creation, lookup, authorship-checked edits, comment numbering.

Tests cover:
    - create_article assigns consecutive global sequences and rejects empty text
    - list_articles by sequence, by author, and unfiltered
    - edits by a non-author are forbidden and leave stored text unchanged
    - comment sequences are per-article, max+1, unique under concurrent appends
    - comment append retries on conflict and surfaces ConflictError when exhausted
"""

import asyncio

import pytest
from sqlalchemy.exc import IntegrityError

from townsquare.core.errors import (
    ConflictError, ForbiddenError, NotFoundError, ValidationError,
)
from tests.services.helpers import make_content_store, register_identity


# ─── create / list ───────────────────────────────────────────────

async def test_create_then_lookup_by_sequence(test_db, content_store):
    await register_identity(test_db, "alice", "3")
    created = await content_store.create_article("alice", "hi")

    found = await content_store.list_articles(sequence=created.sequence)

    assert len(found) == 1
    assert found[0].text == "hi"
    assert found[0].author.display_name == "alice"
    assert found[0].comments == []


async def test_article_sequences_are_consecutive(content_store, bob, carol):
    first = await content_store.create_article("bob", "one")
    second = await content_store.create_article("carol", "two")
    third = await content_store.create_article("bob", "three", image="img/3.png")
    assert [first.sequence, second.sequence, third.sequence] == [1, 2, 3]
    assert third.image == "img/3.png"


async def test_create_article_rejects_empty_text(content_store, bob):
    with pytest.raises(ValidationError):
        await content_store.create_article("bob", "")
    # no sequence consumed by the failed creation
    article = await content_store.create_article("bob", "ok")
    assert article.sequence == 1


async def test_create_article_unknown_author(content_store):
    with pytest.raises(NotFoundError):
        await content_store.create_article("nobody", "text")


async def test_list_articles_by_author_and_all(content_store, bob, carol):
    await content_store.create_article("bob", "b1")
    await content_store.create_article("carol", "c1")
    await content_store.create_article("bob", "b2")

    by_bob = await content_store.list_articles(author="bob")
    everything = await content_store.list_articles()

    assert [a.text for a in by_bob] == ["b1", "b2"]
    assert [a.sequence for a in everything] == [1, 2, 3]


async def test_list_articles_misses_return_empty(content_store, bob):
    await content_store.create_article("bob", "b1")
    assert await content_store.list_articles(sequence=99) == []
    assert await content_store.list_articles(author="ghost") == []


# ─── edit ────────────────────────────────────────────────────────

async def test_author_edits_article_text(content_store, bob):
    article = await content_store.create_article("bob", "draft")
    edited = await content_store.edit_article_or_comment(
        article.sequence, bob.id, None, "final",
    )
    assert edited.text == "final"


async def test_edit_unknown_article_not_found(content_store, bob):
    with pytest.raises(NotFoundError):
        await content_store.edit_article_or_comment(42, bob.id, None, "x")


async def test_edit_requires_text(content_store, bob):
    article = await content_store.create_article("bob", "draft")
    with pytest.raises(ValidationError):
        await content_store.edit_article_or_comment(article.sequence, bob.id, None, "")


async def test_bob_and_carol_scenario(content_store, bob, carol):
    article = await content_store.create_article("bob", "first post")
    assert article.sequence == 1

    with_comment = await content_store.edit_article_or_comment(1, bob.id, "new", "nice")
    assert [c.sequence for c in with_comment.comments] == [1]
    assert with_comment.comments[0].body == "nice"
    assert with_comment.comments[0].author_id == bob.id

    with pytest.raises(ForbiddenError):
        await content_store.edit_article_or_comment(1, carol.id, None, "hacked")

    stored = await content_store.list_articles(sequence=1)
    assert stored[0].text == "first post"


async def test_non_author_cannot_append_comment(content_store, bob, carol):
    await content_store.create_article("bob", "first post")
    with pytest.raises(ForbiddenError):
        await content_store.edit_article_or_comment(1, carol.id, "new", "hello")
    stored = await content_store.list_articles(sequence=1)
    assert stored[0].comments == []


async def test_comment_sequences_are_per_article(content_store, bob):
    await content_store.create_article("bob", "a")
    await content_store.create_article("bob", "b")

    for body in ("one", "two"):
        await content_store.edit_article_or_comment(1, bob.id, "new", body)
    second = await content_store.edit_article_or_comment(2, bob.id, -1, "only")
    first = (await content_store.list_articles(sequence=1))[0]

    assert [c.sequence for c in first.comments] == [1, 2]
    assert [c.sequence for c in second.comments] == [1]


async def test_edit_existing_comment(content_store, bob):
    await content_store.create_article("bob", "a")
    await content_store.edit_article_or_comment(1, bob.id, "new", "typo")
    await content_store.edit_article_or_comment(1, bob.id, "new", "second")

    edited = await content_store.edit_article_or_comment(1, bob.id, 1, "fixed")

    assert [(c.sequence, c.body) for c in edited.comments] == [(1, "fixed"), (2, "second")]


async def test_edit_missing_comment_not_found(content_store, bob):
    await content_store.create_article("bob", "a")
    with pytest.raises(NotFoundError):
        await content_store.edit_article_or_comment(1, bob.id, 5, "x")


async def test_invalid_comment_ref_rejected(content_store, bob):
    await content_store.create_article("bob", "a")
    with pytest.raises(ValidationError):
        await content_store.edit_article_or_comment(1, bob.id, "latest", "x")


# ─── concurrency ─────────────────────────────────────────────────

async def test_concurrent_comment_appends_get_unique_sequences(
    test_session_factory, content_store, bob,
):
    await content_store.create_article("bob", "busy thread")

    async def append(i: int):
        async with test_session_factory() as session:
            store = make_content_store(session, max_comment_attempts=10)
            await store.edit_article_or_comment(1, bob.id, "new", f"comment {i}")

    await asyncio.gather(*(append(i) for i in range(8)))

    article = (await content_store.list_articles(sequence=1))[0]
    sequences = [c.sequence for c in article.comments]
    assert sorted(sequences) == list(range(1, 9))


async def test_concurrent_article_creation_is_gap_free(test_session_factory, bob):
    async def create(i: int) -> int:
        async with test_session_factory() as session:
            article = await make_content_store(session).create_article("bob", f"post {i}")
            return article.sequence

    sequences = await asyncio.gather(*(create(i) for i in range(6)))
    assert sorted(sequences) == [1, 2, 3, 4, 5, 6]


async def test_comment_append_retries_after_conflict(test_db, bob, monkeypatch):
    store = make_content_store(test_db, max_comment_attempts=3)
    await store.create_article("bob", "a")

    original = store._insert_comment
    calls = {"n": 0}

    async def flaky_insert(*args):
        calls["n"] += 1
        if calls["n"] == 1:
            raise IntegrityError("INSERT INTO comments", {}, Exception("duplicate"))
        await original(*args)

    monkeypatch.setattr(store, "_insert_comment", flaky_insert)

    article = await store.edit_article_or_comment(1, bob.id, "new", "eventually")

    assert calls["n"] == 2
    assert [c.sequence for c in article.comments] == [1]


async def test_comment_append_gives_up_with_conflict_error(test_db, bob, monkeypatch):
    store = make_content_store(test_db, max_comment_attempts=3)
    await store.create_article("bob", "a")
    calls = {"n": 0}

    async def always_conflicts(*args):
        calls["n"] += 1
        raise IntegrityError("INSERT INTO comments", {}, Exception("duplicate"))

    monkeypatch.setattr(store, "_insert_comment", always_conflicts)

    with pytest.raises(ConflictError) as exc:
        await store.edit_article_or_comment(1, bob.id, "new", "never")

    assert calls["n"] == 3
    assert exc.value.http_status == 500
    assert exc.value.context.attempt == 3
    assert (await store.list_articles(sequence=1))[0].comments == []


async def test_out_of_range_sequences_miss(content_store, bob):
    await content_store.create_article("bob", "a")
    assert await content_store.list_articles(sequence=2**31) == []
    assert await content_store.list_articles(sequence=10**20) == []
    with pytest.raises(NotFoundError):
        await content_store.edit_article_or_comment(10**20, bob.id, None, "x")

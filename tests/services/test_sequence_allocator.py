"""Sequence Allocator — atomic, gap-free, per-name counters.

Tests cover:
    - First allocation of a name returns 1
    - Successive allocations are consecutive
    - Names are independent series
    - N concurrent allocations yield N distinct consecutive values after the prior max
    - A rolled-back allocation does not consume a value
"""

import asyncio

from townsquare.services.sequence_allocator import SequenceAllocator


async def test_first_allocation_returns_one(test_db):
    allocator = SequenceAllocator(test_db)
    assert await allocator.allocate("article") == 1
    await test_db.commit()


async def test_successive_allocations_are_consecutive(test_db):
    allocator = SequenceAllocator(test_db)
    values = [await allocator.allocate("article") for _ in range(4)]
    await test_db.commit()
    assert values == [1, 2, 3, 4]


async def test_names_are_independent(test_db):
    allocator = SequenceAllocator(test_db)
    assert await allocator.allocate("article") == 1
    assert await allocator.allocate("article") == 2
    assert await allocator.allocate("invoice") == 1
    await test_db.commit()


async def test_concurrent_allocations_are_distinct_and_gap_free(test_session_factory):
    async def allocate_once() -> int:
        async with test_session_factory() as session:
            value = await SequenceAllocator(session).allocate("article")
            await session.commit()
            return value

    prior = [await allocate_once() for _ in range(3)]
    assert prior == [1, 2, 3]

    n = 12
    values = await asyncio.gather(*(allocate_once() for _ in range(n)))
    assert sorted(values) == list(range(4, 4 + n))


async def test_rolled_back_allocation_is_not_consumed(test_db):
    allocator = SequenceAllocator(test_db)
    assert await allocator.allocate("article") == 1
    await test_db.rollback()
    assert await allocator.allocate("article") == 1
    await test_db.commit()

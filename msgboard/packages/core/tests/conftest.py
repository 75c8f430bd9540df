"""packages/core 测试配置 -- 核心层 fixture"""

import pytest_asyncio
from msgboard.core.store import InMemoryBookStore, InMemoryMessageStore


@pytest_asyncio.fixture
async def store(fake_clock) -> InMemoryMessageStore:
    """使用可控时钟的空 store"""
    return InMemoryMessageStore(clock=fake_clock)


@pytest_asyncio.fixture
async def populated_store(store: InMemoryMessageStore) -> InMemoryMessageStore:
    """预置 5 条消息的 store"""
    await store.create_message("Hello world", "alice")
    await store.create_message("Python asyncio tips", "bob")
    await store.create_message("Another HELLO from Bob", "bob")
    await store.create_message("Release notes", "Alice")
    await store.create_message("hello again", "carol")
    return store


@pytest_asyncio.fixture
async def book_store(fake_clock) -> InMemoryBookStore:
    """使用可控时钟的空 BookStore"""
    return InMemoryBookStore(clock=fake_clock)

"""apps/gateway 测试配置 -- FastAPI app + httpx AsyncClient fixture"""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from msgboard.core.store import InMemoryBookStore, InMemoryMessageStore


@pytest_asyncio.fixture
async def message_store() -> InMemoryMessageStore:
    """测试用空 store"""
    return InMemoryMessageStore()


@pytest_asyncio.fixture
async def book_store() -> InMemoryBookStore:
    """测试用空 BookStore"""
    return InMemoryBookStore()


@pytest_asyncio.fixture
async def app(message_store: InMemoryMessageStore, book_store: InMemoryBookStore):
    """创建测试用 FastAPI app 实例（绕过 lifespan，手动注入 store）"""
    from msgboard.gateway.main import create_app

    application = create_app()
    application.state.message_store = message_store
    application.state.book_store = book_store
    application.state.statistics_scheduler = None
    yield application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

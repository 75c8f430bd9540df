"""集成测试共享 fixture"""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def integration_app(monkeypatch):
    """集成测试用 FastAPI app -- 通过 lifespan 完整启动（不写示例数据）"""
    monkeypatch.setenv("MSGBOARD_SEED_SAMPLE_DATA", "false")
    monkeypatch.setenv("MSGBOARD_REPORTER_ENABLED", "true")
    monkeypatch.setenv("MSGBOARD_REPORT_INTERVAL_S", "3600")

    from msgboard.gateway.main import create_app, lifespan

    app = create_app()
    async with lifespan(app):
        yield app


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac

"""健康检查测试

测试内容：
1. GET /health 返回 200 + ok
2. GET /ready 正常时返回 200 + checks 结构
3. 统计任务已停止 / store 不可用时返回 503
"""

from httpx import ASGITransport, AsyncClient
from msgboard.core.reporter import create_statistics_scheduler
from msgboard.gateway.deps import get_statistics_scheduler


class BrokenStore:
    """所有查询都失败的 store"""

    async def count_active(self) -> int:
        raise ConnectionError("store unavailable")


class TestHealthCheck:
    """健康检查"""

    async def test_health_returns_200(self, client: AsyncClient):
        """GET /health 永远返回 200"""
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"

    async def test_ready_without_reporter(self, client: AsyncClient):
        """统计任务未启用时仍然就绪"""
        resp = await client.get("/ready")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ready"
        assert data["checks"]["store"] == "ok"
        assert data["checks"]["statistics_reporter"] == "disabled"
        assert data["checks"]["available_books"] == 0

    async def test_ready_with_running_reporter(self, app, message_store, capture_logger):
        """统计任务运行中时报告其状态"""
        scheduler = create_statistics_scheduler(
            message_store, interval_s=60, logger=capture_logger
        )
        scheduler.start()
        app.state.statistics_scheduler = scheduler
        try:
            async with AsyncClient(
                transport=ASGITransport(app=app), base_url="http://test"
            ) as ac:
                resp = await ac.get("/ready")
        finally:
            await scheduler.stop()

        assert resp.status_code == 200
        assert resp.json()["checks"]["statistics_reporter"] in ("idle", "running")

    async def test_ready_uses_injected_scheduler(self, app, message_store, capture_logger):
        """调度器通过依赖注入获取，可被 dependency_overrides 替换"""
        scheduler = create_statistics_scheduler(
            message_store, interval_s=60, logger=capture_logger
        )
        app.dependency_overrides[get_statistics_scheduler] = lambda: scheduler
        try:
            async with AsyncClient(
                transport=ASGITransport(app=app), base_url="http://test"
            ) as ac:
                resp = await ac.get("/ready")
        finally:
            app.dependency_overrides.clear()

        # app.state 中为 None，但注入的是未启动的调度器
        assert resp.status_code == 503
        assert resp.json()["checks"]["statistics_reporter"] == "stopped"

    async def test_ready_reporter_stopped(self, app, message_store, capture_logger):
        """统计任务已停止时返回 503"""
        scheduler = create_statistics_scheduler(
            message_store, interval_s=60, logger=capture_logger
        )
        app.state.statistics_scheduler = scheduler

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            resp = await ac.get("/ready")

        assert resp.status_code == 503
        data = resp.json()
        assert data["status"] == "not_ready"
        assert data["checks"]["statistics_reporter"] == "stopped"

    async def test_ready_store_failure(self, app):
        """store 不可用时返回 503"""
        app.state.message_store = BrokenStore()

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            resp = await ac.get("/ready")

        assert resp.status_code == 503
        assert resp.json()["checks"]["store"] == "unavailable"

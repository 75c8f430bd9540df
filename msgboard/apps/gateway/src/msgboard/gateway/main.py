"""FastAPI 应用主文件

app 创建 + lifespan 管理：store 初始化（可选写入示例数据）+ 统计任务启动/停止 + 路由注册。
lifespan 是组合根：唯一的 MessageStore / BookStore 在此创建，并注入路由与统计任务。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from msgboard.core.config import (
    get_report_interval_s,
    get_report_recent_days,
    is_reporter_enabled,
    is_seed_enabled,
)
from msgboard.core.reporter import create_statistics_scheduler
from msgboard.core.store import create_book_store, create_message_store

from .middleware.logging_config import setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import books, health, messages

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时创建 store 与统计任务，关闭时停止统计任务"""
    store = await create_message_store(seed=is_seed_enabled())
    app.state.message_store = store
    app.state.book_store = create_book_store()

    scheduler = None
    if is_reporter_enabled():
        scheduler = create_statistics_scheduler(
            store,
            interval_s=get_report_interval_s(),
            recent_days=get_report_recent_days(),
        )
        scheduler.start()
        log.info(
            "statistics_reporter_started",
            interval_s=scheduler.delay_s,
        )
    else:
        log.info("statistics_reporter_disabled")
    app.state.statistics_scheduler = scheduler

    yield

    # 关闭：停止统计任务（store 随进程丢弃）
    if scheduler is not None:
        await scheduler.stop()


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="msgboard Gateway",
        version="0.1.0",
        description="消息与图书 CRUD API + 周期统计日志",
        lifespan=lifespan,
    )

    # 注册中间件（顺序：先 Trace 后 Logging）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)

    # 初始化日志
    setup_logging()

    # 注册路由
    app.include_router(messages.router, tags=["messages"])
    app.include_router(books.router, tags=["bookstore"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()

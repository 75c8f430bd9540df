"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store 与统计任务

实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from fastapi import Request
from msgboard.core.scheduler import FixedDelayScheduler
from msgboard.core.store import BookStore, MessageStore


def get_message_store(request: Request) -> MessageStore:
    """从 app.state 获取 MessageStore 实例"""
    return request.app.state.message_store


def get_book_store(request: Request) -> BookStore:
    """从 app.state 获取 BookStore 实例"""
    return request.app.state.book_store


def get_statistics_scheduler(request: Request) -> FixedDelayScheduler | None:
    """从 app.state 获取统计任务调度器（未启用时为 None）"""
    return getattr(request.app.state, "statistics_scheduler", None)

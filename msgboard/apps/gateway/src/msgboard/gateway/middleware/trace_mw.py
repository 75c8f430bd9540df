"""TraceMiddleware -- 为单条记录操作绑定 message_id / book_id

从 /api/messages/{id} 与 /api/bookstore/{id} 路径中提取数字 id，绑定到 structlog
contextvars，使该请求内 service 的日志都带上记录 id。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


def _extract_record_id(path: str, collection: str) -> int | None:
    parts = [p for p in path.split("/") if p]
    # /api/{collection}/{id} 或 /api/{collection}/{id}/...
    if len(parts) >= 3 and parts[0] == "api" and parts[1] == collection:
        if parts[2].isdigit():
            return int(parts[2])
    return None


def extract_message_id(path: str) -> int | None:
    """从请求路径提取消息 id，非单条消息路由返回 None"""
    return _extract_record_id(path, "messages")


def extract_book_id(path: str) -> int | None:
    """从请求路径提取图书 id，非单本图书路由返回 None"""
    return _extract_record_id(path, "bookstore")


class TraceMiddleware(BaseHTTPMiddleware):
    """记录级追踪中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        message_id = extract_message_id(path)
        if message_id is not None:
            structlog.contextvars.bind_contextvars(message_id=message_id)
        book_id = extract_book_id(path)
        if book_id is not None:
            structlog.contextvars.bind_contextvars(book_id=book_id)

        return await call_next(request)

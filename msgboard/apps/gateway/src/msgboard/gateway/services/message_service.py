"""MessageService -- 消息 CRUD 与查询业务逻辑

路由层与 store 之间的薄层：记录操作日志，统计接口复用统计任务的快照逻辑。
store 抛出的 ValidationError / NotFoundError 原样向上传递，由路由映射为 HTTP 状态码。
"""

from datetime import datetime

import structlog
from msgboard.core.config import get_report_interval_s, get_report_recent_days
from msgboard.core.models import Message, MessageStatistics
from msgboard.core.reporter import collect_statistics
from msgboard.core.store import MessageStore

log = structlog.get_logger()


class MessageService:
    """消息业务服务"""

    def __init__(self, store: MessageStore) -> None:
        self._store = store

    async def list_messages(self) -> list[Message]:
        return await self._store.list_messages()

    async def get_message(self, message_id: int) -> Message:
        return await self._store.get_message(message_id)

    async def create_message(self, content: str, author: str) -> Message:
        """创建消息"""
        message = await self._store.create_message(content, author)
        log.info("message_created", message_id=message.id, author=author)
        return message

    async def update_message(self, message_id: int, content: str) -> Message:
        """更新消息内容"""
        message = await self._store.update_message(message_id, content)
        log.info("message_updated", message_id=message_id)
        return message

    async def set_active(self, message_id: int, active: bool) -> Message:
        """设置 active 标记"""
        message = await self._store.set_active(message_id, active)
        log.info("message_active_changed", message_id=message_id, active=active)
        return message

    async def delete_message(self, message_id: int) -> None:
        """物理删除消息"""
        await self._store.delete_message(message_id)
        log.info("message_deleted", message_id=message_id)

    async def delete_by_author(self, author: str) -> int:
        """删除某作者全部消息"""
        count = await self._store.delete_by_author(author)
        log.info("messages_deleted_by_author", author=author, count=count)
        return count

    async def search(self, keyword: str | None) -> list[Message]:
        """关键字搜索，空关键字返回全部"""
        return await self._store.find_by_keyword(keyword)

    async def find_by_author(self, author: str) -> list[Message]:
        return await self._store.find_by_author(author)

    async def find_recent(self, days: int) -> list[Message]:
        return await self._store.find_recent(days)

    async def find_created_between(
        self,
        start: datetime,
        end: datetime,
    ) -> list[Message]:
        return await self._store.find_created_between(start, end)

    async def list_active(self) -> list[Message]:
        return await self._store.list_active()

    async def list_inactive(self) -> list[Message]:
        return await self._store.list_inactive()

    async def statistics(self) -> MessageStatistics:
        """当前统计快照（与统计任务使用同一计算逻辑）"""
        return await collect_statistics(
            self._store,
            recent_days=get_report_recent_days(),
            interval_s=get_report_interval_s(),
        )

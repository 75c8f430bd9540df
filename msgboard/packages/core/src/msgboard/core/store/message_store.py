"""MessageStore 内存实现

进程内唯一的权威消息集合，进程退出即丢弃。
所有公开操作通过同一把 asyncio.Lock 串行化，保证并发请求与统计任务看到一致快照。
对外只返回 Message 副本，调用方修改返回值不会影响 store 内部状态。
"""

import asyncio
import itertools
from collections.abc import Callable
from datetime import datetime

from pydantic import ValidationError as PydanticValidationError

from ..config import MESSAGE_CONTENT_MAX_LENGTH
from ..exceptions import NotFoundError, ValidationError
from ..models.message import Message
from .clock import as_utc, recent_cutoff, utc_now


def _validate_content(content: str | None) -> str:
    """校验消息内容：非空且不超过最大长度"""
    if not content:
        raise ValidationError("Content cannot be empty", field="content")
    if len(content) > MESSAGE_CONTENT_MAX_LENGTH:
        raise ValidationError(
            f"Content must be between 1 and {MESSAGE_CONTENT_MAX_LENGTH} characters",
            field="content",
        )
    return content


class InMemoryMessageStore:
    """MessageStore 的内存实现"""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        """
        Args:
            clock: 当前时间来源（测试时可注入），默认 UTC 当前时间
        """
        self._clock = clock or utc_now
        self._messages: dict[int, Message] = {}
        self._id_seq = itertools.count(1)
        self._lock = asyncio.Lock()

    async def create_message(self, content: str, author: str) -> Message:
        """创建消息

        Raises:
            ValidationError: content 或 author 为空，或 content 超长
        """
        if not content or not author:
            raise ValidationError("Content and author cannot be empty")
        _validate_content(content)

        async with self._lock:
            try:
                message = Message(
                    id=next(self._id_seq),
                    content=content,
                    author=author,
                    created_at=self._clock(),
                    active=True,
                )
            except PydanticValidationError as e:
                raise ValidationError(str(e)) from e
            self._messages[message.id] = message

        return message.model_copy()

    async def get_message(self, message_id: int) -> Message:
        """根据 id 查询消息

        Raises:
            NotFoundError: 消息不存在
        """
        async with self._lock:
            return self._get_locked(message_id).model_copy()

    async def update_message(self, message_id: int, content: str) -> Message:
        """替换消息内容并更新 updated_at

        author、active、created_at 不会被此操作修改。

        Raises:
            NotFoundError: 消息不存在
            ValidationError: 新内容为空或超长
        """
        async with self._lock:
            current = self._get_locked(message_id)
            _validate_content(content)
            updated = current.model_copy(
                update={
                    "content": content,
                    "updated_at": self._stamp(current),
                }
            )
            self._messages[message_id] = updated

        return updated.model_copy()

    async def set_active(self, message_id: int, active: bool) -> Message:
        """设置软删除标记

        Raises:
            NotFoundError: 消息不存在
        """
        async with self._lock:
            current = self._get_locked(message_id)
            updated = current.model_copy(
                update={
                    "active": active,
                    "updated_at": self._stamp(current),
                }
            )
            self._messages[message_id] = updated

        return updated.model_copy()

    async def delete_message(self, message_id: int) -> None:
        """物理删除消息（不可恢复）

        Raises:
            NotFoundError: 消息不存在
        """
        async with self._lock:
            self._get_locked(message_id)
            del self._messages[message_id]

    async def delete_by_author(self, author: str) -> int:
        """删除指定作者的全部消息，返回删除数量"""
        async with self._lock:
            ids = [m.id for m in self._messages.values() if m.author == author]
            for message_id in ids:
                del self._messages[message_id]
        return len(ids)

    async def list_messages(self) -> list[Message]:
        """返回全部消息（按 id 升序，调用方不应依赖顺序）"""
        return await self._select(lambda m: True)

    async def list_active(self) -> list[Message]:
        """返回全部 active 消息"""
        return await self._select(lambda m: m.active)

    async def list_inactive(self) -> list[Message]:
        """返回全部非 active 消息"""
        return await self._select(lambda m: not m.active)

    async def find_by_author(self, author: str) -> list[Message]:
        """按作者精确匹配，区分大小写"""
        return await self._select(lambda m: m.author == author)

    async def find_by_keyword(self, keyword: str | None) -> list[Message]:
        """按内容关键字查找，不区分大小写

        keyword 先去除首尾空白；为空或 None 时返回全部消息。
        """
        trimmed = (keyword or "").strip()
        if not trimmed:
            return await self.list_messages()

        needle = trimmed.casefold()
        return await self._select(lambda m: needle in m.content.casefold())

    async def find_recent(self, days: int) -> list[Message]:
        """返回最近 days 天内创建的 active 消息（created_at 严格晚于截止时间）

        days 超出可表示范围时窗口覆盖全部消息。
        """
        if days < 0:
            raise ValidationError("days must not be negative", field="days")
        cutoff = recent_cutoff(self._clock(), days)
        return await self._select(lambda m: m.active and m.created_at > cutoff)

    async def find_created_between(
        self,
        start: datetime,
        end: datetime,
    ) -> list[Message]:
        """返回 created_at 落在 [start, end] 闭区间内的消息

        不带时区的时间按 UTC 处理。
        """
        start, end = as_utc(start), as_utc(end)
        return await self._select(lambda m: start <= m.created_at <= end)

    async def count_active(self) -> int:
        """active 消息数"""
        async with self._lock:
            return sum(1 for m in self._messages.values() if m.active)

    async def _select(self, predicate: Callable[[Message], bool]) -> list[Message]:
        """在锁内按条件筛选并返回副本"""
        async with self._lock:
            return [
                m.model_copy()
                for _, m in sorted(self._messages.items())
                if predicate(m)
            ]

    def _get_locked(self, message_id: int) -> Message:
        """读取消息（调用方须已持有锁）"""
        message = self._messages.get(message_id)
        if message is None:
            raise NotFoundError(message_id)
        return message

    def _stamp(self, current: Message) -> datetime:
        """生成 updated_at，保证不早于 created_at"""
        return max(self._clock(), current.created_at)

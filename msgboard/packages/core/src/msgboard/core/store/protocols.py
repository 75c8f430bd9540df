"""Store Protocol 接口定义

定义 MessageStore 与 BookStore 的抽象接口，使用 Python Protocol 实现结构化子类型（duck typing）。
统计任务只依赖其中的只读操作。
"""

from datetime import datetime
from typing import Protocol

from ..models.book import Book
from ..models.message import Message


class MessageReader(Protocol):
    """Message 只读接口 -- 统计任务使用"""

    async def list_messages(self) -> list[Message]:
        """返回全部消息"""
        ...

    async def count_active(self) -> int:
        """active 消息数"""
        ...

    async def find_recent(self, days: int) -> list[Message]:
        """最近 days 天内创建的 active 消息"""
        ...


class MessageStore(MessageReader, Protocol):
    """Message 存储接口"""

    async def create_message(self, content: str, author: str) -> Message:
        """创建消息，分配 id 与 created_at"""
        ...

    async def get_message(self, message_id: int) -> Message:
        """根据 id 查询消息，不存在时抛出 NotFoundError"""
        ...

    async def update_message(self, message_id: int, content: str) -> Message:
        """替换内容并更新 updated_at"""
        ...

    async def delete_message(self, message_id: int) -> None:
        """物理删除消息"""
        ...

    async def set_active(self, message_id: int, active: bool) -> Message:
        """设置软删除标记"""
        ...

    async def find_by_author(self, author: str) -> list[Message]:
        """按作者精确匹配（区分大小写）"""
        ...

    async def find_by_keyword(self, keyword: str | None) -> list[Message]:
        """按内容关键字模糊匹配（不区分大小写）"""
        ...

    async def list_active(self) -> list[Message]:
        """全部 active 消息"""
        ...

    async def list_inactive(self) -> list[Message]:
        """全部非 active 消息"""
        ...

    async def find_created_between(
        self,
        start: datetime,
        end: datetime,
    ) -> list[Message]:
        """created_at 落在 [start, end] 内的消息"""
        ...

    async def delete_by_author(self, author: str) -> int:
        """删除指定作者的全部消息，返回删除数量"""
        ...


class BookStore(Protocol):
    """Book 存储接口"""

    async def create_book(
        self,
        title: str,
        author: str,
        isbn: str | None = None,
        price: float | None = None,
    ) -> Book:
        """创建图书，分配 id 与 created_at"""
        ...

    async def get_book(self, book_id: int) -> Book:
        """根据 id 查询图书，不存在时抛出 BookNotFoundError"""
        ...

    async def update_book(
        self,
        book_id: int,
        title: str | None = None,
        author: str | None = None,
        isbn: str | None = None,
        price: float | None = None,
    ) -> Book:
        """部分更新，空值字段保持原值"""
        ...

    async def set_available(self, book_id: int, available: bool) -> Book:
        """设置可售标记"""
        ...

    async def delete_book(self, book_id: int) -> None:
        """物理删除图书"""
        ...

    async def list_books(self) -> list[Book]:
        """全部图书"""
        ...

    async def list_available(self) -> list[Book]:
        """全部可售图书"""
        ...

    async def list_unavailable(self) -> list[Book]:
        """全部下架图书"""
        ...

    async def find_by_author(self, author: str) -> list[Book]:
        """按作者精确匹配"""
        ...

    async def find_by_isbn(self, isbn: str) -> Book | None:
        """按 ISBN 查询"""
        ...

    async def search(self, keyword: str | None) -> list[Book]:
        """按书名关键字模糊匹配（不区分大小写）"""
        ...

    async def find_recent(self, days: int) -> list[Book]:
        """最近 days 天内创建的可售图书"""
        ...

    async def count_available(self) -> int:
        """可售图书数"""
        ...

"""BookStore 内存实现

与 InMemoryMessageStore 相同的并发纪律：一把 asyncio.Lock 串行化所有公开操作，
对外只返回 Book 副本。
"""

import asyncio
import itertools
from collections.abc import Callable
from datetime import datetime

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import BookNotFoundError, ValidationError
from ..models.book import Book
from .clock import recent_cutoff, utc_now


def _validation_error(e: PydanticValidationError) -> ValidationError:
    """pydantic 校验错误 -> store ValidationError（取第一个出错字段）"""
    errors = e.errors()
    field = str(errors[0]["loc"][0]) if errors and errors[0]["loc"] else None
    return ValidationError(str(e), field=field)


class InMemoryBookStore:
    """BookStore 的内存实现"""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or utc_now
        self._books: dict[int, Book] = {}
        self._id_seq = itertools.count(1)
        self._lock = asyncio.Lock()

    async def create_book(
        self,
        title: str,
        author: str,
        isbn: str | None = None,
        price: float | None = None,
    ) -> Book:
        """创建图书

        Raises:
            ValidationError: title 或 author 为空，或字段越界（超长、负价格）
        """
        if not title or not author:
            raise ValidationError("Title and author cannot be empty")

        async with self._lock:
            try:
                book = Book(
                    id=next(self._id_seq),
                    title=title,
                    author=author,
                    isbn=isbn or None,
                    price=price,
                    created_at=self._clock(),
                    available=True,
                )
            except PydanticValidationError as e:
                raise _validation_error(e) from e
            self._books[book.id] = book

        return book.model_copy()

    async def get_book(self, book_id: int) -> Book:
        """根据 id 查询图书

        Raises:
            BookNotFoundError: 图书不存在
        """
        async with self._lock:
            return self._get_locked(book_id).model_copy()

    async def update_book(
        self,
        book_id: int,
        title: str | None = None,
        author: str | None = None,
        isbn: str | None = None,
        price: float | None = None,
    ) -> Book:
        """部分更新图书

        空字符串或 None 的字段保持原值；任何调用都会更新 updated_at。

        Raises:
            BookNotFoundError: 图书不存在
            ValidationError: 新值越界
        """
        changes: dict[str, object] = {}
        if title:
            changes["title"] = title
        if author:
            changes["author"] = author
        if isbn:
            changes["isbn"] = isbn
        if price is not None:
            changes["price"] = price

        async with self._lock:
            current = self._get_locked(book_id)
            try:
                updated = Book.model_validate(
                    {
                        **current.model_dump(),
                        **changes,
                        "updated_at": self._stamp(current),
                    }
                )
            except PydanticValidationError as e:
                raise _validation_error(e) from e
            self._books[book_id] = updated

        return updated.model_copy()

    async def set_available(self, book_id: int, available: bool) -> Book:
        """设置可售标记

        Raises:
            BookNotFoundError: 图书不存在
        """
        async with self._lock:
            current = self._get_locked(book_id)
            updated = current.model_copy(
                update={
                    "available": available,
                    "updated_at": self._stamp(current),
                }
            )
            self._books[book_id] = updated

        return updated.model_copy()

    async def delete_book(self, book_id: int) -> None:
        """物理删除图书

        Raises:
            BookNotFoundError: 图书不存在
        """
        async with self._lock:
            self._get_locked(book_id)
            del self._books[book_id]

    async def list_books(self) -> list[Book]:
        return await self._select(lambda b: True)

    async def list_available(self) -> list[Book]:
        return await self._select(lambda b: b.available)

    async def list_unavailable(self) -> list[Book]:
        return await self._select(lambda b: not b.available)

    async def find_by_author(self, author: str) -> list[Book]:
        """按作者精确匹配，区分大小写"""
        return await self._select(lambda b: b.author == author)

    async def find_by_isbn(self, isbn: str) -> Book | None:
        """按 ISBN 查询，存在多本时返回 id 最小的一本"""
        matches = await self._select(lambda b: b.isbn == isbn)
        return matches[0] if matches else None

    async def search(self, keyword: str | None) -> list[Book]:
        """按书名关键字查找，不区分大小写；关键字为空时返回全部"""
        trimmed = (keyword or "").strip()
        if not trimmed:
            return await self.list_books()

        needle = trimmed.casefold()
        return await self._select(lambda b: needle in b.title.casefold())

    async def find_recent(self, days: int) -> list[Book]:
        """返回最近 days 天内创建的可售图书（created_at 严格晚于截止时间）"""
        if days < 0:
            raise ValidationError("days must not be negative", field="days")
        cutoff = recent_cutoff(self._clock(), days)
        return await self._select(lambda b: b.available and b.created_at > cutoff)

    async def count_available(self) -> int:
        async with self._lock:
            return sum(1 for b in self._books.values() if b.available)

    async def _select(self, predicate: Callable[[Book], bool]) -> list[Book]:
        async with self._lock:
            return [
                b.model_copy()
                for _, b in sorted(self._books.items())
                if predicate(b)
            ]

    def _get_locked(self, book_id: int) -> Book:
        book = self._books.get(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    def _stamp(self, current: Book) -> datetime:
        return max(self._clock(), current.created_at)

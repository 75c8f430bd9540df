"""BookService -- 图书目录业务逻辑

写操作记录业务事件日志；store 异常原样向上传递，由路由映射为 HTTP 状态码。
"""

import structlog
from msgboard.core.models import Book
from msgboard.core.store import BookStore

log = structlog.get_logger()


class BookService:
    """图书业务服务"""

    def __init__(self, store: BookStore) -> None:
        self._store = store

    async def list_books(self, available: bool | None = None) -> list[Book]:
        """图书列表；available=True 时只返回可售图书，False 时只返回下架图书"""
        if available is None:
            return await self._store.list_books()
        if available:
            return await self._store.list_available()
        return await self._store.list_unavailable()

    async def get_book(self, book_id: int) -> Book:
        return await self._store.get_book(book_id)

    async def create_book(
        self,
        title: str,
        author: str,
        isbn: str | None,
        price: float | None,
    ) -> Book:
        """创建图书"""
        book = await self._store.create_book(title, author, isbn=isbn, price=price)
        log.info("book_created", book_id=book.id, title=book.title, author=author)
        return book

    async def update_book(
        self,
        book_id: int,
        title: str | None,
        author: str | None,
        isbn: str | None,
        price: float | None,
    ) -> Book:
        """部分更新图书"""
        book = await self._store.update_book(
            book_id, title=title, author=author, isbn=isbn, price=price
        )
        log.info("book_updated", book_id=book_id)
        return book

    async def set_available(self, book_id: int, available: bool) -> Book:
        book = await self._store.set_available(book_id, available)
        log.info("book_availability_changed", book_id=book_id, available=available)
        return book

    async def delete_book(self, book_id: int) -> None:
        await self._store.delete_book(book_id)
        log.info("book_deleted", book_id=book_id)

    async def search(self, keyword: str | None) -> list[Book]:
        return await self._store.search(keyword)

    async def find_by_author(self, author: str) -> list[Book]:
        return await self._store.find_by_author(author)

    async def find_by_isbn(self, isbn: str) -> Book | None:
        return await self._store.find_by_isbn(isbn)

    async def find_recent(self, days: int) -> list[Book]:
        return await self._store.find_recent(days)

    async def count_available(self) -> int:
        return await self._store.count_available()

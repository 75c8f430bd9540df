"""InMemoryBookStore 单元测试

测试内容：
1. 创建 / 查询 / 部分更新 / 删除
2. 上架下架与可售计数
3. 书名搜索、作者、ISBN、近期查询
"""

import asyncio

import pytest
from msgboard.core.exceptions import BookNotFoundError, StoreError, ValidationError
from msgboard.core.store import create_book_store


class TestCreate:
    """创建图书"""

    async def test_create_assigns_fields(self, book_store, fake_clock):
        """分配 id / created_at，available 为 True"""
        book = await book_store.create_book("Dune", "Herbert", isbn="978-0441013593", price=9.99)
        assert book.id == 1
        assert book.title == "Dune"
        assert book.isbn == "978-0441013593"
        assert book.price == 9.99
        assert book.created_at == fake_clock.now
        assert book.updated_at is None
        assert book.available is True

    async def test_isbn_and_price_optional(self, book_store):
        book = await book_store.create_book("Dune", "Herbert")
        assert book.isbn is None
        assert book.price is None

    @pytest.mark.parametrize(
        "title,author",
        [("", "Herbert"), ("Dune", ""), (None, "Herbert"), ("Dune", None)],
    )
    async def test_empty_fields_rejected(self, book_store, title, author):
        """书名或作者为空抛出 ValidationError"""
        with pytest.raises(ValidationError, match="Title and author cannot be empty"):
            await book_store.create_book(title, author)
        assert await book_store.list_books() == []

    async def test_title_too_long_rejected(self, book_store):
        with pytest.raises(ValidationError) as exc_info:
            await book_store.create_book("t" * 201, "Herbert")
        assert exc_info.value.field == "title"

    async def test_negative_price_rejected(self, book_store):
        with pytest.raises(ValidationError) as exc_info:
            await book_store.create_book("Dune", "Herbert", price=-1)
        assert exc_info.value.field == "price"

    async def test_concurrent_creates_get_unique_ids(self, book_store):
        books = await asyncio.gather(
            *(book_store.create_book(f"Book {i}", "author") for i in range(50))
        )
        assert sorted(b.id for b in books) == list(range(1, 51))


class TestGetUpdateDelete:
    """查询 / 更新 / 删除"""

    async def test_get_missing_raises(self, book_store):
        with pytest.raises(BookNotFoundError) as exc_info:
            await book_store.get_book(42)
        assert exc_info.value.book_id == 42
        assert isinstance(exc_info.value, StoreError)
        assert str(exc_info.value) == "Book not found with id: 42"

    async def test_returned_value_is_a_copy(self, book_store):
        book = await book_store.create_book("Dune", "Herbert")
        book.title = "tampered"
        assert (await book_store.get_book(book.id)).title == "Dune"

    async def test_partial_update_keeps_blank_fields(self, book_store, fake_clock):
        """None 或空字符串的字段保持原值，updated_at 被更新"""
        book = await book_store.create_book("Dune", "Herbert", isbn="111", price=9.99)
        fake_clock.advance(minutes=5)

        updated = await book_store.update_book(book.id, title="Dune Messiah", author="", price=None)
        assert updated.title == "Dune Messiah"
        assert updated.author == "Herbert"
        assert updated.isbn == "111"
        assert updated.price == 9.99
        assert updated.created_at == book.created_at
        assert updated.updated_at == fake_clock.now

    async def test_update_price_to_zero(self, book_store):
        """价格 0 是有效的新值"""
        book = await book_store.create_book("Dune", "Herbert", price=9.99)
        updated = await book_store.update_book(book.id, price=0)
        assert updated.price == 0

    async def test_update_missing_raises(self, book_store):
        with pytest.raises(BookNotFoundError):
            await book_store.update_book(7, title="x")

    async def test_update_invalid_value_leaves_book_unchanged(self, book_store):
        book = await book_store.create_book("Dune", "Herbert")
        with pytest.raises(ValidationError):
            await book_store.update_book(book.id, title="t" * 201)
        assert await book_store.get_book(book.id) == book

    async def test_delete(self, book_store):
        book = await book_store.create_book("Dune", "Herbert")
        await book_store.delete_book(book.id)
        with pytest.raises(BookNotFoundError):
            await book_store.get_book(book.id)
        with pytest.raises(BookNotFoundError):
            await book_store.delete_book(book.id)


class TestAvailability:
    """上架 / 下架"""

    async def test_set_available_and_count(self, book_store, fake_clock):
        a = await book_store.create_book("A", "x")
        b = await book_store.create_book("B", "x")
        fake_clock.advance(minutes=1)

        updated = await book_store.set_available(a.id, False)
        assert updated.available is False
        assert updated.updated_at == fake_clock.now
        assert await book_store.count_available() == 1
        assert [bk.id for bk in await book_store.list_available()] == [b.id]
        assert [bk.id for bk in await book_store.list_unavailable()] == [a.id]

    async def test_set_available_missing_raises(self, book_store):
        with pytest.raises(BookNotFoundError):
            await book_store.set_available(3, True)


class TestQueries:
    """条件查询"""

    async def test_search_title_case_insensitive(self, book_store):
        await book_store.create_book("The Python Cookbook", "Beazley")
        await book_store.create_book("Fluent PYTHON", "Ramalho")
        await book_store.create_book("Dune", "Herbert")

        results = await book_store.search("  python ")
        assert [b.title for b in results] == ["The Python Cookbook", "Fluent PYTHON"]

    @pytest.mark.parametrize("keyword", ["", None, "  "])
    async def test_search_empty_keyword_returns_all(self, book_store, keyword):
        await book_store.create_book("A", "x")
        await book_store.create_book("B", "y")
        assert len(await book_store.search(keyword)) == 2

    async def test_find_by_author_is_case_sensitive(self, book_store):
        await book_store.create_book("Dune", "Herbert")
        assert len(await book_store.find_by_author("Herbert")) == 1
        assert await book_store.find_by_author("herbert") == []

    async def test_find_by_isbn(self, book_store):
        first = await book_store.create_book("A", "x", isbn="123")
        await book_store.create_book("B", "y", isbn="123")
        assert (await book_store.find_by_isbn("123")).id == first.id
        assert await book_store.find_by_isbn("999") is None

    async def test_find_recent_only_available(self, book_store, fake_clock):
        await book_store.create_book("old", "x")
        fake_clock.advance(days=10)
        fresh = await book_store.create_book("fresh", "x")
        hidden = await book_store.create_book("hidden", "x")
        await book_store.set_available(hidden.id, False)

        assert [b.id for b in await book_store.find_recent(7)] == [fresh.id]

    async def test_find_recent_huge_window(self, book_store):
        """窗口超出日期可表示范围时返回全部可售图书"""
        await book_store.create_book("A", "x")
        assert len(await book_store.find_recent(1_000_000)) == 1

    async def test_find_recent_negative_days_rejected(self, book_store):
        with pytest.raises(ValidationError):
            await book_store.find_recent(-1)


class TestFactory:
    async def test_create_book_store_is_empty(self):
        """每次调用返回独立的空 store"""
        first = create_book_store()
        second = create_book_store()
        await first.create_book("A", "x")
        assert await second.list_books() == []

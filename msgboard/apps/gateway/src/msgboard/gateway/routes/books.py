"""图书路由

GET    /api/bookstore                        图书列表（可按 available 过滤）
POST   /api/bookstore                        创建图书
GET    /api/bookstore/search                 书名关键字搜索
GET    /api/bookstore/author/{author}        按作者查询
GET    /api/bookstore/isbn/{isbn}            按 ISBN 查询
GET    /api/bookstore/recent                 最近 N 天的可售图书
GET    /api/bookstore/available/count        可售图书数
GET    /api/bookstore/{book_id}              图书详情
PUT    /api/bookstore/{book_id}              部分更新
PATCH  /api/bookstore/{book_id}/available    设置可售标记
DELETE /api/bookstore/{book_id}              删除图书
"""

from fastapi import APIRouter, Depends, Query
from msgboard.core.exceptions import BookNotFoundError, ValidationError
from msgboard.core.models import Book
from pydantic import BaseModel, Field
from starlette.responses import JSONResponse

from ..deps import get_book_store
from ..services.book_service import BookService

router = APIRouter(prefix="/api/bookstore")


class CreateBookRequest(BaseModel):
    """创建图书请求体（必填与长度校验由 store 负责，统一返回 400）"""

    title: str | None = Field(default=None, description="书名")
    author: str | None = Field(default=None, description="作者")
    isbn: str | None = Field(default=None, description="ISBN")
    price: float | None = Field(default=None, description="价格")


class UpdateBookRequest(BaseModel):
    """更新图书请求体，未提供或为空的字段保持原值"""

    title: str | None = None
    author: str | None = None
    isbn: str | None = None
    price: float | None = None


class SetAvailableRequest(BaseModel):
    available: bool = Field(description="是否可售")


class BookListResponse(BaseModel):
    """图书列表响应"""

    books: list[Book]
    count: int


class AvailableCountResponse(BaseModel):
    available: int


class DeleteResponse(BaseModel):
    deleted: int


def _list_response(books: list[Book]) -> BookListResponse:
    return BookListResponse(books=books, count=len(books))


def _validation_error(e: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": {"code": "VALIDATION_ERROR", "message": str(e)}},
    )


def _not_found(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"error": {"code": "BOOK_NOT_FOUND", "message": message}},
    )


@router.get("", response_model=BookListResponse)
async def list_books(
    available: bool | None = Query(
        default=None,
        description="true 只返回可售图书，false 只返回下架图书",
    ),
    store=Depends(get_book_store),
):
    """图书列表"""
    service = BookService(store)
    return _list_response(await service.list_books(available))


@router.post("", status_code=201, response_model=Book)
async def create_book(body: CreateBookRequest, store=Depends(get_book_store)):
    """创建图书

    - 成功返回 201 Created
    - title / author 为空、字段超长或价格为负返回 400
    """
    service = BookService(store)
    try:
        return await service.create_book(body.title, body.author, body.isbn, body.price)
    except ValidationError as e:
        return _validation_error(e)


@router.get("/search", response_model=BookListResponse)
async def search_books(
    keyword: str | None = Query(default=None, description="书名关键字（不区分大小写）"),
    store=Depends(get_book_store),
):
    """书名搜索，keyword 为空时返回全部图书"""
    service = BookService(store)
    return _list_response(await service.search(keyword))


@router.get("/author/{author}", response_model=BookListResponse)
async def books_by_author(author: str, store=Depends(get_book_store)):
    service = BookService(store)
    return _list_response(await service.find_by_author(author))


@router.get("/isbn/{isbn}", response_model=Book)
async def book_by_isbn(isbn: str, store=Depends(get_book_store)):
    service = BookService(store)
    book = await service.find_by_isbn(isbn)
    if book is None:
        return _not_found(f"Book not found with isbn: {isbn}")
    return book


@router.get("/recent", response_model=BookListResponse)
async def recent_books(
    days: int = Query(default=7, ge=0, description="窗口天数"),
    store=Depends(get_book_store),
):
    """最近 days 天内创建的可售图书"""
    service = BookService(store)
    return _list_response(await service.find_recent(days))


@router.get("/available/count", response_model=AvailableCountResponse)
async def available_count(store=Depends(get_book_store)):
    service = BookService(store)
    return AvailableCountResponse(available=await service.count_available())


@router.get("/{book_id}", response_model=Book)
async def get_book(book_id: int, store=Depends(get_book_store)):
    service = BookService(store)
    try:
        return await service.get_book(book_id)
    except BookNotFoundError as e:
        return _not_found(str(e))


@router.put("/{book_id}", response_model=Book)
async def update_book(
    book_id: int,
    body: UpdateBookRequest,
    store=Depends(get_book_store),
):
    """部分更新图书"""
    service = BookService(store)
    try:
        return await service.update_book(
            book_id, body.title, body.author, body.isbn, body.price
        )
    except BookNotFoundError as e:
        return _not_found(str(e))
    except ValidationError as e:
        return _validation_error(e)


@router.patch("/{book_id}/available", response_model=Book)
async def set_book_available(
    book_id: int,
    body: SetAvailableRequest,
    store=Depends(get_book_store),
):
    """上架 / 下架"""
    service = BookService(store)
    try:
        return await service.set_available(book_id, body.available)
    except BookNotFoundError as e:
        return _not_found(str(e))


@router.delete("/{book_id}", response_model=DeleteResponse)
async def delete_book(book_id: int, store=Depends(get_book_store)):
    service = BookService(store)
    try:
        await service.delete_book(book_id)
    except BookNotFoundError as e:
        return _not_found(str(e))
    return DeleteResponse(deleted=1)

"""Book Domain Model

图书目录条目。与 Message 相同，id 与 created_at 由 store 分配后不可变；
available 为可借/在售标记，创建时为 True。
"""

from datetime import datetime

from pydantic import BaseModel, Field

from ..config import BOOK_AUTHOR_MAX_LENGTH, BOOK_ISBN_MAX_LENGTH, BOOK_TITLE_MAX_LENGTH


class Book(BaseModel):
    """Book 数据模型"""

    id: int = Field(description="唯一标识，由 store 分配")
    title: str = Field(
        min_length=1,
        max_length=BOOK_TITLE_MAX_LENGTH,
        description="书名（1-200 字符）",
    )
    author: str = Field(
        min_length=1,
        max_length=BOOK_AUTHOR_MAX_LENGTH,
        description="作者（1-100 字符）",
    )
    isbn: str | None = Field(
        default=None,
        max_length=BOOK_ISBN_MAX_LENGTH,
        description="ISBN（可选，不校验唯一性）",
    )
    price: float | None = Field(default=None, ge=0, description="价格（可选）")
    created_at: datetime = Field(description="创建时间，只写一次")
    updated_at: datetime | None = Field(default=None, description="最后更新时间")
    available: bool = Field(default=True, description="是否可售")

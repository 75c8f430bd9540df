"""Message Domain Model

消息板的核心领域实体。id 与 created_at 由 store 在创建时分配，之后不可变；
updated_at 在首次更新前为 None。
"""

from datetime import datetime

from pydantic import BaseModel, Field

from ..config import MESSAGE_CONTENT_MAX_LENGTH


class Message(BaseModel):
    """Message 数据模型

    store 独占所有实例，对外只返回副本。
    """

    id: int = Field(description="唯一标识，由 store 分配")
    content: str = Field(
        min_length=1,
        max_length=MESSAGE_CONTENT_MAX_LENGTH,
        description="消息内容（1-500 字符）",
    )
    author: str = Field(min_length=1, description="作者标识")
    created_at: datetime = Field(description="创建时间，只写一次")
    updated_at: datetime | None = Field(default=None, description="最后更新时间")
    active: bool = Field(default=True, description="软删除标记")

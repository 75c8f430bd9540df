"""消息路由

GET    /api/messages                      消息列表（可按 active 过滤）
POST   /api/messages                      创建消息
GET    /api/messages/search               关键字搜索
GET    /api/messages/author/{author}      按作者查询
DELETE /api/messages/author/{author}      删除某作者全部消息
GET    /api/messages/recent               最近 N 天的 active 消息
GET    /api/messages/created-between      按创建时间区间查询
GET    /api/messages/stats                统计快照
GET    /api/messages/{message_id}         消息详情
PUT    /api/messages/{message_id}         更新内容
PATCH  /api/messages/{message_id}/active  设置 active 标记
DELETE /api/messages/{message_id}         删除消息

静态路径必须注册在 /{message_id} 之前。
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from msgboard.core.exceptions import NotFoundError, ValidationError
from msgboard.core.models import Message, MessageStatistics
from pydantic import BaseModel, Field
from starlette.responses import JSONResponse

from ..deps import get_message_store
from ..services.message_service import MessageService

router = APIRouter()


class CreateMessageRequest(BaseModel):
    """创建消息请求体（内容校验由 store 负责，统一返回 400）"""

    content: str | None = Field(default=None, description="消息内容")
    author: str | None = Field(default=None, description="作者")


class UpdateMessageRequest(BaseModel):
    """更新消息请求体"""

    content: str | None = Field(default=None, description="新的消息内容")


class SetActiveRequest(BaseModel):
    """设置 active 标记请求体"""

    active: bool = Field(description="是否 active")


class MessageListResponse(BaseModel):
    """消息列表响应"""

    messages: list[Message]
    count: int


class DeleteResponse(BaseModel):
    """删除响应"""

    deleted: int


def _list_response(messages: list[Message]) -> MessageListResponse:
    return MessageListResponse(messages=messages, count=len(messages))


def _validation_error(e: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": {"code": "VALIDATION_ERROR", "message": str(e)}},
    )


def _not_found(e: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"error": {"code": "MESSAGE_NOT_FOUND", "message": str(e)}},
    )


@router.get("/api/messages", response_model=MessageListResponse)
async def list_messages(
    active: bool | None = Query(
        default=None,
        description="true 只返回 active 消息，false 只返回非 active 消息",
    ),
    store=Depends(get_message_store),
):
    """消息列表"""
    service = MessageService(store)
    if active is None:
        return _list_response(await service.list_messages())
    if active:
        return _list_response(await service.list_active())
    return _list_response(await service.list_inactive())


@router.post("/api/messages", status_code=201, response_model=Message)
async def create_message(
    body: CreateMessageRequest,
    store=Depends(get_message_store),
):
    """创建消息

    - 成功返回 201 Created
    - content / author 为空或内容超长返回 400
    """
    service = MessageService(store)
    try:
        return await service.create_message(body.content, body.author)
    except ValidationError as e:
        return _validation_error(e)


@router.get("/api/messages/search", response_model=MessageListResponse)
async def search_messages(
    keyword: str | None = Query(default=None, description="内容关键字（不区分大小写）"),
    store=Depends(get_message_store),
):
    """关键字搜索，keyword 为空时返回全部消息"""
    service = MessageService(store)
    return _list_response(await service.search(keyword))


@router.get("/api/messages/author/{author}", response_model=MessageListResponse)
async def messages_by_author(author: str, store=Depends(get_message_store)):
    """按作者精确查询（区分大小写）"""
    service = MessageService(store)
    return _list_response(await service.find_by_author(author))


@router.delete("/api/messages/author/{author}", response_model=DeleteResponse)
async def delete_messages_by_author(author: str, store=Depends(get_message_store)):
    """删除某作者全部消息"""
    service = MessageService(store)
    return DeleteResponse(deleted=await service.delete_by_author(author))


@router.get("/api/messages/recent", response_model=MessageListResponse)
async def recent_messages(
    days: int = Query(default=7, ge=0, description="窗口天数"),
    store=Depends(get_message_store),
):
    """最近 days 天内创建的 active 消息"""
    service = MessageService(store)
    return _list_response(await service.find_recent(days))


@router.get("/api/messages/created-between", response_model=MessageListResponse)
async def messages_created_between(
    start: datetime = Query(description="起始时间（含）"),
    end: datetime = Query(description="结束时间（含）"),
    store=Depends(get_message_store),
):
    """按创建时间闭区间查询"""
    service = MessageService(store)
    return _list_response(await service.find_created_between(start, end))


@router.get("/api/messages/stats", response_model=MessageStatistics)
async def message_stats(store=Depends(get_message_store)):
    """当前统计快照"""
    service = MessageService(store)
    return await service.statistics()


@router.get("/api/messages/{message_id}", response_model=Message)
async def get_message(message_id: int, store=Depends(get_message_store)):
    """消息详情"""
    service = MessageService(store)
    try:
        return await service.get_message(message_id)
    except NotFoundError as e:
        return _not_found(e)


@router.put("/api/messages/{message_id}", response_model=Message)
async def update_message(
    message_id: int,
    body: UpdateMessageRequest,
    store=Depends(get_message_store),
):
    """更新消息内容"""
    service = MessageService(store)
    try:
        return await service.update_message(message_id, body.content)
    except NotFoundError as e:
        return _not_found(e)
    except ValidationError as e:
        return _validation_error(e)


@router.patch("/api/messages/{message_id}/active", response_model=Message)
async def set_message_active(
    message_id: int,
    body: SetActiveRequest,
    store=Depends(get_message_store),
):
    """设置 active 标记（软删除 / 恢复）"""
    service = MessageService(store)
    try:
        return await service.set_active(message_id, body.active)
    except NotFoundError as e:
        return _not_found(e)


@router.delete("/api/messages/{message_id}", response_model=DeleteResponse)
async def delete_message(message_id: int, store=Depends(get_message_store)):
    """物理删除消息"""
    service = MessageService(store)
    try:
        await service.delete_message(message_id)
    except NotFoundError as e:
        return _not_found(e)
    return DeleteResponse(deleted=1)

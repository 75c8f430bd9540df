"""示例数据 -- 启动时写入的初始消息"""

import structlog

from .protocols import MessageStore

log = structlog.get_logger()

SAMPLE_MESSAGES: list[tuple[str, str]] = [
    ("Welcome to the Message Service!", "admin"),
    ("The message service now runs on Python with FastAPI!", "system"),
    ("Statistics are logged every minute by a background task", "admin"),
    ("Using an in-memory store for easy testing", "system"),
    ("Modern code with pydantic models, structlog and asyncio", "developer"),
]


async def seed_sample_messages(store: MessageStore) -> int:
    """写入示例消息，返回写入数量"""
    for content, author in SAMPLE_MESSAGES:
        await store.create_message(content, author)

    log.info("sample_messages_seeded", count=len(SAMPLE_MESSAGES))
    return len(SAMPLE_MESSAGES)

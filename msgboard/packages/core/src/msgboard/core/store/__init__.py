"""msgboard Core Store -- 内存存储实现

提供工厂函数创建进程内共享的 MessageStore / BookStore 实例。
"""

from .book_store import InMemoryBookStore
from .message_store import InMemoryMessageStore
from .protocols import BookStore, MessageReader, MessageStore
from .seed import SAMPLE_MESSAGES, seed_sample_messages


async def create_message_store(seed: bool = False) -> InMemoryMessageStore:
    """创建 MessageStore

    Args:
        seed: 是否写入示例消息

    Returns:
        InMemoryMessageStore 实例
    """
    store = InMemoryMessageStore()
    if seed:
        await seed_sample_messages(store)
    return store


def create_book_store() -> InMemoryBookStore:
    """创建空的 BookStore"""
    return InMemoryBookStore()


__all__ = [
    "BookStore",
    "InMemoryBookStore",
    "InMemoryMessageStore",
    "MessageReader",
    "MessageStore",
    "SAMPLE_MESSAGES",
    "create_book_store",
    "create_message_store",
    "seed_sample_messages",
]

"""msgboard Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .book import Book
from .enums import SchedulerState
from .message import Message
from .stats import MessageStatistics

__all__ = [
    # 枚举
    "SchedulerState",
    # Message
    "Message",
    # Book
    "Book",
    # 统计
    "MessageStatistics",
]

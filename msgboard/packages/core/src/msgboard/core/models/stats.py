"""MessageStatistics -- 消息统计快照

由 collect_statistics 生成，供统计日志与 /api/messages/stats 使用。
"""

from datetime import datetime

from pydantic import BaseModel, Field


class MessageStatistics(BaseModel):
    """单次统计快照"""

    execution_time: datetime = Field(description="统计执行时间")
    total_messages: int = Field(ge=0, description="消息总数")
    active_messages: int = Field(ge=0, description="active 消息数")
    inactive_messages: int = Field(ge=0, description="非 active 消息数")
    recent_messages: int = Field(ge=0, description="近期窗口内的 active 消息数")
    recent_days: int = Field(ge=1, description="近期窗口天数")
    next_execution: datetime = Field(description="预计下一次执行时间（仅供观测）")

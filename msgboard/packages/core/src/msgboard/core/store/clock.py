"""Store 共用的时间工具

所有时间均为带时区的 UTC。
"""

from datetime import UTC, datetime, timedelta

# 最早可表示的 UTC 时间，窗口过大时作为截止时间下限
EARLIEST_UTC = datetime.min.replace(tzinfo=UTC)


def utc_now() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """不带时区的时间按 UTC 处理"""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def recent_cutoff(now: datetime, days: int) -> datetime:
    """计算“最近 days 天”的截止时间

    days 超出 timedelta / datetime 可表示范围时截断为 EARLIEST_UTC，
    即窗口覆盖全部记录。
    """
    try:
        return now - timedelta(days=days)
    except OverflowError:
        return EARLIEST_UTC

"""消息统计任务

每次执行从 store 读取总数、active 数、近期数，输出一段可读的统计日志块：

    ========================================
    Message Statistics Task - Executing
    ========================================
    Execution Time: 2026-10-16 12:00:00 UTC
    Total Messages: 5
    ...
    ========================================

查询 store 时的任何异常都被捕获，记录为 message_statistics_failed，不向上抛出。
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import structlog

from .config import REPORT_TIMESTAMP_FORMAT
from .models.stats import MessageStatistics
from .scheduler import FixedDelayScheduler
from .store.protocols import MessageReader

log = structlog.get_logger()

REPORT_DELIMITER = "=" * 40
REPORT_TITLE = "Message Statistics Task - Executing"


async def collect_statistics(
    store: MessageReader,
    recent_days: int = 7,
    interval_s: float = 60,
    now: datetime | None = None,
) -> MessageStatistics:
    """从 store 生成一次统计快照

    Args:
        store: 只读 store
        recent_days: 近期窗口天数
        interval_s: 调度间隔，用于推算 next_execution（仅供观测）
        now: 执行时间，默认 UTC 当前时间

    Returns:
        MessageStatistics
    """
    execution_time = now or datetime.now(UTC)

    total = len(await store.list_messages())
    active = await store.count_active()
    recent = len(await store.find_recent(recent_days))

    return MessageStatistics(
        execution_time=execution_time,
        total_messages=total,
        active_messages=active,
        inactive_messages=max(total - active, 0),
        recent_messages=recent,
        recent_days=recent_days,
        next_execution=execution_time + timedelta(seconds=interval_s),
    )


def _format_time(value: datetime) -> str:
    return value.astimezone(UTC).strftime(REPORT_TIMESTAMP_FORMAT)


def render_report(stats: MessageStatistics) -> str:
    """将统计快照渲染为多行文本块，首尾为分隔行"""
    lines = [
        REPORT_DELIMITER,
        REPORT_TITLE,
        REPORT_DELIMITER,
        f"Execution Time: {_format_time(stats.execution_time)}",
        f"Total Messages: {stats.total_messages}",
        f"Active Messages: {stats.active_messages}",
        f"Inactive Messages: {stats.inactive_messages}",
        f"Messages from last {stats.recent_days} days: {stats.recent_messages}",
        f"Next Execution: {_format_time(stats.next_execution)}",
        "Task completed successfully",
        REPORT_DELIMITER,
    ]
    return "\n".join(lines)


class StatisticsReporter:
    """统计上报 -- 只依赖 store 的只读操作"""

    def __init__(
        self,
        store: MessageReader,
        recent_days: int = 7,
        interval_s: float = 60,
        clock: Callable[[], datetime] | None = None,
        logger=None,
    ) -> None:
        self._store = store
        self._recent_days = recent_days
        self._interval_s = interval_s
        self._clock = clock
        self._log = logger or log
        self.last_statistics: MessageStatistics | None = None

    async def report_once(self) -> MessageStatistics | None:
        """执行一次统计并输出日志块

        Returns:
            成功时返回统计快照，失败时返回 None（错误已记录）
        """
        try:
            stats = await collect_statistics(
                self._store,
                recent_days=self._recent_days,
                interval_s=self._interval_s,
                now=self._clock() if self._clock else None,
            )
        except Exception as e:
            self._log.error(
                "message_statistics_failed",
                error=str(e),
                exc_info=True,
            )
            return None

        self.last_statistics = stats
        self._log.info(render_report(stats), **stats.model_dump(mode="json"))
        return stats


def create_statistics_scheduler(
    store: MessageReader,
    interval_s: float = 60,
    recent_days: int = 7,
    **scheduler_kwargs,
) -> FixedDelayScheduler:
    """组装统计任务：StatisticsReporter + FixedDelayScheduler"""
    reporter = StatisticsReporter(
        store,
        recent_days=recent_days,
        interval_s=interval_s,
        logger=scheduler_kwargs.get("logger"),
    )
    return FixedDelayScheduler(
        reporter.report_once,
        interval_s,
        name="message_statistics",
        **scheduler_kwargs,
    )

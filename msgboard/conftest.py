"""全局 pytest 配置 -- structlog 日志捕获 + 可控时钟 fixture"""

from datetime import UTC, datetime, timedelta

import pytest
import structlog
from structlog.testing import LogCapture


class FakeClock:
    """可手动推进的 UTC 时钟，供 store / reporter 注入"""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 10, 16, 12, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        """按 timedelta 参数推进时间"""
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def fake_clock() -> FakeClock:
    """从 2026-10-16 12:00:00 UTC 开始的可控时钟"""
    return FakeClock()


@pytest.fixture
def log_capture() -> LogCapture:
    """记录所有日志事件的 LogCapture 处理器"""
    return LogCapture()


@pytest.fixture
def capture_logger(log_capture: LogCapture):
    """只写入 log_capture 的 structlog logger，不受全局配置与缓存影响"""
    return structlog.wrap_logger(
        structlog.PrintLogger(),
        processors=[log_capture],
        wrapper_class=structlog.BoundLogger,
        cache_logger_on_first_use=False,
    )

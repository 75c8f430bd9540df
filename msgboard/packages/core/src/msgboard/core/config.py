"""配置常量模块 -- 可通过环境变量覆盖

包含统计上报周期、近期窗口天数、示例数据开关等可配置项。
非法数值不阻塞启动，记录 warning 后回退到默认值。
"""

import os

import structlog

log = structlog.get_logger()

# 消息内容最大长度
MESSAGE_CONTENT_MAX_LENGTH: int = 500

# 图书字段最大长度
BOOK_TITLE_MAX_LENGTH: int = 200
BOOK_AUTHOR_MAX_LENGTH: int = 100
BOOK_ISBN_MAX_LENGTH: int = 50

# 统计日志中的时间格式（时间先转换为 UTC）
REPORT_TIMESTAMP_FORMAT: str = "%Y-%m-%d %H:%M:%S UTC"


def _get_int(env_var: str, default: int) -> int:
    """读取正整数环境变量，非法值回退到默认值"""
    val = os.environ.get(env_var)
    if val is None or val == "":
        return default
    try:
        parsed = int(val)
    except ValueError:
        parsed = 0
    if parsed <= 0:
        log.warning(
            "invalid_int_config",
            env_var=env_var,
            value=val,
            fallback=default,
        )
        return default
    return parsed


def _get_bool(env_var: str, default: bool) -> bool:
    """读取布尔环境变量（true/false/1/0/yes/no）"""
    val = os.environ.get(env_var)
    if val is None or val == "":
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


def get_report_interval_s() -> int:
    """统计任务的固定延迟（秒）：上一次结束到下一次开始的间隔"""
    return _get_int("MSGBOARD_REPORT_INTERVAL_S", 60)


def get_report_recent_days() -> int:
    """“近期消息”统计窗口（天）"""
    return _get_int("MSGBOARD_REPORT_RECENT_DAYS", 7)


def is_reporter_enabled() -> bool:
    """是否在 gateway 启动时运行统计任务"""
    return _get_bool("MSGBOARD_REPORTER_ENABLED", True)


def is_seed_enabled() -> bool:
    """是否在启动时写入示例消息"""
    return _get_bool("MSGBOARD_SEED_SAMPLE_DATA", True)

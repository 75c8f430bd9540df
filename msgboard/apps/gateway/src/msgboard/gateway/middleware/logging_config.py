"""structlog 配置模块

dev 模式：pretty print 可读输出（统计日志块按原样多行显示）
json 模式：结构化 JSON 输出；多行事件（统计日志块）拆为逐行数组，保持 "key: value" 可读
"""

import logging
import os

import structlog
from structlog.types import EventDict, WrappedLogger


def split_multiline_event(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """多行事件拆分：event 取首个非分隔行，完整内容放入 event_lines

    JSON 中的换行会被转义为 \\n，拆成数组后每行仍可直接阅读。
    """
    event = event_dict.get("event")
    if isinstance(event, str) and "\n" in event:
        lines = event.splitlines()
        event_dict["event_lines"] = lines
        event_dict["event"] = next(
            (line for line in lines if line.strip("=- ")), event
        )
    return event_dict


def setup_logging() -> None:
    """初始化 structlog 配置

    根据 MSGBOARD_LOG_FORMAT 环境变量选择渲染模式：
    - "json": 结构化 JSON 输出（生产环境）
    - "dev" (默认): pretty print 可读输出
    """
    log_format = os.environ.get("MSGBOARD_LOG_FORMAT", "dev")
    log_level = os.environ.get("MSGBOARD_LOG_LEVEL", "INFO")

    # 基础处理器链
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        # 生产模式：JSON 输出，异常展开为 traceback 字段
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer(
            ensure_ascii=False
        )
        shared_processors.append(structlog.processors.format_exc_info)
        shared_processors.append(split_multiline_event)
    else:
        # 开发模式：pretty print
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # 配置标准库 logging
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

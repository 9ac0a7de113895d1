"""日志配置

职责：
- 根据 Settings.log_level / log_format 配置根日志记录器
- json 格式由 structlog 的 ProcessorFormatter + JSONRenderer 输出，一行一个 JSON 对象
- text 格式沿用常规的 asctime/name/level 格式

各模块仍使用 logging.getLogger(__name__)，structlog 只负责渲染。
应用启动时（FastAPI lifespan）调用一次 configure_logging()。
"""

from __future__ import annotations

import logging

import structlog

from planpilot.config import Settings

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_HANDLER_NAME = "planpilot"


def build_json_formatter() -> structlog.stdlib.ProcessorFormatter:
    """标准库日志记录 → 单行 JSON（timestamp / level / logger / event）"""
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
    )


def configure_logging(settings: Settings) -> None:
    """配置根日志记录器

    重复调用时替换之前安装的 handler，不会重复输出。
    """
    root = logging.getLogger()
    root.setLevel(settings.log_level.upper())

    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if settings.log_format == "json":
        handler.setFormatter(build_json_formatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)


__all__ = ["build_json_formatter", "configure_logging"]

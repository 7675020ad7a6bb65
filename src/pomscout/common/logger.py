"""PomScout 日志

采集、分析、输出各阶段统一通过 get_logger 取日志器，消息以 [Extractor]、
[Pipeline]、[Codegen] 等阶段前缀开头。终端输出走 Rich；
环境变量 LOG_LEVEL 控制终端级别，LOG_FILE 指定时另写一份完整的 DEBUG 日志。
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


# 终端日志共用的控制台
console = Console()

LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"


def get_log_level() -> int:
    """LOG_LEVEL 对应的终端日志级别，无法识别时为 INFO"""
    level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    return LOG_LEVEL_MAP.get(level_str, logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """取 PomScout 模块日志器

    同名日志器只配置一次。元素级的跳过原因（不可见、装饰性、句柄失效）记在 DEBUG，
    页面与阶段进度记在 INFO，被跳过的页面记在 WARNING。

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("[Pipeline] URL 数量: 3")
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    console_level = get_log_level()
    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
        tracebacks_show_locals=os.getenv("LOG_SHOW_LOCALS", "false").lower() == "true",
        markup=False,
    )
    rich_handler.setLevel(console_level)
    rich_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(rich_handler)
    logger.setLevel(console_level)

    log_file = os.getenv("LOG_FILE")
    if log_file:
        setup_file_logging(logger, log_file)

    logger.propagate = False
    return logger


def setup_file_logging(
    logger: logging.Logger,
    log_file: str | Path,
    level: int = logging.DEBUG,
) -> logging.FileHandler:
    """给日志器追加文件输出，必要时放宽日志器级别让文件收到 DEBUG 记录"""
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(path, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(file_handler)
    logger.setLevel(min(logger.level or level, level))
    return file_handler

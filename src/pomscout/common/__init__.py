"""Common模块 - 公共工具和基础设施

该模块提供：
- 全局配置管理
- 类型定义
- 日志系统
- 异常类
- 输入验证
"""

from .config import config, Config
from .logger import get_logger, console
from .exceptions import (
    PomScoutError,
    BrowserError,
    BrowserNotStartedError,
    PageLoadError,
    ValidationError,
    URLValidationError,
    ConfigError,
    AnalysisError,
    NoElementsFoundError,
    OutputError,
)
from .types import (
    ElementCharacteristics,
    ElementInfo,
    GroupedElement,
    InteractionState,
    SimilarityResult,
    Stability,
)

__all__ = [
    # 配置
    "config",
    "Config",
    # 日志
    "get_logger",
    "console",
    # 异常
    "PomScoutError",
    "BrowserError",
    "BrowserNotStartedError",
    "PageLoadError",
    "ValidationError",
    "URLValidationError",
    "ConfigError",
    "AnalysisError",
    "NoElementsFoundError",
    "OutputError",
    # 类型
    "ElementCharacteristics",
    "ElementInfo",
    "GroupedElement",
    "InteractionState",
    "SimilarityResult",
    "Stability",
]

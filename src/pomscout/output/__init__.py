"""报告与 BasePage 代码输出模块"""

from .codegen import (
    GenerationContext,
    build_context,
    default_out_file,
    generate_artifact,
    normalize_locator,
    resolve_target,
    select_candidates,
    write_artifact,
)
from .report import build_report, load_report, write_report
from .sections import classify_section

__all__ = [
    "GenerationContext",
    "build_context",
    "default_out_file",
    "generate_artifact",
    "normalize_locator",
    "resolve_target",
    "select_candidates",
    "write_artifact",
    "build_report",
    "load_report",
    "write_report",
    "classify_section",
]

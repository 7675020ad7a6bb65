"""PomScout - 跨页面元素相似度分析与 BasePage 生成"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

__version__ = "0.1.0"

if TYPE_CHECKING:
    from .pipeline.runner import analyze_elements as analyze_elements
    from .pipeline.runner import run_analysis as run_analysis

__all__ = [
    "__version__",
    "analyze_elements",
    "run_analysis",
]


def __getattr__(name: str) -> Any:
    """Lazy exports to avoid importing Playwright at package import time."""
    if name in {"analyze_elements", "run_analysis"}:
        from .pipeline.runner import analyze_elements, run_analysis

        return analyze_elements if name == "analyze_elements" else run_analysis
    raise AttributeError(f"module 'pomscout' has no attribute '{name}'")

"""分析流水线"""

from .runner import AnalysisResult, AnalysisSummary, analyze_elements, crawl_pages, run_analysis

__all__ = [
    "AnalysisResult",
    "AnalysisSummary",
    "analyze_elements",
    "crawl_pages",
    "run_analysis",
]

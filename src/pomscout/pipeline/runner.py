"""分析流水线运行器

串联整个流程：
1. 采集：逐个打开页面，按选择器目录提取元素。
2. 分析：跨页面相似度搜索，主路径分组；没有相似元素对时走回退分组。
3. 输出：写入 JSON 报告和 BasePage 源码。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..analysis import find_similar, group_by_recurrence, group_similar
from ..common.browser import BrowserSession, create_browser_session
from ..common.config import config
from ..common.exceptions import NoElementsFoundError, PageLoadError
from ..common.logger import get_logger
from ..common.types import ElementInfo, GroupedElement
from ..crawler import PageElementExtractor
from ..output import (
    default_out_file,
    generate_artifact,
    resolve_target,
    write_artifact,
    write_report,
)

logger = get_logger(__name__)


@dataclass
class AnalysisResult:
    """纯分析阶段的结果"""

    groups: list[GroupedElement]
    pair_count: int
    used_fallback: bool


@dataclass
class AnalysisSummary:
    """一次完整运行的摘要"""

    urls: list[str]
    element_count: int
    pair_count: int
    used_fallback: bool
    groups: list[GroupedElement] = field(default_factory=list)
    report_path: Path | None = None
    artifact_path: Path | None = None
    failed_urls: list[str] = field(default_factory=list)


def analyze_elements(
    elements: list[ElementInfo],
    min_similarity: float | None = None,
    class_prefix: int | None = None,
) -> AnalysisResult:
    """相似度搜索 + 分组；没有元素对达到阈值时改用回退分组"""
    similarities = find_similar(elements, min_similarity)
    if similarities:
        return AnalysisResult(
            groups=group_similar(similarities, class_prefix),
            pair_count=len(similarities),
            used_fallback=False,
        )

    logger.info("[Pipeline] 没有相似元素对，按多页面复现的语义特征分组...")
    return AnalysisResult(
        groups=group_by_recurrence(elements),
        pair_count=0,
        used_fallback=True,
    )


async def crawl_pages(
    session: BrowserSession,
    urls: list[str],
    extractor: PageElementExtractor,
    skip_failed_pages: bool = False,
) -> tuple[list[ElementInfo], list[str]]:
    """依次采集每个页面，页面在采集结束后关闭

    Returns:
        (全部元素, 导航失败被跳过的 URL)
    """
    elements: list[ElementInfo] = []
    failed: list[str] = []
    for url in urls:
        try:
            page = await session.open_page(url)
        except PageLoadError as exc:
            if not skip_failed_pages:
                raise
            logger.warning(f"[Pipeline] 跳过页面: {exc}")
            failed.append(url)
            continue
        try:
            elements.extend(await extractor.extract(page, url))
        finally:
            await page.close()
    return elements, failed


async def run_analysis(
    urls: list[str],
    min_similarity: float | None = None,
    headless: bool | None = None,
    max_per_selector: int | None = None,
    report_file: str | None = None,
    out_file: str | None = None,
    target: str | None = None,
    skip_failed_pages: bool | None = None,
) -> AnalysisSummary:
    """运行完整的采集 -> 分析 -> 输出流程

    Raises:
        PageLoadError: 页面导航失败（未开启跳过时）
        ConfigError: 生成目标不受支持（在打开浏览器之前检查）
        NoElementsFoundError: 所有页面都没有采集到元素
        OutputError: 报告或源码写入失败
    """
    target = resolve_target(target)
    threshold = config.analyzer.min_similarity if min_similarity is None else min_similarity
    report_path = report_file or config.output.report_file
    artifact_path = out_file or default_out_file(target)
    skip = config.crawler.skip_failed_pages if skip_failed_pages is None else skip_failed_pages

    logger.info(f"[Pipeline] URL 数量: {len(urls)}")
    logger.info(
        f"[Pipeline] 相似度阈值: {threshold}%  最大元素数/选择器: "
        f"{max_per_selector or config.crawler.max_per_selector}"
    )

    extractor = PageElementExtractor(max_per_selector=max_per_selector)
    async with create_browser_session(headless=headless) as session:
        elements, failed = await crawl_pages(session, urls, extractor, skip)

    logger.info(f"[Pipeline] 元素总数: {len(elements)}")
    if not elements:
        raise NoElementsFoundError(urls)

    result = analyze_elements(elements, threshold)
    logger.info(f"[Pipeline] 元素组: {len(result.groups)}")

    written_report = write_report(result.groups, report_path)
    code = generate_artifact(result.groups, target=target)
    written_artifact = write_artifact(code, artifact_path)

    return AnalysisSummary(
        urls=list(urls),
        element_count=len(elements),
        pair_count=result.pair_count,
        used_fallback=result.used_fallback,
        groups=result.groups,
        report_path=written_report,
        artifact_path=written_artifact,
        failed_urls=failed,
    )

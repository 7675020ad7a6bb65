"""CLI 入口"""

from __future__ import annotations

import asyncio
import threading

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .analysis.locators import is_base_page_recommendation
from .common.config import config
from .common.exceptions import PomScoutError
from .common.logger import get_logger
from .common.types import GroupedElement
from .common.validators import parse_url_list, validate_percentage, validate_positive_integer
from .output.codegen import TARGETS, resolve_target
from .output.report import load_report
from .pipeline import run_analysis

# 日志器
logger = get_logger(__name__)

app = typer.Typer(
    name="pomscout",
    help="PomScout CLI - 跨页面元素分析与 BasePage 生成",
    add_completion=False,
)
console = Console()


def run_async_safely(coro):
    """在 CLI 同步上下文中安全执行协程。"""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        # 没有运行中的事件循环，直接使用 asyncio.run
        return asyncio.run(coro)

    # 已有运行中的事件循环，需要在新线程中创建新的事件循环
    result_holder: dict[str, object] = {"result": None, "error": None}

    def _runner():
        try:
            result_holder["result"] = asyncio.run(coro)
        except BaseException as exc:  # noqa: BLE001
            result_holder["error"] = exc

    thread = threading.Thread(target=_runner, daemon=True)
    thread.start()
    thread.join()

    if result_holder["error"] is not None:
        raise result_holder["error"]  # type: ignore[misc]
    return result_holder["result"]


def _build_candidates_table(groups: list[GroupedElement], limit: int = 5) -> Table:
    """构建 BasePage 候选预览表格。"""
    table = Table(title="BasePage 候选元素")
    table.add_column("#", style="dim")
    table.add_column("name", style="cyan")
    table.add_column("confidence", style="magenta")
    table.add_column("locator", style="green")
    table.add_column("pages", style="yellow")

    candidates = [g for g in groups if is_base_page_recommendation(g.pom_recommendation)]
    for index, group in enumerate(candidates[:limit], start=1):
        table.add_row(
            str(index),
            group.suggested_name,
            f"{group.confidence}%",
            group.suggested_locator,
            str(len(group.pages)),
        )
    return table


@app.command("analyze")
def analyze_command(
    urls: str = typer.Option(
        "",
        "--urls",
        "-u",
        help="逗号分隔的页面 URL 列表（为空时使用内置示例页面）",
    ),
    min_sim: float = typer.Option(
        config.analyzer.min_similarity,
        "--min-sim",
        help="相似度阈值（百分比）",
    ),
    headless: bool = typer.Option(
        config.browser.headless,
        "--headless/--no-headless",
        help="是否使用无头模式",
    ),
    max_per_selector: int = typer.Option(
        config.crawler.max_per_selector,
        "--max-per-selector",
        help="单个选择器最多处理的元素数量",
    ),
    out_file: str = typer.Option(
        "",
        "--out-file",
        "-o",
        help="BasePage 输出路径（默认随 --target 变化）",
    ),
    report: str = typer.Option(
        config.output.report_file,
        "--report",
        "-r",
        help="JSON 报告输出路径",
    ),
    target: str = typer.Option(
        config.output.target,
        "--target",
        "-t",
        help=f"生成目标: {' / '.join(TARGETS)}",
    ),
):
    """分析页面，生成相似元素报告和 BasePage 源码"""
    try:
        url_list = parse_url_list(urls) or list(config.default_urls)
        threshold = validate_percentage(min_sim, "--min-sim")
        per_selector = validate_positive_integer(max_per_selector, "--max-per-selector")
        target = resolve_target(target)
    except PomScoutError as exc:
        console.print(f"[red]参数错误: {exc}[/red]")
        raise typer.Exit(code=1)

    console.print(
        Panel(
            f"[bold]URL:[/bold] {len(url_list)}\n"
            f"[bold]阈值:[/bold] {threshold}%   "
            f"[bold]无头:[/bold] {headless}   "
            f"[bold]每选择器上限:[/bold] {per_selector}",
            title="Element Similarity Analyzer",
            style="cyan",
        )
    )

    try:
        summary = run_async_safely(
            run_analysis(
                url_list,
                min_similarity=threshold,
                headless=headless,
                max_per_selector=per_selector,
                report_file=report,
                out_file=out_file or None,
                target=target,
            )
        )
    except PomScoutError as exc:
        logger.error(f"分析失败: {exc}")
        raise typer.Exit(code=1)

    if summary.used_fallback:
        console.print("[yellow]没有相似元素对，BasePage 基于多页面复现的语义元素生成[/yellow]")
    for url in summary.failed_urls:
        console.print(f"[yellow]跳过的页面: {url}[/yellow]")
    console.print(_build_candidates_table(summary.groups))
    console.print(f"[green]报告: {summary.report_path}[/green]")
    console.print(f"[green]BasePage: {summary.artifact_path}[/green]")


@app.command("show-report")
def show_report_command(
    report: str = typer.Option(
        config.output.report_file,
        "--report",
        "-r",
        help="JSON 报告路径",
    ),
    limit: int = typer.Option(10, "--limit", "-n", help="最多显示的候选数量"),
):
    """查看已有报告中的 BasePage 候选元素"""
    try:
        groups = load_report(report)
    except PomScoutError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    console.print(f"元素组: {len(groups)}")
    console.print(_build_candidates_table(groups, limit=limit))


if __name__ == "__main__":
    app()

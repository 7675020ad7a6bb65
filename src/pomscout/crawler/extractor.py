"""页面元素采集器

按选择器目录枚举页面元素，过滤出可交互、非装饰的元素，
在单页内按指纹去重，并为每个元素生成 ElementInfo。
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Callable, Sequence

from ..common.browser.probe import ElementProbe, PlaywrightElementProbe
from ..common.config import config
from ..common.logger import get_logger
from ..common.types import ElementInfo
from .catalogue import SELECTOR_CATALOGUE
from .filters import fingerprint, is_decorative, is_interactable

if TYPE_CHECKING:
    from playwright.async_api import Page


logger = get_logger(__name__)

ProbeFactory = Callable[[Any], ElementProbe]


class PageElementExtractor:
    """页面元素采集器

    选择器按批次并发查询（每批 batch_size 个），
    查询结果按目录顺序逐个处理，指纹集合只在这一步写入。
    """

    def __init__(
        self,
        max_per_selector: int | None = None,
        batch_size: int | None = None,
        catalogue: Sequence[str] = SELECTOR_CATALOGUE,
        probe_factory: ProbeFactory = PlaywrightElementProbe,
    ):
        self.max_per_selector = max_per_selector or config.crawler.max_per_selector
        self.batch_size = max(1, batch_size or config.crawler.batch_size)
        self.catalogue = list(catalogue)
        self.probe_factory = probe_factory

    async def extract(self, page: Page, page_url: str) -> list[ElementInfo]:
        """采集单个页面的元素

        Args:
            page: 已加载完成的页面
            page_url: 页面 URL（写入每个 ElementInfo）

        Returns:
            按“选择器顺序 -> 句柄顺序”排列的元素列表
        """
        logger.info(f"[Extractor] 开始采集: {page_url}")
        seen: set[str] = set()
        results: list[ElementInfo] = []

        for start in range(0, len(self.catalogue), self.batch_size):
            batch = self.catalogue[start:start + self.batch_size]
            handle_lists = await asyncio.gather(*(self._query(page, sel) for sel in batch))
            for handles in handle_lists:
                results.extend(await self._process_handles(handles, page_url, seen))

        logger.info(f"[Extractor] {page_url}: {len(results)} 个元素")
        return results

    async def _query(self, page: Page, selector: str) -> list[Any]:
        """查询选择器；失败时该选择器返回空列表"""
        try:
            return await page.query_selector_all(selector)
        except Exception as exc:
            logger.debug(f"[Extractor] 选择器查询失败 {selector}: {exc}")
            return []

    async def _process_handles(
        self,
        handles: list[Any],
        page_url: str,
        seen: set[str],
    ) -> list[ElementInfo]:
        collected: list[ElementInfo] = []
        for index, handle in enumerate(handles):
            probe = self.probe_factory(handle)
            try:
                # 超出上限的句柄只做释放
                if index >= self.max_per_selector:
                    continue
                info = await self._extract_one(probe, page_url, seen)
                if info is not None:
                    collected.append(info)
            except Exception as exc:
                logger.debug(f"[Extractor] 跳过元素: {exc}")
            finally:
                await probe.dispose()
        return collected

    async def _extract_one(
        self,
        probe: ElementProbe,
        page_url: str,
        seen: set[str],
    ) -> ElementInfo | None:
        state = await probe.interaction_state()
        if not is_interactable(state):
            return None

        characteristics = await probe.characteristics()
        if is_decorative(characteristics):
            return None

        key = fingerprint(characteristics)
        if key in seen:
            return None
        seen.add(key)

        return ElementInfo(
            selector=await probe.css_selector(),
            characteristics=characteristics,
            xpath=await probe.xpath(),
            page_url=page_url,
        )

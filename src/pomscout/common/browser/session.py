"""浏览器会话管理"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from playwright.async_api import Browser, Error as PlaywrightError, Page, Playwright, async_playwright

from ..config import config
from ..exceptions import BrowserNotStartedError, PageLoadError
from ..logger import get_logger

logger = get_logger(__name__)


class BrowserSession:
    """浏览器会话管理器

    负责启动 Chromium、打开并导航页面、在结束时释放所有资源。
    """

    def __init__(
        self,
        headless: bool | None = None,
        viewport_width: int | None = None,
        viewport_height: int | None = None,
        slow_mo: int | None = None,
    ):
        self.headless = headless if headless is not None else config.browser.headless
        self.viewport_width = viewport_width or config.browser.viewport_width
        self.viewport_height = viewport_height or config.browser.viewport_height
        self.slow_mo = slow_mo if slow_mo is not None else config.browser.slow_mo

        self._playwright: Playwright | None = None
        self._browser: Browser | None = None

    async def start(self) -> Browser:
        """启动浏览器"""
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self.headless,
            slow_mo=self.slow_mo,
        )
        logger.info(f"浏览器已启动 (headless={self.headless})")
        return self._browser

    async def stop(self) -> None:
        """关闭浏览器并停止 Playwright"""
        if self._browser:
            try:
                await self._browser.close()
                logger.info("浏览器已关闭")
            except PlaywrightError as exc:
                logger.debug(f"关闭浏览器失败: {exc}")
        if self._playwright:
            await self._playwright.stop()
        self._browser = None
        self._playwright = None

    @property
    def browser(self) -> Browser | None:
        return self._browser

    async def open_page(
        self,
        url: str,
        wait_until: str | None = None,
        timeout_ms: int | None = None,
    ) -> Page:
        """新建页面并导航到 URL

        导航失败时先关闭页面，再抛出 PageLoadError；不做重试。
        """
        if not self._browser:
            raise BrowserNotStartedError()

        page = await self._browser.new_page(
            viewport={"width": self.viewport_width, "height": self.viewport_height},
        )
        try:
            await page.goto(
                url,
                wait_until=wait_until or config.browser.wait_until,
                timeout=timeout_ms or config.browser.timeout_ms,
            )
        except PlaywrightError as exc:
            await page.close()
            raise PageLoadError(url, f"页面加载失败 ({exc})") from exc

        logger.info(f"已打开页面: {url}")
        return page


@asynccontextmanager
async def create_browser_session(
    headless: bool | None = None,
    viewport_width: int | None = None,
    viewport_height: int | None = None,
) -> AsyncGenerator[BrowserSession, None]:
    """创建浏览器会话的上下文管理器，退出时总是关闭浏览器"""
    session = BrowserSession(
        headless=headless,
        viewport_width=viewport_width,
        viewport_height=viewport_height,
    )
    try:
        await session.start()
        yield session
    finally:
        await session.stop()

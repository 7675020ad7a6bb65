"""浏览器会话与元素探针单元测试

Playwright 对象全部使用 Mock，不启动真实浏览器。
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import Error as PlaywrightError

from pomscout.common.browser.probe import (
    CHARACTERISTICS_JS,
    INTERACTION_STATE_JS,
    PlaywrightElementProbe,
)
from pomscout.common.browser.session import BrowserSession
from pomscout.common.exceptions import BrowserNotStartedError, PageLoadError


class TestBrowserSession:
    """浏览器会话测试"""

    @pytest.mark.asyncio
    async def test_open_page_requires_start(self):
        """未启动时打开页面抛出异常"""
        session = BrowserSession(headless=True)
        with pytest.raises(BrowserNotStartedError):
            await session.open_page("https://example.com/")

    @pytest.mark.asyncio
    async def test_open_page_navigates(self, mock_page):
        session = BrowserSession(headless=True, viewport_width=800, viewport_height=600)
        browser = MagicMock()
        browser.new_page = AsyncMock(return_value=mock_page)
        session._browser = browser

        page = await session.open_page("https://example.com/", wait_until="load", timeout_ms=1000)

        assert page is mock_page
        browser.new_page.assert_awaited_once_with(viewport={"width": 800, "height": 600})
        mock_page.goto.assert_awaited_once_with(
            "https://example.com/", wait_until="load", timeout=1000,
        )

    @pytest.mark.asyncio
    async def test_navigation_failure_closes_page(self, mock_page):
        """导航失败时关闭页面并抛出 PageLoadError"""
        session = BrowserSession(headless=True)
        browser = MagicMock()
        browser.new_page = AsyncMock(return_value=mock_page)
        session._browser = browser
        mock_page.goto = AsyncMock(side_effect=PlaywrightError("Timeout 45000ms exceeded"))

        with pytest.raises(PageLoadError) as exc_info:
            await session.open_page("https://example.com/")

        assert exc_info.value.url == "https://example.com/"
        mock_page.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_stop_without_start(self):
        session = BrowserSession(headless=True)
        await session.stop()
        assert session.browser is None


class TestPlaywrightElementProbe:
    """元素探针测试"""

    @pytest.mark.asyncio
    async def test_characteristics_payload(self):
        handle = MagicMock()
        handle.evaluate = AsyncMock(return_value={
            "tagName": "input",
            "classes": ["form-control"],
            "attributes": {"type": "text", "placeholder": "Search"},
            "textContent": "",
            "role": None,
            "placeholder": "Search",
            "type": "text",
            "href": None,
            "src": None,
        })

        characteristics = await PlaywrightElementProbe(handle).characteristics()

        handle.evaluate.assert_awaited_once_with(CHARACTERISTICS_JS)
        assert characteristics.tag_name == "input"
        assert characteristics.input_type == "text"
        assert characteristics.placeholder == "Search"
        assert characteristics.attr("type") == "text"
        assert characteristics.attr("id") == ""

    @pytest.mark.asyncio
    async def test_interaction_state_payload(self):
        handle = MagicMock()
        handle.evaluate = AsyncMock(return_value={
            "tagName": "div",
            "display": "block",
            "visibility": "visible",
            "opacity": 1,
            "width": 120,
            "height": 30,
            "role": "tab",
            "hasOnclick": False,
            "hasTabindex": True,
        })

        state = await PlaywrightElementProbe(handle).interaction_state()

        handle.evaluate.assert_awaited_once_with(INTERACTION_STATE_JS)
        assert state.role == "tab"
        assert state.has_tabindex

    @pytest.mark.asyncio
    async def test_dispose_ignores_errors(self):
        """句柄已失效时释放不抛出异常"""
        handle = MagicMock()
        handle.dispose = AsyncMock(side_effect=PlaywrightError("Target closed"))

        await PlaywrightElementProbe(handle).dispose()

        handle.dispose.assert_awaited_once()

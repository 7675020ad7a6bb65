"""页面元素采集器单元测试

通过假探针驱动采集流程，不启动浏览器。
"""

from unittest.mock import AsyncMock

import pytest

from pomscout.crawler.extractor import PageElementExtractor
from pomscout.crawler.filters import fingerprint

PAGE_URL = "https://example.com/"


def make_page(mapping):
    """按选择器返回预设句柄列表；值为异常时查询抛出该异常"""
    page = AsyncMock()

    async def query_selector_all(selector):
        value = mapping.get(selector, [])
        if isinstance(value, Exception):
            raise value
        return value

    page.query_selector_all = AsyncMock(side_effect=query_selector_all)
    return page


@pytest.fixture
def extractor_factory(fake_probe_factory):
    def factory(catalogue, max_per_selector=120, batch_size=4):
        return PageElementExtractor(
            max_per_selector=max_per_selector,
            batch_size=batch_size,
            catalogue=catalogue,
            probe_factory=fake_probe_factory,
        )
    return factory


class TestPageElementExtractor:
    """采集流程测试"""

    @pytest.mark.asyncio
    async def test_collects_elements_in_catalogue_order(self, make_handle, extractor_factory):
        """结果按“选择器顺序 -> 句柄顺序”排列"""
        page = make_page({
            "button": [make_handle("button", "Sign in", selector="button.btn")],
            "a": [
                make_handle("a", "Home", href="/", selector="a.home"),
                make_handle("a", "Settings", href="/settings", selector="a.settings"),
            ],
        })
        extractor = extractor_factory(["button", "a"])

        elements = await extractor.extract(page, PAGE_URL)

        assert [e.selector for e in elements] == ["button.btn", "a.home", "a.settings"]
        assert all(e.page_url == PAGE_URL for e in elements)
        assert elements[0].xpath == "//button"

    @pytest.mark.asyncio
    async def test_non_interactable_div_never_reaches_characteristics(self, make_handle, extractor_factory):
        """空文本、无交互信号的 div 在可交互性阶段被排除"""
        handle = make_handle("div", "", state={})
        page = make_page({"div": [handle]})

        elements = await extractor_factory(["div"]).extract(page, PAGE_URL)

        assert elements == []
        assert handle.characteristics_calls == 0
        assert handle.disposed

    @pytest.mark.asyncio
    async def test_hidden_and_decorative_elements_skipped(self, make_handle, extractor_factory):
        hidden = make_handle("button", "Hidden", state={"display": "none"})
        ad = make_handle("a", "Buy now", classes=["promo"], href="/buy")
        kept = make_handle("a", "Home", href="/")
        page = make_page({"a": [hidden, ad, kept]})

        elements = await extractor_factory(["a"]).extract(page, PAGE_URL)

        assert len(elements) == 1
        assert elements[0].characteristics.text_content == "Home"

    @pytest.mark.asyncio
    async def test_fingerprint_dedup_across_selectors(self, make_handle, extractor_factory):
        """同一元素被多个选择器命中时只保留第一次"""
        handle = make_handle("a", "Home", classes=["nav-link"], href="/", selector="a.nav-link")
        page = make_page({"a": [handle], ".nav-link": [handle]})

        elements = await extractor_factory(["a", ".nav-link"]).extract(page, PAGE_URL)

        assert len(elements) == 1

    @pytest.mark.asyncio
    async def test_per_selector_cap(self, make_handle, extractor_factory):
        """超出上限的句柄不处理但会释放"""
        handles = [make_handle("a", f"Link {i}", href=f"/{i}") for i in range(5)]
        page = make_page({"a": handles})

        elements = await extractor_factory(["a"], max_per_selector=2).extract(page, PAGE_URL)

        assert [e.characteristics.href for e in elements] == ["/0", "/1"]
        assert all(h.disposed for h in handles)
        assert handles[4].characteristics_calls == 0

    @pytest.mark.asyncio
    async def test_selector_failure_returns_empty(self, make_handle, extractor_factory):
        """单个选择器查询失败不影响其他选择器"""
        page = make_page({
            "input[type=search]": RuntimeError("invalid selector"),
            "a": [make_handle("a", "Home", href="/")],
        })

        elements = await extractor_factory(["input[type=search]", "a"]).extract(page, PAGE_URL)

        assert len(elements) == 1

    @pytest.mark.asyncio
    async def test_element_failure_is_skipped(self, make_handle, extractor_factory):
        """单个元素处理失败被跳过，句柄仍被释放"""
        broken = make_handle("a", "Stale", href="/stale", fail=True)
        good = make_handle("a", "Home", href="/")
        page = make_page({"a": [broken, good]})

        elements = await extractor_factory(["a"]).extract(page, PAGE_URL)

        assert [e.characteristics.text_content for e in elements] == ["Home"]
        assert broken.disposed and good.disposed

    @pytest.mark.asyncio
    async def test_batches_cover_whole_catalogue(self, make_handle, extractor_factory):
        """分批查询覆盖全部选择器"""
        catalogue = [f"[data-k='{i}']" for i in range(6)]
        page = make_page({
            selector: [make_handle("button", f"B{i}", attributes={"id": f"b{i}"})]
            for i, selector in enumerate(catalogue)
        })

        elements = await extractor_factory(catalogue, batch_size=4).extract(page, PAGE_URL)

        assert page.query_selector_all.await_count == 6
        assert [e.characteristics.text_content for e in elements] == [f"B{i}" for i in range(6)]

    @pytest.mark.asyncio
    async def test_repeated_extraction_is_stable(self, make_handle, extractor_factory):
        """同一页面采集两次，指纹和数量一致"""
        shared = make_handle("a", "Home", classes=["nav-link"], href="/", selector="a.nav-link")
        page = make_page({
            "a": [shared, make_handle("a", "Settings", href="/settings", selector="a.settings")],
            ".nav-link": [shared],
            "button": [make_handle("button", "Sign in", selector="button.btn")],
        })
        extractor = extractor_factory(["a", ".nav-link", "button"])

        first = await extractor.extract(page, PAGE_URL)
        second = await extractor.extract(page, PAGE_URL)

        assert len(first) == len(second) == 3
        assert [fingerprint(e.characteristics) for e in first] == [
            fingerprint(e.characteristics) for e in second
        ]
        assert len({fingerprint(e.characteristics) for e in first}) == len(first)

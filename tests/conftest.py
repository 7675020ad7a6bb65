"""pytest 全局配置和 fixtures

提供测试所需的元素构造工具、假探针和 Mock 页面。
"""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# 添加项目路径
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pomscout.common.types import (  # noqa: E402
    ElementCharacteristics,
    ElementInfo,
    GroupedElement,
    InteractionState,
    Stability,
)
from pomscout.analysis.locators import RECOMMENDATIONS  # noqa: E402


PAGE_A = "https://example.com/"
PAGE_B = "https://example.com/profile"
PAGE_C = "https://example.com/settings"


# ============================================================================
# 元素构造
# ============================================================================

def build_element(
    page_url: str = PAGE_A,
    tag: str = "a",
    classes: list[str] | None = None,
    text: str = "",
    attributes: dict[str, str] | None = None,
    role: str | None = None,
    placeholder: str | None = None,
    input_type: str | None = None,
    href: str | None = None,
    selector: str | None = None,
) -> ElementInfo:
    """按常用字段构造 ElementInfo，attributes 自动补齐 class/role/href 等属性"""
    attrs = dict(attributes or {})
    if classes:
        attrs.setdefault("class", " ".join(classes))
    for name, value in (("role", role), ("placeholder", placeholder), ("type", input_type), ("href", href)):
        if value is not None:
            attrs.setdefault(name, value)

    characteristics = ElementCharacteristics(
        tag_name=tag,
        classes=list(classes or []),
        attributes=attrs,
        text_content=text,
        role=role,
        placeholder=placeholder,
        input_type=input_type,
        href=href,
    )
    return ElementInfo(
        selector=selector or tag,
        characteristics=characteristics,
        xpath=f"//{tag}",
        page_url=page_url,
    )


def build_group(
    name: str,
    locator: str,
    element_type: str = "a",
    confidence: float = 90.0,
    stability: Stability = Stability.HIGH,
    pages: list[str] | None = None,
) -> GroupedElement:
    """构造元素组"""
    return GroupedElement(
        suggested_locator=locator,
        suggested_name=name,
        element_type=element_type,
        pages=pages or [PAGE_A, PAGE_B],
        selectors=[element_type],
        confidence=confidence,
        pom_recommendation=RECOMMENDATIONS[stability],
        stability=stability,
    )


@pytest.fixture
def make_element():
    """ElementInfo 工厂"""
    return build_element


@pytest.fixture
def make_group():
    """GroupedElement 工厂"""
    return build_group


# ============================================================================
# 假探针
# ============================================================================

VISIBLE_STATE = {
    "display": "block",
    "visibility": "visible",
    "opacity": 1.0,
    "width": 100.0,
    "height": 20.0,
}


class FakeHandle:
    """假元素句柄：保存状态与特征，记录是否被释放"""

    def __init__(
        self,
        characteristics: ElementCharacteristics,
        state: InteractionState | None = None,
        selector: str | None = None,
        fail: bool = False,
    ):
        self.characteristics = characteristics
        self.state = state or InteractionState(tag_name=characteristics.tag_name, **VISIBLE_STATE)
        self.selector = selector or characteristics.tag_name
        self.fail = fail
        self.disposed = False
        self.characteristics_calls = 0


class FakeProbe:
    """基于 FakeHandle 的探针实现"""

    def __init__(self, handle: FakeHandle):
        self.handle = handle

    async def interaction_state(self) -> InteractionState:
        if self.handle.fail:
            raise RuntimeError("元素已从 DOM 中移除")
        return self.handle.state

    async def characteristics(self) -> ElementCharacteristics:
        self.handle.characteristics_calls += 1
        return self.handle.characteristics

    async def css_selector(self) -> str:
        return self.handle.selector

    async def xpath(self) -> str:
        return f"//{self.handle.characteristics.tag_name}"

    async def dispose(self) -> None:
        self.handle.disposed = True


def build_handle(
    tag: str = "a",
    text: str = "",
    classes: list[str] | None = None,
    attributes: dict[str, str] | None = None,
    state: dict | None = None,
    selector: str | None = None,
    fail: bool = False,
    **fields,
) -> FakeHandle:
    """构造 FakeHandle；state 覆盖默认的可见状态"""
    characteristics = ElementCharacteristics(
        tag_name=tag,
        classes=list(classes or []),
        attributes=dict(attributes or {}),
        text_content=text,
        **fields,
    )
    interaction = None
    if state is not None:
        interaction = InteractionState(tag_name=tag, **{**VISIBLE_STATE, **state})
    return FakeHandle(characteristics, interaction, selector, fail)


@pytest.fixture
def make_handle():
    """FakeHandle 工厂"""
    return build_handle


@pytest.fixture
def fake_probe_factory():
    """探针工厂：把 FakeHandle 包装为 FakeProbe"""
    return FakeProbe


# ============================================================================
# Mock Fixtures
# ============================================================================

@pytest.fixture
def mock_page():
    """模拟 Playwright Page 对象"""
    page = AsyncMock()
    page.url = PAGE_A
    page.query_selector_all = AsyncMock(return_value=[])
    page.close = AsyncMock()
    page.goto = AsyncMock()
    page.locator = MagicMock()
    return page


# ============================================================================
# 临时目录 Fixture
# ============================================================================

@pytest.fixture
def temp_output_dir(tmp_path):
    """创建临时输出目录"""
    output_dir = tmp_path / "output"
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir

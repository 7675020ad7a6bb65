"""页面内元素探针

把采集阶段需要的页面内计算收敛为一组固定操作，
由 Playwright ElementHandle 实现；测试中可替换为假实现。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from ..logger import get_logger
from ..types import ElementCharacteristics, InteractionState

if TYPE_CHECKING:
    from playwright.async_api import ElementHandle


logger = get_logger(__name__)


# ============================================================================
# 注入脚本
# ============================================================================

INTERACTION_STATE_JS = r"""
(node) => {
  const style = window.getComputedStyle(node);
  const rect = node.getBoundingClientRect ? node.getBoundingClientRect() : null;
  return {
    tagName: String(node.tagName).toLowerCase(),
    display: style.display,
    visibility: style.visibility,
    opacity: Number(style.opacity),
    width: rect ? rect.width : 0,
    height: rect ? rect.height : 0,
    role: node.getAttribute('role') || '',
    hasOnclick: node.hasAttribute('onclick'),
    hasTabindex: node.hasAttribute('tabindex'),
  };
}
"""

CHARACTERISTICS_JS = r"""
(node) => {
  const attributes = {};
  for (const a of Array.from(node.attributes || [])) attributes[String(a.name)] = String(a.value);
  const text = String(node.textContent || '').replace(/\s+/g, ' ').trim().slice(0, 100);
  return {
    tagName: String(node.tagName).toLowerCase(),
    classes: Array.from(node.classList || []),
    attributes,
    textContent: text,
    role: node.getAttribute('role') || null,
    placeholder: node.getAttribute('placeholder') || null,
    type: node.getAttribute('type') || null,
    href: node.getAttribute('href') || null,
    src: node.getAttribute('src') || null,
  };
}
"""

CSS_SELECTOR_JS = r"""
(node) => {
  const tag = String(node.tagName).toLowerCase();
  if (node.id) return `#${node.id}`;
  const classes = Array.from(node.classList || []);
  if (classes.length) return `${tag}.${classes.slice(0, 3).join('.')}`;
  return tag;
}
"""

XPATH_JS = r"""
(node) => {
  const build = (n) => {
    if (n.id) return `//*[@id="${n.id}"]`;
    if (n === document.body) return '/html/body';
    const parent = n.parentElement;
    if (!parent) return '/';
    const siblings = Array.from(parent.children).filter((s) => s.tagName === n.tagName);
    const index = siblings.indexOf(n) + 1;
    return `${build(parent)}/${String(n.tagName).toLowerCase()}[${index || 1}]`;
  };
  return build(node);
}
"""


class ElementProbe(Protocol):
    """采集阶段使用的元素能力接口"""

    async def interaction_state(self) -> InteractionState: ...

    async def characteristics(self) -> ElementCharacteristics: ...

    async def css_selector(self) -> str: ...

    async def xpath(self) -> str: ...

    async def dispose(self) -> None: ...


class PlaywrightElementProbe:
    """基于 Playwright ElementHandle 的探针实现"""

    def __init__(self, handle: ElementHandle):
        self.handle = handle

    async def interaction_state(self) -> InteractionState:
        payload = await self.handle.evaluate(INTERACTION_STATE_JS)
        return InteractionState.model_validate(payload)

    async def characteristics(self) -> ElementCharacteristics:
        payload = await self.handle.evaluate(CHARACTERISTICS_JS)
        return ElementCharacteristics.model_validate(payload)

    async def css_selector(self) -> str:
        return str(await self.handle.evaluate(CSS_SELECTOR_JS))

    async def xpath(self) -> str:
        return str(await self.handle.evaluate(XPATH_JS))

    async def dispose(self) -> None:
        """释放句柄，失败时忽略（句柄可能已随页面失效）"""
        try:
            await self.handle.dispose()
        except Exception as exc:
            logger.debug(f"释放元素句柄失败: {exc}")

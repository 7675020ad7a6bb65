"""元素过滤规则：可交互性、装饰性判断与页面内去重指纹"""

from __future__ import annotations

import re

from ..common.types import ElementCharacteristics, InteractionState

INTERACTIVE_TAGS = frozenset({"input", "button", "select", "textarea", "a", "form"})
INTERACTIVE_ROLES = frozenset({"button", "link", "tab", "menuitem", "search", "navigation"})
SEMANTIC_TAGS = frozenset(
    {"h1", "h2", "h3", "h4", "h5", "h6", "main", "nav", "header", "footer", "article", "section"}
)
# 无文本时仍保留的输入类标签
INPUT_FAMILY_TAGS = frozenset({"input", "button", "select", "textarea"})

# 短词只按完整词匹配（避免 header、address 之类误判）
DECORATIVE_CLASS_TOKENS = frozenset({"ad", "ads", "bg"})
# 其余关键字按子串匹配
DECORATIVE_CLASS_KEYWORDS = (
    "advert", "adsbygoogle", "adsense", "banner", "promo",
    "decoration", "ornament", "divider", "spacer", "separator",
    "background", "overlay", "backdrop", "shadow", "border", "icon-only",
)
DECORATIVE_ID_PATTERN = re.compile(r"google|doubleclick|adsystem|advert", re.IGNORECASE)

_TOKEN_SPLIT = re.compile(r"[-_\s]+")


def is_interactable(state: InteractionState) -> bool:
    """判断元素是否可见且可交互

    先看计算样式和边界框，再依次看标签、onclick、role、tabindex 和语义标签。
    """
    if state.display == "none" or state.visibility == "hidden" or state.opacity == 0:
        return False
    if state.width == 0 or state.height == 0:
        return False

    if state.tag_name in INTERACTIVE_TAGS:
        return True
    if state.has_onclick:
        return True
    if state.role in INTERACTIVE_ROLES:
        return True
    if state.has_tabindex:
        return True
    return state.tag_name in SEMANTIC_TAGS


def _is_decorative_class(name: str) -> bool:
    lowered = name.lower()
    if any(keyword in lowered for keyword in DECORATIVE_CLASS_KEYWORDS):
        return True
    return any(token in DECORATIVE_CLASS_TOKENS for token in _TOKEN_SPLIT.split(lowered))


def is_decorative(characteristics: ElementCharacteristics) -> bool:
    """广告/装饰类元素，或非输入类的空文本元素"""
    if DECORATIVE_ID_PATTERN.search(characteristics.attr("id")):
        return True
    if any(_is_decorative_class(name) for name in characteristics.classes):
        return True
    return not characteristics.text_content and characteristics.tag_name not in INPUT_FAMILY_TAGS


def fingerprint(characteristics: ElementCharacteristics) -> str:
    """页面内去重指纹：tag|id|role|name|placeholder|href|首个 class

    七个字段完全相同的不同元素（如两个无标签、同 class 的按钮）会被视为同一个，
    只保留第一次出现的那个。
    """
    c = characteristics
    return "|".join([
        c.tag_name,
        c.attr("id"),
        c.role or "",
        c.attr("name"),
        c.placeholder or "",
        c.href or "",
        c.classes[0] if c.classes else "",
    ])

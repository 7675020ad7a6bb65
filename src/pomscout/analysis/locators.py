"""定位器与字段名生成

按优先级规则为代表元素生成稳定的 Playwright 定位表达式和可读字段名，
并给出稳定性等级与 BasePage 建议。规则表均为“先命中先返回”。
"""

from __future__ import annotations

import json
import re

from ..common.types import ElementInfo, Stability

TEST_HOOK_ATTRIBUTES = ("data-testid", "data-cy", "data-test")
SEMANTIC_LOCATOR_TAGS = frozenset({"header", "footer", "nav", "main", "aside", "section", "article"})
HEADING_PATTERN = re.compile(r"^h[1-6]$")

# ============================================================================
# 动态 id 识别
# ============================================================================

DYNAMIC_ID_PATTERNS = (
    re.compile(r"^[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}$", re.IGNORECASE),
    re.compile(r"^[a-f0-9]{16,}$", re.IGNORECASE),
    re.compile(r"\d{10,}"),
    re.compile(r"(random|temp|generated|uuid|guid)", re.IGNORECASE),
    re.compile(r"^(react|ember|mat|cdk|_ngcontent|vaadin|ant|chakra|mantine|mui)-", re.IGNORECASE),
)


def is_dynamic_id(element_id: str) -> bool:
    """id 是否像自动生成的（UUID、长十六进制、长数字、框架前缀等）"""
    return any(pattern.search(element_id) for pattern in DYNAMIC_ID_PATTERNS)


def stable_id(element: ElementInfo) -> str:
    """返回非动态 id，没有则返回空字符串"""
    element_id = element.characteristics.attr("id")
    if element_id and not is_dynamic_id(element_id):
        return element_id
    return ""


# ============================================================================
# 有意义的 class
# ============================================================================

UTILITY_CLASS_PATTERNS = (
    re.compile(
        r"^(m|p|mt|mb|ml|mr|pt|pb|pl|pr|w|h|min|max|text|bg|border|shadow|rounded"
        r"|flex|grid|block|inline|relative|absolute)([-:]|$)",
        re.IGNORECASE,
    ),
    re.compile(r"^(sm|md|lg|xl):", re.IGNORECASE),
    re.compile(r"util|utility|helper", re.IGNORECASE),
)

PREFERRED_CLASS_PATTERNS = (
    re.compile(r"(navbar|header|footer|sidebar|content|main|nav|menu)", re.IGNORECASE),
    re.compile(r"(btn|button)(?!.*(util|margin|padding))", re.IGNORECASE),
    re.compile(r"(form|input|search)", re.IGNORECASE),
    re.compile(r"(logo|brand|title)", re.IGNORECASE),
    re.compile(r"(toggle|dropdown|modal|dialog)", re.IGNORECASE),
)


def _is_utility_class(name: str) -> bool:
    return any(pattern.search(name) for pattern in UTILITY_CLASS_PATTERNS)


def meaningful_class(classes: list[str]) -> str | None:
    """挑选最能表达结构角色的 class

    先按偏好分组依次查找，再退回第一个长度大于 2 的非工具类 class。
    """
    candidates = [name for name in classes if not _is_utility_class(name)]
    for pattern in PREFERRED_CLASS_PATTERNS:
        for name in candidates:
            if pattern.search(name):
                return name
    for name in candidates:
        if len(name) > 2:
            return name
    return None


# ============================================================================
# 定位器
# ============================================================================


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def role_locator(role: str, name: str | None = None) -> str:
    if name:
        return f"getByRole('{role}', {{ name: {_quote(name)} }})"
    return f"getByRole('{role}')"


def suggest_locator(element: ElementInfo) -> str:
    """按优先级生成定位表达式

    测试钩子 > role + 可访问名 > input 属性 > 按钮文本 > 链接 >
    稳定 id > 有意义的 class > 语义标签 > 标题文本 > 采集时的选择器。
    """
    c = element.characteristics

    for attribute in TEST_HOOK_ATTRIBUTES:
        if c.attr(attribute):
            return f'[{attribute}="{c.attr(attribute)}"]'

    accessible_name = c.attr("aria-label") or c.text_content.strip()
    if c.role:
        return role_locator(c.role, accessible_name or None)

    if c.tag_name == "input":
        if c.placeholder:
            return f"getByPlaceholder({_quote(c.placeholder)})"
        if c.attr("name"):
            return f'input[name="{c.attr("name")}"]'
        if c.input_type:
            return f'input[type="{c.input_type}"]'

    if c.tag_name == "button" and c.text_content and len(c.text_content) < 50:
        return role_locator("button", c.text_content)

    if c.tag_name == "a":
        if c.text_content:
            return role_locator("link", c.text_content)
        if c.href:
            return f'a[href="{c.href}"]'

    element_id = stable_id(element)
    if element_id:
        return f"#{element_id}"

    class_name = meaningful_class(c.classes)
    if class_name:
        return f".{class_name}"

    if c.tag_name in SEMANTIC_LOCATOR_TAGS:
        return c.tag_name

    if HEADING_PATTERN.match(c.tag_name) and c.text_content:
        return f"{c.tag_name}:has-text({_quote(c.text_content[:30])})"

    return element.selector or c.tag_name


# ============================================================================
# 字段名
# ============================================================================

ROLE_SUFFIXES = {
    "button": "Button",
    "link": "Link",
    "tab": "Tab",
    "tabpanel": "Panel",
    "dialog": "Dialog",
    "navigation": "Navigation",
    "search": "Search",
    "menu": "Menu",
    "menuitem": "MenuItem",
}

TAG_SUFFIXES = {
    "a": "Link",
    "button": "Button",
    "select": "Dropdown",
    "textarea": "Textarea",
    "form": "Form",
    "table": "Table",
    "nav": "Navigation",
    "header": "Header",
    "footer": "Footer",
    "main": "Content",
}

INPUT_TYPE_SUFFIXES = {
    "text": "Input",
    "email": "Input",
    "password": "Input",
    "number": "Input",
    "tel": "Input",
    "url": "Input",
    "search": "Input",
    "checkbox": "Checkbox",
    "radio": "Radio",
    "file": "FileInput",
    "date": "DateInput",
    "time": "DateInput",
    "datetime-local": "DateInput",
}

_SEPARATORS = re.compile(r"[-_\s]+")
_WORD_START = re.compile(r"(?:^\w|[A-Z]|\b\w)", re.ASCII)
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def clean_base_name(value: str) -> str:
    """小写化并把连字符、下划线和空白折叠为单个空格"""
    cleaned = _SEPARATORS.sub(" ", value.lower().strip()).strip()
    return cleaned or "element"


def to_camel(value: str) -> str:
    """转换为 camelCase，只保留 ASCII 字母和数字"""
    words = _WORD_START.sub(
        lambda m: m.group(0).lower() if m.start() == 0 else m.group(0).upper(),
        clean_base_name(value),
    )
    camel = _NON_ALNUM.sub("", words)
    if not camel or not camel[0].isalpha():
        camel = "element" + camel
    return camel


def name_suffix(tag: str, input_type: str | None = None, role: str | None = None) -> str:
    """字段名后缀：role 优先，其次标签和 input 类型"""
    if role and role in ROLE_SUFFIXES:
        return ROLE_SUFFIXES[role]
    if tag == "a":
        return "Link"
    if tag == "button" or input_type in ("submit", "button"):
        return "Button"
    if tag in TAG_SUFFIXES:
        return TAG_SUFFIXES[tag]
    if HEADING_PATTERN.match(tag):
        return "Heading"
    if tag == "input":
        return INPUT_TYPE_SUFFIXES.get(input_type or "", "Input")
    return "Element"


def href_slug(href: str | None) -> str:
    """根路径或以 / 结尾 -> home；否则取最后一段路径"""
    if not href:
        return ""
    if href == "/" or href.endswith("/"):
        return "home"
    segments = [segment for segment in href.split("/") if segment]
    return segments[-1] if segments else "link"


def suggest_name(element: ElementInfo) -> str:
    """生成 camelCase 字段名"""
    c = element.characteristics
    base = (
        c.attr("data-testid")
        or c.attr("aria-label")
        or stable_id(element)
        or c.placeholder
        or c.text_content
        or c.attr("name")
        or meaningful_class(c.classes)
        or href_slug(c.href)
        or c.tag_name
    )
    return to_camel(base) + name_suffix(c.tag_name, c.input_type, c.role)


# ============================================================================
# 稳定性
# ============================================================================

RECOMMENDATIONS = {
    Stability.HIGH: "Recommended for BasePage - stable across pages",
    Stability.MEDIUM: "Consider for BasePage - may need overrides",
    Stability.LOW: "Page-specific locator - avoid BasePage",
}
RECURRING_RECOMMENDATION = "Recommended for BasePage - appears on multiple pages"
_BASE_PAGE_PREFIXES = ("Recommended for BasePage", "Consider for BasePage")


def classify_stability(element: ElementInfo) -> Stability:
    c = element.characteristics
    if any(c.attr(attribute) for attribute in TEST_HOOK_ATTRIBUTES):
        return Stability.HIGH
    if stable_id(element) or c.role:
        return Stability.HIGH
    if meaningful_class(c.classes):
        return Stability.MEDIUM
    return Stability.LOW


def pom_recommendation(element: ElementInfo) -> str:
    return RECOMMENDATIONS[classify_stability(element)]


def is_base_page_recommendation(recommendation: str) -> bool:
    """建议文本是否允许进入 BasePage（high / medium / 多页面复现）"""
    return recommendation.startswith(_BASE_PAGE_PREFIXES)

"""BasePage 字段分区规则

分区按固定顺序匹配，候选元素归入第一个命中的分区；都不命中时归入 Utility。
"""

from __future__ import annotations

import re
from typing import Callable, NamedTuple

from ..common.types import GroupedElement

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")


def _name(pattern: str) -> Callable[[GroupedElement], bool]:
    compiled = re.compile(pattern, re.IGNORECASE)
    return lambda group: bool(compiled.search(group.suggested_name))


def _locator(pattern: str) -> Callable[[GroupedElement], bool]:
    compiled = re.compile(pattern)
    return lambda group: bool(compiled.search(group.suggested_locator.lower()))


def _tag(*tags: str) -> Callable[[GroupedElement], bool]:
    return lambda group: group.element_type in tags


def _any(*checks: Callable[[GroupedElement], bool]) -> Callable[[GroupedElement], bool]:
    return lambda group: any(check(group) for check in checks)


is_navigation = _any(
    _name(r"(nav|menu|home|docs|api)"),
    _locator(r'role="navigation"|nav|menu|href='),
    _tag("nav"),
)
is_header = _any(_name(r"(header|logo|brand)"), _locator(r"header|logo|brand"), _tag("header"))
is_search = _any(_locator(r"search|docsearch"), _name(r"search"))
is_sidebar = _any(
    _name(r"(sidebar|aside|toc|toggle)"),
    _locator(r"(sidebar|aside|toc|toggle)"),
    _tag("aside"),
)
is_content = _any(
    _name(r"(main|content|article|title|heading)"),
    _locator(r"(main|content|article)"),
    _tag("main", "section", "article", *HEADING_TAGS),
)
is_form = _any(
    _name(r"(form|input|button|dropdown|checkbox|radio)"),
    _tag("input", "button", "select", "textarea", "form"),
)
is_footer = _any(_name(r"(footer)"), _tag("footer"))
is_theme = _any(_locator(r"(theme|dark|light|color-mode)"), _name(r"(theme|dark|light)"))


class Section(NamedTuple):
    title: str
    matches: Callable[[GroupedElement], bool]


SECTIONS: tuple[Section, ...] = (
    Section("Navigation Elements", is_navigation),
    Section("Header Elements", lambda g: is_header(g) and not is_navigation(g)),
    Section("Search Elements", is_search),
    Section("Sidebar Elements", is_sidebar),
    Section("Content Elements", is_content),
    Section("Form Elements", lambda g: is_form(g) and not is_search(g)),
    Section("Footer Elements", is_footer),
    Section("Theme Elements", is_theme),
)
UTILITY_SECTION = "Utility Elements"


def classify_section(group: GroupedElement) -> str:
    """返回候选元素所属分区标题"""
    for section in SECTIONS:
        if section.matches(group):
            return section.title
    return UTILITY_SECTION


def section_titles() -> list[str]:
    return [section.title for section in SECTIONS] + [UTILITY_SECTION]

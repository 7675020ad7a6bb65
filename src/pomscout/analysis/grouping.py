"""相似元素分组

主路径：按结构签名把相似元素对合并为组。
回退路径：没有任何元素对达到阈值时，按语义键把多页面复现的元素分组。
"""

from __future__ import annotations

from ..common.config import config
from ..common.logger import get_logger
from ..common.types import ElementInfo, GroupedElement, SimilarityResult
from .locators import (
    RECURRING_RECOMMENDATION,
    classify_stability,
    href_slug,
    pom_recommendation,
    suggest_locator,
    suggest_name,
)

logger = get_logger(__name__)

FALLBACK_SEMANTIC_TAGS = frozenset({"header", "footer", "nav", "main", "aside"})


def grouping_key(element: ElementInfo, class_prefix: int | None = None) -> str:
    """结构签名：tag-type-role-首个 class 前缀"""
    prefix = config.analyzer.group_class_prefix if class_prefix is None else class_prefix
    c = element.characteristics
    first_class = c.classes[0] if c.classes else ""
    return f"{c.tag_name}-{c.input_type or 'none'}-{c.role or 'none'}-{first_class[:prefix]}"


def _new_group(base: ElementInfo, confidence: float, recommendation: str) -> GroupedElement:
    return GroupedElement(
        suggested_locator=suggest_locator(base),
        suggested_name=suggest_name(base),
        element_type=base.characteristics.tag_name,
        confidence=confidence,
        pom_recommendation=recommendation,
        stability=classify_stability(base),
    )


def group_similar(
    similarities: list[SimilarityResult],
    class_prefix: int | None = None,
) -> list[GroupedElement]:
    """把相似元素对折叠为组，结果按置信度降序

    每个元素对以 element1 的结构签名归组；
    第一个元素对建立组并决定定位器和字段名，之后的元素对只扩充页面、选择器和置信度。
    """
    groups: dict[str, GroupedElement] = {}
    for result in sorted(similarities, key=lambda item: item.similarity_score, reverse=True):
        key = grouping_key(result.element1, class_prefix)
        group = groups.get(key)
        if group is None:
            base = result.element1
            group = _new_group(base, result.similarity_score, pom_recommendation(base))
            groups[key] = group
        group.merge(result)

    ordered = sorted(groups.values(), key=lambda item: item.confidence, reverse=True)
    logger.info(f"[Grouping] 元素组: {len(ordered)}")
    return ordered


def recurrence_key(element: ElementInfo) -> str:
    """回退分组使用的粗粒度语义键"""
    c = element.characteristics
    if c.attr("data-testid"):
        return f"testid:{c.attr('data-testid')}"
    if c.role:
        return f"role:{c.role}"
    if c.tag_name == "a" and c.href:
        slug = href_slug(c.href)
        if slug == "home":
            return "nav:home"
        if "/docs" in c.href:
            return "nav:docs"
        if "/api" in c.href:
            return "nav:api"
        return f"nav:{slug}"
    if c.tag_name in FALLBACK_SEMANTIC_TAGS:
        return f"semantic:{c.tag_name}"

    lowered = [name.lower() for name in c.classes]
    if any("search" in name for name in lowered):
        return "search"
    if any("toggle" in name for name in lowered):
        return "toggle"
    if any(word in name for name in lowered for word in ("theme", "dark", "light")):
        return "theme"
    return f"{c.tag_name}-{c.input_type or 'default'}"


def group_by_recurrence(
    elements: list[ElementInfo],
    confidence: float | None = None,
) -> list[GroupedElement]:
    """回退分组：语义键在至少两个页面出现即成组，结果按页面数降序"""
    fixed_confidence = config.analyzer.fallback_confidence if confidence is None else confidence
    buckets: dict[str, list[ElementInfo]] = {}
    for element in elements:
        buckets.setdefault(recurrence_key(element), []).append(element)

    groups: list[GroupedElement] = []
    for members in buckets.values():
        pages = list(dict.fromkeys(member.page_url for member in members))
        if len(pages) < 2:
            continue
        representative = members[0]
        group = _new_group(representative, fixed_confidence, RECURRING_RECOMMENDATION)
        group.common_attributes = list(representative.characteristics.attributes)
        group.pages = pages
        group.selectors = list(dict.fromkeys(member.selector for member in members))
        groups.append(group)

    groups.sort(key=lambda item: len(item.pages), reverse=True)
    logger.info(f"[Grouping] 回退分组: {len(groups)} 个多页面复现元素")
    return groups

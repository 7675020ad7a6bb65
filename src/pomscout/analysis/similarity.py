"""跨页面元素相似度评分"""

from __future__ import annotations

import math

from ..common.config import config
from ..common.logger import get_logger
from ..common.types import ElementInfo, SimilarityResult

logger = get_logger(__name__)

# 评分权重，满分 8 分（tag 3 + class 2 + 属性 3）；文本匹配是 0.5 分附加分，不计入满分
TAG_WEIGHT = 3.0
CLASS_WEIGHT = 2.0
ATTRIBUTE_WEIGHT = 1.0
TEXT_MATCH_SCORE = 0.5
COMPARED_ATTRIBUTES = ("role", "input_type", "placeholder")
_ATTRIBUTE_LABELS = {"role": "role", "input_type": "type", "placeholder": "placeholder"}


def _round_half_up(value: float, digits: int = 2) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def score_similarity(a: ElementInfo, b: ElementInfo) -> SimilarityResult:
    """计算两个不同页面元素的相似度（0-100）

    Raises:
        ValueError: 两个元素来自同一页面时
    """
    if a.page_url == b.page_url:
        raise ValueError(f"同一页面的元素不参与比较: {a.page_url}")

    first, second = a.characteristics, b.characteristics
    score = 0.0
    total = 0.0
    matched: list[str] = []

    total += TAG_WEIGHT
    if first.tag_name == second.tag_name:
        score += TAG_WEIGHT
        matched.append("tagName")

    total += CLASS_WEIGHT
    common = [name for name in first.classes if name in second.classes][:int(CLASS_WEIGHT)]
    score += len(common)
    if common:
        matched.append(f"classes({','.join(common)})")

    for field in COMPARED_ATTRIBUTES:
        total += ATTRIBUTE_WEIGHT
        value = getattr(first, field)
        if value and value == getattr(second, field):
            score += ATTRIBUTE_WEIGHT
            matched.append(_ATTRIBUTE_LABELS[field])

    if first.text_content and second.text_content:
        left, right = first.text_content.lower(), second.text_content.lower()
        if left == right or left in right or right in left:
            score += TEXT_MATCH_SCORE
            matched.append("text")

    percentage = min(100.0, (score / total) * 100) if total else 0.0
    return SimilarityResult(
        element1=a,
        element2=b,
        similarity_score=_round_half_up(percentage),
        matching_attributes=matched,
    )


def find_similar(
    elements: list[ElementInfo],
    min_score: float | None = None,
) -> list[SimilarityResult]:
    """两两比较所有跨页面元素，返回得分不低于阈值的结果（按得分降序）"""
    threshold = config.analyzer.min_similarity if min_score is None else min_score
    results: list[SimilarityResult] = []
    for i, left in enumerate(elements):
        for right in elements[i + 1:]:
            if left.page_url == right.page_url:
                continue
            result = score_similarity(left, right)
            if result.similarity_score >= threshold:
                results.append(result)

    results.sort(key=lambda item: item.similarity_score, reverse=True)
    logger.info(f"[Similarity] 相似度 ≥ {threshold}% 的元素对: {len(results)}")
    return results

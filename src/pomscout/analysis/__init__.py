"""元素相似度分析模块"""

from .grouping import group_by_recurrence, group_similar, grouping_key, recurrence_key
from .locators import (
    classify_stability,
    is_dynamic_id,
    meaningful_class,
    pom_recommendation,
    suggest_locator,
    suggest_name,
)
from .similarity import find_similar, score_similarity

__all__ = [
    "find_similar",
    "score_similarity",
    "group_similar",
    "group_by_recurrence",
    "grouping_key",
    "recurrence_key",
    "classify_stability",
    "is_dynamic_id",
    "meaningful_class",
    "pom_recommendation",
    "suggest_locator",
    "suggest_name",
]

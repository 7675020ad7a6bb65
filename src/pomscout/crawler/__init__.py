"""页面元素采集模块"""

from .catalogue import SELECTOR_CATALOGUE
from .extractor import PageElementExtractor
from .filters import fingerprint, is_decorative, is_interactable

__all__ = [
    "SELECTOR_CATALOGUE",
    "PageElementExtractor",
    "fingerprint",
    "is_decorative",
    "is_interactable",
]

"""浏览器模块"""

from .probe import ElementProbe, PlaywrightElementProbe
from .session import BrowserSession, create_browser_session

__all__ = [
    "BrowserSession",
    "create_browser_session",
    "ElementProbe",
    "PlaywrightElementProbe",
]

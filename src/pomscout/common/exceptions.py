"""自定义异常类

定义项目中使用的所有自定义异常，用于更精细的错误处理。
"""

from __future__ import annotations


class PomScoutError(Exception):
    """PomScout 基础异常类

    所有自定义异常的基类。
    """
    pass


class BrowserError(PomScoutError):
    """浏览器相关错误的基类"""
    pass


class BrowserNotStartedError(BrowserError):
    """浏览器尚未启动"""
    def __init__(self, message: str = "浏览器尚未启动"):
        super().__init__(message)


class PageLoadError(BrowserError):
    """页面加载失败

    当页面无法在超时时间内加载完成时抛出。
    """
    def __init__(self, url: str, message: str = "页面加载失败"):
        super().__init__(f"{message}: {url}")
        self.url = url


class ValidationError(PomScoutError):
    """验证失败错误"""
    pass


class URLValidationError(ValidationError):
    """URL 验证失败"""
    def __init__(self, url: str, reason: str = "格式无效"):
        super().__init__(f"URL 验证失败: {url}, 原因: {reason}")
        self.url = url
        self.reason = reason


class ConfigError(PomScoutError):
    """配置相关错误"""
    pass


class AnalysisError(PomScoutError):
    """元素分析相关错误"""
    pass


class NoElementsFoundError(AnalysisError):
    """所有页面均未采集到元素"""
    def __init__(self, urls: list[str]):
        super().__init__(f"未在 {len(urls)} 个页面中找到任何元素，请检查 URL")
        self.urls = list(urls)


class OutputError(PomScoutError):
    """报告或代码文件读写失败"""
    def __init__(self, path: str, message: str = "文件写入失败"):
        super().__init__(f"{message}: {path}")
        self.path = path

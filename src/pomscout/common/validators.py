"""输入验证工具

提供 URL 列表、百分比阈值等命令行输入的验证功能。
"""

from __future__ import annotations

from urllib.parse import urlparse

from .exceptions import URLValidationError, ValidationError

MAX_URL_LENGTH = 2048
VALID_URL_SCHEMES = ("http", "https")


def validate_url(url: str) -> str:
    """验证并清理 URL

    Args:
        url: 待验证的 URL 字符串

    Returns:
        清理后的 URL

    Raises:
        URLValidationError: 当 URL 格式无效时
    """
    url = url.strip() if url else ""

    if not url:
        raise URLValidationError("", "URL 不能为空")

    if len(url) > MAX_URL_LENGTH:
        raise URLValidationError(url, f"URL 长度超过 {MAX_URL_LENGTH} 字符")

    try:
        result = urlparse(url)
    except ValueError as e:
        raise URLValidationError(url, f"URL 解析失败: {e}") from e

    if not result.scheme:
        raise URLValidationError(url, "缺少协议 (http/https)")

    if result.scheme.lower() not in VALID_URL_SCHEMES:
        raise URLValidationError(url, f"不支持的协议: {result.scheme}")

    if not result.netloc:
        raise URLValidationError(url, "缺少域名")

    return url


def parse_url_list(raw: str | None) -> list[str]:
    """解析逗号分隔的 URL 列表

    空白项被忽略，重复 URL 只保留第一次出现的位置。
    """
    urls: list[str] = []
    for part in (raw or "").split(","):
        if not part.strip():
            continue
        url = validate_url(part)
        if url not in urls:
            urls.append(url)
    return urls


def validate_percentage(value: float, name: str) -> float:
    """验证 0-100 之间的百分比参数"""
    if value < 0 or value > 100:
        raise ValidationError(f"{name} 必须在 0 到 100 之间，当前值: {value}")
    return float(value)


def validate_positive_integer(
    value: int,
    name: str,
    min_value: int = 1,
) -> int:
    """验证正整数参数

    Raises:
        ValidationError: 当值小于下限时
    """
    if value < min_value:
        raise ValidationError(f"{name} 不能小于 {min_value}，当前值: {value}")
    return int(value)

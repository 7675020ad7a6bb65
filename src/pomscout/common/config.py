"""配置管理"""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# 加载 .env 文件
load_dotenv()


# 未指定 URL 时使用的示例页面
DEFAULT_URLS = [
    "https://conduit.bondaracademy.com/",
    "https://conduit.bondaracademy.com/profile",
    "https://conduit.bondaracademy.com/settings",
]


class BrowserConfig(BaseModel):
    """浏览器配置"""

    headless: bool = Field(default_factory=lambda: os.getenv("HEADLESS", "true").lower() == "true")
    viewport_width: int = Field(default_factory=lambda: int(os.getenv("VIEWPORT_WIDTH", "1280")))
    viewport_height: int = Field(default_factory=lambda: int(os.getenv("VIEWPORT_HEIGHT", "720")))
    slow_mo: int = Field(default_factory=lambda: int(os.getenv("SLOW_MO", "0")))
    # 页面导航超时（毫秒），超时视为导航失败，不重试
    timeout_ms: int = Field(default_factory=lambda: int(os.getenv("NAV_TIMEOUT_MS", "45000")))
    wait_until: str = Field(default_factory=lambda: os.getenv("NAV_WAIT_UNTIL", "networkidle"))


class CrawlerConfig(BaseModel):
    """页面元素采集配置"""

    # 单个选择器最多处理的元素数量
    max_per_selector: int = Field(
        default_factory=lambda: int(os.getenv("MAX_PER_SELECTOR", "120"))
    )
    # 同时查询的选择器数量
    batch_size: int = Field(default_factory=lambda: int(os.getenv("SELECTOR_BATCH_SIZE", "4")))
    # 导航失败时跳过该页面而不是中止整个运行
    skip_failed_pages: bool = Field(
        default_factory=lambda: os.getenv("SKIP_FAILED_PAGES", "false").lower() == "true"
    )


class AnalyzerConfig(BaseModel):
    """相似度分析与分组配置"""

    # 相似度阈值（百分比）
    min_similarity: float = Field(
        default_factory=lambda: float(os.getenv("MIN_SIMILARITY", "40"))
    )
    # 分组键中首个 class 的截断长度
    group_class_prefix: int = Field(
        default_factory=lambda: int(os.getenv("GROUP_CLASS_PREFIX", "24"))
    )
    # 回退分组的固定置信度
    fallback_confidence: float = 80.0
    # 进入 BasePage 的最低置信度
    candidate_min_confidence: float = Field(
        default_factory=lambda: float(os.getenv("CANDIDATE_MIN_CONFIDENCE", "50"))
    )


class OutputConfig(BaseModel):
    """报告与代码生成配置"""

    report_file: str = Field(
        default_factory=lambda: os.getenv("POM_REPORT_FILE", "./pom-locators-report.json")
    )
    # 为空时根据 target 推导（python -> ./base_page.py, typescript -> ./BasePage.ts）
    out_file: str = Field(default_factory=lambda: os.getenv("POM_OUT_FILE", ""))
    target: str = Field(default_factory=lambda: os.getenv("POM_TARGET", "python"))
    class_name: str = Field(default_factory=lambda: os.getenv("POM_CLASS_NAME", "BasePage"))


class Config(BaseModel):
    """全局配置"""

    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    crawler: CrawlerConfig = Field(default_factory=CrawlerConfig)
    analyzer: AnalyzerConfig = Field(default_factory=AnalyzerConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    default_urls: list[str] = Field(default_factory=lambda: list(DEFAULT_URLS))

    @classmethod
    def load(cls) -> "Config":
        """加载配置"""
        return cls()


# 全局配置实例
config = Config.load()

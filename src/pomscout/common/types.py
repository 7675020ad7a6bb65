"""核心数据类型定义"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """JSON 输出使用 camelCase 字段名，Python 侧使用 snake_case"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# 元素采集
# ============================================================================


class InteractionState(_CamelModel):
    """判断元素可交互性所需的页面内事实"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    tag_name: str = Field(..., description="小写标签名")
    display: str = Field(default="", description="计算样式 display")
    visibility: str = Field(default="", description="计算样式 visibility")
    opacity: float = Field(default=1.0, description="计算样式 opacity")
    width: float = Field(default=0.0, description="边界框宽度")
    height: float = Field(default=0.0, description="边界框高度")
    role: str = Field(default="", description="role 属性")
    has_onclick: bool = Field(default=False, description="是否存在 onclick 属性")
    has_tabindex: bool = Field(default=False, description="是否存在 tabindex 属性")


class ElementCharacteristics(_CamelModel):
    """单个 DOM 节点的身份特征快照（采集后不可变）"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    tag_name: str = Field(..., description="小写标签名")
    classes: list[str] = Field(default_factory=list, description="class 列表（保持原顺序）")
    attributes: dict[str, str] = Field(default_factory=dict, description="全部属性")
    text_content: str = Field(default="", description="折叠空白后的文本，最多 100 字符")
    role: str | None = Field(default=None, description="ARIA role")
    placeholder: str | None = Field(default=None, description="placeholder")
    input_type: str | None = Field(default=None, alias="type", description="type 属性")
    href: str | None = Field(default=None, description="链接地址")
    src: str | None = Field(default=None, description="资源地址")

    def attr(self, name: str) -> str:
        """读取属性值，缺失时返回空字符串"""
        return self.attributes.get(name, "")


class ElementInfo(_CamelModel):
    """某页面上观察到的一个元素"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    selector: str = Field(..., description="采集时计算的 CSS 选择器")
    characteristics: ElementCharacteristics
    xpath: str = Field(default="", description="XPath 表达式")
    page_url: str = Field(..., description="来源页面 URL")


# ============================================================================
# 相似度与分组
# ============================================================================


class SimilarityResult(_CamelModel):
    """两个不同页面元素的比较结果"""

    element1: ElementInfo
    element2: ElementInfo
    similarity_score: float = Field(..., description="0-100，保留两位小数")
    matching_attributes: list[str] = Field(default_factory=list)


class Stability(str, Enum):
    """定位器稳定性等级"""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class GroupedElement(_CamelModel):
    """跨页面结构等价的元素组"""

    suggested_locator: str = Field(..., description="Playwright 定位表达式或 CSS")
    suggested_name: str = Field(..., description="camelCase 字段名")
    element_type: str = Field(..., description="标签名")
    common_attributes: list[str] = Field(default_factory=list)
    pages: list[str] = Field(default_factory=list)
    selectors: list[str] = Field(default_factory=list)
    confidence: float = Field(..., description="0-100")
    pom_recommendation: str = Field(default="")
    stability: Stability = Field(default=Stability.LOW)

    def merge(self, result: SimilarityResult) -> None:
        """把一对相似元素并入本组：页面、选择器、属性取并集，置信度取最大值"""
        for element in (result.element1, result.element2):
            if element.page_url not in self.pages:
                self.pages.append(element.page_url)
            if element.selector not in self.selectors:
                self.selectors.append(element.selector)
        for name in result.matching_attributes:
            if name not in self.common_attributes:
                self.common_attributes.append(name)
        self.confidence = max(self.confidence, result.similarity_score)

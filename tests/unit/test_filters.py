"""元素过滤规则单元测试"""

import pytest

from pomscout.common.types import ElementCharacteristics, InteractionState
from pomscout.crawler.filters import fingerprint, is_decorative, is_interactable

VISIBLE = {"display": "block", "visibility": "visible", "opacity": 1.0, "width": 80.0, "height": 24.0}


def state(tag="div", **overrides):
    return InteractionState(tag_name=tag, **{**VISIBLE, **overrides})


def characteristics(tag="a", text="Home", classes=None, **fields):
    return ElementCharacteristics(tag_name=tag, classes=classes or [], text_content=text, **fields)


class TestIsInteractable:
    """可交互性判断测试"""

    @pytest.mark.parametrize("tag", ["input", "button", "select", "textarea", "a", "form"])
    def test_interactive_tags(self, tag):
        assert is_interactable(state(tag))

    @pytest.mark.parametrize("tag", ["h1", "nav", "header", "footer", "main", "section", "article"])
    def test_semantic_tags(self, tag):
        assert is_interactable(state(tag))

    def test_plain_div_is_not_interactable(self):
        """没有任何交互信号的 div 不可交互"""
        assert not is_interactable(state("div"))

    def test_onclick_role_tabindex(self):
        assert is_interactable(state("div", has_onclick=True))
        assert is_interactable(state("div", role="tab"))
        assert is_interactable(state("span", has_tabindex=True))
        assert not is_interactable(state("div", role="presentation"))

    @pytest.mark.parametrize("overrides", [
        {"display": "none"},
        {"visibility": "hidden"},
        {"opacity": 0},
        {"width": 0},
        {"height": 0},
    ])
    def test_hidden_elements(self, overrides):
        """不可见或零尺寸元素即使是按钮也不可交互"""
        assert not is_interactable(state("button", **overrides))


class TestIsDecorative:
    """装饰性判断测试"""

    def test_ad_id(self):
        element = characteristics(attributes={"id": "google_ads_iframe"})
        assert is_decorative(element)

    @pytest.mark.parametrize("name", [
        "ad-slot", "promo", "page-divider", "btn-icon-only", "bg-overlay",
        "adsbygoogle", "advertisement", "top-banner", "promotion-card",
    ])
    def test_decorative_classes(self, name):
        assert is_decorative(characteristics(classes=[name]))

    @pytest.mark.parametrize("name", ["header", "navbar", "address", "badge", "loader"])
    def test_similar_words_are_not_decorative(self, name):
        """按词匹配，header、address 等包含 ad 的词不算装饰"""
        assert not is_decorative(characteristics(classes=[name]))

    def test_empty_text_non_input(self):
        """非输入类空文本元素视为装饰"""
        assert is_decorative(characteristics(tag="div", text=""))
        assert is_decorative(characteristics(tag="a", text=""))

    @pytest.mark.parametrize("tag", ["input", "button", "select", "textarea"])
    def test_empty_text_input_family_kept(self, tag):
        assert not is_decorative(characteristics(tag=tag, text=""))

    def test_regular_link(self):
        assert not is_decorative(characteristics(classes=["nav-link"]))


class TestFingerprint:
    """页面内去重指纹测试"""

    def test_fingerprint_fields(self):
        element = characteristics(
            classes=["nav-link", "active"],
            attributes={"id": "home", "name": "n"},
            role="link",
            placeholder="p",
            href="/",
        )
        assert fingerprint(element) == "a|home|link|n|p|/|nav-link"

    def test_missing_fields_are_empty(self):
        assert fingerprint(characteristics(tag="nav", text="x")) == "nav||||||"

    def test_text_does_not_affect_fingerprint(self):
        """文本不同但七个字段相同的元素指纹相同"""
        first = characteristics(tag="button", text="Save", classes=["btn"])
        second = characteristics(tag="button", text="Cancel", classes=["btn"])
        assert fingerprint(first) == fingerprint(second)

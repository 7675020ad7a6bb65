"""元素采集使用的 CSS 选择器目录"""

from __future__ import annotations

# 表单控件
FORM_SELECTORS = (
    "input[type=text]",
    "input[type=email]",
    "input[type=password]",
    "input[type=search]",
    "input[type=number]",
    "input[type=tel]",
    "input[type=url]",
    "input[type=date]",
    "input[type=time]",
    "input[type=datetime-local]",
    "input[type=checkbox]",
    "input[type=radio]",
    "input[type=file]",
    "textarea",
    "select",
    "button",
)

# 导航、链接与 role
NAVIGATION_SELECTORS = (
    "a[href]",
    "nav a",
    "[role=navigation] a",
    "[role=button]",
    "[role=tab]",
    "[role=menuitem]",
    "[role=link]",
    "[tabindex]",
)

# 测试钩子
TEST_ID_SELECTORS = (
    "[data-testid]",
    "[data-test]",
    "[data-cy]",
)

# 语义标签
SEMANTIC_SELECTORS = (
    "form",
    "fieldset",
    "header",
    "footer",
    "nav",
    "main",
    "article",
    "section",
)

# 弹窗与内联点击
MISC_SELECTORS = (
    "[onclick]",
    ".modal",
    ".dialog",
    ".popup",
    "[role=dialog]",
    "[role=alertdialog]",
)

SELECTOR_CATALOGUE: tuple[str, ...] = (
    FORM_SELECTORS
    + NAVIGATION_SELECTORS
    + TEST_ID_SELECTORS
    + SEMANTIC_SELECTORS
    + MISC_SELECTORS
)

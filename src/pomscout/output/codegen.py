"""BasePage 代码生成器

把推荐进入 BasePage 的元素组按分区排列，完成定位器去重、字段名去重、
导航辅助方法生成，然后渲染为 Python（Playwright async API）或 TypeScript
（@playwright/test）类定义。
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from ..common.config import config
from ..common.exceptions import ConfigError, OutputError
from ..common.logger import get_logger
from ..common.types import GroupedElement
from ..analysis.locators import is_base_page_recommendation
from .sections import classify_section, section_titles

logger = get_logger(__name__)

TARGETS = ("python", "typescript")
DEFAULT_OUT_FILES = {"python": "./base_page.py", "typescript": "./BasePage.ts"}

# 名称关键字 -> 固定辅助方法名（按顺序匹配）
HELPER_KEYWORDS = (
    (("home",), "gotoHome"),
    (("signin", "login"), "gotoSignIn"),
    (("logout", "signout"), "gotoLogout"),
    (("settings",), "gotoSettings"),
    (("profile",), "gotoProfile"),
)
_HELPER_TRIGGER = re.compile(r"(home|signin|login|signout|logout|settings|profile)")
_LINK_OR_BUTTON = re.compile(r"link|button$", re.IGNORECASE)

_ROLE_EXPRESSION = re.compile(r"""^getByRole\('([^']*)'(?:, \{ name: (".*") \})?\)$""")
_PLACEHOLDER_EXPRESSION = re.compile(r'^getByPlaceholder\((".*")\)$')
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass
class GeneratedField:
    section: str
    name: str
    locator: str


@dataclass
class GeneratedHelper:
    name: str
    field_name: str
    action: str = "click"


def normalize_locator(locator: str) -> str:
    """去重用的定位器归一化：去首尾空白、小写、删除所有空白"""
    return re.sub(r"\s+", "", locator.strip().lower())


@dataclass
class GenerationContext:
    """单次生成过程中的去重登记表"""

    seen_locators: set[str] = field(default_factory=set)
    used_field_names: set[str] = field(default_factory=set)
    used_helper_names: set[str] = field(default_factory=set)
    fields: list[GeneratedField] = field(default_factory=list)
    helpers: list[GeneratedHelper] = field(default_factory=list)

    @property
    def taken_names(self) -> set[str]:
        """字段和辅助方法共用一个命名空间"""
        return self.used_field_names | self.used_helper_names

    def _unique(self, base: str, used: set[str]) -> str:
        taken = self.taken_names
        name = base
        index = 2
        while name in taken:
            name = f"{base}{index}"
            index += 1
        used.add(name)
        return name

    def add_field(self, name: str, locator: str, section: str) -> str | None:
        """登记字段

        定位器已出现过时整体丢弃并返回 None；
        名称与已有字段或辅助方法冲突时追加数字后缀（从 2 开始）。
        """
        normalized = normalize_locator(locator)
        if normalized in self.seen_locators:
            return None
        self.seen_locators.add(normalized)

        field_name = self._unique(name, self.used_field_names)
        self.fields.append(GeneratedField(section=section, name=field_name, locator=locator))
        return field_name

    def add_helper(self, base: str, field_name: str, allow_suffix: bool) -> str | None:
        """登记辅助方法

        固定名称（gotoHome 等）重复时丢弃，保证只生成一个；
        click 类方法与已有字段或方法重名时追加数字后缀。
        """
        if base in self.used_helper_names and not allow_suffix:
            return None
        name = self._unique(base, self.used_helper_names)
        self.helpers.append(GeneratedHelper(name=name, field_name=field_name))
        return name


def select_candidates(
    groups: list[GroupedElement],
    min_confidence: float | None = None,
) -> list[GroupedElement]:
    """推荐进入 BasePage 且置信度达到下限的元素组"""
    floor = config.analyzer.candidate_min_confidence if min_confidence is None else min_confidence
    return [
        group for group in groups
        if is_base_page_recommendation(group.pom_recommendation) and group.confidence >= floor
    ]


def helper_base(group: GroupedElement, field_name: str) -> tuple[str, bool] | None:
    """推导导航辅助方法名，返回 (方法名, 是否允许加后缀)"""
    lower = group.suggested_name.lower()
    if not (
        _HELPER_TRIGGER.search(lower)
        or group.element_type in ("a", "button")
        or _LINK_OR_BUTTON.search(group.suggested_name)
    ):
        return None

    for keywords, name in HELPER_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return name, False
    if group.element_type == "a":
        return f"click{field_name[0].upper()}{field_name[1:]}", True
    return None


def build_context(
    groups: list[GroupedElement],
    min_confidence: float | None = None,
) -> GenerationContext:
    """按分区顺序登记字段和辅助方法"""
    by_section: dict[str, list[GroupedElement]] = {title: [] for title in section_titles()}
    for group in select_candidates(groups, min_confidence):
        by_section[classify_section(group)].append(group)

    context = GenerationContext()
    for title, members in by_section.items():
        for group in members:
            field_name = context.add_field(group.suggested_name, group.suggested_locator, title)
            if field_name is None:
                continue
            helper = helper_base(group, field_name)
            if helper:
                context.add_helper(helper[0], field_name, allow_suffix=helper[1])
    return context


# ============================================================================
# 渲染
# ============================================================================


def to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def _escape_single_quoted(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _python_locator(locator: str) -> str:
    role_match = _ROLE_EXPRESSION.match(locator)
    if role_match:
        role, name = role_match.groups()
        if name is None:
            return f"page.get_by_role({json.dumps(role)})"
        name_literal = json.dumps(json.loads(name), ensure_ascii=False)
        return f"page.get_by_role({json.dumps(role)}, name={name_literal})"
    placeholder_match = _PLACEHOLDER_EXPRESSION.match(locator)
    if placeholder_match:
        text = json.dumps(json.loads(placeholder_match.group(1)), ensure_ascii=False)
        return f"page.get_by_placeholder({text})"
    return f"page.locator({json.dumps(locator, ensure_ascii=False)})"


def _typescript_locator(locator: str) -> str:
    if re.match(r"^getBy[A-Z]", locator):
        return f"this.page.{locator}"
    return f"this.page.locator('{_escape_single_quoted(locator)}')"


def _section_lines(
    fields: list[GeneratedField],
    comment: str,
    render: Callable[[GeneratedField], str],
) -> list[str]:
    """逐字段渲染，每个分区前加一行分区注释"""
    lines: list[str] = []
    current = None
    for item in fields:
        if item.section != current:
            if current is not None:
                lines.append("")
            lines.append(f"{comment} {item.section}")
            current = item.section
        lines.append(render(item))
    return lines


def render_typescript(context: GenerationContext, class_name: str = "BasePage") -> str:
    lines = ["import { Page, Locator } from '@playwright/test';", "", f"export class {class_name} {{"]

    lines += _section_lines(context.fields, "  //", lambda f: f"  readonly {f.name}: Locator;")
    if context.fields:
        lines.append("")

    lines.append("  constructor(private page: Page) {")
    lines += _section_lines(
        context.fields,
        "    //",
        lambda f: f"    this.{f.name} = {_typescript_locator(f.locator)};",
    )
    lines += [
        "  }",
        "",
        "  // -------- Utilities --------",
        "  async navigate(url: string): Promise<void> {",
        "    await this.page.goto(url);",
        "  }",
        "",
        "  async waitForIdle(): Promise<void> {",
        "    await this.page.waitForLoadState('networkidle');",
        "  }",
        "",
        "  async getTitle(): Promise<string> {",
        "    return this.page.title();",
        "  }",
        "",
        "  async currentUrl(): Promise<string> {",
        "    return this.page.url();",
        "  }",
    ]

    if context.helpers:
        lines += ["", "  // -------- Navigation Helpers (auto-generated) --------"]
        for helper in context.helpers:
            lines.append(
                f"  async {helper.name}() {{ await this.{helper.field_name}.{helper.action}(); "
                f"await this.waitForIdle(); }}"
            )

    lines.append("}")
    return "\n".join(lines) + "\n"


def render_python(context: GenerationContext, class_name: str = "BasePage") -> str:
    lines = [
        '"""Auto-generated base page object. Regenerate instead of editing by hand."""',
        "",
        "from __future__ import annotations",
        "",
        "from playwright.async_api import Locator, Page",
        "",
        "",
        f"class {class_name}:",
    ]

    lines += _section_lines(context.fields, "    #", lambda f: f"    {to_snake(f.name)}: Locator")
    if context.fields:
        lines.append("")

    lines += [
        "    def __init__(self, page: Page) -> None:",
        "        self.page = page",
    ]
    lines += _section_lines(
        context.fields,
        "        #",
        lambda f: f"        self.{to_snake(f.name)} = {_python_locator(f.locator)}",
    )

    lines += [
        "",
        "    # -------- Utilities --------",
        "    async def navigate(self, url: str) -> None:",
        "        await self.page.goto(url)",
        "",
        "    async def wait_for_idle(self) -> None:",
        '        await self.page.wait_for_load_state("networkidle")',
        "",
        "    async def get_title(self) -> str:",
        "        return await self.page.title()",
        "",
        "    def current_url(self) -> str:",
        "        return self.page.url",
    ]

    if context.helpers:
        lines += ["", "    # -------- Navigation Helpers (auto-generated) --------"]
        for index, helper in enumerate(context.helpers):
            if index:
                lines.append("")
            lines += [
                f"    async def {to_snake(helper.name)}(self) -> None:",
                f"        await self.{to_snake(helper.field_name)}.{helper.action}()",
                "        await self.wait_for_idle()",
            ]

    return "\n".join(lines) + "\n"


RENDERERS = {"python": render_python, "typescript": render_typescript}


def resolve_target(target: str | None = None) -> str:
    """归一化生成目标，未知目标抛出 ConfigError"""
    resolved = (target or config.output.target).strip().lower()
    if resolved not in RENDERERS:
        raise ConfigError(f"不支持的生成目标: {resolved}，可选: {', '.join(TARGETS)}")
    return resolved


def generate_artifact(
    groups: list[GroupedElement],
    target: str | None = None,
    class_name: str | None = None,
    min_confidence: float | None = None,
) -> str:
    """生成 BasePage 源码文本"""
    target = resolve_target(target)
    context = build_context(groups, min_confidence)
    logger.info(
        f"[Codegen] BasePage 字段: {len(context.fields)}，辅助方法: {len(context.helpers)}"
    )
    return RENDERERS[target](context, class_name or config.output.class_name)


def default_out_file(target: str | None = None) -> str:
    target = resolve_target(target)
    return config.output.out_file or DEFAULT_OUT_FILES[target]


def write_artifact(code: str, path: str | Path) -> Path:
    """写入生成的源码（覆盖已有文件）"""
    out_path = Path(path)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(code, encoding="utf-8")
    except OSError as exc:
        raise OutputError(str(out_path), f"BasePage 写入失败 ({exc})") from exc
    logger.info(f"[Codegen] BasePage: {out_path}")
    return out_path

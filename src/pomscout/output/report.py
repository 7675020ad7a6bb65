"""分析报告（JSON）"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError as SchemaError

from ..analysis.locators import is_base_page_recommendation
from ..common.exceptions import OutputError
from ..common.logger import get_logger
from ..common.types import GroupedElement

logger = get_logger(__name__)


def iso_timestamp(moment: datetime | None = None) -> str:
    """ISO-8601 时间戳（UTC，毫秒精度，Z 结尾）"""
    moment = moment or datetime.now(UTC)
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_report(groups: list[GroupedElement], timestamp: str | None = None) -> dict[str, Any]:
    """组装报告内容"""
    return {
        "timestamp": timestamp or iso_timestamp(),
        "summary": {
            "totalGroups": len(groups),
            "basePageRecommendations": sum(
                1 for group in groups if is_base_page_recommendation(group.pom_recommendation)
            ),
        },
        "groups": [group.model_dump(mode="json", by_alias=True) for group in groups],
    }


def write_report(
    groups: list[GroupedElement],
    path: str | Path,
    timestamp: str | None = None,
) -> Path:
    """写入报告文件（覆盖已有文件）"""
    report_path = Path(path)
    payload = build_report(groups, timestamp)
    try:
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    except OSError as exc:
        raise OutputError(str(report_path), f"报告写入失败 ({exc})") from exc
    logger.info(f"[Report] 报告: {report_path}")
    return report_path


def load_report(path: str | Path) -> list[GroupedElement]:
    """读取已有报告中的元素组"""
    report_path = Path(path)
    try:
        payload = json.loads(report_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise OutputError(str(report_path), f"报告读取失败 ({exc})") from exc

    groups = payload.get("groups", []) if isinstance(payload, dict) else None
    if not isinstance(groups, list):
        raise OutputError(str(report_path), "报告格式错误: 缺少 groups 列表")
    try:
        return [GroupedElement.model_validate(item) for item in groups]
    except SchemaError as exc:
        raise OutputError(str(report_path), f"报告格式错误 ({exc.error_count()} 处字段校验失败)") from exc

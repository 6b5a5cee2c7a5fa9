"""
Shared helpers for CLI commands.

Items files are YAML (or JSON, which YAML accepts):

    context:
      active_project: launch
      recent_topics: [pricing]
    items:
      - id: c1
        type: deadline
        content: Send the quote
        priority: 80
        deadline: 2026-03-02T10:00:00
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..core import get_utc_timestamp, parse_datetime, to_local_naive
from ..core.logging import get_logger
from ..models import CandidateItem, UserContext

logger = get_logger(__name__)


@dataclass
class ItemsFile:
    """Parsed contents of an items file."""

    context: UserContext
    items: list[CandidateItem] = field(default_factory=list)
    skipped: list[dict[str, Any]] = field(default_factory=list)


def load_items_file(path: Path | str, now: datetime | None = None) -> ItemsFile:
    """
    Load context and candidate items from a YAML/JSON file.

    Invalid items are logged and reported in ``skipped`` instead of failing
    the whole file.

    Args:
        path: File to read
        now: Overrides context.current_time when given

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not a mapping or not valid YAML
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Items file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in items file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Items file {path} must be a mapping with 'context' and 'items'")

    context = UserContext.from_dict(data.get("context"))
    if now is not None:
        context.current_time = now

    result = ItemsFile(context=context)
    for index, raw in enumerate(data.get("items") or []):
        try:
            result.items.append(CandidateItem.model_validate(raw))
        except ValidationError as e:
            item_id = raw.get("id") if isinstance(raw, dict) else None
            logger.warning("Skipping invalid item #%d (%s): %s", index, item_id, e)
            result.skipped.append(
                {"index": index, "id": item_id, "errors": e.error_count()}
            )

    return result


def resolve_now(value: str | None) -> datetime | None:
    """Parse a --now argument; None when not given."""
    if not value:
        return None
    parsed = parse_datetime(value)
    if parsed is None:
        raise ValueError(f"Invalid --now timestamp: {value}")
    return to_local_naive(parsed)


def error_result(error: str, message: str, **extra: Any) -> dict[str, Any]:
    """Error payload in the CLI's JSON shape."""
    result: dict[str, Any] = {
        "error": error,
        "message": message,
        "query_timestamp": get_utc_timestamp(),
    }
    result.update(extra)
    return result

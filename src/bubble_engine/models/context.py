"""
User Context.

Snapshot of what the user is doing right now, supplied by the caller and used
for context-relevance scoring.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..core.formatters import to_local_naive


@dataclass
class UserContext:
    """Current activity used for relevance scoring."""

    active_project: str | None = None
    recent_topics: list[str] = field(default_factory=list)
    recent_entities: list[str] = field(default_factory=list)
    active_task: str | None = None
    current_time: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        self.current_time = to_local_naive(self.current_time)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> UserContext:
        """Create from configuration dict."""
        if not data:
            return cls()
        current_time = data.get("current_time")
        if isinstance(current_time, str):
            current_time = datetime.fromisoformat(current_time)
        return cls(
            active_project=data.get("active_project"),
            recent_topics=list(data.get("recent_topics") or []),
            recent_entities=list(data.get("recent_entities") or []),
            active_task=data.get("active_task"),
            current_time=current_time or datetime.now(),
        )

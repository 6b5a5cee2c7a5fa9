"""
Bubble Engine - proactive surfacing of system-generated items

Decides, for every candidate item, whether, when and how to interrupt the
user: a multi-factor confidence score, a finite daily/hourly interrupt
budget, a user-selected focus mode and a feedback loop that adapts
per-category weights.

Usage as library:
    from bubble_engine import CandidateItem, create_bubble_engine

    engine = create_bubble_engine()
    engine.subscribe(print)
    engine.ingest(CandidateItem(id="c1", type="deadline", content="Send the quote"))

Usage as CLI:
    python -m bubble_engine simulate items.yaml
    python -m bubble_engine explain items.yaml c1 --text

Package structure:
    bubble_engine/
    ├── core/        # Settings, logging, constants, formatters
    ├── models/      # Enums, pydantic input/state models, dataclasses
    ├── scoring/     # Confidence scorer
    ├── budget/      # Interrupt budget and focus modes
    ├── generation/  # Message rules
    ├── feedback/    # Feedback and adaptation
    ├── engine/      # BubbleEngine orchestrator
    └── commands/    # CLI commands
"""

__version__ = "1.0.0"

from .engine import (
    BubbleEngine,
    EngineConfig,
    EngineConfigError,
    EngineEvent,
    EngineEventType,
    create_bubble_engine,
    load_engine_config,
)
from .models import (
    CandidateItem,
    DeferPreset,
    Feedback,
    FocusModeName,
    ItemCategory,
    ItemState,
    ItemType,
    SurfaceableItem,
    TimeWindow,
    UserContext,
    UserState,
    VisualState,
)

__all__ = [
    "__version__",
    # Engine
    "BubbleEngine",
    "EngineConfig",
    "EngineConfigError",
    "EngineEvent",
    "EngineEventType",
    "create_bubble_engine",
    "load_engine_config",
    # Models
    "CandidateItem",
    "DeferPreset",
    "Feedback",
    "FocusModeName",
    "ItemCategory",
    "ItemState",
    "ItemType",
    "SurfaceableItem",
    "TimeWindow",
    "UserContext",
    "UserState",
    "VisualState",
]

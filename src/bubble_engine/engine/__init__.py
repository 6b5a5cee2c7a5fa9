"""
Engine Orchestration

The stateful BubbleEngine plus its configuration and event types.
"""

from .config import EngineConfig, EngineConfigError, load_engine_config
from .engine import BubbleEngine, EngineState, create_bubble_engine
from .events import EngineEvent, EngineEventType, EngineListener

__all__ = [
    "BubbleEngine",
    "EngineConfig",
    "EngineConfigError",
    "EngineEvent",
    "EngineEventType",
    "EngineListener",
    "EngineState",
    "create_bubble_engine",
    "load_engine_config",
]

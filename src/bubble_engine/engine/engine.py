"""
Bubble Engine.

Owns the item lifecycle and coordinates the scorer, budget manager, focus
mode filter, message generator and feedback handler:

    ingest -> score -> transform -> try_surface (threshold, focus, budget)
    user action -> feedback handler -> history/weights -> future scores

Item states:

    pending -> surfaced -> {dismissed | engaged | deferred}
    deferred -> pending (when the deferral is due)

The engine is synchronous and expects a single owner. Every mutation happens
before the matching event is emitted, so listeners may call back into the
engine. Periodic work is pull-based: call apply_resets() and
check_deferred_items() on a schedule.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Callable

from ..budget.focus_mode import (
    get_effective_visual_state,
    get_focus_mode,
    get_queued_items,
    is_valid_focus_mode,
    should_surface_item,
)
from ..budget.interrupt_budget import (
    apply_resets,
    can_consume_budget,
    consume_budget,
    create_interrupt_budget,
    get_budget_utilization,
    set_daily_total,
)
from ..core.config import BubbleSettings, get_settings
from ..core.formatters import format_duration, to_local_naive
from ..core.logging import get_logger
from ..feedback.handler import (
    DeferOption,
    cleanup_deferred_items,
    get_category_weight,
    get_ready_deferred_items,
    is_item_deferred,
    process_defer,
    process_dismiss,
    process_engage,
)
from ..generation.messages import transform_to_bubble
from ..models import (
    BudgetReason,
    BudgetSnapshot,
    CandidateItem,
    DailySnapshot,
    DeferPreset,
    Feedback,
    FocusModeConfig,
    FocusModeName,
    HourlySnapshot,
    InterruptBudget,
    ItemCategory,
    ItemState,
    Preferences,
    SurfaceableItem,
    UserContext,
    UserState,
    VisualState,
)
from ..scoring.calculator import ConfidenceBreakdown, calculate_confidence_breakdown
from .config import EngineConfig
from .events import EngineEvent, EngineEventType, EngineListener, Unsubscribe

logger = get_logger(__name__)

Clock = Callable[[], datetime]


@dataclass
class EngineState:
    """Point-in-time snapshot of the engine."""

    items: list[SurfaceableItem] = field(default_factory=list)
    user_state: UserState = field(default_factory=UserState)
    focus_mode: FocusModeConfig = field(default_factory=lambda: get_focus_mode("available"))
    budget: InterruptBudget | None = None
    context: UserContext = field(default_factory=UserContext)


class BubbleEngine:
    """
    Decides whether, when and how candidate items interrupt the user.

    Domain operations never raise. Unknown item ids and invalid transitions
    return None or False; budget denials show up as events and return values.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        user_state: UserState | None = None,
        focus_mode: FocusModeName | str = FocusModeName.AVAILABLE,
        context: UserContext | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._clock: Clock = clock or datetime.now
        self._listeners: list[EngineListener] = []
        self._items: list[SurfaceableItem] = []

        now = to_local_naive(self._clock())
        self._context = context or UserContext(current_time=now)
        self._focus_mode = get_focus_mode(focus_mode)
        self._budget = create_interrupt_budget(
            self._config.budget.default_daily, now, self._config.budget
        )
        self._user_state = UserState(
            preferences=Preferences(
                focus_mode=self._focus_mode.name,
                daily_budget=self._budget.daily.total,
            )
        )

        if user_state is not None:
            self.import_user_state(user_state)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def budget(self) -> InterruptBudget:
        return self._budget

    @property
    def user_state(self) -> UserState:
        return self._user_state

    @property
    def context(self) -> UserContext:
        return self._context

    # =========================================================================
    # Events
    # =========================================================================

    def subscribe(self, listener: EngineListener) -> Unsubscribe:
        """
        Register a listener for engine events.

        Returns:
            Callable that removes the listener (safe to call twice)
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: EngineEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Listener failed handling %s", event.type.value)

    # =========================================================================
    # Internals
    # =========================================================================

    def _now(self) -> datetime:
        """Read the clock and keep the scoring context in step with it."""
        now = to_local_naive(self._clock())
        self._context = replace(self._context, current_time=now)
        return now

    def _find_item(self, item_id: str) -> SurfaceableItem | None:
        """Look up by surfaceable id or candidate id."""
        for item in self._items:
            if item.id == item_id or item.candidate_id == item_id:
                return item
        return None

    def _breakdown(self, candidate: CandidateItem) -> ConfidenceBreakdown:
        return calculate_confidence_breakdown(
            candidate,
            self._context,
            self._user_state.history,
            self._user_state,
            self._config.weights,
            self._config.weight_bounds,
        )

    def _rescore(self, item: SurfaceableItem) -> None:
        if item.candidate is not None:
            item.confidence_score = self._breakdown(item.candidate).final_score

    def _time_to_action(self, item: SurfaceableItem, now: datetime) -> float:
        if item.surfaced_at is None:
            return 0.0
        return max(0.0, (now - item.surfaced_at).total_seconds())

    def _actionable(self, item_id: str) -> SurfaceableItem | None:
        item = self._find_item(item_id)
        if item is None:
            logger.debug("Ignoring action on unknown item %s", item_id)
            return None
        if item.state != ItemState.SURFACED:
            logger.debug("Ignoring action on %s in state %s", item.id, item.state.value)
            return None
        return item

    def _try_surface_item(self, item: SurfaceableItem, now: datetime) -> bool:
        if item.state != ItemState.PENDING:
            return False

        if item.confidence_score < self._config.thresholds.minimum_surface:
            logger.debug(
                "Holding silently (score %d)", item.confidence_score, extra={"item_id": item.id}
            )
            return False

        mode = self._focus_mode.name
        if not should_surface_item(
            item,
            mode,
            emergency_threshold=self._budget.emergency.threshold,
            thresholds=self._config.thresholds,
        ):
            logger.debug("Held by focus mode", extra={"item_id": item.id, "mode": mode.value})
            return False

        decision = can_consume_budget(self._budget, item, mode, now)
        if not decision.allowed:
            logger.debug(
                "Budget denied",
                extra={"item_id": item.id, "mode": mode.value, "reason": decision.reason.value},
            )
            if decision.reason == BudgetReason.DAILY_BUDGET_EXHAUSTED:
                logger.info("Daily interrupt budget exhausted")
                self._emit(EngineEvent(type=EngineEventType.BUDGET_EXHAUSTED))
            return False

        self._budget = consume_budget(self._budget, item, mode, now)
        item.state = ItemState.SURFACED
        item.surfaced_at = now

        logger.debug(
            "Surfaced (score %d)",
            item.confidence_score,
            extra={"item_id": item.id, "reason": decision.reason.value},
        )
        self._emit(EngineEvent(type=EngineEventType.ITEM_SURFACED, item=item))
        self._emit(
            EngineEvent(
                type=EngineEventType.BUDGET_CONSUMED,
                remaining=self._budget.daily.remaining,
            )
        )
        return True

    # =========================================================================
    # Ingestion
    # =========================================================================

    def ingest(self, candidate: CandidateItem) -> SurfaceableItem | None:
        """
        Score, wrap and try to surface a candidate.

        Args:
            candidate: Item from the upstream source

        Returns:
            The new SurfaceableItem, or None for duplicates and deferred ids
        """
        now = self._now()

        if any(item.candidate_id == candidate.id for item in self._items):
            logger.debug("Skipping duplicate candidate %s", candidate.id)
            return None

        if is_item_deferred(self._user_state, candidate.id, now):
            logger.debug("Skipping deferred candidate %s", candidate.id)
            return None

        score = self._breakdown(candidate).final_score
        item = transform_to_bubble(candidate, score, now)
        self._items.append(item)

        self._try_surface_item(item, now)
        return item

    def ingest_batch(self, candidates: list[CandidateItem]) -> list[SurfaceableItem]:
        """Ingest in order, returning only the newly accepted items."""
        accepted = []
        for candidate in candidates:
            item = self.ingest(candidate)
            if item is not None:
                accepted.append(item)
        return accepted

    def try_surface(self, item_id: str) -> bool:
        """Attempt to surface a pending item. False when anything blocks it."""
        item = self._find_item(item_id)
        if item is None:
            return False
        return self._try_surface_item(item, self._now())

    # =========================================================================
    # User Actions
    # =========================================================================

    def dismiss(
        self, item_id: str, feedback: Feedback | str | None = None
    ) -> SurfaceableItem | None:
        """
        Dismiss an item, optionally with explicit feedback.

        Returns:
            The dismissed item, or None if the id is unknown or not actionable
        """
        item = self._actionable(item_id)
        if item is None:
            return None

        tag: Feedback | None = None
        if feedback is not None:
            try:
                tag = Feedback(feedback)
            except ValueError:
                logger.warning("Ignoring unknown feedback %r for %s", feedback, item.id)

        now = self._now()
        elapsed = self._time_to_action(item, now)
        item.state = ItemState.DISMISSED
        self._user_state = process_dismiss(
            self._user_state, item, elapsed, tag, now, self._config.weight_bounds
        )

        logger.debug("Dismissed %s after %s", item.id, format_duration(elapsed))

        self._emit(EngineEvent(type=EngineEventType.ITEM_DISMISSED, item=item, feedback=tag))
        return item

    def engage(self, item_id: str) -> SurfaceableItem | None:
        """Record that the user acted on an item."""
        item = self._actionable(item_id)
        if item is None:
            return None

        now = self._now()
        elapsed = self._time_to_action(item, now)
        item.state = ItemState.ENGAGED
        self._user_state = process_engage(
            self._user_state, item, elapsed, now, self._config.weight_bounds
        )

        logger.debug("Engaged %s after %s", item.id, format_duration(elapsed))

        self._emit(EngineEvent(type=EngineEventType.ITEM_ENGAGED, item=item))
        return item

    def defer(
        self, item_id: str, until: DeferOption = DeferPreset.TOMORROW
    ) -> SurfaceableItem | None:
        """
        Push an item to a later time.

        Args:
            item_id: Surfaceable or candidate id
            until: tonight / tomorrow / monday or an explicit datetime

        Returns:
            The deferred item, or None if the id is unknown or not actionable
        """
        item = self._actionable(item_id)
        if item is None:
            return None

        now = self._now()
        self._user_state = process_defer(
            self._user_state, item, self._time_to_action(item, now), until, now
        )
        deferred_until = next(
            d.deferred_until for d in self._user_state.deferred if d.item_id == item.candidate_id
        )
        item.state = ItemState.DEFERRED
        item.deferred_until = deferred_until

        logger.debug("Deferred %s until %s", item.id, deferred_until.isoformat())
        self._emit(
            EngineEvent(type=EngineEventType.ITEM_DEFERRED, item=item, until=deferred_until)
        )
        return item

    # =========================================================================
    # Preferences and Context
    # =========================================================================

    def set_focus_mode(self, mode: FocusModeName | str) -> None:
        """Switch focus mode; announces queued items when the new mode queues."""
        if not is_valid_focus_mode(mode):
            logger.warning("Ignoring unknown focus mode %r", mode)
            return

        self._focus_mode = get_focus_mode(mode)
        preferences = self._user_state.preferences.model_copy(
            update={"focus_mode": self._focus_mode.name}
        )
        self._user_state = self._user_state.model_copy(update={"preferences": preferences})

        logger.info("Focus mode set to %s", self._focus_mode.name.value)
        self._emit(
            EngineEvent(type=EngineEventType.FOCUS_MODE_CHANGED, mode=self._focus_mode.name)
        )

        queued = self.get_queued_items()
        if queued:
            self._emit(EngineEvent(type=EngineEventType.ITEMS_QUEUED, count=len(queued)))

    def get_focus_mode(self) -> FocusModeConfig:
        return self._focus_mode

    def set_daily_budget(self, total: int) -> None:
        """Change the daily allowance (clamped), keeping today's usage."""
        self._budget = set_daily_total(self._budget, total, self._config.budget)
        preferences = self._user_state.preferences.model_copy(
            update={"daily_budget": self._budget.daily.total}
        )
        self._user_state = self._user_state.model_copy(update={"preferences": preferences})

    def update_context(self, context: UserContext | None = None, **changes: Any) -> None:
        """
        Replace or patch the user context, then rescore active items.

        Args:
            context: New context to replace the current one
            **changes: Individual UserContext fields to change
        """
        base = context or self._context
        self._context = replace(base, **changes)
        self._now()

        for item in self._items:
            if item.state.is_active:
                self._rescore(item)

        # list.sort is stable, so equal scores keep their order
        self._items.sort(key=lambda i: i.confidence_score, reverse=True)

    # =========================================================================
    # Periodic Work
    # =========================================================================

    def check_deferred_items(self) -> list[SurfaceableItem]:
        """
        Return due deferred items to pending and try to surface them.

        Returns:
            Items moved back to pending (whether or not they surfaced)
        """
        now = self._now()
        resurfaced = []

        for deferred in get_ready_deferred_items(self._user_state, now):
            item = self._find_item(deferred.item_id)
            if item is None or item.state != ItemState.DEFERRED:
                continue

            item.state = ItemState.PENDING
            item.deferred_until = None
            self._rescore(item)
            self._try_surface_item(item, now)
            resurfaced.append(item)

        self._user_state = cleanup_deferred_items(self._user_state, now)
        return resurfaced

    def apply_resets(self) -> None:
        """Apply any due daily/hourly budget reset."""
        self._budget = apply_resets(self._budget, self._now())

    # =========================================================================
    # Queries
    # =========================================================================

    def get_items(self) -> list[SurfaceableItem]:
        return list(self._items)

    def get_surfaced_items(self) -> list[SurfaceableItem]:
        """Surfaced items that the current focus mode still shows."""
        return [
            item
            for item in self._items
            if item.state == ItemState.SURFACED
            and should_surface_item(
                item,
                self._focus_mode.name,
                emergency_threshold=self._budget.emergency.threshold,
                thresholds=self._config.thresholds,
            )
        ]

    def get_queued_items(self) -> list[SurfaceableItem]:
        """Pending items held back by a queueing focus mode."""
        pending = [item for item in self._items if item.state == ItemState.PENDING]
        return get_queued_items(
            pending, self._focus_mode.name, emergency_threshold=self._budget.emergency.threshold
        )

    def get_budget_status(self) -> dict[str, int]:
        """Usage percentages and the daily remaining count."""
        now = to_local_naive(self._clock())
        current = apply_resets(self._budget, now)
        utilization = get_budget_utilization(current, now)
        return {
            "daily": utilization.daily,
            "hourly": utilization.hourly,
            "remaining": current.daily.remaining,
        }

    def get_confidence_breakdown(self, item_id: str) -> ConfidenceBreakdown | None:
        item = self._find_item(item_id)
        if item is None or item.candidate is None:
            return None
        self._now()
        return self._breakdown(item.candidate)

    def get_item_visual_state(self, item_id: str) -> VisualState | None:
        """Visual state after focus mode restrictions, or None."""
        item = self._find_item(item_id)
        if item is None:
            return None
        return get_effective_visual_state(item, self._focus_mode.name, self._config.thresholds)

    def get_category_weight(self, category: ItemCategory | str) -> float:
        try:
            resolved = ItemCategory(category)
        except ValueError:
            return self._config.weight_bounds.default
        return get_category_weight(self._user_state, resolved, self._config.weight_bounds)

    def get_state(self) -> EngineState:
        return EngineState(
            items=list(self._items),
            user_state=self._user_state,
            focus_mode=self._focus_mode,
            budget=self._budget,
            context=self._context,
        )

    def clear_items(self) -> None:
        """Forget every item. User state and budget are kept."""
        self._items.clear()

    # =========================================================================
    # Persistence
    # =========================================================================

    def export_user_state(self) -> UserState:
        """UserState with the budget snapshot taken from the live budget."""
        snapshot = BudgetSnapshot(
            daily=DailySnapshot(
                total=self._budget.daily.total,
                used=self._budget.daily.used,
                last_reset=self._budget.daily.last_reset,
            ),
            hourly=HourlySnapshot(
                current=self._budget.hourly.current,
                window_start=self._budget.hourly.window_start,
            ),
        )
        return self._user_state.model_copy(update={"budget": snapshot})

    def import_user_state(self, user_state: UserState) -> None:
        """Adopt persisted state, rebuilding focus mode and budget from it."""
        now = to_local_naive(self._clock())
        self._user_state = user_state
        self._focus_mode = get_focus_mode(user_state.preferences.focus_mode)

        fresh = create_interrupt_budget(
            user_state.preferences.daily_budget, now, self._config.budget
        )
        daily = user_state.budget.daily
        hourly = user_state.budget.hourly
        self._budget = replace(
            fresh,
            daily=replace(
                fresh.daily,
                used=daily.used,
                remaining=max(0, fresh.daily.total - daily.used),
                last_reset=daily.last_reset,
            ),
            hourly=replace(
                fresh.hourly,
                current=hourly.current,
                window_start=hourly.window_start,
            ),
        )
        logger.debug(
            "Imported user state (%s, %d/%d used)",
            self._focus_mode.name.value,
            daily.used,
            fresh.daily.total,
        )


def create_bubble_engine(
    config: EngineConfig | None = None,
    user_state: UserState | None = None,
    focus_mode: FocusModeName | str | None = None,
    context: UserContext | None = None,
    clock: Clock | None = None,
    settings: BubbleSettings | None = None,
) -> BubbleEngine:
    """
    Create an engine using BUBBLE_* settings for anything not given.

    Raises:
        FileNotFoundError: If BUBBLE_ENGINE_CONFIG points at a missing file
        EngineConfigError: If that file is invalid
    """
    settings = settings or get_settings()
    return BubbleEngine(
        config=config or EngineConfig.from_settings(settings),
        user_state=user_state,
        focus_mode=focus_mode or settings.focus_mode,
        context=context,
        clock=clock,
    )

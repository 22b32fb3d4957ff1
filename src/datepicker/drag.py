"""Drag tracking for the three-month calendar strip.

The strip holds the previous, current and next month side by side, each one
panel wide. At rest it is shifted left by one panel width so the current
month is centered (offset ``-W``). Dragging right (positive dx) reveals the
previous month; dragging left reveals the next.

Lifecycle::

    idle --PointerDown--> tracking --PointerUp--> settling --SettleFinished--> idle
    idle --MonthStep----------------------------> settling

While settling, the shell plays ``DragResult.animation`` and reports its end
with ``SettleFinished``. Only then is the month change released through
``commit_month_delta``. Pointer input arriving while settling is ignored.
"""

from dataclasses import dataclass, replace
from typing import Literal, NamedTuple, Union

DragPhase = Literal["idle", "tracking", "settling"]

DEFAULT_DRAG_RATIO = 0.15
DEFAULT_ANIMATION_DURATION_MS = 150.0
SETTLE_EASING = "cubic-bezier(0, 0, .4, 1)"


class Pointer(NamedTuple):
    x: float
    y: float = 0.0


@dataclass(frozen=True)
class PointerDown:
    pointer: Pointer
    panel_width: float


@dataclass(frozen=True)
class PointerMove:
    current: Pointer
    previous: Pointer


@dataclass(frozen=True)
class PointerUp:
    current: Pointer
    previous: Pointer


@dataclass(frozen=True)
class MonthStep:
    """Animated one-month step requested by the month selector buttons."""

    delta: Literal[-1, 1]
    panel_width: float


@dataclass(frozen=True)
class SettleFinished:
    """The settle animation has completed."""


DragEvent = Union[PointerDown, PointerMove, PointerUp, MonthStep, SettleFinished]


class SettleAnimation(NamedTuple):
    start_offset: float
    end_offset: float
    duration_ms: float = DEFAULT_ANIMATION_DURATION_MS
    easing: str = SETTLE_EASING


@dataclass(frozen=True)
class DragState:
    phase: DragPhase = "idle"
    origin_x: float = 0.0
    dx: float = 0.0  # Net horizontal displacement since PointerDown
    current_offset: float = 0.0
    total_draggable_distance: float = 0.0
    pending_month_delta: int = 0

    @classmethod
    def idle(cls, total_draggable_distance: float = 0.0) -> "DragState":
        """Resting state with the strip centered on the current month."""
        return cls(
            current_offset=-total_draggable_distance,
            total_draggable_distance=total_draggable_distance,
        )

    @property
    def centered_offset(self) -> float:
        return -self.total_draggable_distance


class DragResult(NamedTuple):
    state: DragState
    animation: SettleAnimation | None = None
    commit_month_delta: int = 0


def month_delta_for(dx: float) -> int:
    """Month change a drag of ``dx`` points at: -1, 0 or 1."""
    if dx > 0:
        return -1
    if dx < 0:
        return 1
    return 0


def is_inert(dx: float, has_previous: bool, has_next: bool) -> bool:
    """True if the drag heads toward a month outside the range."""
    return (dx > 0 and not has_previous) or (dx < 0 and not has_next)


def visual_offset(
    dx: float,
    total_draggable_distance: float,
    has_previous: bool = True,
    has_next: bool = True,
) -> float:
    """Strip offset for a drag of ``dx``, limited to one panel width."""
    centered = -total_draggable_distance
    if is_inert(dx, has_previous, has_next):
        return centered
    clamped = min(total_draggable_distance, abs(dx))
    return centered + (clamped if dx > 0 else -clamped)


def _settle_target(delta: int, total_draggable_distance: float) -> float:
    if delta < 0:
        return 0.0
    if delta > 0:
        return -2 * total_draggable_distance
    return -total_draggable_distance


def track_drag(
    state: DragState,
    event: DragEvent,
    *,
    has_previous: bool = True,
    has_next: bool = True,
    drag_ratio: float = DEFAULT_DRAG_RATIO,
    duration_ms: float = DEFAULT_ANIMATION_DURATION_MS,
) -> DragResult:
    """Advance the drag state machine by one event.

    Args:
        state: Current drag state.
        event: Pointer, month-step or settle-finished event.
        has_previous: False when the previous month is outside the range;
            drags toward it do not move the strip and never commit.
        has_next: Same for the next month.
        drag_ratio: Fraction of the panel width a drag must cover to commit.
        duration_ms: Duration of the settle animation.

    Returns:
        DragResult with the new state, the settle animation to play when one
        starts, and the committed month delta (non-zero only on
        SettleFinished after a committing drag or step).
    """
    W = state.total_draggable_distance

    if isinstance(event, PointerDown):
        if state.phase != "idle" or event.panel_width <= 0:
            return DragResult(state)
        width = float(event.panel_width)
        return DragResult(
            DragState(
                phase="tracking",
                origin_x=event.pointer.x,
                current_offset=-width,
                total_draggable_distance=width,
            )
        )

    if isinstance(event, PointerMove):
        if state.phase != "tracking":
            return DragResult(state)
        dx = state.dx + (event.current.x - event.previous.x)
        offset = visual_offset(dx, W, has_previous, has_next)
        return DragResult(replace(state, dx=dx, current_offset=offset))

    if isinstance(event, PointerUp):
        if state.phase != "tracking":
            return DragResult(state)
        dx = state.dx + (event.current.x - event.previous.x)
        offset = visual_offset(dx, W, has_previous, has_next)
        if is_inert(dx, has_previous, has_next) or abs(dx) < W * drag_ratio:
            delta = 0
        else:
            delta = month_delta_for(dx)
        end = _settle_target(delta, W)
        return DragResult(
            replace(
                state,
                phase="settling",
                dx=dx,
                current_offset=end,
                pending_month_delta=delta,
            ),
            animation=SettleAnimation(offset, end, duration_ms),
        )

    if isinstance(event, MonthStep):
        if event.delta not in (-1, 1):
            raise ValueError(f"MonthStep delta must be -1 or 1, got {event.delta}")
        if state.phase != "idle" or event.panel_width <= 0:
            return DragResult(state)
        if (event.delta < 0 and not has_previous) or (event.delta > 0 and not has_next):
            return DragResult(state)
        width = float(event.panel_width)
        end = _settle_target(event.delta, width)
        return DragResult(
            DragState(
                phase="settling",
                current_offset=end,
                total_draggable_distance=width,
                pending_month_delta=event.delta,
            ),
            animation=SettleAnimation(-width, end, duration_ms),
        )

    if isinstance(event, SettleFinished):
        if state.phase != "settling":
            return DragResult(state)
        return DragResult(
            DragState.idle(W),
            commit_month_delta=state.pending_month_delta,
        )

    raise TypeError(f"Unknown drag event: {type(event).__name__}")

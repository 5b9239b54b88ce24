"""
Composition Reducer
===================
The controller's state machine as a pure function:

    apply(event, state) -> state

Every input of the rendering surface is an event (see
`soiltexture.controller.events`). Handlers never mutate the state they
receive. An ignored event returns the *same* state object, which lets callers
detect no-ops with an identity check.

Why is this file needed?
------------------------
1. Determinism: A sequence of events can be replayed in tests without Qt.
2. Single owner: Only this module decides how composition and locks change.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from typing import Callable, Optional

from soiltexture.config import (
    DEFAULT_CENTER, DEFAULT_COMPOSITION, DEFAULT_TRIANGLE_SIZE, MAX_LOCKS,
)
from soiltexture.controller import events as ev
from soiltexture.controller.solver import apply_locks, redistribute, solve
from soiltexture.model import geometry
from soiltexture.model.classifier import TextureClass, classify_composition
from soiltexture.model.composition import Axis, Composition, LockState
from soiltexture.model.regions import centroid_of

logger = logging.getLogger(__name__)


def _default_composition() -> Composition:
    return Composition.from_sequence(DEFAULT_COMPOSITION)


@dataclass(frozen=True)
class ControllerState:
    """Session state owned by the composition controller."""
    composition: Composition = field(default_factory=_default_composition)
    locks: LockState = frozenset()
    inputs: Optional[tuple[str, str, str]] = None  # derived from composition when omitted
    dragging: bool = False
    center: tuple[float, float] = DEFAULT_CENTER
    size: float = DEFAULT_TRIANGLE_SIZE

    def __post_init__(self) -> None:
        if self.inputs is None:
            object.__setattr__(self, "inputs", self.composition.percentages())

    @property
    def texture_class(self) -> TextureClass:
        return classify_composition(self.composition)

    def is_locked(self, axis: Axis) -> bool:
        return axis in self.locks

    def is_editable(self, axis: Axis) -> bool:
        """Whether the slider/input of `axis` accepts edits."""
        return axis not in self.locks and len(self.locks) < MAX_LOCKS

    def can_lock(self, axis: Axis) -> bool:
        return axis in self.locks or len(self.locks) < MAX_LOCKS


Handler = Callable[[object, ControllerState], ControllerState]

_HANDLERS: dict[type, Handler] = {}


def register_handler(event_type: type) -> Callable[[Handler], Handler]:
    """Decorator registering the reducer function of an event type."""
    def decorator(fn: Handler) -> Handler:
        if event_type in _HANDLERS:
            raise ValueError(f"Handler for {event_type.__name__} is already registered")
        _HANDLERS[event_type] = fn
        return fn
    return decorator


def apply(event: ev.Event, state: ControllerState) -> ControllerState:
    """
    Reduce one event into a new state.

    Raises:
        TypeError: If no handler is registered for the event type.
    """
    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"No handler registered for event '{type(event).__name__}'")
    return handler(event, state)


def replay(events: list[ev.Event], state: Optional[ControllerState] = None) -> ControllerState:
    """Apply events in order, starting from `state` (or the defaults)."""
    current = state if state is not None else ControllerState()
    for event in events:
        current = apply(event, current)
    return current


def _commit(state: ControllerState, composition: Composition, **changes) -> ControllerState:
    """Store a new composition and re-derive the display strings."""
    return replace(state, composition=composition, inputs=composition.percentages(), **changes)


def _with_input(state: ControllerState, axis: Axis, text: str) -> ControllerState:
    inputs = list(state.inputs)
    inputs[axis] = text
    return replace(state, inputs=tuple(inputs))


# ---- pointer ----

def _pointer(x: float, y: float, state: ControllerState, **changes) -> ControllerState:
    raw = geometry.inverse((x, y), state.center, state.size)
    if raw.has_negative():
        logger.debug("Pointer (%.1f, %.1f) is outside the triangle; ignored.", x, y)
        return replace(state, **changes) if changes else state

    solved = apply_locks(raw.clamped().normalized(), state.composition, state.locks)
    if solved is None:
        return replace(state, **changes) if changes else state
    return _commit(state, solved, **changes)


@register_handler(ev.PointerDown)
def _on_pointer_down(event: ev.PointerDown, state: ControllerState) -> ControllerState:
    return _pointer(event.x, event.y, state, dragging=True)


@register_handler(ev.PointerMove)
def _on_pointer_move(event: ev.PointerMove, state: ControllerState) -> ControllerState:
    if not state.dragging:
        return state
    return _pointer(event.x, event.y, state)


@register_handler(ev.PointerUp)
@register_handler(ev.PointerLeave)
def _on_pointer_release(event: object, state: ControllerState) -> ControllerState:
    if not state.dragging:
        return state
    return replace(state, dragging=False)


# ---- sliders and numeric inputs ----

@register_handler(ev.SliderChange)
def _on_slider(event: ev.SliderChange, state: ControllerState) -> ControllerState:
    solved = redistribute(state.composition, event.axis, event.value, state.locks)
    if solved is None:
        logger.debug("%s is not editable with locks %s; slider change ignored.",
                     event.axis.name, sorted(a.name for a in state.locks))
        return state
    return _commit(state, solved)


@register_handler(ev.NumericInput)
def _on_numeric_input(event: ev.NumericInput, state: ControllerState) -> ControllerState:
    if state.inputs[event.axis] == event.text:
        return state
    return _with_input(state, event.axis, event.text)


_LEADING_NUMBER = re.compile(
    r"\s*[+-]?(?:inf(?:inity)?|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)",
    re.IGNORECASE,
)


def parse_percent(text: str) -> float:
    """
    Parse a typed percentage from its leading number, clamped to [0, 100].

    Trailing characters are ignored ("50abc" and "12%" read as 50 and 12).
    Text without a leading number is 0.
    """
    match = _LEADING_NUMBER.match(text)
    if match is None:
        return 0.0
    return min(100.0, max(0.0, float(match.group())))


@register_handler(ev.NumericCommit)
def _on_numeric_commit(event: ev.NumericCommit, state: ControllerState) -> ControllerState:
    value = parse_percent(state.inputs[event.axis])
    committed = _on_slider(ev.SliderChange(event.axis, value), state)
    # Always leave a clean number in the field, also when the edit was refused
    return replace(committed, inputs=committed.composition.percentages())


# ---- locks and legend ----

@register_handler(ev.LockToggle)
def _on_lock_toggle(event: ev.LockToggle, state: ControllerState) -> ControllerState:
    locks = state.locks ^ {event.axis}
    if len(locks) > MAX_LOCKS:
        logger.info("Cannot lock %s: %d axes are already locked.", event.axis.name, MAX_LOCKS)
        return state
    if len(locks) == MAX_LOCKS:
        return _commit(state, solve(state.composition, locks), locks=locks)
    return replace(state, locks=locks)


@register_handler(ev.LegendSelect)
def _on_legend_select(event: ev.LegendSelect, state: ControllerState) -> ControllerState:
    return _commit(state, centroid_of(event.texture_class))


# ---- surface ----

@register_handler(ev.Resize)
def _on_resize(event: ev.Resize, state: ControllerState) -> ControllerState:
    if event.size <= 0.0:
        logger.debug("Ignoring degenerate triangle size %s.", event.size)
        return state
    return replace(state, center=(float(event.center[0]), float(event.center[1])), size=float(event.size))


@register_handler(ev.Reset)
def _on_reset(event: ev.Reset, state: ControllerState) -> ControllerState:
    return ControllerState(center=state.center, size=state.size)

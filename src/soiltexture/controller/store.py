"""
Composition Store
=================
Qt-facing owner of the controller state.

Why is this file needed?
------------------------
1. State Management: It holds the single ControllerState of the session.
2. Notification: Views subscribe to its signals instead of polling.
3. Decoupling: Views forward raw input here; the pure reducer decides what
   happens, so the same logic runs in tests without a QApplication.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from soiltexture.controller import events as ev
from soiltexture.controller.reducer import ControllerState, apply
from soiltexture.model.classifier import TextureClass
from soiltexture.model.composition import Axis, Composition
from soiltexture.model.regions import lookup

logger = logging.getLogger(__name__)


class Store(QObject):
    """Central state store with signals for panel/canvas sync."""
    state_changed = Signal(object)  # any field changed, emits ControllerState
    composition_changed = Signal(object)  # emits ControllerState
    locks_changed = Signal(object)  # emits LockState
    inputs_changed = Signal(object)  # emits tuple[str, str, str]
    geometry_changed = Signal(object)  # emits ControllerState (center/size)

    def __init__(self, state: Optional[ControllerState] = None, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._state = state if state is not None else ControllerState()

    # ---- read access ----

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def composition(self) -> Composition:
        return self._state.composition

    @property
    def texture_class(self) -> TextureClass:
        return self._state.texture_class

    # ---- dispatch ----

    def dispatch(self, event: ev.Event) -> bool:
        """
        Apply an event and notify listeners.

        Returns:
            True if the state changed.
        """
        old = self._state
        new = apply(event, old)
        if new is old or new == old:
            return False

        self._state = new
        if new.composition != old.composition:
            logger.debug("%s -> %s (%s)", type(event).__name__, new.composition, new.texture_class)
            self.composition_changed.emit(new)
        if new.locks != old.locks:
            logger.info("Locked axes: %s", ", ".join(a.name for a in sorted(new.locks)) or "none")
            self.locks_changed.emit(new.locks)
        if new.inputs != old.inputs:
            self.inputs_changed.emit(new.inputs)
        if new.center != old.center or new.size != old.size:
            self.geometry_changed.emit(new)
        self.state_changed.emit(new)
        return True

    # ---- convenience API for the rendering surface ----

    def pointer_down(self, x: float, y: float) -> bool:
        return self.dispatch(ev.PointerDown(x, y))

    def pointer_move(self, x: float, y: float) -> bool:
        return self.dispatch(ev.PointerMove(x, y))

    def pointer_up(self) -> bool:
        return self.dispatch(ev.PointerUp())

    def pointer_leave(self) -> bool:
        return self.dispatch(ev.PointerLeave())

    def set_slider(self, axis: Axis, value: float) -> bool:
        return self.dispatch(ev.SliderChange(axis, value))

    def set_input_text(self, axis: Axis, text: str) -> bool:
        return self.dispatch(ev.NumericInput(axis, text))

    def commit_input(self, axis: Axis) -> bool:
        return self.dispatch(ev.NumericCommit(axis))

    def toggle_lock(self, axis: Axis) -> bool:
        return self.dispatch(ev.LockToggle(axis))

    def select_class(self, texture_class: TextureClass | str) -> bool:
        """Jump to a class centroid. Unknown names are logged and ignored."""
        if not isinstance(texture_class, TextureClass):
            try:
                texture_class = lookup(texture_class)
            except KeyError:
                logger.warning("Legend selection '%s' is not a texture class; ignored.", texture_class)
                return False
        return self.dispatch(ev.LegendSelect(texture_class))

    def resize(self, center: tuple[float, float], size: float) -> bool:
        return self.dispatch(ev.Resize(center, size))

    def reset(self) -> None:
        self.dispatch(ev.Reset())
        logger.info("Composition state has been reset.")

"""
Composition Control Panel
Sliders, numeric inputs and lock toggles for the three fractions.
"""
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QCheckBox, QGridLayout, QGroupBox, QLabel, QLineEdit, QSlider, QVBoxLayout, QWidget
)

from soiltexture.config import AXIS_META
from soiltexture.controller.reducer import ControllerState
from soiltexture.controller.store import Store
from soiltexture.model.composition import Axis


class AxisRow:
    """The widgets of one axis. Plain holder, laid out by the panel."""

    def __init__(self, axis: Axis, parent: QWidget) -> None:
        meta = AXIS_META[axis]
        self.axis = axis

        self.label = QLabel(meta.label, parent)
        self.label.setStyleSheet(f"color: {meta.color}; font-weight: bold;")

        self.slider = QSlider(Qt.Orientation.Horizontal, parent)
        self.slider.setRange(0, 100)
        self.slider.setSingleStep(1)
        self.slider.setPageStep(5)

        self.edit = QLineEdit(parent)
        self.edit.setFixedWidth(48)
        self.edit.setAlignment(Qt.AlignmentFlag.AlignRight)

        self.unit = QLabel("%", parent)

        self.lock = QCheckBox("Lock", parent)


class CompositionPanel(QWidget):
    def __init__(self, store: Store, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.store = store

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        box = QGroupBox("Composition", self)
        grid = QGridLayout(box)
        grid.setVerticalSpacing(8)
        layout.addWidget(box)

        self.rows: dict[Axis, AxisRow] = {}
        self._dirty: set[Axis] = set()
        for axis in Axis:
            row = AxisRow(axis, box)
            grid.addWidget(row.label, axis, 0)
            grid.addWidget(row.slider, axis, 1)
            grid.addWidget(row.edit, axis, 2)
            grid.addWidget(row.unit, axis, 3)
            grid.addWidget(row.lock, axis, 4)
            self._connect_row(row)
            self.rows[axis] = row

        self.hint = QLabel("Up to two axes can be locked.", self)
        self.hint.setStyleSheet("color: gray;")
        layout.addWidget(self.hint)

        self.store.state_changed.connect(self.load_from_state)
        self.load_from_state(self.store.state)

    def _connect_row(self, row: AxisRow) -> None:
        axis = row.axis
        row.slider.valueChanged.connect(lambda v: self.store.set_slider(axis, v))
        row.edit.textEdited.connect(lambda text: self._on_text_edited(axis, text))
        row.edit.editingFinished.connect(lambda: self._on_editing_finished(axis))
        row.lock.clicked.connect(lambda *_: self._on_lock_clicked(axis))

    def _on_text_edited(self, axis: Axis, text: str) -> None:
        self._dirty.add(axis)
        self.store.set_input_text(axis, text)

    def _on_editing_finished(self, axis: Axis) -> None:
        # Focus changes also finish editing; only typed text is committed
        if axis in self._dirty:
            self._dirty.discard(axis)
            self.store.commit_input(axis)

    def _on_lock_clicked(self, axis: Axis) -> None:
        if not self.store.toggle_lock(axis):
            # Refused toggle: put the checkbox back
            self.load_from_state(self.store.state)

    def load_from_state(self, state: ControllerState) -> None:
        """
        Updates widgets to match the ControllerState.
        """
        for axis, row in self.rows.items():
            editable = state.is_editable(axis)
            percent = int(round(state.composition[axis] * 100.0))

            row.slider.blockSignals(True)
            row.slider.setValue(percent)
            row.slider.setEnabled(editable)
            row.slider.blockSignals(False)

            if row.edit.text() != state.inputs[axis]:
                row.edit.blockSignals(True)
                row.edit.setText(state.inputs[axis])
                row.edit.blockSignals(False)
            row.edit.setEnabled(editable)

            row.lock.blockSignals(True)
            row.lock.setChecked(state.is_locked(axis))
            row.lock.setEnabled(state.can_lock(axis))
            row.lock.blockSignals(False)

"""
Texture Class Legend
Lists the twelve classes with their colours. Clicking one moves the
composition to that class' centroid.
"""
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QIcon, QPixmap
from PySide6.QtWidgets import QGroupBox, QListWidget, QListWidgetItem, QVBoxLayout, QWidget

from soiltexture.controller.reducer import ControllerState
from soiltexture.controller.store import Store
from soiltexture.model.classifier import TextureClass
from soiltexture.model.regions import REGIONS


def _swatch(color: str, size: int = 14) -> QIcon:
    pix = QPixmap(size, size)
    pix.fill(QColor(color))
    return QIcon(pix)


class LegendPanel(QWidget):
    def __init__(self, store: Store, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.store = store

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        box = QGroupBox("Texture classes", self)
        box_layout = QVBoxLayout(box)
        layout.addWidget(box)

        self.list = QListWidget(box)
        self.list.setToolTip("Click a class to jump to its centre.")
        box_layout.addWidget(self.list)

        self._items: dict[TextureClass, QListWidgetItem] = {}
        for texture_class, region in REGIONS.items():
            item = QListWidgetItem(_swatch(region.base_color), region.label)
            item.setData(Qt.ItemDataRole.UserRole, texture_class.name)
            self.list.addItem(item)
            self._items[texture_class] = item

        self.list.itemClicked.connect(self._on_item_clicked)
        self.store.composition_changed.connect(self.load_from_state)
        self.load_from_state(self.store.state)

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        self.store.select_class(item.data(Qt.ItemDataRole.UserRole))

    def load_from_state(self, state: ControllerState) -> None:
        """Mark the class of the current composition."""
        current = state.texture_class
        self.list.blockSignals(True)
        for texture_class, item in self._items.items():
            region = REGIONS[texture_class]
            is_current = texture_class is current
            item.setIcon(_swatch(region.highlight_color if is_current else region.base_color))
            font = item.font()
            font.setBold(is_current)
            item.setFont(font)
        self.list.setCurrentItem(self._items[current])
        self.list.blockSignals(False)

"""
Main Application Window
=======================
The primary GUI container that holds the menu bar, the diagram and the side
panels.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (Reset, Quit) to the store.
"""
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QGroupBox, QLabel, QMainWindow, QPushButton, QSplitter, QVBoxLayout, QWidget
)

from soiltexture.config import VISIBLE_APP_NAME
from soiltexture.controller.reducer import ControllerState
from soiltexture.controller.store import Store
from soiltexture.model.regions import colors_for
from soiltexture.view.panels.composition_panel import CompositionPanel
from soiltexture.view.panels.legend_panel import LegendPanel
from soiltexture.view.widgets.ternary_canvas import TernaryCanvas


class MainWindow(QMainWindow):
    def __init__(self, store: Store) -> None:
        super().__init__()
        self.store = store
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1100, 720)

        # --- SPLITTER (CONTENT AREA) ---
        splitter = QSplitter(Qt.Orientation.Horizontal)
        self.setCentralWidget(splitter)

        # --- LEFT SIDE: Diagram ---
        self.canvas = TernaryCanvas(self.store)
        splitter.addWidget(self.canvas)

        # --- RIGHT SIDE: Result + Controls ---
        side = QWidget()
        side_layout = QVBoxLayout(side)

        result_box = QGroupBox("Texture class")
        result_layout = QVBoxLayout(result_box)
        self.lbl_class = QLabel()
        self.lbl_class.setAlignment(Qt.AlignmentFlag.AlignCenter)
        result_layout.addWidget(self.lbl_class)
        side_layout.addWidget(result_box)

        self.composition_panel = CompositionPanel(self.store, side)
        side_layout.addWidget(self.composition_panel)

        self.legend_panel = LegendPanel(self.store, side)
        side_layout.addWidget(self.legend_panel, 1)

        self.btn_reset = QPushButton("Reset")
        self.btn_reset.clicked.connect(lambda *_: self.store.reset())
        side_layout.addWidget(self.btn_reset)

        splitter.addWidget(side)
        splitter.setSizes([720, 380])

        # --- SIGNAL CONNECTIONS ---
        self.store.composition_changed.connect(self.on_composition_changed)

        self._create_actions()
        self._create_menus()

        self.on_composition_changed(self.store.state)

    def _create_actions(self) -> None:
        self.act_reset = QAction("&Reset", self)
        self.act_reset.setShortcut(QKeySequence("Ctrl+R"))
        self.act_reset.triggered.connect(lambda *_: self.store.reset())

        self.act_exit = QAction("E&xit", self)
        self.act_exit.setShortcut(QKeySequence.StandardKey.Quit)
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        file_menu = self.menuBar().addMenu("&File")
        file_menu.addAction(self.act_exit)

        edit_menu = self.menuBar().addMenu("&Edit")
        edit_menu.addAction(self.act_reset)

    def on_composition_changed(self, state: ControllerState) -> None:
        texture_class = state.texture_class
        _, highlight = colors_for(texture_class)
        self.lbl_class.setText(texture_class.value)
        self.lbl_class.setStyleSheet(
            f"font-size: 20px; font-weight: bold; padding: 8px;"
            f" background-color: {highlight}; border-radius: 4px;"
        )
        self.statusBar().showMessage(str(state.composition))

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
dialtone_gui.py
----------------------------------------------------------------------
PyQt6 window for Dialtone.

- Number entry + Play / Stop, Reboot Audio for the supriya backend
- Status line (melody, errors, "not ready") and hover readout
- Piano roll on the bottom
- A QTimer is the render driver: every frame it ticks the controller
  and repaints the roll.
"""

from __future__ import annotations

from PyQt6 import QtCore, QtWidgets

from dialtone_controller import DialtoneController
from dialtone_piano import PianoRollWidget


FRAME_INTERVAL_MS = 16


class DialtoneWindow(QtWidgets.QWidget):
    """
    Main window: owns the render timer, borrows the controller.
    """

    def __init__(self, controller: DialtoneController, parent=None) -> None:
        super().__init__(parent)

        self.controller = controller

        self.setWindowTitle("Dialtone")
        self.setStyleSheet("background-color: white; color: black;")

        self._build_ui()

        self.frame_timer = QtCore.QTimer(self)
        self.frame_timer.setInterval(FRAME_INTERVAL_MS)
        self.frame_timer.timeout.connect(self._on_frame)
        self.frame_timer.start()

    # ------------------------------------------------------------------
    # UI
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        main_layout = QtWidgets.QVBoxLayout()
        main_layout.setContentsMargins(10, 10, 10, 10)
        main_layout.setSpacing(8)
        self.setLayout(main_layout)

        # ---------- Row 1: number + buttons ----------
        top_layout = QtWidgets.QHBoxLayout()

        number_lbl = QtWidgets.QLabel("Phone number:")
        self.number_edit = QtWidgets.QLineEdit()
        self.number_edit.setPlaceholderText("e.g. 06 01 02 03 04")
        self.number_edit.returnPressed.connect(self._on_play)

        self.play_button = QtWidgets.QPushButton("Play")
        self.stop_button = QtWidgets.QPushButton("Stop")
        self.play_button.clicked.connect(self._on_play)
        self.stop_button.clicked.connect(self._on_stop)

        self.reboot_button = QtWidgets.QPushButton("Reboot Audio")
        self.reboot_button.setEnabled(self.controller.can_reboot_audio)
        self.reboot_button.clicked.connect(self._on_reboot_audio)

        top_layout.addWidget(number_lbl)
        top_layout.addWidget(self.number_edit, 1)
        top_layout.addWidget(self.play_button)
        top_layout.addWidget(self.stop_button)
        top_layout.addWidget(self.reboot_button)
        main_layout.addLayout(top_layout)

        # ---------- Row 2: status ----------
        status_layout = QtWidgets.QHBoxLayout()
        self.status_label = QtWidgets.QLabel(self.controller.status)
        self.hover_label = QtWidgets.QLabel("")
        self.hover_label.setAlignment(QtCore.Qt.AlignmentFlag.AlignRight)
        status_layout.addWidget(self.status_label, 1)
        status_layout.addWidget(self.hover_label)
        main_layout.addLayout(status_layout)

        # ---------- Bottom: piano roll ----------
        self.roll = PianoRollWidget(self.controller)
        self.roll.hoverChanged.connect(self.hover_label.setText)
        main_layout.addWidget(self.roll, 1)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_play(self) -> None:
        self.controller.play_number(self.number_edit.text())
        self._refresh()

    def _on_stop(self) -> None:
        self.controller.stop()
        self._refresh()

    def _on_reboot_audio(self) -> None:
        self.controller.reboot_audio()
        self._refresh()

    def _on_frame(self) -> None:
        self.controller.tick()
        self._refresh()

    def _refresh(self) -> None:
        if self.status_label.text() != self.controller.status:
            self.status_label.setText(self.controller.status)
        self.roll.update()

    # ------------------------------------------------------------------
    # Clean shutdown hook
    # ------------------------------------------------------------------

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.frame_timer.stop()
        self.controller.stop()
        super().closeEvent(event)

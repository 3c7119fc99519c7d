#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
dialtone_piano.py
----------------------------------------------------------------------
88-key piano roll widget (A0–C8, MIDI 21..108), PyQt6.

    +--------+-------------------------------------------+
    |  keys  |  one lane per pitch, time runs left->right |
    |  (C8)  |      ====        ====                      |
    |   ..   |  ====        ====           |  <- playhead |
    |  (A0)  |                                           |
    +--------+-------------------------------------------+

- Every key gets the same row height, lowest key at the bottom, so the
  interaction resolver can map a row coordinate straight to a key.
- Painted with QPainter from controller snapshots; nothing here keeps
  playback state of its own.
- Hover over the key column reports the key; clicking auditions it.
"""

from __future__ import annotations

from typing import Optional

from PyQt6 import QtCore, QtGui, QtWidgets

from dialtone_controller import DialtoneController


KEYBOARD_WIDTH = 70
LANE_MARGIN = 12

WHITE_KEY_COLOR = QtGui.QColor("#fdfdfd")
BLACK_KEY_COLOR = QtGui.QColor("#111111")
KEY_BORDER_COLOR = QtGui.QColor("#444444")
HOVER_COLOR = QtGui.QColor("#3f88ff")
LANE_LIGHT = QtGui.QColor("#f4f4f4")
LANE_DARK = QtGui.QColor("#e6e6e6")
NOTE_COLOR = QtGui.QColor("#ff8800")
SOUNDING_COLOR = QtGui.QColor("#44aa44")
PLAYHEAD_COLOR = QtGui.QColor("#aa44ff")


class PianoRollWidget(QtWidgets.QWidget):
    """
    Piano roll drawn from a DialtoneController.

    Emits:
        hoverChanged(str)  key description, or "" when off the keys
    """

    hoverChanged = QtCore.pyqtSignal(str)

    def __init__(self, controller: DialtoneController, parent=None) -> None:
        super().__init__(parent)
        self.controller = controller

        self.setMouseTracking(True)
        self.setMinimumHeight(len(controller.table) * 4)
        self.setMinimumWidth(KEYBOARD_WIDTH + 200)

        self._layout_geometry()

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._layout_geometry()

    def _layout_geometry(self) -> None:
        self.row_height = max(1.0, self.height() / len(self.controller.table))
        self.controller.resolver.set_key_extent(self.row_height)

        self.lane_start = float(KEYBOARD_WIDTH + LANE_MARGIN)
        self.lane_end = float(max(self.lane_start + 1, self.width() - LANE_MARGIN))
        self.controller.playhead.set_lane(self.lane_start, self.lane_end)

    def _axis_position(self, y: float) -> float:
        """Widget y (top-down) -> resolver coordinate (lowest key at 0)."""
        # Nudge so the top edge of a row belongs to that row, not the one above.
        return self.row_height * len(self.controller.table) - y - 1e-6

    def _row_rect(self, index: int, x: float, width: float) -> QtCore.QRectF:
        top = self.row_height * (len(self.controller.table) - 1 - index)
        return QtCore.QRectF(x, top, width, self.row_height)

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QtGui.QPainter(self)
        try:
            self._paint_lanes(painter)
            self._paint_notes(painter)
            self._paint_keys(painter)
            self._paint_playhead(painter)
        finally:
            painter.end()

    def _paint_lanes(self, painter: QtGui.QPainter) -> None:
        lane_w = self.width() - KEYBOARD_WIDTH
        for index, key in enumerate(self.controller.table):
            color = LANE_DARK if key.is_black_key else LANE_LIGHT
            painter.fillRect(self._row_rect(index, KEYBOARD_WIDTH, lane_w), color)

    def _paint_keys(self, painter: QtGui.QPainter) -> None:
        table = self.controller.table
        sounding = set(self.controller.last_state.sounding)
        hover = self.controller.hover_note

        painter.setPen(QtGui.QPen(KEY_BORDER_COLOR, 1))
        for index, key in enumerate(table):
            if key.note == hover:
                color = HOVER_COLOR
            elif key.note in sounding:
                color = SOUNDING_COLOR
            elif key.is_black_key:
                color = BLACK_KEY_COLOR
            else:
                color = WHITE_KEY_COLOR
            width = KEYBOARD_WIDTH * (0.6 if key.is_black_key else 1.0)
            painter.fillRect(self._row_rect(index, 0, width), color)
            if key.note % 12 == 0 and self.row_height >= 6:
                painter.drawText(
                    self._row_rect(index, 0, KEYBOARD_WIDTH - 4),
                    QtCore.Qt.AlignmentFlag.AlignRight | QtCore.Qt.AlignmentFlag.AlignVCenter,
                    key.display_name,
                )

    def _paint_notes(self, painter: QtGui.QPainter) -> None:
        events = self.controller.events
        total = self.controller.melody_duration
        if not events or total <= 0:
            return
        table = self.controller.table
        sounding = set(self.controller.last_state.sounding)
        span = self.lane_end - self.lane_start

        for event in events:
            x = self.lane_start + span * (event.onset_offset / total)
            w = span * (event.hold_duration / total)
            rect = self._row_rect(table.index_of(event.note), x, w)
            color = SOUNDING_COLOR if event.note in sounding else NOTE_COLOR
            painter.fillRect(rect.adjusted(0, 0.5, 0, -0.5), color)

    def _paint_playhead(self, painter: QtGui.QPainter) -> None:
        playhead = self.controller.playhead_position()
        if not playhead.visible:
            return
        painter.setPen(QtGui.QPen(PLAYHEAD_COLOR, 2))
        x = int(playhead.position)
        painter.drawLine(x, 0, x, self.height())

    # ------------------------------------------------------------------
    # Pointer
    # ------------------------------------------------------------------

    def _key_column_position(self, event) -> Optional[float]:
        pos = event.position()
        if pos.x() < 0 or pos.x() >= KEYBOARD_WIDTH:
            return None
        return self._axis_position(pos.y())

    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        position = self._key_column_position(event)
        status = None if position is None else self.controller.hover(position)
        if status is None:
            self.controller.leave()
            self.hoverChanged.emit("")
        else:
            self.hoverChanged.emit(status.describe())
        self.update()

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if event.button() != QtCore.Qt.MouseButton.LeftButton:
            return
        position = self._key_column_position(event)
        if position is not None:
            self.controller.click(position)

    def leaveEvent(self, event) -> None:  # type: ignore[override]
        super().leaveEvent(event)
        self.controller.leave()
        self.hoverChanged.emit("")
        self.update()

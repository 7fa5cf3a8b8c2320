"""Hover card — full date, chart values, and the day's description/feelings."""

from __future__ import annotations

import markdown as md_lib

from PySide6.QtWidgets import QFrame, QLabel, QVBoxLayout
from PySide6.QtCore import Qt, QPoint

import daylog.utils.config as cfg
from daylog.services.chart_data import format_long_date

# Qt's rich-text engine only supports a CSS subset
_TEXT_CSS = """
<style>
p           { margin: 0 0 4px 0; }
ul, ol      { margin: 2px 0 4px 0; padding-left: 16px; }
strong      { font-weight: bold; }
em          { font-style: italic; }
</style>
"""

CARD_WIDTH = 280


def _to_html(text: str) -> str:
    return _TEXT_CSS + md_lib.markdown(text, extensions=["nl2br"])


def _make_sep(color: str) -> QFrame:
    sep = QFrame()
    sep.setFrameShape(QFrame.Shape.HLine)
    sep.setFrameShadow(QFrame.Shadow.Plain)
    sep.setStyleSheet(f"color: {color}; border: none; background-color: {color}; max-height: 1px;")
    sep.setFixedHeight(1)
    return sep


class EntryCard(QFrame):
    """Floating tooltip-style card for one chart point.

    Call ``show_point(point, lines, global_pos)`` with any chart point that
    carries ``date``, ``description`` and ``feelings``; ``lines`` are the
    chart-specific value rows.
    """

    def __init__(self, parent=None):
        super().__init__(parent, Qt.WindowType.ToolTip)
        self.setFixedWidth(CARD_WIDTH)
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(12, 10, 12, 10)
        self._layout.setSpacing(6)

    def _clear(self):
        while self._layout.count():
            item = self._layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()

    def _label(self, text: str, color: str, bold: bool = False) -> QLabel:
        label = QLabel(text)
        label.setWordWrap(True)
        weight = "font-weight: bold;" if bold else ""
        label.setStyleSheet(f"color: {color}; {weight}")
        return label

    def _section(self, title: str, text: str):
        p = cfg.palette()
        self._layout.addWidget(self._label(f"{title}:", p["text"], bold=True))
        body = self._label(_to_html(text), p["subtext"])
        body.setTextFormat(Qt.TextFormat.RichText)
        self._layout.addWidget(body)

    def show_point(self, point, lines: list[str], global_pos: QPoint):
        p = cfg.palette()
        self.setStyleSheet(
            f"EntryCard {{ background-color: {p['base']}; border: 1px solid {p['overlay']}; border-radius: 8px; }}"
        )
        self._clear()

        self._layout.addWidget(self._label(format_long_date(point.date), p["text"], bold=True))
        self._layout.addWidget(_make_sep(p["surface"]))
        for line in lines:
            self._layout.addWidget(self._label(line, p["subtext"]))

        if point.description:
            self._layout.addWidget(_make_sep(p["surface"]))
            self._section("Description", point.description)
        if point.feelings:
            self._section("Feelings", point.feelings)

        self.adjustSize()
        self.move(global_pos + QPoint(16, 16))
        self.show()

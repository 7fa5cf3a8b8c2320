"""Journal text box with per-line colouring and a ghost placeholder."""

from __future__ import annotations

from PySide6.QtWidgets import QPlainTextEdit
from PySide6.QtCore import Qt
from PySide6.QtGui import (
    QColor,
    QFont,
    QPainter,
    QSyntaxHighlighter,
    QTextBlockFormat,
    QTextCharFormat,
    QTextCursor,
)

import daylog.utils.config as cfg

# Palette key per line position inside an entry block
SLOT_COLORS = ["accent", "peach", "mauve", "green", "teal", "text", "text"]

PLACEHOLDER_TEXT = (
    "01.02.24, thursday\n"
    "none\n"
    "2 mtp\n"
    "yes, no, yes\n"
    "1.30 and 8.15\n"
    "what happened today\n"
    "how it felt\n"
    "\n"
    "(blank line, then the next day)"
)


class _SlotHighlighter(QSyntaxHighlighter):
    """Colours each line by its position in the current entry block.

    The block state carries the line index within the entry; a blank line
    resets it.
    """

    def highlightBlock(self, text: str):
        if not text.strip():
            self.setCurrentBlockState(-1)
            return
        previous = self.previousBlockState()
        index = previous + 1 if previous >= 0 else 0
        self.setCurrentBlockState(index)
        if index >= len(SLOT_COLORS):
            return

        fmt = QTextCharFormat()
        fmt.setForeground(QColor(cfg.palette()[SLOT_COLORS[index]]))
        if index == 0:
            fmt.setFontWeight(QFont.Weight.Bold)
        self.setFormat(0, len(text), fmt)


class JournalEditor(QPlainTextEdit):
    """Plain-text journal input."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setPlaceholderText("")  # we paint our own
        self._highlighter = _SlotHighlighter(self.document())
        self._apply_line_spacing()
        self.textChanged.connect(self.viewport().update)

    def keyPressEvent(self, event):
        if event.key() == Qt.Key.Key_Tab:
            return  # no tab characters in the journal
        super().keyPressEvent(event)

    # -- Ghost placeholder --------------------------------------------------

    def paintEvent(self, event):
        super().paintEvent(event)
        if self.toPlainText():
            return

        painter = QPainter(self.viewport())
        painter.setPen(QColor(cfg.palette()["muted"]))
        painter.setFont(self.font())

        # Use the first block's geometry so ghost text aligns with real text
        block = self.document().firstBlock()
        rect = self.blockBoundingGeometry(block).translated(self.contentOffset())
        fm = painter.fontMetrics()
        x = int(rect.left() + self.document().documentMargin())
        y = int(rect.top())
        for line in PLACEHOLDER_TEXT.split("\n"):
            painter.drawText(x, y + fm.ascent(), line)
            y += fm.lineSpacing()
        painter.end()

    # -- Public API ---------------------------------------------------------

    def set_text(self, text: str):
        self.setPlainText(text)
        self._apply_line_spacing()
        self.viewport().update()

    def get_text(self) -> str:
        return self.toPlainText()

    def rehighlight(self):
        """Re-run colouring after a theme change."""
        self._highlighter.rehighlight()

    def _apply_line_spacing(self):
        fmt = QTextBlockFormat()
        fmt.setLineHeight(140, 1)  # 1 = ProportionalHeight (140%)
        cursor = self.textCursor()
        cursor.select(QTextCursor.SelectionType.Document)
        cursor.mergeBlockFormat(fmt)
        cursor.clearSelection()
        self.setTextCursor(cursor)

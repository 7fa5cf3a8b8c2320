"""Input view — paste the journal text and store or delete it."""

from __future__ import annotations

import logging

from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QMessageBox,
)
from PySide6.QtCore import Signal, Qt

import daylog.utils.config as cfg
from daylog.models import storage
from daylog.widgets.journal_editor import JournalEditor

logger = logging.getLogger(__name__)


def _outline_qss(p: dict, fg: str) -> str:
    return (
        f"QPushButton {{ padding: 4px 16px; color: {fg}; background: transparent; "
        f"border: 1px solid {p['overlay']}; border-radius: 6px; }}"
        f"QPushButton:hover {{ background-color: {p['surface']}; }}"
    )


class InputView(QWidget):
    """Text box with Update and Delete.

    Update replaces the stored journal with the box contents; Delete removes
    it. Both clear the box afterwards.
    """

    journal_changed = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.setSpacing(16)

        self._title = QLabel("Input")
        layout.addWidget(self._title)

        self._editor = JournalEditor()
        layout.addWidget(self._editor, 1)

        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)

        self._load_btn = QPushButton("Load saved")
        self._load_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self._load_btn.clicked.connect(self._load_saved)
        btn_row.addWidget(self._load_btn)

        btn_row.addStretch()

        self._update_btn = QPushButton("Update")
        self._update_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self._update_btn.clicked.connect(self._update)
        btn_row.addWidget(self._update_btn)

        self._delete_btn = QPushButton("Delete")
        self._delete_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self._delete_btn.clicked.connect(self._delete)
        btn_row.addWidget(self._delete_btn)

        layout.addLayout(btn_row)

    # -- Public API ---------------------------------------------------------

    def refresh(self):
        p = cfg.palette()
        base = cfg.font_size
        self._title.setStyleSheet(f"font-weight: bold; font-size: {base * 2}pt; color: {p['text']};")
        self._editor.setStyleSheet(
            f"JournalEditor {{ background-color: {p['base']}; color: {p['text']}; "
            f"border: 1px solid {p['surface']}; border-radius: 8px; padding: 8px; }}"
        )
        self._editor.rehighlight()
        self._load_btn.setStyleSheet(_outline_qss(p, p["subtext"]))
        self._update_btn.setStyleSheet(_outline_qss(p, p["text"]))
        self._delete_btn.setStyleSheet(
            f"QPushButton {{ padding: 4px 16px; color: {p['base']}; background-color: {p['red']}; "
            f"border: 1px solid {p['red']}; border-radius: 6px; }}"
        )

    def focus_editor(self):
        self._editor.setFocus()

    # -- Actions ------------------------------------------------------------

    def _load_saved(self):
        """Put the stored journal text back in the box for editing."""
        self._editor.set_text(storage.load_journal_text())

    def _update(self):
        text = self._editor.get_text()
        storage.update_journal(text)
        logger.info("Journal updated (%d characters)", len(text))
        self._editor.set_text("")
        self.journal_changed.emit()

    def _delete(self):
        reply = QMessageBox.question(
            self,
            "Delete journal",
            "Remove the stored journal? This cannot be undone.",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if reply != QMessageBox.StandardButton.Yes:
            return
        storage.remove_journal()
        logger.info("Journal removed")
        self._editor.set_text("")
        self.journal_changed.emit()

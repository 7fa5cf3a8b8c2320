"""Home view — duration selector and the four journal charts."""

from __future__ import annotations

import logging

from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
)
from PySide6.QtCore import Qt

import daylog.utils.config as cfg
from daylog.models import storage
from daylog.services.chart_data import DURATION_OPTIONS, DurationOption, duration_by_label
from daylog.widgets.charts import MedicationChart, RoutineChart, SleepChart, SubstanceChart

logger = logging.getLogger(__name__)


class HomeView(QWidget):
    """Charts over the stored journal, re-parsed on every refresh."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._duration: DurationOption = duration_by_label(cfg.load_duration())
        self._entries = []
        self._duration_buttons: dict[str, QPushButton] = {}
        self._init_ui()

    def _init_ui(self):
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        outer.setSpacing(0)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QScrollArea.Shape.NoFrame)
        outer.addWidget(scroll)

        container = QWidget()
        scroll.setWidget(container)
        layout = QVBoxLayout(container)
        layout.setContentsMargins(32, 24, 32, 32)
        layout.setSpacing(24)

        # -- Title + duration buttons --
        header = QVBoxLayout()
        header.setSpacing(12)
        self._title = QLabel("Home")
        header.addWidget(self._title)

        btn_row = QHBoxLayout()
        btn_row.setSpacing(8)
        for option in DURATION_OPTIONS:
            btn = QPushButton(option.label)
            btn.setCursor(Qt.CursorShape.PointingHandCursor)
            btn.clicked.connect(lambda _=False, o=option: self._select_duration(o))
            btn_row.addWidget(btn)
            self._duration_buttons[option.label] = btn
        btn_row.addStretch()
        header.addLayout(btn_row)
        layout.addLayout(header)

        # -- Charts --
        self._charts = [
            SleepChart("Sleep", "Daily Wakeup and Sleep time"),
            SubstanceChart("Substances", "Daily Substance Level"),
            RoutineChart("Routines", "Daily Morning, Work and Night routine"),
            MedicationChart("M Types", "Daily mTypes"),
        ]
        for chart in self._charts:
            layout.addWidget(chart)
        layout.addStretch()

    # -- Public API ---------------------------------------------------------

    def refresh(self):
        """Reload the journal from the store and redraw every chart."""
        self._entries = storage.get_journal()
        logger.debug("Loaded %d journal entries", len(self._entries))
        self._restyle()
        self._redraw()

    # -- Internal -----------------------------------------------------------

    def _select_duration(self, option: DurationOption):
        if option == self._duration:
            return
        self._duration = option
        cfg.save_duration(option.label)
        self._restyle()
        self._redraw()

    def _redraw(self):
        for chart in self._charts:
            chart.set_entries(self._entries, self._duration)

    def _restyle(self):
        p = cfg.palette()
        base = cfg.font_size
        self._title.setStyleSheet(f"font-weight: bold; font-size: {base * 2}pt; color: {p['text']};")
        for label, btn in self._duration_buttons.items():
            if label == self._duration.label:
                btn.setStyleSheet(
                    f"QPushButton {{ padding: 4px 16px; color: {p['base']}; background-color: {p['accent']}; "
                    f"border: 1px solid {p['accent']}; border-radius: 6px; }}"
                )
            else:
                btn.setStyleSheet(
                    f"QPushButton {{ padding: 4px 16px; color: {p['text']}; background: transparent; "
                    f"border: 1px solid {p['overlay']}; border-radius: 6px; }}"
                    f"QPushButton:hover {{ background-color: {p['surface']}; }}"
                )

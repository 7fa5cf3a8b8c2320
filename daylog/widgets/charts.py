"""Chart cards for the home view, one per tracked series."""

from __future__ import annotations

from PySide6.QtCharts import (
    QBarSet,
    QCategoryAxis,
    QChart,
    QChartView,
    QLineSeries,
    QStackedBarSeries,
    QBarSeries,
    QValueAxis,
)
from PySide6.QtCore import QMargins, Qt
from PySide6.QtGui import QColor, QCursor, QPainter, QPen
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

import daylog.utils.config as cfg
from daylog.models.journal import JournalEntry
from daylog.services import chart_data
from daylog.services.chart_data import DurationOption, format_time
from daylog.widgets.entry_card import EntryCard

CHART_HEIGHT = 400


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def _date_axis(labels: list[str], interval: int) -> QCategoryAxis:
    """X axis with a label on every (interval + 1)-th point, tilted like a calendar strip."""
    axis = QCategoryAxis()
    axis.setLabelsPosition(QCategoryAxis.AxisLabelsPosition.AxisLabelsPositionOnValue)
    axis.setRange(-0.5, max(len(labels), 1) - 0.5)
    axis.setLabelsAngle(-45)
    axis.setGridLineVisible(False)
    seen = set()
    for i in range(0, len(labels), interval + 1):
        # QCategoryAxis silently rejects duplicate labels
        if labels[i] in seen:
            continue
        seen.add(labels[i])
        axis.append(labels[i], i)
    return axis


def _tick_axis(ticks: dict[float, str], low: float, high: float) -> QCategoryAxis:
    axis = QCategoryAxis()
    axis.setLabelsPosition(QCategoryAxis.AxisLabelsPosition.AxisLabelsPositionOnValue)
    axis.setRange(low, high)
    for value, label in ticks.items():
        axis.append(label, value)
    return axis


class _ChartCard(QWidget):
    """Title, subtitle and a QChartView; subclasses build the series."""

    def __init__(self, title: str, description: str, parent=None):
        super().__init__(parent)
        self._points: list = []

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(4)

        self._title = QLabel(title)
        layout.addWidget(self._title)
        self._subtitle = QLabel(description)
        layout.addWidget(self._subtitle)

        self._chart = QChart()
        self._chart.legend().hide()
        self._chart.setMargins(QMargins(0, 2, 0, 2))
        self._chart.setBackgroundRoundness(0)

        self._view = QChartView(self._chart)
        self._view.setRenderHint(QPainter.RenderHint.Antialiasing)
        self._view.setMinimumHeight(CHART_HEIGHT)
        layout.addWidget(self._view)

        self._empty = QLabel("No entries in this range")
        self._empty.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty.hide()
        layout.addWidget(self._empty)

        self._card = EntryCard(self)

    # -- Subclass hooks -----------------------------------------------------

    def build_points(self, entries: list[JournalEntry], days: int | None) -> list:
        raise NotImplementedError

    def populate(self, interval: int):
        raise NotImplementedError

    def describe(self, point) -> list[str]:
        return []

    # -- Public API ---------------------------------------------------------

    def set_entries(self, entries: list[JournalEntry], option: DurationOption):
        self._card.hide()
        self._points = self.build_points(entries, option.days)
        self._chart.removeAllSeries()
        for axis in self._chart.axes():
            self._chart.removeAxis(axis)
        self._apply_palette()
        if self._points:
            self.populate(option.interval)
        self._view.setVisible(bool(self._points))
        self._empty.setVisible(not self._points)

    # -- Internal -----------------------------------------------------------

    def _apply_palette(self):
        p = cfg.palette()
        self.setStyleSheet(
            f"_ChartCard {{ background-color: {p['mantle']}; border: 1px solid {p['surface']}; border-radius: 8px; }}"
        )
        self._title.setStyleSheet(f"color: {p['text']}; font-weight: bold;")
        self._subtitle.setStyleSheet(f"color: {p['subtext']};")
        self._empty.setStyleSheet(f"color: {p['muted']};")
        self._chart.setBackgroundBrush(QColor(p["mantle"]))
        self._chart.setPlotAreaBackgroundVisible(False)

    def _style_axis(self, axis, grid: bool = True):
        p = cfg.palette()
        axis.setLabelsColor(QColor(p["subtext"]))
        axis.setLinePenColor(QColor(p["mantle"]))
        axis.setGridLineVisible(grid)
        if grid:
            pen = QPen(QColor(p["surface"]))
            pen.setStyle(Qt.PenStyle.DashLine)
            axis.setGridLinePen(pen)

    def _attach(self, series, x_axis, y_axis):
        self._style_axis(x_axis, grid=False)
        self._style_axis(y_axis)
        self._chart.addSeries(series)
        if x_axis not in self._chart.axes():
            self._chart.addAxis(x_axis, Qt.AlignmentFlag.AlignBottom)
        if y_axis not in self._chart.axes():
            self._chart.addAxis(y_axis, Qt.AlignmentFlag.AlignLeft)
        series.attachAxis(x_axis)
        series.attachAxis(y_axis)

    def _on_hover(self, index: int, active: bool):
        if not active or not 0 <= index < len(self._points):
            self._card.hide()
            return
        point = self._points[index]
        self._card.show_point(point, self.describe(point), QCursor.pos())

    def _connect_bar_set(self, bar_set: QBarSet):
        bar_set.hovered.connect(lambda status, index: self._on_hover(index, status))


class SleepChart(_ChartCard):
    """Fell-asleep and woke-up times as two lines, sorted by date."""

    def build_points(self, entries, days):
        return chart_data.sleep_points(entries, days)

    def describe(self, point):
        schedule = point.sleep_schedule
        return [
            f"Fell asleep: {schedule.morning or 'N/A'}",
            f"Woke up: {schedule.night or 'N/A'}",
        ]

    def _runs(self, values: list[float | None]) -> list[list[tuple[int, float]]]:
        """Contiguous stretches of recorded values; a missing time breaks the line."""
        runs, current = [], []
        for i, value in enumerate(values):
            if value is None:
                if current:
                    runs.append(current)
                current = []
            else:
                current.append((i, value))
        if current:
            runs.append(current)
        return runs

    def populate(self, interval):
        p = cfg.palette()
        x_axis = _date_axis([pt.label for pt in self._points], interval)
        y_axis = _tick_axis({float(h): format_time(h) for h in range(0, 15, 2)}, 0, 14)

        # Entries with no times at all still get a labelled, empty plot
        self._style_axis(x_axis, grid=False)
        self._style_axis(y_axis)
        self._chart.addAxis(x_axis, Qt.AlignmentFlag.AlignBottom)
        self._chart.addAxis(y_axis, Qt.AlignmentFlag.AlignLeft)

        for key, color in (("wakeup", p["accent"]), ("bedtime", p["mauve"])):
            values = [getattr(pt, key) for pt in self._points]
            for run in self._runs(values):
                series = QLineSeries()
                series.setPen(QPen(QColor(color), 2))
                for i, value in run:
                    series.append(i, value)
                series.hovered.connect(lambda pos, state: self._on_hover(round(pos.x()), state))
                self._attach(series, x_axis, y_axis)


class SubstanceChart(_ChartCard):
    """Daily substance intensity (0-10) from the lookup table."""

    def build_points(self, entries, days):
        return chart_data.substance_points(entries, days)

    def describe(self, point):
        return [f"Intensity: {point.intensity}", point.text or "No substances"]

    def populate(self, interval):
        p = cfg.palette()
        bar_set = QBarSet("Intensity")
        bar_set.setColor(QColor(p["accent"]))
        bar_set.setBorderColor(QColor(p["accent"]))
        for pt in self._points:
            bar_set.append(pt.intensity)
        self._connect_bar_set(bar_set)

        series = QBarSeries()
        series.append(bar_set)
        series.setBarWidth(0.8)

        y_axis = QValueAxis()
        y_axis.setRange(0, 10)
        y_axis.setTickCount(6)
        y_axis.setLabelFormat("%d")
        y_axis.setTitleText("Intensity")
        y_axis.setTitleBrush(QColor(p["subtext"]))
        self._attach(series, _date_axis([pt.label for pt in self._points], interval), y_axis)


class RoutineChart(_ChartCard):
    """One column per day split into morning, work and night cells."""

    SLOTS = ("morning", "work", "night")

    def build_points(self, entries, days):
        return chart_data.routine_points(entries, days)

    def describe(self, point):
        return [
            f"Night: {_yes_no(point.night)}",
            f"Work: {_yes_no(point.work)}",
            f"Morning: {_yes_no(point.morning)}",
        ]

    def populate(self, interval):
        p = cfg.palette()
        series = QStackedBarSeries()
        series.setBarWidth(1.0)
        # A done/missed pair per slot, stacked bottom to top; one of each pair is 0
        for slot in self.SLOTS:
            for done, color in ((True, p["green"]), (False, p["base"])):
                bar_set = QBarSet(f"{slot} {'done' if done else 'missed'}")
                bar_set.setColor(QColor(color))
                bar_set.setBorderColor(QColor(p["surface"]))
                for pt in self._points:
                    bar_set.append(1 if getattr(pt, slot) == done else 0)
                self._connect_bar_set(bar_set)
                series.append(bar_set)

        y_axis = _tick_axis({0: " ", 1: "Morning", 2: "Work", 3: "Night"}, 0, 3)
        self._attach(series, _date_axis([pt.label for pt in self._points], interval), y_axis)


class MedicationChart(_ChartCard):
    """Medication amount per day, coloured by type."""

    TYPE_COLORS = {"MTP": "peach", "MWO": "green"}

    def build_points(self, entries, days):
        return chart_data.medication_points(entries, days)

    def describe(self, point):
        lines = [f"Type: {point.type or 'None'}"]
        if point.amount is not None:
            lines.append(f"Amount: {point.amount}")
        return lines

    def populate(self, interval):
        p = cfg.palette()
        series = QStackedBarSeries()
        series.setBarWidth(1.0)
        for kind in ("MTP", "MWO", None):
            color = p[self.TYPE_COLORS[kind]] if kind else p["base"]
            bar_set = QBarSet(kind or "None")
            bar_set.setColor(QColor(color))
            bar_set.setBorderColor(QColor(p["surface"]))
            for pt in self._points:
                matches = pt.type == kind if kind else pt.type not in self.TYPE_COLORS
                bar_set.append(pt.value if matches else 0)
            self._connect_bar_set(bar_set)
            series.append(bar_set)

        y_axis = QValueAxis()
        y_axis.setRange(0, 3)
        y_axis.setTickCount(4)
        y_axis.setLabelFormat("%d")
        y_axis.setTitleText("Amount")
        y_axis.setTitleBrush(QColor(p["subtext"]))
        self._attach(series, _date_axis([pt.label for pt in self._points], interval), y_axis)

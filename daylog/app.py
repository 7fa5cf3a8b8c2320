import logging

from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)
from PySide6.QtGui import QShortcut, QKeySequence
from PySide6.QtCore import Qt

import daylog.utils.config as cfg
from daylog.views.home_view import HomeView
from daylog.views.input_view import InputView

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 13


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("daylog")
        self.setMinimumSize(1024, 768)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        self.setCentralWidget(central)

        # -- Top navigation bar --
        self._nav_bar = QWidget()
        self._nav_bar.setFixedHeight(50)
        nav_layout = QHBoxLayout(self._nav_bar)
        nav_layout.setContentsMargins(16, 4, 16, 4)
        nav_layout.setSpacing(4)

        self._home_btn = QPushButton("Home")
        self._home_btn.clicked.connect(self.show_home)
        nav_layout.addWidget(self._home_btn)

        self._input_btn = QPushButton("Input")
        self._input_btn.clicked.connect(self.show_input)
        nav_layout.addWidget(self._input_btn)

        nav_layout.addStretch()

        self._theme_btn = QPushButton()
        self._theme_btn.clicked.connect(self._toggle_theme)
        nav_layout.addWidget(self._theme_btn)

        for btn in (self._home_btn, self._input_btn, self._theme_btn):
            btn.setCursor(Qt.CursorShape.PointingHandCursor)

        layout.addWidget(self._nav_bar)

        # -- Pages --
        self._stack = QStackedWidget()
        self._home = HomeView()
        self._input = InputView()
        self._stack.addWidget(self._home)
        self._stack.addWidget(self._input)
        layout.addWidget(self._stack, 1)

        self._input.journal_changed.connect(self._home.refresh)

        # Escape → Home from any view
        QShortcut(QKeySequence(Qt.Key.Key_Escape), self, self.show_home)
        QShortcut(QKeySequence("Ctrl+1"), self, self.show_home)
        QShortcut(QKeySequence("Ctrl+2"), self, self.show_input)

        self.show_home()

    def show_home(self):
        self._home.refresh()
        self._stack.setCurrentWidget(self._home)
        self._style_nav()

    def show_input(self):
        self._input.refresh()
        self._stack.setCurrentWidget(self._input)
        self._input.focus_editor()
        self._style_nav()

    def _toggle_theme(self):
        theme = "light" if cfg.theme == "dark" else "dark"
        cfg.save_theme(theme)
        _apply_theme(QApplication.instance(), theme, cfg.font_size)
        if self._stack.currentWidget() == self._home:
            self._home.refresh()
        else:
            self._input.refresh()
        self._style_nav()

    def _style_nav(self):
        p = cfg.palette()
        self._nav_bar.setStyleSheet(f"background-color: {p['mantle']}; border-bottom: 1px solid {p['surface']};")
        current = self._stack.currentWidget()
        for btn, page in ((self._home_btn, self._home), (self._input_btn, self._input)):
            underline = f"border-bottom: 2px solid {p['accent']};" if page is current else "border: none;"
            btn.setStyleSheet(
                f"QPushButton {{ padding: 4px 12px; color: {p['text']}; background: transparent; {underline} }}"
                f"QPushButton:hover {{ background-color: {p['surface']}; }}"
            )
        self._theme_btn.setText("Light mode" if cfg.theme == "dark" else "Dark mode")
        self._theme_btn.setStyleSheet(
            f"QPushButton {{ padding: 4px 12px; color: {p['subtext']}; background: transparent; border: none; }}"
            f"QPushButton:hover {{ color: {p['accent']}; }}"
        )


def _apply_theme(app: QApplication, theme: str, font_size: int):
    """Apply the base stylesheet for a theme. Widgets restyle themselves on refresh."""
    cfg.theme = theme
    cfg.font_size = font_size
    p = cfg.palette()
    app.setStyleSheet(
        f"* {{ font-size: {font_size}pt; }}\n"
        f"QMainWindow, QStackedWidget, QScrollArea, QScrollArea > QWidget > QWidget "
        f"{{ background-color: {p['base']}; color: {p['text']}; }}\n"
        f"QMessageBox {{ background-color: {p['base']}; color: {p['text']}; }}\n"
    )


def _configure_logging():
    level = getattr(logging, cfg.LOG_LEVEL, logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def create_app() -> QApplication:
    _configure_logging()
    app = QApplication([])
    app.setApplicationName("daylog")
    app.setApplicationDisplayName("daylog")
    _apply_theme(app, cfg.load_theme(), DEFAULT_FONT_SIZE)
    logger.info("Data directory: %s", cfg.DATA_DIR)
    window = MainWindow()
    window.show()
    app._window = window
    return app

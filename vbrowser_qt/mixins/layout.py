from PySide6.QtWidgets import (
    QComboBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QProgressBar,
    QPushButton,
    QTabBar,
    QVBoxLayout,
    QWidget,
)

from vbrowser.constants import APP_NAME, SEARCH_ENGINES
from vbrowser_qt.constants import (
    NAV_BAR_MARGINS,
    NAV_BAR_SPACING,
    ROOT_LAYOUT_MARGINS,
    ROOT_LAYOUT_SPACING,
)


class LayoutMixin:
    def _build_ui(self):
        self.setWindowTitle(APP_NAME)
        container = QWidget()
        root_layout = QVBoxLayout(container)
        root_layout.setContentsMargins(*ROOT_LAYOUT_MARGINS)
        root_layout.setSpacing(ROOT_LAYOUT_SPACING)

        tab_row = QHBoxLayout()
        self.tab_bar = QTabBar()
        self.tab_bar.setObjectName("surfaceTabs")
        self.tab_bar.setTabsClosable(True)
        self.tab_bar.setExpanding(False)
        self.tab_bar.setDocumentMode(True)
        self.new_tab_btn = QPushButton("+")
        self.new_tab_btn.setToolTip("New tab")
        tab_row.addWidget(self.tab_bar, 1)
        tab_row.addWidget(self.new_tab_btn)
        root_layout.addLayout(tab_row)

        nav_bar = QFrame()
        self._nav_bar = nav_bar
        nav_bar.setObjectName("navBar")
        nav_layout = QHBoxLayout(nav_bar)
        nav_layout.setContentsMargins(*NAV_BAR_MARGINS)
        nav_layout.setSpacing(NAV_BAR_SPACING)

        self.back_btn = QPushButton("◀")
        self.back_btn.setToolTip("Back")
        self.forward_btn = QPushButton("▶")
        self.forward_btn.setToolTip("Forward")
        self.reload_btn = QPushButton("⟳")
        self.reload_btn.setToolTip("Reload")
        self.address_input = QLineEdit()
        self.address_input.setPlaceholderText("Search or enter address")
        self.search_engine_combo = QComboBox()
        for engine_id in SEARCH_ENGINES:
            self.search_engine_combo.addItem(engine_id.title(), engine_id)
        self.loading_bar = QProgressBar()
        self.loading_bar.setRange(0, 0)
        self.loading_bar.setMaximumWidth(80)
        self.loading_bar.setTextVisible(False)
        self.loading_bar.hide()

        nav_layout.addWidget(self.back_btn)
        nav_layout.addWidget(self.forward_btn)
        nav_layout.addWidget(self.reload_btn)
        nav_layout.addWidget(self.address_input, 1)
        nav_layout.addWidget(self.loading_bar)
        nav_layout.addWidget(self.search_engine_combo)
        root_layout.addWidget(nav_bar)

        self.surface_host = QWidget()
        self.surface_host.setObjectName("surfaceHost")
        self.surface_layout = QVBoxLayout(self.surface_host)
        self.surface_layout.setContentsMargins(0, 0, 0, 0)
        self.surface_layout.setSpacing(0)
        self.empty_lbl = QLabel("No open tabs. Press + to open one.")
        self.surface_layout.addWidget(self.empty_lbl)
        root_layout.addWidget(self.surface_host, 1)

        self.status_lbl = QLabel("Starting...")
        self.status_lbl.setObjectName("statusLabel")
        root_layout.addWidget(self.status_lbl)

        self.setCentralWidget(container)
        self._toaster.build(container)


__all__ = ["LayoutMixin"]

from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import Qt, QSettings, QByteArray
from PyQt6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QListWidget,
    QSplitter,
    QMessageBox,
    QDialog
)

from ui.desktop.controller import ClientController
from ui.desktop.login_dialog import LoginDialog

from ui.desktop.widgets.card_table import CardTable
from ui.desktop.widgets.credits_panel import CreditsPanel
from ui.desktop.widgets.trading_controls import TradingControls

class MainWindow(QMainWindow):
    def __init__(self, controller: ClientController | None = None):
        super().__init__()
        self.setWindowTitle("Hollomon Card Trader")
        self.resize(1000, 680)

        self._settings = QSettings("hollomon", "hollomon_client")
        self._last_username = self._settings.value("session/username", "", type=str)

        qss_path = Path(__file__).with_name("styles.qss")
        if qss_path.exists():
            self.setStyleSheet(qss_path.read_text(encoding="utf-8"))

        self.controller = controller or ClientController()
        self.controller.logged_in.connect(self._on_logged_in)
        self.controller.logged_out.connect(self._on_logged_out)
        self.controller.credits_updated.connect(self._on_credits)
        self.controller.owned_updated.connect(self._on_owned)
        self.controller.offers_updated.connect(self._on_offers)
        self.controller.event_logged.connect(self._on_event)
        self.controller.error_raised.connect(self._on_error)

        self._build_menu()
        self._build_ui()
        self._on_logged_out()

        geo = self._settings.value("ui/geometry", QByteArray(), type=QByteArray)
        if geo and not geo.isEmpty():
            self.restoreGeometry(geo)

    # ---------- UI ----------

    def _build_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)

        header = QHBoxLayout()
        self.server_label = QLabel("Not connected")
        self.server_label.setStyleSheet("font-size: 11pt; font-weight: bold; color: #ff9800;")

        self.btn_login = QPushButton("LOG IN")
        self.btn_login.setMinimumWidth(140)
        self.btn_login.clicked.connect(self._login)

        self.btn_logout = QPushButton("LOG OUT")
        self.btn_logout.setMinimumWidth(140)
        self.btn_logout.clicked.connect(self.controller.logout)

        header.addWidget(self.server_label)
        header.addStretch()
        header.addWidget(self.btn_login)
        header.addWidget(self.btn_logout)
        main_layout.addLayout(header)

        self.credits_panel = CreditsPanel()
        main_layout.addWidget(self.credits_panel)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        self.owned_table = CardTable("My Cards", show_price=False)
        splitter.addWidget(self.owned_table)

        self.offers_table = CardTable("Offers")
        splitter.addWidget(self.offers_table)
        splitter.setSizes([450, 550])
        main_layout.addWidget(splitter, stretch=3)

        self.controls = TradingControls(self.controller, self.owned_table, self.offers_table)
        main_layout.addWidget(self.controls)

        main_layout.addWidget(QLabel("Event Log"))
        self.log_list = QListWidget()
        self.log_list.setStyleSheet("font-family: Consolas; font-size: 10pt;")
        self.log_list.setMaximumHeight(160)
        main_layout.addWidget(self.log_list, stretch=1)

    # ---------- Menu ----------

    def _build_menu(self) -> None:
        mb = self.menuBar()
        session = mb.addMenu("Session")

        act_login = session.addAction("Log In…")
        act_login.triggered.connect(self._login)

        act_refresh = session.addAction("Refresh")
        act_refresh.triggered.connect(self.controller.refresh_all)

        act_logout = session.addAction("Log Out")
        act_logout.triggered.connect(self.controller.logout)

        session.addSeparator()

        act_quit = session.addAction("Quit")
        act_quit.triggered.connect(self.close)

    # ---------- Login flow ----------

    def _login(self) -> None:
        if self.controller.is_logged_in:
            resp = QMessageBox.question(
                self,
                "Log In",
                "This will end the current session.\nContinue?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            )
            if resp != QMessageBox.StandardButton.Yes:
                return

        dlg = LoginDialog(config=self.controller.config, username=self._last_username, parent=self)
        if dlg.exec() != QDialog.DialogCode.Accepted:
            return

        try:
            config, username, password = dlg.values()
        except ValueError as e:
            self._on_error(str(e))
            return

        if not username:
            self._on_error("Username cannot be empty")
            return

        self._last_username = username
        self._settings.setValue("session/username", username)

        if not self.controller.login(config, username, password):
            QMessageBox.warning(self, "Log In", f"Could not log in to {config.address} as {username}.")

    # ---------- Rendering ----------

    def _on_logged_in(self, username: str) -> None:
        self.server_label.setText(f"Connected to {self.controller.config.address}")
        self.credits_panel.set_user(username)
        self.btn_login.setVisible(False)
        self.btn_logout.setVisible(True)
        self.controls.set_enabled(True)

    def _on_logged_out(self) -> None:
        self.server_label.setText("Not connected")
        self.credits_panel.reset()
        self.owned_table.clear_cards()
        self.offers_table.clear_cards()
        self.btn_login.setVisible(True)
        self.btn_logout.setVisible(False)
        self.controls.set_enabled(False)

    def _on_credits(self, credits: int) -> None:
        self.credits_panel.set_credits(credits)

    def _on_owned(self, cards) -> None:
        self.owned_table.update_cards(cards)
        self.credits_panel.set_counts(owned=len(cards))

    def _on_offers(self, cards) -> None:
        self.offers_table.update_cards(cards)
        self.credits_panel.set_counts(offers=len(cards))

    def _on_event(self, msg: str) -> None:
        self.log_list.addItem(msg)
        self.log_list.scrollToBottom()

    def _on_error(self, msg: str) -> None:
        self.log_list.addItem(f"[ERR] {msg}")
        self.log_list.scrollToBottom()

    def closeEvent(self, event):
        self.controller.logout()
        self._settings.setValue("ui/geometry", self.saveGeometry())
        super().closeEvent(event)
        event.accept()

from __future__ import annotations

from PyQt6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QFormLayout,
    QLineEdit,
    QSpinBox,
    QDialogButtonBox,
)

from infrastructure.config import ClientConfig


class LoginDialog(QDialog):
    def __init__(self, *, config: ClientConfig, username: str = "", parent=None):
        super().__init__(parent)
        self.setWindowTitle("Log in to Hollomon")
        self.setModal(True)
        self._encoding = config.encoding

        root = QVBoxLayout(self)
        form = QFormLayout()
        root.addLayout(form)

        self.host_le = QLineEdit(config.host)
        form.addRow("Server", self.host_le)

        self.port_sb = QSpinBox()
        self.port_sb.setRange(1, 65535)
        self.port_sb.setValue(int(config.port))
        form.addRow("Port", self.port_sb)

        self.user_le = QLineEdit(username)
        form.addRow("Username", self.user_le)

        self.pass_le = QLineEdit()
        self.pass_le.setEchoMode(QLineEdit.EchoMode.Password)
        form.addRow("Password", self.pass_le)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        root.addWidget(buttons)

        if username:
            self.pass_le.setFocus()

    def values(self) -> tuple[ClientConfig, str, str]:
        cfg = ClientConfig(
            host=self.host_le.text().strip(),
            port=int(self.port_sb.value()),
            encoding=self._encoding,
        )
        return cfg, self.user_le.text().strip(), self.pass_le.text()

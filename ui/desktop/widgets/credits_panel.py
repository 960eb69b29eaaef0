# ui/desktop/widgets/credits_panel.py
from PyQt6.QtWidgets import QWidget, QHBoxLayout, QLabel, QVBoxLayout, QFrame

class StatBox(QFrame):
    def __init__(self, title):
        super().__init__()
        self.setFrameShape(QFrame.Shape.StyledPanel)
        self.setStyleSheet("background-color: #252526; border-radius: 4px;")
        box = QVBoxLayout(self)
        box.setContentsMargins(6, 4, 6, 4)

        self.title_lbl = QLabel(title)
        self.title_lbl.setStyleSheet("color: #888; font-size: 8pt;")
        box.addWidget(self.title_lbl)

        self.value_lbl = QLabel("-")
        self.value_lbl.setStyleSheet("font-size: 13pt; font-weight: bold;")
        box.addWidget(self.value_lbl)

    def set_value(self, text, color=None):
        self.value_lbl.setText(text)
        if color:
            self.value_lbl.setStyleSheet(f"font-size: 13pt; font-weight: bold; color: {color};")
        else:
            self.value_lbl.setStyleSheet("font-size: 13pt; font-weight: bold; color: #e0e0e0;")

class CreditsPanel(QWidget):
    def __init__(self):
        super().__init__()
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0,0,0,0)

        self.user_box = StatBox("User")
        self.credits_box = StatBox("Credits")
        self.owned_box = StatBox("Cards Owned")
        self.offers_box = StatBox("On Offer")

        layout.addWidget(self.user_box)
        layout.addWidget(self.credits_box)
        layout.addWidget(self.owned_box)
        layout.addWidget(self.offers_box)

    def set_user(self, username):
        if username:
            self.user_box.set_value(username, "#4caf50")
        else:
            self.user_box.set_value("offline", "#f44336")

    def set_credits(self, credits):
        self.credits_box.set_value(f"{credits:,}")

    def set_counts(self, owned=None, offers=None):
        if owned is not None:
            self.owned_box.set_value(str(owned))
        if offers is not None:
            self.offers_box.set_value(str(offers))

    def reset(self):
        self.set_user(None)
        for box in (self.credits_box, self.owned_box, self.offers_box):
            box.set_value("-")

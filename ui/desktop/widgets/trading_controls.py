from __future__ import annotations

from PyQt6.QtGui import QIntValidator
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QGridLayout,
    QLabel, QLineEdit, QPushButton, QGroupBox, QMessageBox
)


class TradingControls(QWidget):
    """
    Buy the selected offer, or put the selected owned card up for sale.

    The widget only knows how to ask for a selection; the main window
    supplies the two card tables.
    """

    def __init__(self, controller, owned_table, offers_table):
        super().__init__()
        self.controller = controller
        self.owned_table = owned_table
        self.offers_table = offers_table

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        group = QGroupBox("Trading Controls")
        gl = QGridLayout(group)
        root.addWidget(group)

        self.price_validator = QIntValidator(0, 2_000_000_000)

        # ---------- Buy ----------
        self.btn_buy = QPushButton("BUY SELECTED OFFER")
        self.btn_buy.setObjectName("BuyBtn")
        self.btn_buy.clicked.connect(self._on_buy)
        gl.addWidget(self.btn_buy, 0, 0, 1, 3)

        # ---------- Sell ----------
        gl.addWidget(QLabel("Asking price:"), 1, 0)
        self.price_input = QLineEdit()
        self.price_input.setValidator(self.price_validator)
        self.price_input.setPlaceholderText("credits")
        gl.addWidget(self.price_input, 1, 1)

        self.btn_sell = QPushButton("SELL SELECTED CARD")
        self.btn_sell.setObjectName("SellBtn")
        self.btn_sell.clicked.connect(self._on_sell)
        gl.addWidget(self.btn_sell, 1, 2)

        # ---------- Refresh ----------
        self.btn_refresh = QPushButton("REFRESH")
        self.btn_refresh.clicked.connect(self.controller.refresh_all)
        gl.addWidget(self.btn_refresh, 2, 0, 1, 3)

        self.set_enabled(False)

    def set_enabled(self, enabled: bool) -> None:
        for w in (self.btn_buy, self.btn_sell, self.btn_refresh, self.price_input):
            w.setEnabled(enabled)

    def _get_valid_price(self) -> int | None:
        """Parses the asking price, ensuring it is a non-negative integer."""
        text = self.price_input.text().strip()
        if not text:
            return None
        try:
            val = int(text)
            return val if val >= 0 else None
        except ValueError:
            return None

    def _reject(self, msg: str):
        QMessageBox.warning(self, "Trade Rejected", msg)

    # ======================================================================
    # Actions
    # ======================================================================

    def _on_buy(self):
        card = self.offers_table.selected_card()
        if card is None:
            self._reject("Select a card from the offers list first.")
            return
        if not self.controller.buy(card):
            self._reject(f"Could not buy {card}.")

    def _on_sell(self):
        card = self.owned_table.selected_card()
        price = self._get_valid_price()
        if card is None:
            self._reject("Select one of your cards first.")
            return
        if price is None:
            self._reject("Please enter a valid asking price in credits.")
            return
        if self.controller.sell(card, price):
            self.price_input.clear()
        else:
            self._reject(f"Could not sell {card.name}.")

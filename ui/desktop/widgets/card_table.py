from __future__ import annotations

from typing import Iterable, List, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QLabel, QTableWidget, QTableWidgetItem, QHeaderView

from cards.card import Card, Rank

RANK_COLORS = {
    Rank.UNIQUE: "#ff9800",
    Rank.RARE: "#42a5f5",
    Rank.UNCOMMON: "#66bb6a",
    Rank.COMMON: "#e0e0e0",
}


class CardTable(QWidget):
    """Sorted card listing with single-row selection."""

    def __init__(self, title: str, show_price: bool = True, parent=None):
        super().__init__(parent)
        self._title = title
        self._cards: List[Card] = []

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        self.header = QLabel(title)
        self.header.setAlignment(Qt.AlignmentFlag.AlignLeft)
        # Use pt, not px
        self.header.setStyleSheet("font-size: 12pt; font-weight: bold;")
        root.addWidget(self.header)

        columns = ["Rank", "Name", "ID"] + (["Price"] if show_price else [])
        self.table = QTableWidget(0, len(columns))
        self.table.setHorizontalHeaderLabels(columns)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QTableWidget.SelectionMode.SingleSelection)
        root.addWidget(self.table)

        self._show_price = show_price

    def update_cards(self, cards: Iterable[Card]) -> None:
        # Listings arrive sorted from the client; keep that order.
        self._cards = list(cards)
        self.header.setText(f"{self._title} ({len(self._cards)})")
        self.table.setRowCount(len(self._cards))

        for r, card in enumerate(self._cards):
            self._set_item(r, 0, card.rank.value, color=RANK_COLORS.get(card.rank))
            self._set_item(r, 1, card.name)
            self._set_item(r, 2, str(card.id), align=Qt.AlignmentFlag.AlignRight)
            if self._show_price:
                self._set_item(r, 3, str(card.price), align=Qt.AlignmentFlag.AlignRight)

        self.table.resizeColumnToContents(0)

    def clear_cards(self) -> None:
        self.update_cards([])

    def selected_card(self) -> Optional[Card]:
        rows = self.table.selectionModel().selectedRows()
        if not rows:
            return None
        r = rows[0].row()
        if 0 <= r < len(self._cards):
            return self._cards[r]
        return None

    def _set_item(
        self,
        r: int,
        c: int,
        text: str,
        align: Qt.AlignmentFlag = Qt.AlignmentFlag.AlignLeft,
        color: Optional[str] = None,
    ) -> None:
        it = QTableWidgetItem(text)
        it.setTextAlignment(int(align | Qt.AlignmentFlag.AlignVCenter))
        if color:
            it.setForeground(QColor(color))
        self.table.setItem(r, c, it)

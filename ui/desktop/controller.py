from __future__ import annotations

from typing import Callable, List, Optional

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from application.hollomon_client import HollomonClient
from application.results import Result
from cards.card import Card
from infrastructure.config import ClientConfig
from infrastructure.logger import get_logger

logger = get_logger(__name__)


class ClientController(QObject):
    """
    Single owner of the HollomonClient for the GUI.

    - Owns exactly one session at a time (new login = new client).
    - Every exchange runs on the UI thread, one at a time, matching the
      strictly synchronous protocol.
    - Emits plain values (lists of Card, ints, strings) to the widgets.
    """

    logged_in = pyqtSignal(str)            # username
    logged_out = pyqtSignal()
    credits_updated = pyqtSignal(int)
    owned_updated = pyqtSignal(object)     # List[Card]
    offers_updated = pyqtSignal(object)    # List[Card]
    event_logged = pyqtSignal(str)
    error_raised = pyqtSignal(str)

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        client_factory: Callable[[ClientConfig], HollomonClient] = HollomonClient.from_config,
    ):
        super().__init__()
        self._config = config or ClientConfig.from_env()
        self._client_factory = client_factory
        self.client: Optional[HollomonClient] = None

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def is_logged_in(self) -> bool:
        return self.client is not None and self.client.is_authenticated

    # ---------- Session ----------

    def login(self, config: ClientConfig, username: str, password: str) -> bool:
        self.logout()
        self._config = config

        client = self._client_factory(config)
        result = client.login(username, password)
        if not result.ok:
            client.close()
            self._fail(f"Login to {config.address} failed", result)
            return False

        self.client = client
        self.logged_in.emit(username)
        self.event_logged.emit(f"Logged in as {username} on {config.address}")
        self.owned_updated.emit(result.value)
        self.refresh_credits()
        self.refresh_offers()
        return True

    @pyqtSlot()
    def logout(self) -> None:
        if self.client is None:
            return
        client, self.client = self.client, None
        client.close()
        self.logged_out.emit()
        self.event_logged.emit("Logged out")

    # ---------- Queries ----------

    @pyqtSlot()
    def refresh_credits(self) -> None:
        result = self._run("CREDITS", lambda c: c.get_credits())
        if result is not None:
            self.credits_updated.emit(int(result.value))

    @pyqtSlot()
    def refresh_owned(self) -> None:
        result = self._run("CARDS", lambda c: c.get_cards())
        if result is not None:
            self.owned_updated.emit(result.value)

    @pyqtSlot()
    def refresh_offers(self) -> None:
        result = self._run("OFFERS", lambda c: c.get_offers())
        if result is not None:
            self.offers_updated.emit(result.value)

    @pyqtSlot()
    def refresh_all(self) -> None:
        self.refresh_credits()
        self.refresh_owned()
        self.refresh_offers()

    # ---------- Trades ----------

    def buy(self, card: Card) -> bool:
        result = self._run(f"BUY {card.id}", lambda c: c.buy_card(card))
        if result is None:
            return False
        self.event_logged.emit(f"Bought {card}")
        self.refresh_all()
        return True

    def sell(self, card: Card, price: int) -> bool:
        result = self._run(f"SELL {card.id}", lambda c: c.sell_card(card, price))
        if result is None:
            return False
        self.event_logged.emit(f"Offered {card.name} {{ID:{card.id}}} for {price} credits")
        self.refresh_all()
        return True

    # ---------- Internal helpers ----------

    def _run(self, label: str, op: Callable[[HollomonClient], Result]) -> Optional[Result]:
        if self.client is None:
            self.error_raised.emit(f"{label}: not logged in")
            return None
        result = op(self.client)
        if not result.ok:
            self._fail(label, result)
            return None
        return result

    def _fail(self, label: str, result: Result) -> None:
        msg = f"{label}: {result.failure.value} ({result.detail})"
        logger.warning(msg)
        self.error_raised.emit(msg)

# cli_play.py

from __future__ import annotations

import getpass
from typing import Dict, List, Optional

from infrastructure.config import ClientConfig
from infrastructure.logger import configure_logging, LoggingConfig
from application.hollomon_client import HollomonClient
from application.results import Result
from cards.card import Card


HELP = """Commands:
  login <user> [pass]  -> connect and log in (prompts for password if omitted)
  credits              -> show balance
  cards                -> list owned cards
  offers               -> list cards on offer
  buy <id>             -> buy an offered card
  sell <id> <price>    -> offer one of your cards for sale
  logout               -> close the session
  help                 -> this text
  quit                 -> exit
"""


def _describe(result: Result) -> str:
    return f"{result.failure.value}: {result.detail}" if result.detail else result.failure.value


def print_cards(title: str, cards: List[Card]) -> None:
    if not cards:
        print(f"{title}: none")
        return
    print(f"{title} ({len(cards)}):")
    for card in cards:
        print("  ", card)


class CardShell:
    """
    Line-oriented front end over one HollomonClient at a time.

    Remembers the last owned/offered listings so buy/sell can be given a
    bare card id.
    """

    def __init__(self, config: ClientConfig, client_factory=HollomonClient.from_config):
        self.config = config
        self._client_factory = client_factory
        self.client: Optional[HollomonClient] = None
        self.owned: Dict[int, Card] = {}
        self.offers: Dict[int, Card] = {}

    def execute(self, line: str) -> bool:
        """Run one command line. Returns False when the shell should exit."""
        parts = line.split()
        if not parts:
            return True
        cmd = parts[0].lower()

        if cmd == "quit":
            self.logout()
            return False

        if cmd == "help":
            print(HELP)
            return True

        if cmd == "login":
            username = parts[1]
            password = parts[2] if len(parts) > 2 else getpass.getpass("password: ")
            self.login(username, password)
            return True

        if cmd == "logout":
            self.logout()
            print("Logged out.")
            return True

        if cmd in ("credits", "cards", "offers", "buy", "sell"):
            if self.client is None:
                print("Not logged in. Use `login <user>` first.")
                return True

            if cmd == "credits":
                result = self.client.get_credits()
                print("Credits:", result.value if result.ok else f"unavailable ({_describe(result)})")
                return True

            if cmd == "cards":
                self._show_owned(self.client.get_cards())
                return True

            if cmd == "offers":
                self._show_offers(self.client.get_offers())
                return True

            if cmd == "buy":
                card = self._lookup(self.offers, int(parts[1]), "offers")
                if card is not None:
                    result = self.client.buy_card(card)
                    print(f"Bought {card}" if result.ok else f"Buy failed ({_describe(result)})")
                return True

            if cmd == "sell":
                card = self._lookup(self.owned, int(parts[1]), "cards")
                price = int(parts[2])
                if card is not None:
                    result = self.client.sell_card(card, price)
                    print(f"Offered {card.name} for {price} credits" if result.ok
                          else f"Sell failed ({_describe(result)})")
                return True

        print("Unknown command. Type `help`.")
        return True

    def login(self, username: str, password: str) -> bool:
        self.logout()
        client = self._client_factory(self.config)
        result = client.login(username, password)
        if not result.ok:
            client.close()
            print(f"Login to {self.config.address} failed ({_describe(result)})")
            return False
        self.client = client
        print(f"User {username} logged in.")
        self._show_owned(result)
        return True

    def logout(self) -> None:
        if self.client is not None:
            self.client.close()
        self.client = None
        self.owned.clear()
        self.offers.clear()

    def _show_owned(self, result: Result) -> None:
        if not result.ok:
            print(f"Could not list cards ({_describe(result)})")
            return
        self.owned = {c.id: c for c in result.value}
        print_cards("Your cards", result.value)

    def _show_offers(self, result: Result) -> None:
        if not result.ok:
            print(f"Could not list offers ({_describe(result)})")
            return
        self.offers = {c.id: c for c in result.value}
        print_cards("Offers", result.value)

    def _lookup(self, listing: Dict[int, Card], card_id: int, source: str) -> Optional[Card]:
        card = listing.get(card_id)
        if card is None:
            print(f"No card {card_id} in the last `{source}` listing.")
        return card


def main() -> None:
    configure_logging(LoggingConfig(level="WARNING", log_file="runs/client.log"))

    cfg = ClientConfig.from_env()
    shell = CardShell(cfg)

    print(f"Hollomon server: {cfg.address}")
    print(HELP)

    while True:
        try:
            line = input("hollomon> ").strip()
        except (EOFError, KeyboardInterrupt):
            line = "quit"

        try:
            if not shell.execute(line):
                break
        except (IndexError, ValueError) as e:
            print("Error:", str(e) or "missing argument")
            print("Type `help` for usage.")

    print("Bye.")


if __name__ == "__main__":
    main()

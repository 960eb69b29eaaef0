# main.py
from __future__ import annotations

import sys

from infrastructure.config import ClientConfig
from infrastructure.logger import configure_logging, LoggingConfig
from application.hollomon_client import HollomonClient


def print_cards(title, cards) -> None:
    print(f"{title} ({len(cards)}):")
    for card in cards:
        print("  ", card)


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 2:
        print("usage: python main.py <username> <password>")
        return 2
    username, password = argv

    configure_logging(LoggingConfig(level="INFO"))
    cfg = ClientConfig.from_env()

    with HollomonClient.from_config(cfg) as client:
        owned = client.login(username, password)
        if not owned.ok:
            print(f"Login to {cfg.address} failed: {owned.failure.value} ({owned.detail})")
            return 1

        print_cards("Owned", owned.value)

        credits = client.get_credits()
        print("Credits:", credits.value if credits.ok else "unavailable")

        offers = client.get_offers()
        if offers.ok:
            print_cards("Offers", offers.value)

    return 0

if __name__ == "__main__":
    sys.exit(main())

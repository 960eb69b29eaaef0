# protocol/commands.py
from __future__ import annotations

# Response tokens
CARD = "CARD"
OK = "OK"

# Requests
CREDITS = "CREDITS"
CARDS = "CARDS"
OFFERS = "OFFERS"


def login_greeting(username: str) -> str:
    """Exact line the server sends after accepting a login."""
    return f"User {username} logged in successfully."


def buy_command(card_id: int) -> str:
    return f"BUY {card_id}"


def sell_command(card_id: int, price: int) -> str:
    return f"SELL {card_id} {price}"

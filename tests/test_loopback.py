"""
End-to-end tests over a real TCP socket.

A small threaded socketserver plays the card server on 127.0.0.1 so the
whole stack (connect_tcp -> CardReader -> HollomonClient) is exercised
with real buffering and real end-of-stream behaviour.
"""
import socketserver
import threading

import pytest

from application.hollomon_client import HollomonClient, SessionState
from application.results import FailureKind
from cards.card import Card, Rank
from infrastructure.transport import connect_tcp

USERS = {"alice": "secret"}


class MarketState:
    def __init__(self):
        self.lock = threading.Lock()
        self.credits = 30
        self.owned = [Card(2, "Butler", Rank.COMMON)]
        self.offers = [
            Card(10, "Observatory", Rank.UNIQUE, 500),
            Card(11, "Gate Lodge", Rank.RARE, 5),
        ]


class HollomonHandler(socketserver.StreamRequestHandler):

    def _line(self):
        raw = self.rfile.readline()
        return raw.decode("utf-8").rstrip("\n") if raw else None

    def _send(self, *lines):
        self.wfile.write("".join(line + "\n" for line in lines).encode("utf-8"))

    def _send_cards(self, cards):
        for card in cards:
            self._send("CARD", str(card.id), card.name, card.rank.value, str(card.price))
        self._send("OK")

    def handle(self):
        market = self.server.market
        username, password = self._line(), self._line()
        if username is None or USERS.get(username) != password:
            self._send("Invalid username or password.")
            return

        self._send(f"User {username} logged in successfully.")
        # Owned cards go out in reverse order to prove the client sorts.
        self._send_cards(list(reversed(market.owned)))

        while True:
            line = self._line()
            if line is None:
                return
            parts = line.split()
            with market.lock:
                if line == "CREDITS":
                    self._send(str(market.credits), "OK")
                elif line == "CARDS":
                    self._send_cards(market.owned)
                elif line == "OFFERS":
                    self._send_cards(market.offers)
                elif parts[0] == "BUY":
                    card = next((c for c in market.offers if c.id == int(parts[1])), None)
                    if card is None or card.price > market.credits:
                        self._send("ERROR")
                        continue
                    market.offers.remove(card)
                    market.owned.append(Card(card.id, card.name, card.rank))
                    market.credits -= card.price
                    self._send("OK")
                elif parts[0] == "SELL":
                    card = next((c for c in market.owned if c.id == int(parts[1])), None)
                    if card is None:
                        self._send("ERROR")
                        continue
                    market.owned.remove(card)
                    market.offers.append(Card(card.id, card.name, card.rank, int(parts[2])))
                    self._send("OK")
                else:
                    self._send("ERROR")


class HollomonTestServer(socketserver.ThreadingTCPServer):
    allow_reuse_address = True
    daemon_threads = True

    def __init__(self):
        super().__init__(("127.0.0.1", 0), HollomonHandler)
        self.market = MarketState()


@pytest.fixture
def server():
    srv = HollomonTestServer()
    thread = threading.Thread(target=srv.serve_forever, daemon=True, name="hollomon-test-server")
    thread.start()
    yield srv
    srv.shutdown()
    srv.server_close()
    thread.join(timeout=2.0)


def client_for(srv) -> HollomonClient:
    host, port = srv.server_address
    return HollomonClient(host, port, connection_factory=connect_tcp)


class TestLoopbackSession:

    def test_full_trading_session(self, server):
        with client_for(server) as client:
            owned = client.login("alice", "secret")
            assert owned.ok
            assert owned.value == [Card(2, "Butler", Rank.COMMON)]

            assert client.get_credits().value == 30

            offers = client.get_offers().value
            assert [c.name for c in offers] == ["Observatory", "Gate Lodge"]

            observatory, gate_lodge = offers
            assert client.buy_card(observatory).failure == FailureKind.INSUFFICIENT_CREDITS
            assert client.buy_card(gate_lodge).ok
            assert client.get_credits().value == 25

            cards = client.get_cards().value
            assert cards == [Card(11, "Gate Lodge", Rank.RARE), Card(2, "Butler", Rank.COMMON)]

            assert client.sell_card(cards[1], 15).ok
            assert [c.id for c in client.get_offers().value] == [10, 2]

        assert client.state == SessionState.CLOSED

    def test_bad_password(self, server):
        client = client_for(server)
        result = client.login("alice", "guess")
        assert result.failure == FailureKind.REJECTED
        assert client.state == SessionState.DISCONNECTED
        client.close()

    def test_server_refuses_unknown_buy(self, server):
        with client_for(server) as client:
            client.login("alice", "secret")
            result = client.buy_card(Card(999, "Ghost", Rank.COMMON, 1))
            assert result.failure == FailureKind.REJECTED

    def test_nothing_listening(self):
        srv = HollomonTestServer()
        host, port = srv.server_address
        srv.server_close()

        client = HollomonClient(host, port)
        result = client.login("alice", "secret")
        assert result.failure == FailureKind.TRANSPORT
        client.close()

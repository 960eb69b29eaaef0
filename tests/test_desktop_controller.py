"""
Desktop controller tests.

Only QtCore is needed: signals are delivered synchronously to plain
Python callables, so no window or event loop is started.
"""
import pytest

pytest.importorskip("PyQt6.QtCore")

from application.hollomon_client import HollomonClient, SessionState
from cards.card import Card, Rank
from infrastructure.config import ClientConfig
from ui.desktop.controller import ClientController
from fakes import FakeServer, card_lines, greeting


class Recorder:
    def __init__(self, controller: ClientController):
        self.events = []
        controller.logged_in.connect(lambda u: self.events.append(("logged_in", u)))
        controller.logged_out.connect(lambda: self.events.append(("logged_out",)))
        controller.credits_updated.connect(lambda c: self.events.append(("credits", c)))
        controller.owned_updated.connect(lambda cards: self.events.append(("owned", cards)))
        controller.offers_updated.connect(lambda cards: self.events.append(("offers", cards)))
        controller.error_raised.connect(lambda msg: self.events.append(("error", msg)))

    def of(self, kind):
        return [e[1:] for e in self.events if e[0] == kind]


class TestClientController:

    def setup_method(self):
        self.server = FakeServer(
            greeting("alice"),
            *card_lines(2, "Butler", "COMMON"),
            "OK",
            "100", "OK",                                # credits after login
            *card_lines(7, "Gate Lodge", "RARE", 5),    # offers after login
            "OK",
        )
        self.controller = ClientController(
            config=ClientConfig.LOCAL(),
            client_factory=lambda cfg: HollomonClient.from_config(cfg, connection_factory=self.server),
        )
        self.rec = Recorder(self.controller)

    def test_login_emits_snapshot(self):
        assert self.controller.login(ClientConfig.LOCAL(), "alice", "secret")

        assert self.rec.of("logged_in") == [("alice",)]
        assert self.rec.of("owned") == [([Card(2, "Butler", Rank.COMMON)],)]
        assert self.rec.of("credits") == [(100,)]
        assert self.rec.of("offers") == [([Card(7, "Gate Lodge", Rank.RARE)],)]
        assert self.controller.is_logged_in

    def test_failed_login_emits_error(self):
        self.server = FakeServer("Bad login")
        assert not self.controller.login(ClientConfig.LOCAL(), "alice", "nope")

        assert self.rec.of("logged_in") == []
        assert len(self.rec.of("error")) == 1
        assert not self.controller.is_logged_in

    def test_logout_closes_client(self):
        self.controller.login(ClientConfig.LOCAL(), "alice", "secret")
        client = self.controller.client

        self.controller.logout()

        assert client.state == SessionState.CLOSED
        assert self.rec.of("logged_out") == [()]
        assert self.controller.client is None

    def test_refresh_without_login_reports_error(self):
        self.controller.refresh_credits()
        assert self.rec.of("error") == [("CREDITS: not logged in",)]

"""
Session controller for the Hollomon card server.

One HollomonClient owns one TCP connection and drives it through:

    DISCONNECTED --login ok--> AUTHENTICATED --close--> CLOSED
         |                          ^
         +--connect--> CONNECTED ---+  (greeting matched)
                           |
                           +--greeting rejected / I/O error--> DISCONNECTED

Every public operation is one synchronous exchange: write the request
line(s), flush, block on the response. Nothing is pipelined and there is
no internal locking, so callers must not share a client across threads.

Failures never escape as exceptions. Each operation returns a Result;
transport errors, protocol violations and local refusals are told apart
by Result.failure.
"""
from __future__ import annotations

from enum import Enum
from typing import BinaryIO, List, Optional

from application.results import CREDITS_UNAVAILABLE, FailureKind, Result
from cards.card import Card
from infrastructure.config import ClientConfig
from infrastructure.logger import get_logger
from infrastructure.transport import Connection, ConnectionFactory, connect_tcp
from protocol import commands
from protocol.card_reader import CardReader
from protocol.errors import CardFormatError, StreamClosedError

logger = get_logger(__name__)


class SessionState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"          # socket open, not yet logged in
    AUTHENTICATED = "authenticated"
    CLOSED = "closed"


class HollomonClient:
    """
    Usage:
        with HollomonClient("netsrv.cim.rhul.ac.uk", 1812) as client:
            owned = client.login("alice", "secret")
            if owned.ok:
                offers = client.get_offers().value_or([])
                client.buy_card(offers[0])

    Login does not open the socket until it is called, and a failed login
    releases it again, so the same client may retry login.
    """

    def __init__(
        self,
        host: str,
        port: int,
        *,
        encoding: str = "utf-8",
        connection_factory: ConnectionFactory = connect_tcp,
    ):
        self.host = host
        self.port = port
        self.encoding = encoding
        self._connection_factory = connection_factory

        self._state = SessionState.DISCONNECTED
        self._connection: Optional[Connection] = None
        self._writer: Optional[BinaryIO] = None
        self._reader: Optional[CardReader] = None
        self._username: Optional[str] = None

    @classmethod
    def from_config(cls, cfg: ClientConfig, **kwargs) -> "HollomonClient":
        return cls(cfg.host, cfg.port, encoding=cfg.encoding, **kwargs)

    # ==================== Read-only properties ====================

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def username(self) -> Optional[str]:
        """Logged-in user, None until login succeeds."""
        return self._username

    @property
    def is_authenticated(self) -> bool:
        return self._state == SessionState.AUTHENTICATED

    # ==================== Login ====================

    def login(self, username: str, password: str) -> Result:
        """
        Connect, authenticate and return the user's owned cards.

        Returns:
            Result[List[Card]]: sorted owned cards on success.
            TRANSPORT if the server is unreachable or drops the line,
            REJECTED if the greeting does not match.
        """
        if self._state != SessionState.DISCONNECTED:
            return self._invalid_state("login")

        if any(ch in s for s in (username, password) for ch in "\r\n"):
            return Result.fail(FailureKind.REJECTED, "credentials must not contain line breaks")

        try:
            connection = self._connection_factory(self.host, self.port)
        except (OSError, ValueError) as e:
            # ValueError: malformed host name (idna encoding)
            logger.error("Error when attempting to connect to server %s:%s. %s", self.host, self.port, e)
            return Result.fail(FailureKind.TRANSPORT, f"connect failed: {e}")

        self._connection = connection
        self._writer = connection.wfile
        self._reader = CardReader(connection.rfile, self.encoding)
        self._state = SessionState.CONNECTED

        try:
            self._send(username, password, log_lines=False)
        except (OSError, ValueError) as e:
            logger.error("Failed to send login for %s. %s", username, e)
            self._abandon_connection()
            return Result.fail(FailureKind.TRANSPORT, f"login send failed: {e}")

        response = self._reader.read_line()
        if response is None:
            self._abandon_connection()
            return Result.fail(FailureKind.TRANSPORT, "no login response from server")

        if response != commands.login_greeting(username):
            logger.warning("Login rejected for %s: %r", username, response)
            self._abandon_connection()
            return Result.fail(FailureKind.REJECTED, response)

        self._state = SessionState.AUTHENTICATED
        self._username = username
        logger.info("Logged in as %s", username)
        return self._read_card_list("owned cards")

    # ==================== Queries ====================

    def get_credits(self) -> Result:
        """
        Current balance.

        Returns:
            Result[int]. On failure, value_or(CREDITS_UNAVAILABLE) is -1.
        """
        denied = self._require_authenticated("CREDITS")
        if denied is not None:
            return denied

        try:
            self._send(commands.CREDITS)
        except (OSError, ValueError) as e:
            return self._send_failure(commands.CREDITS, e)

        credit_line = self._reader.read_line()
        ok_line = self._reader.read_line()

        if ok_line != commands.OK:
            logger.warning(
                "Failed to retrieve credits. Response from server incorrect. Received: {%s, %s}",
                credit_line, ok_line,
            )
            kind = FailureKind.TRANSPORT if ok_line is None else FailureKind.PROTOCOL
            return Result.fail(kind, f"unexpected credits response: {credit_line!r}, {ok_line!r}")

        try:
            balance = int(credit_line)
        except (TypeError, ValueError):
            logger.warning("Failed to retrieve credits. Not a number: %r", credit_line)
            return Result.fail(FailureKind.PROTOCOL, f"credits not an integer: {credit_line!r}")

        return Result.success(balance)

    def get_cards(self) -> Result:
        """Result[List[Card]]: cards the user owns, sorted."""
        return self._list_command(commands.CARDS, "owned cards")

    def get_offers(self) -> Result:
        """Result[List[Card]]: cards on offer, sorted, with asking prices."""
        return self._list_command(commands.OFFERS, "offers")

    # ==================== Trades ====================

    def buy_card(self, card: Card) -> Result:
        """
        Buy an offered card.

        Pre-trade check: the balance is fetched first and the purchase is
        refused locally (no BUY sent) if it cannot be read or is below
        card.price.

        Returns:
            Result[bool]: True when the server answered OK
        """
        denied = self._require_authenticated("BUY")
        if denied is not None:
            return denied

        credits = self.get_credits()
        if not credits.ok:
            return credits

        balance = credits.value_or(CREDITS_UNAVAILABLE)
        if balance < 0 or balance < card.price:
            logger.info("Not buying %s: %s credits available", card, balance)
            return Result.fail(
                FailureKind.INSUFFICIENT_CREDITS,
                f"{balance} credits available, {card.price} needed",
            )

        return self._confirmed_command(commands.buy_command(card.id))

    def sell_card(self, card: Card, price: int) -> Result:
        """
        Put an owned card up for sale at the given asking price.

        The price must be an int; anything else is refused locally
        (REJECTED, nothing sent). Its value is left to the server.

        Returns:
            Result[bool]: True when the server answered OK
        """
        denied = self._require_authenticated("SELL")
        if denied is not None:
            return denied

        if not isinstance(price, int) or isinstance(price, bool):
            logger.error("Not selling %s: asking price %r is not an integer", card, price)
            return Result.fail(FailureKind.REJECTED, f"asking price must be an integer, got {price!r}")

        return self._confirmed_command(commands.sell_command(card.id, price))

    # ==================== Lifecycle ====================

    def close(self) -> None:
        """
        Release reader, writer and connection, in that order.
        Safe to call more than once; errors are logged only.
        """
        if self._state == SessionState.CLOSED:
            return
        self._release()
        self._state = SessionState.CLOSED
        logger.debug("Session closed")

    def __enter__(self) -> "HollomonClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"HollomonClient({self.host}:{self.port}, {self._state.value})"

    # ==================== Internal helpers ====================

    def _send(self, *lines: str, log_lines: bool = True) -> None:
        """Write each line plus newline, then flush once."""
        for line in lines:
            self._writer.write(line.encode(self.encoding) + b"\n")
        self._writer.flush()
        if log_lines:
            logger.debug(">> %s", " | ".join(lines))

    def _list_command(self, command: str, what: str) -> Result:
        denied = self._require_authenticated(command)
        if denied is not None:
            return denied

        try:
            self._send(command)
        except (OSError, ValueError) as e:
            return self._send_failure(command, e)

        return self._read_card_list(what)

    def _read_card_list(self, what: str) -> Result:
        """Drain one card list up to OK and sort it."""
        try:
            cards: List[Card] = sorted(self._reader.read_cards())
        except StreamClosedError as e:
            logger.error("Failed to read all %s. %s", what, e)
            return Result.fail(FailureKind.TRANSPORT, str(e))
        except CardFormatError as e:
            logger.warning("Failed to read all %s. %s", what, e)
            return Result.fail(FailureKind.PROTOCOL, str(e))

        logger.debug("Read %d %s", len(cards), what)
        return Result.success(cards)

    def _confirmed_command(self, command: str) -> Result:
        """Send a command whose whole answer is a single OK line."""
        try:
            self._send(command)
        except (OSError, ValueError) as e:
            return self._send_failure(command, e)

        response = self._reader.read_line()
        if response is None:
            return Result.fail(FailureKind.TRANSPORT, f"no response to {command}")
        if response != commands.OK:
            logger.info("%s refused by server: %r", command, response)
            return Result.fail(FailureKind.REJECTED, response)
        return Result.success(True)

    def _require_authenticated(self, op: str) -> Optional[Result]:
        if self._state != SessionState.AUTHENTICATED:
            return self._invalid_state(op)
        return None

    def _invalid_state(self, op: str) -> Result:
        logger.error("%s not allowed while session is %s", op, self._state.value)
        return Result.fail(FailureKind.INVALID_STATE, f"{op} not allowed while {self._state.value}")

    def _send_failure(self, command: str, exc: Exception) -> Result:
        logger.error("Failed to send %s. %s", command, exc)
        return Result.fail(FailureKind.TRANSPORT, f"{command} send failed: {exc}")

    def _abandon_connection(self) -> None:
        """Drop a connection that never reached AUTHENTICATED so login can be retried."""
        self._release()
        self._state = SessionState.DISCONNECTED

    def _release(self) -> None:
        reader, self._reader = self._reader, None
        writer, self._writer = self._writer, None
        connection, self._connection = self._connection, None

        if reader is not None:
            reader.close()

        if writer is not None:
            try:
                writer.close()
            except (OSError, ValueError) as e:
                logger.error("Failed to close writer. %s", e)

        if connection is not None:
            try:
                connection.close()
            except OSError as e:
                logger.error("Failed to close connection. %s", e)

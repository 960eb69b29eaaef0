"""
In-memory stand-ins for the TCP transport.

FakeServer is a connection factory: each call hands out the next scripted
connection, whose rfile replays the scripted server lines and whose wfile
records everything the client sent.
"""
import io
from typing import List, Tuple


def wire(*lines: str) -> bytes:
    return "".join(line + "\n" for line in lines).encode("utf-8")


def card_lines(card_id: int, name: str, rank: str, price: int = 0) -> List[str]:
    return ["CARD", str(card_id), name, rank, str(price)]


def greeting(username: str) -> str:
    return f"User {username} logged in successfully."


class RecordingWriter(io.BytesIO):
    """BytesIO that still remembers what was written after close()."""

    def __init__(self):
        super().__init__()
        self.final = b""

    def close(self):
        if not self.closed:
            self.final = self.getvalue()
        super().close()

    def data(self) -> bytes:
        return self.final if self.closed else self.getvalue()


class FakeConnection:
    def __init__(self, lines: List[str]):
        self.rfile = io.BytesIO(wire(*lines))
        self.wfile = RecordingWriter()
        self.closed = False

    def close(self) -> None:
        self.closed = True

    def sent_lines(self) -> List[str]:
        return self.wfile.data().decode("utf-8").splitlines()


class FakeServer:
    """
    Usage:
        server = FakeServer(greeting("alice"), "OK")
        client = HollomonClient("h", 1, connection_factory=server)
    """

    def __init__(self, *lines: str):
        self._scripts: List[List[str]] = [list(lines)]
        self.connections: List[FakeConnection] = []
        self.calls: List[Tuple[str, int]] = []

    def then(self, *lines: str) -> "FakeServer":
        """Script the connection handed out on the next call."""
        self._scripts.append(list(lines))
        return self

    def __call__(self, host: str, port: int) -> FakeConnection:
        self.calls.append((host, port))
        conn = FakeConnection(self._scripts.pop(0))
        self.connections.append(conn)
        return conn

    @property
    def connection(self) -> FakeConnection:
        return self.connections[-1]

    def sent_lines(self) -> List[str]:
        return self.connection.sent_lines()


class RefusingServer:
    """Connection factory for a server that is not there."""

    def __init__(self):
        self.calls = 0

    def __call__(self, host: str, port: int):
        self.calls += 1
        raise ConnectionRefusedError(111, "Connection refused")

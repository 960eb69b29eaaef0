# infrastructure/transport.py

from __future__ import annotations

import socket
from typing import BinaryIO, Callable, Optional

from .logger import get_logger

logger = get_logger(__name__)


class Connection:
    """
    One byte-stream pair to the server.

    rfile/wfile are buffered binary file objects. Whoever owns the
    Connection is the only reader/writer of the underlying socket.
    """

    def __init__(self, rfile: BinaryIO, wfile: BinaryIO, sock: Optional[socket.socket] = None):
        self.rfile = rfile
        self.wfile = wfile
        self._sock = sock

    def close(self) -> None:
        """
        Close the socket itself. rfile/wfile are closed separately by
        their owners; closing the socket does not flush wfile.
        """
        if self._sock is None:
            return
        sock, self._sock = self._sock, None
        sock.close()

    def __repr__(self) -> str:
        if self._sock is None:
            return "Connection(detached)"
        try:
            peer = self._sock.getpeername()
        except OSError:
            peer = "?"
        return f"Connection(peer={peer})"


ConnectionFactory = Callable[[str, int], Connection]


def connect_tcp(host: str, port: int) -> Connection:
    """
    Open a TCP connection and wrap it in buffered binary files.

    Raises:
        OSError: host unreachable, connection refused, DNS failure
    """
    sock = socket.create_connection((host, port))
    try:
        rfile = sock.makefile("rb")
        wfile = sock.makefile("wb")
    except OSError:
        sock.close()
        raise
    logger.debug("Connected to %s:%s", host, port)
    return Connection(rfile, wfile, sock)

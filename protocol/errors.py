"""Exceptions raised inside the wire layer.

These never leave the session controller; it turns them into failed results.
"""


class ProtocolError(Exception):
    """Server response did not follow the line protocol."""


class CardFormatError(ProtocolError):
    """A CARD block had an unparseable id/price or an unknown rank."""


class StreamClosedError(ProtocolError):
    """A required line was not available (end of stream or I/O error)."""

"""
Wire layer - line framing and card decoding.
Knows the byte stream and the card block format, nothing about sessions.
"""
from .card_reader import CardReader
from .errors import ProtocolError, CardFormatError, StreamClosedError
from . import commands

__all__ = [
    'CardReader',
    'ProtocolError',
    'CardFormatError',
    'StreamClosedError',
    'commands',
]

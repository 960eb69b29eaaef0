"""
Application layer - one authenticated session against the card server.
"""
from .hollomon_client import HollomonClient, SessionState
from .results import Result, FailureKind, CREDITS_UNAVAILABLE

__all__ = [
    'HollomonClient',
    'SessionState',
    'Result',
    'FailureKind',
    'CREDITS_UNAVAILABLE',
]

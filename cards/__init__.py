"""
Domain layer - card value types.
Pure values, zero dependencies on protocol/infrastructure.
"""
from .card import Card, Rank

__all__ = [
    'Card',
    'Rank',
]

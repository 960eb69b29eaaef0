"""
Card value type and rank ordering.

Design philosophy:
1. Identity vs. quote:
   - A card is identified by (id, name, rank)
   - Price is a quote attached to a listing, NOT part of identity
   - The same card offered at two prices is still the same card

2. Ordering:
   - Rarer ranks sort first (UNIQUE before COMMON)
   - Ties broken by name, then by id
   - Every listing handed to callers is sorted with this order

3. Immutability:
   - Cards are created when a server response is parsed
   - Never mutated afterwards, safe to put in sets and dict keys
"""
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Tuple


@total_ordering
class Rank(Enum):
    """Card rarity, rarest first. Values are the wire spelling."""
    UNIQUE = "UNIQUE"
    RARE = "RARE"
    UNCOMMON = "UNCOMMON"
    COMMON = "COMMON"

    @property
    def order(self) -> int:
        """Position in the rarity order (0 = rarest)."""
        return _RANK_ORDER[self]

    @classmethod
    def parse(cls, text: str) -> "Rank":
        """
        Parse a rank exactly as the server spells it.

        Matching is case-sensitive: "rare" is not a rank.

        Raises:
            ValueError: text is not one of UNIQUE, RARE, UNCOMMON, COMMON
        """
        try:
            return cls[text]
        except KeyError:
            raise ValueError(f"unknown rank {text!r}") from None

    def __lt__(self, other):
        if not isinstance(other, Rank):
            return NotImplemented
        return self.order < other.order


_RANK_ORDER = {rank: i for i, rank in enumerate(Rank)}


@total_ordering
@dataclass(frozen=True, eq=False)
class Card:
    """
    Immutable card record.

    Fields:
        id: Numeric id, unique within the catalog
        name: Display name
        rank: Rarity
        price: Asking price in credits (0 for cards you own)

    Equality and hashing use (id, name, rank) only, so two listings of
    the same card at different prices compare equal and collapse in a set.
    """
    id: int
    name: str
    rank: Rank
    price: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.rank, Rank):
            raise ValueError(f"rank must be a Rank, got {self.rank!r}")
        if not isinstance(self.id, int) or isinstance(self.id, bool):
            raise ValueError(f"id must be int, got {self.id!r}")
        if not isinstance(self.name, str):
            raise ValueError(f"name must be str, got {self.name!r}")
        if not isinstance(self.price, int) or isinstance(self.price, bool):
            raise ValueError(f"price must be int, got {self.price!r}")
        if self.price < 0:
            raise ValueError(f"price must be >= 0, got {self.price}")

    # ==================== Identity ====================

    def identity(self) -> Tuple[int, str, Rank]:
        return (self.id, self.name, self.rank)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.identity() == other.identity()

    def __hash__(self) -> int:
        return hash(self.identity())

    # ==================== Ordering ====================

    def sort_key(self) -> Tuple[int, str, int]:
        """Rank (rarest first), then name, then id."""
        return (self.rank.order, self.name, self.id)

    def compare(self, other: "Card") -> int:
        """
        Three-way comparison.

        Returns:
            int: negative if self sorts before other, 0 if equal, positive otherwise
        """
        a, b = self.sort_key(), other.sort_key()
        return (a > b) - (a < b)

    def __lt__(self, other):
        if not isinstance(other, Card):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    # ==================== Display ====================

    def render(self) -> str:
        """Human-readable form, e.g. "[COMMON] Butler {ID:12345} 20 credits"."""
        return f"[{self.rank.value}] {self.name} {{ID:{self.id}}} {self.price} credits"

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Card(id={self.id}, {self.name!r}, {self.rank.value}, price={self.price})"

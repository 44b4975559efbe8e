"""Card-related data structures and helpers for Klondike."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Suit(Enum):
    CLUBS = "c"
    DIAMONDS = "d"
    HEARTS = "h"
    SPADES = "s"

    def __str__(self) -> str:
        return self.name.lower()

    def is_red(self) -> bool:
        return self in RED_SUITS


RED_SUITS = frozenset({Suit.DIAMONDS, Suit.HEARTS})

ACE = 1
JACK = 11
QUEEN = 12
KING = 13
RANKS = range(ACE, KING + 1)

RANK_NAMES: dict[int, str] = {
    ACE: "ace",
    2: "two",
    3: "three",
    4: "four",
    5: "five",
    6: "six",
    7: "seven",
    8: "eight",
    9: "nine",
    10: "ten",
    JACK: "jack",
    QUEEN: "queen",
    KING: "king",
}

# Rank tokens used in compact card codes ("ah", "10s", "qd").
RANK_CODES: dict[int, str] = {rank: str(rank) for rank in RANKS}
RANK_CODES.update({ACE: "a", JACK: "j", QUEEN: "q", KING: "k"})
CODE_RANKS: dict[str, int] = {code: rank for rank, code in RANK_CODES.items()}


@dataclass(eq=False)
class Card:
    """A playing card with a fixed identity and a mutable orientation.

    Equality is identity: a card moves between piles, it is never copied.
    """

    rank: int
    suit: Suit
    face_up: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.suit, Suit):
            raise ValueError(f"Unknown suit: {self.suit!r}")
        if self.rank not in RANKS:
            raise ValueError(f"Rank must be between {ACE} and {KING}, got {self.rank!r}.")

    def is_red(self) -> bool:
        return self.suit.is_red()

    def is_face_up(self) -> bool:
        return self.face_up

    def turn_up(self) -> None:
        self.face_up = True

    def turn_down(self) -> None:
        self.face_up = False

    def __repr__(self) -> str:
        return f"Card({card_code(self)}{'' if self.face_up else ', down'})"


def card_key(card: Card) -> Tuple[int, Suit]:
    """Return the (rank, suit) identity of a card, ignoring orientation."""
    return card.rank, card.suit


def card_code(card: Card) -> str:
    return f"{RANK_CODES[card.rank]}{card.suit.value}"


def parse_card_code(code: str) -> Card:
    """Parse a compact code such as ``"ah"`` or ``"10s"`` into a face-down card."""
    normalized = code.strip().lower()
    if len(normalized) < 2:
        raise ValueError(f"Malformed card code: {code!r}")
    rank_token, suit_token = normalized[:-1], normalized[-1]
    if rank_token not in CODE_RANKS:
        raise ValueError(f"Unknown rank in card code: {code!r}")
    try:
        suit = Suit(suit_token)
    except ValueError as exc:
        raise ValueError(f"Unknown suit in card code: {code!r}") from exc
    return Card(CODE_RANKS[rank_token], suit)


def card_label(card: Card) -> str:
    return f"{RANK_NAMES[card.rank].title()} of {card.suit.name.title()}"


def serialize_card(card: Card, *, reveal: bool = False) -> dict[str, Optional[object]]:
    """Return a JSON-friendly payload; face-down cards hide their identity."""
    if not card.face_up and not reveal:
        return {"rank": None, "suit": None, "face_up": False, "code": None, "label": None}
    return {
        "rank": card.rank,
        "suit": str(card.suit),
        "face_up": card.face_up,
        "code": card_code(card),
        "label": card_label(card),
    }

"""Deck creation utilities for Klondike."""

from __future__ import annotations

from collections import Counter
from random import Random
from typing import Iterable, List, Optional

from .cards import RANKS, Card, Suit, card_code, card_key

DECK_SIZE = 52


def build_deck() -> List[Card]:
    """Return the 52 canonical cards, face-down, ordered by rank then suit."""
    return [Card(rank, suit) for rank in RANKS for suit in Suit]


def create_shuffled_stock(
    *, rng: Optional[Random] = None, cards: Optional[Iterable[Card]] = None
) -> List[Card]:
    """Return a uniformly shuffled stock; the last element is the top card.

    Cards are drawn one at a time from the remaining cards (the canonical
    deck unless ``cards`` is given) at a uniformly random position and
    appended to the stock.
    """
    if rng is None:
        rng = Random()
    remaining = build_deck() if cards is None else list(cards)
    stock: List[Card] = []
    while remaining:
        stock.append(remaining.pop(rng.randrange(len(remaining))))
    return stock


def stock_from_order(cards: Iterable[Card]) -> List[Card]:
    """Validate a fixed deck order and return it as a face-down stock."""
    stock = list(cards)
    if len(stock) != DECK_SIZE:
        raise ValueError(f"Deck must contain exactly {DECK_SIZE} cards, got {len(stock)}.")
    if len({id(card) for card in stock}) != DECK_SIZE:
        raise ValueError("The same card object appears more than once in the deck.")
    counts = Counter(card_key(card) for card in stock)
    duplicated = sorted(card_code(card) for card in stock if counts[card_key(card)] > 1)
    if duplicated:
        raise ValueError(f"Deck contains duplicate cards: {', '.join(sorted(set(duplicated)))}.")
    for card in stock:
        card.turn_down()
    return stock

"""Validation schema for fixed Klondike deal orders."""

from __future__ import annotations

from collections import Counter
from typing import List

from pydantic import BaseModel, Field, field_validator

from .cards import Card, card_code, parse_card_code
from .deck import DECK_SIZE, build_deck


class DealOrder(BaseModel):
    cards: List[str] = Field(
        ...,
        description="Card codes from the bottom of the stock to the top, e.g. 'ah', '10s', 'qd'.",
    )

    @field_validator("cards")
    @classmethod
    def validate_codes(cls, value: List[str]) -> List[str]:
        normalized = []
        for code in value:
            normalized.append(card_code(parse_card_code(code)))
        return normalized

    @field_validator("cards")
    @classmethod
    def validate_full_deck(cls, value: List[str]) -> List[str]:
        if len(value) != DECK_SIZE:
            raise ValueError(f"Deal order must list exactly {DECK_SIZE} cards, got {len(value)}.")
        counts = Counter(value)
        duplicated = sorted(code for code, count in counts.items() if count > 1)
        if duplicated:
            missing = sorted(card_code(card) for card in build_deck() if card_code(card) not in counts)
            raise ValueError(
                f"Duplicate cards in deal order: {', '.join(duplicated)}; missing: {', '.join(missing)}."
            )
        return value

    def to_cards(self) -> List[Card]:
        """Return fresh face-down cards in stock order."""
        return [parse_card_code(code) for code in self.cards]

"""Klondike Solitaire rules engine."""

__all__ = [
    "cards",
    "deck",
    "deal_schema",
    "state",
    "selection",
    "game",
    "service",
]

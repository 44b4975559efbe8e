"""Convenience service layer for UI clients."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .cards import Card, serialize_card
from .deal_schema import DealOrder
from .game import GameResult, GameSession, KlondikeGame
from .state import FOUNDATION_COUNT, PILE_COUNT

logger = logging.getLogger(__name__)

ZONES = ("stock", "waste", "pile", "foundation")


@dataclass
class CardView:
    rank: Optional[int]
    suit: Optional[str]
    face_up: bool
    code: Optional[str]
    label: Optional[str]


@dataclass
class SelectionView:
    zone: str
    index: Optional[int]


@dataclass
class TableView:
    stock_size: int
    stock_top: Optional[CardView]
    waste_size: int
    waste_top: Optional[CardView]
    foundations: list[Optional[CardView]]
    foundation_sizes: list[int]
    piles: list[list[CardView]]
    selection: SelectionView
    won: bool
    clicks: int


@dataclass
class SessionView:
    games_played: int
    games_won: int
    table: Optional[TableView]


def card_view(card: Optional[Card]) -> Optional[CardView]:
    if card is None:
        return None
    return CardView(**serialize_card(card))


class GameService:
    """Facade around GameSession for UI consumers."""

    def __init__(self, session: Optional[GameSession] = None) -> None:
        self.session = session or GameSession()

    # Session lifecycle -------------------------------------------------

    def start_new_game(self, order: Optional[DealOrder] = None) -> TableView:
        deck: Optional[Sequence[Card]] = order.to_cards() if order is not None else None
        logger.info("Starting game %d from a %s deck", self.session.games_played + 1, "fixed" if deck else "shuffled")
        self.session.start_game(deck=deck)
        return self.get_table_view()

    def has_active_game(self) -> bool:
        return self.session.current_game is not None

    def finish_game(self) -> GameResult:
        return self.session.finish_game()

    # Actions -----------------------------------------------------------

    def stock_clicked(self) -> TableView:
        self._require_game().stock_clicked()
        return self.get_table_view()

    def waste_clicked(self) -> TableView:
        self._require_game().waste_clicked()
        return self.get_table_view()

    def pile_clicked(self, index: int) -> TableView:
        self._require_game().pile_clicked(index)
        return self.get_table_view()

    def foundation_clicked(self, index: int) -> TableView:
        self._require_game().foundation_clicked(index)
        return self.get_table_view()

    def click(self, zone: str, index: Optional[int] = None) -> TableView:
        """Dispatch a click by zone name; pile and foundation clicks need an index."""
        zone = zone.lower()
        if zone not in ZONES:
            raise ValueError(f"Unknown zone {zone!r}; expected one of {', '.join(ZONES)}.")
        if zone == "stock":
            return self.stock_clicked()
        if zone == "waste":
            return self.waste_clicked()
        if index is None:
            raise ValueError(f"A {zone} click needs an index.")
        if zone == "pile":
            return self.pile_clicked(index)
        return self.foundation_clicked(index)

    # Views -------------------------------------------------------------

    def get_session_view(self) -> SessionView:
        return SessionView(
            games_played=self.session.games_played,
            games_won=self.session.games_won,
            table=self.get_table_view() if self.has_active_game() else None,
        )

    def get_table_view(self) -> TableView:
        game = self._require_game()
        state = game.state
        selection = game.selection
        return TableView(
            stock_size=len(state.stock),
            stock_top=card_view(state.top_of_stock()),
            waste_size=len(state.waste),
            waste_top=card_view(state.top_of_waste()),
            foundations=[card_view(state.foundation_top(index)) for index in range(FOUNDATION_COUNT)],
            foundation_sizes=[len(foundation) for foundation in state.foundations],
            piles=[[CardView(**serialize_card(card)) for card in state.pile(index)] for index in range(PILE_COUNT)],
            selection=SelectionView(zone=str(selection.zone), index=selection.index),
            won=game.is_won(),
            clicks=game.clicks,
        )

    # Helpers -----------------------------------------------------------

    def _require_game(self) -> KlondikeGame:
        if self.session.current_game is None:
            raise RuntimeError("No active game.")
        return self.session.current_game

"""Click-driven game orchestration for Klondike."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from random import Random
from typing import List, Optional, Sequence

from .cards import Card
from .deck import create_shuffled_stock, stock_from_order
from .selection import NO_SELECTION, Selection, Zone
from .state import GameState, InvalidMove

logger = logging.getLogger(__name__)


@dataclass
class KlondikeGame:
    """Mediate two-step click interactions against a single deal.

    Every click handler is total: a click that does not apply is a no-op.
    Out-of-range indices raise ``IndexError``.
    """

    rng: Optional[Random] = None
    deck: Optional[Sequence[Card]] = None

    state: GameState = field(init=False)
    selection: Selection = field(init=False, default=NO_SELECTION)
    clicks: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        if self.deck is not None:
            stock = stock_from_order(self.deck)
        else:
            stock = create_shuffled_stock(rng=self.rng)
        self.state = GameState(stock=stock)
        self.state.deal()
        logger.info("Dealt new game; %d cards left in stock", len(self.state.stock))

    # Clicks ------------------------------------------------------------

    def stock_clicked(self) -> None:
        self._count_click("stock")
        if self.selection.is_empty():
            self.state.draw_from_stock()

    def waste_clicked(self) -> None:
        self._count_click("waste")
        if self.state.waste and self.selection.is_empty():
            self.selection = Selection.waste()
        elif self.selection.zone is Zone.WASTE:
            self._unselect()

    def pile_clicked(self, index: int) -> None:
        state = self.state
        pile = state.pile(index)
        self._count_click("pile", index)
        selection = self.selection

        if selection.is_empty():
            if not pile:
                return
            if pile[-1].is_face_up():
                self.selection = Selection.pile(index)
            else:
                state.reveal_pile_top(index)
        elif selection.is_pile(index):
            self._unselect()
        elif selection.zone is Zone.WASTE:
            card = state.top_of_waste()
            if card is not None and state.can_add_to_tableau(card, index):
                state.move_waste_to_pile(index)
                self._unselect()
        elif selection.zone is Zone.PILE:
            assert selection.index is not None
            try:
                state.move_run(selection.index, index)
            except InvalidMove as exc:
                logger.debug("Run move rejected: %s", exc)
            else:
                self._unselect()
        elif selection.zone is Zone.FOUNDATION:
            assert selection.index is not None
            card = state.foundation_top(selection.index)
            if card is not None and state.can_add_to_tableau(card, index):
                state.move_foundation_to_pile(selection.index, index)
                self._unselect()

    def foundation_clicked(self, index: int) -> None:
        state = self.state
        foundation_top = state.foundation_top(index)
        self._count_click("foundation", index)
        selection = self.selection

        if selection.is_foundation(index):
            self._unselect()
        elif selection.zone is Zone.WASTE:
            card = state.top_of_waste()
            if card is not None and state.can_add_to_foundation(card, index):
                state.move_waste_to_foundation(index)
                self._after_foundation_deposit()
        elif selection.zone is Zone.PILE:
            assert selection.index is not None
            pile = state.pile(selection.index)
            if pile and state.can_add_to_foundation(pile[-1], index):
                state.move_pile_to_foundation(selection.index, index)
                self._after_foundation_deposit()
        elif foundation_top is not None:
            self.selection = Selection.foundation(index)

    # Selection introspection -------------------------------------------

    def is_waste_selected(self) -> bool:
        return self.selection.zone is Zone.WASTE

    def is_pile_selected(self) -> bool:
        return self.selection.zone is Zone.PILE

    def selected_pile_index(self) -> Optional[int]:
        return self.selection.index if self.is_pile_selected() else None

    def is_foundation_selected(self) -> bool:
        return self.selection.zone is Zone.FOUNDATION

    def selected_foundation_index(self) -> Optional[int]:
        return self.selection.index if self.is_foundation_selected() else None

    # Queries -----------------------------------------------------------

    def is_won(self) -> bool:
        return self.state.check_for_win()

    def foundation_card_count(self) -> int:
        return sum(len(foundation) for foundation in self.state.foundations)

    # Helpers -----------------------------------------------------------

    def _after_foundation_deposit(self) -> None:
        self._unselect()
        if self.state.check_for_win():
            logger.info("Game won after %d clicks", self.clicks)

    def _unselect(self) -> None:
        self.selection = NO_SELECTION

    def _count_click(self, zone: str, index: Optional[int] = None) -> None:
        self.clicks += 1
        target = zone if index is None else f"{zone} {index}"
        logger.debug("Click %d on %s with selection %s", self.clicks, target, self.selection)


@dataclass(frozen=True)
class GameResult:
    won: bool
    foundation_cards: int
    clicks: int


@dataclass
class GameSession:
    """Deal successive games and track their outcomes."""

    seed: Optional[int] = None
    rng: Random = field(init=False)
    current_game: Optional[KlondikeGame] = field(default=None, init=False)
    history: List[GameResult] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.rng = Random(self.seed)

    @property
    def games_played(self) -> int:
        return len(self.history)

    @property
    def games_won(self) -> int:
        return sum(1 for result in self.history if result.won)

    def start_game(self, deck: Optional[Sequence[Card]] = None) -> KlondikeGame:
        self.current_game = KlondikeGame(rng=self.rng, deck=deck)
        return self.current_game

    def finish_game(self) -> GameResult:
        if self.current_game is None:
            raise RuntimeError("No active game.")
        game = self.current_game
        result = GameResult(
            won=game.is_won(),
            foundation_cards=game.foundation_card_count(),
            clicks=game.clicks,
        )
        self.history.append(result)
        self.current_game = None
        logger.info("Finished game %d (won=%s)", self.games_played, result.won)
        return result

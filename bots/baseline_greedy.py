"""Baseline greedy bot."""

from __future__ import annotations

from typing import Optional, Tuple

from klondike.game import KlondikeGame
from klondike.selection import Selection, Zone
from klondike.state import FOUNDATION_COUNT, PILE_COUNT, GameState

from .base import BotStrategy, Click


def _clear_click(selection: Selection) -> Click:
    if selection.zone is Zone.WASTE:
        return "waste", None
    if selection.zone is Zone.PILE:
        return "pile", selection.index
    return "foundation", selection.index


def _foundation_move(state: GameState) -> Optional[Tuple[Click, Click]]:
    waste_top = state.top_of_waste()
    for target in range(FOUNDATION_COUNT):
        if waste_top is not None and state.can_add_to_foundation(waste_top, target):
            return ("waste", None), ("foundation", target)
        for index in range(PILE_COUNT):
            pile = state.pile(index)
            if pile and pile[-1].is_face_up() and state.can_add_to_foundation(pile[-1], target):
                return ("pile", index), ("foundation", target)
    return None


def _tableau_move(state: GameState) -> Optional[Tuple[Click, Click]]:
    waste_top = state.top_of_waste()
    for target in range(PILE_COUNT):
        if waste_top is not None and state.can_add_to_tableau(waste_top, target):
            return ("waste", None), ("pile", target)
    for source in range(PILE_COUNT):
        run = state.face_up_run(source)
        if not run:
            continue
        clears_pile = len(run) == len(state.pile(source))
        for target in range(PILE_COUNT):
            # Shifting a whole pile onto an empty one gains nothing.
            if clears_pile and not state.pile(target):
                continue
            if state.can_move_run(source, target):
                return ("pile", source), ("pile", target)
    return None


class GreedyBot(BotStrategy):
    """Reveal, then play to foundations, then build the tableau, else draw."""

    name = "Greedy"

    def __init__(self) -> None:
        self._pending: Optional[Click] = None

    def on_game_start(self, game: KlondikeGame) -> None:
        self._pending = None

    def next_click(self, game: KlondikeGame) -> Optional[Click]:
        if self._pending is not None:
            click, self._pending = self._pending, None
            return click
        if not game.selection.is_empty():
            return _clear_click(game.selection)

        state = game.state
        for index in range(PILE_COUNT):
            pile = state.pile(index)
            if pile and not pile[-1].is_face_up():
                return "pile", index

        move = _foundation_move(state) or _tableau_move(state)
        if move is not None:
            source, self._pending = move
            return source
        if state.stock or state.waste:
            return "stock", None
        return None

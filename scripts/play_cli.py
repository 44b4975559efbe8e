#!/usr/bin/env python3
"""Interactive text-mode client for a game of Klondike."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from klondike.game import GameSession
from klondike.service import CardView, GameService, TableView
from klondike.state import FOUNDATION_COUNT, PILE_COUNT

HELP = "Commands: s = stock, w = waste, p0..p6 = pile, f0..f3 = foundation, n = new game, q = quit"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Klondike in the terminal.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible deals.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...).")
    return parser.parse_args()


def describe_card(card: Optional[CardView]) -> str:
    if card is None:
        return "[  ]"
    if not card.face_up:
        return "[##]"
    return f"[{card.code}]".ljust(5)


def parse_command(text: str) -> Optional[Tuple[str, Optional[int]]]:
    """Translate a typed command into a (zone, index) click, or None if malformed."""
    text = text.strip().lower()
    if text == "s":
        return "stock", None
    if text == "w":
        return "waste", None
    if len(text) >= 2 and text[0] in "pf" and text[1:].isdigit():
        index = int(text[1:])
        if text[0] == "p" and index < PILE_COUNT:
            return "pile", index
        if text[0] == "f" and index < FOUNDATION_COUNT:
            return "foundation", index
    return None


def print_table(view: TableView) -> None:
    print("\n============================")
    selection = view.selection.zone if view.selection.index is None else f"{view.selection.zone} {view.selection.index}"
    print(f"Selected: {selection}")
    stock = "[##]" if view.stock_size else "[  ]"
    print(f"Stock {stock} ({view.stock_size})  Waste {describe_card(view.waste_top)} ({view.waste_size})")
    foundations = "  ".join(f"f{i}{describe_card(card)}" for i, card in enumerate(view.foundations))
    print(f"Foundations: {foundations}")
    for index, pile in enumerate(view.piles):
        print(f"p{index}: " + " ".join(describe_card(card) for card in pile))


def play(service: GameService) -> None:
    view = service.start_new_game()
    while True:
        print_table(view)
        if view.won:
            print("Congratulations! You win!")
        choice = input("Click (h for help): ").strip().lower()
        if choice == "q":
            break
        if choice == "h":
            print(HELP)
            continue
        if choice == "n":
            result = service.finish_game()
            print(f"Game over with {result.foundation_cards} cards on the foundations.")
            view = service.start_new_game()
            continue
        command = parse_command(choice)
        if command is None:
            print("Unknown command. " + HELP)
            continue
        zone, index = command
        view = service.click(zone, index)
    if service.has_active_game():
        service.finish_game()
    session = service.session
    print(f"Games played: {session.games_played}, won: {session.games_won}")


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    service = GameService(GameSession(seed=args.seed))
    try:
        play(service)
    except (KeyboardInterrupt, EOFError):
        print("\nExiting early.")


if __name__ == "__main__":
    main()

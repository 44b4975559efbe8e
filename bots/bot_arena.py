"""Simple bot arena for Klondike."""

from __future__ import annotations

import argparse
import logging
from typing import Dict, Iterable

from klondike.game import GameSession, KlondikeGame

from .base import BotStrategy, Click
from .baseline_greedy import GreedyBot
from .random_bot import RandomBot

logger = logging.getLogger(__name__)

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "greedy": GreedyBot,
    "random": RandomBot,
}


def apply_click(game: KlondikeGame, click: Click) -> None:
    zone, index = click
    if zone == "stock":
        game.stock_clicked()
    elif zone == "waste":
        game.waste_clicked()
    elif zone == "pile" and index is not None:
        game.pile_clicked(index)
    elif zone == "foundation" and index is not None:
        game.foundation_clicked(index)
    else:
        raise ValueError(f"Malformed click {click!r}.")


def play_game(game: KlondikeGame, bot: BotStrategy, *, max_clicks: int = 2000) -> int:
    """Feed bot clicks into the game until it wins, the bot stops, or the cap is hit."""
    bot.on_game_start(game)
    issued = 0
    while issued < max_clicks and not game.is_won():
        click = bot.next_click(game)
        if click is None:
            break
        apply_click(game, click)
        issued += 1
    return issued


def run_games(
    bot: BotStrategy,
    *,
    n_games: int = 10,
    seed: int | None = None,
    max_clicks: int = 2000,
) -> dict:
    session = GameSession(seed=seed)
    history = []
    for idx in range(n_games):
        game = session.start_game()
        issued = play_game(game, bot, max_clicks=max_clicks)
        result = session.finish_game()
        logger.debug("Game %d: %d clicks, %d foundation cards", idx + 1, issued, result.foundation_cards)
        history.append(
            {
                "won": result.won,
                "foundation_cards": result.foundation_cards,
                "clicks": result.clicks,
            }
        )
    return {"games_played": session.games_played, "games_won": session.games_won, "history": history}


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a bot over several Klondike deals.")
    parser.add_argument("--bot", default="greedy", choices=BOT_REGISTRY.keys())
    parser.add_argument("--n", type=int, default=10, help="Number of games to play.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--max-clicks", type=int, default=2000)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    bot = BOT_REGISTRY[args.bot]()
    results = run_games(bot, n_games=args.n, seed=args.seed, max_clicks=args.max_clicks)

    print(f"Won {results['games_won']}/{results['games_played']} games")
    average = sum(entry["foundation_cards"] for entry in results["history"]) / max(1, len(results["history"]))
    print(f"Average cards on foundations: {average:.1f}")


if __name__ == "__main__":
    main()

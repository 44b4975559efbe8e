"""Random clicking bot used to fuzz the rules engine."""

from __future__ import annotations

import random
from typing import Optional

from klondike.game import KlondikeGame

from .base import ALL_CLICKS, BotStrategy, Click


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def next_click(self, game: KlondikeGame) -> Optional[Click]:
        return self._rng.choice(ALL_CLICKS)

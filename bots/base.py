"""Common bot strategy interfaces."""

from __future__ import annotations

from typing import List, Optional, Tuple

from klondike.game import KlondikeGame
from klondike.state import FOUNDATION_COUNT, PILE_COUNT

# A click is a zone name plus an index for piles and foundations.
Click = Tuple[str, Optional[int]]

ALL_CLICKS: List[Click] = (
    [("stock", None), ("waste", None)]
    + [("pile", index) for index in range(PILE_COUNT)]
    + [("foundation", index) for index in range(FOUNDATION_COUNT)]
)


class BotStrategy:
    """Base class for click policies."""

    name: str = "BaseBot"

    def on_game_start(self, game: KlondikeGame) -> None:
        """Optional hook invoked when a new deal starts."""
        return None

    def next_click(self, game: KlondikeGame) -> Optional[Click]:
        """Return the next click to issue, or None to stop playing."""
        return None

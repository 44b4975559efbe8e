"""Game state management for Klondike."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .cards import ACE, KING, Card

PILE_COUNT = 7
FOUNDATION_COUNT = 4
DRAW_COUNT = 3
DEALT_CARDS = PILE_COUNT * (PILE_COUNT + 1) // 2


class InvalidMove(RuntimeError):
    """Raised when a transition breaks the Klondike move rules."""


def _empty_piles(count: int) -> List[List[Card]]:
    return [[] for _ in range(count)]


@dataclass
class GameState:
    """Stock, waste, foundations and tableau piles of a single deal.

    Every container is a list whose last element is its top card.
    """

    stock: List[Card]
    waste: List[Card] = field(default_factory=list)
    foundations: List[List[Card]] = field(default_factory=lambda: _empty_piles(FOUNDATION_COUNT))
    piles: List[List[Card]] = field(default_factory=lambda: _empty_piles(PILE_COUNT))

    def __post_init__(self) -> None:
        if len(self.foundations) != FOUNDATION_COUNT:
            raise ValueError(f"GameState needs exactly {FOUNDATION_COUNT} foundations.")
        if len(self.piles) != PILE_COUNT:
            raise ValueError(f"GameState needs exactly {PILE_COUNT} tableau piles.")
        self.stock = list(self.stock)
        self.waste = list(self.waste)
        self.foundations = [list(foundation) for foundation in self.foundations]
        self.piles = [list(pile) for pile in self.piles]

    # Dealing -----------------------------------------------------------

    def deal(self) -> None:
        """Deal pile i its i+1 cards from the stock and turn every pile top up."""
        if any(self.piles):
            raise ValueError("Cannot deal into non-empty tableau piles.")
        if len(self.stock) < DEALT_CARDS:
            raise ValueError(f"Dealing needs at least {DEALT_CARDS} cards in the stock.")
        for index, pile in enumerate(self.piles):
            for _ in range(index + 1):
                card = self.stock.pop()
                card.turn_down()
                pile.append(card)
        for pile in self.piles:
            pile[-1].turn_up()

    # Stock and waste ---------------------------------------------------

    def draw_from_stock(self) -> None:
        if not self.stock:
            self.recycle_waste()
            return
        for _ in range(min(DRAW_COUNT, len(self.stock))):
            card = self.stock.pop()
            card.turn_up()
            self.waste.append(card)

    def recycle_waste(self) -> None:
        # Popping reverses the waste, so the next pass draws in the same order.
        while self.waste:
            card = self.waste.pop()
            card.turn_down()
            self.stock.append(card)

    # Legality ----------------------------------------------------------

    def can_add_to_tableau(self, card: Card, pile_index: int) -> bool:
        pile = self._pile(pile_index)
        if not pile:
            return card.rank == KING
        top = pile[-1]
        return top.is_face_up() and card.is_red() != top.is_red() and card.rank == top.rank - 1

    def can_add_to_foundation(self, card: Card, foundation_index: int) -> bool:
        # Colour, not suit, must match on foundations.
        foundation = self._foundation(foundation_index)
        if not foundation:
            return card.rank == ACE
        top = foundation[-1]
        return card.is_red() == top.is_red() and card.rank == top.rank + 1

    def face_up_run(self, pile_index: int) -> List[Card]:
        """Return the maximal face-up run at the top of a pile, bottom to top."""
        pile = self._pile(pile_index)
        start = len(pile)
        while start > 0 and pile[start - 1].is_face_up():
            start -= 1
        return pile[start:]

    def can_move_run(self, source: int, destination: int) -> bool:
        self._pile(destination)
        if source == destination:
            return False
        run = self.face_up_run(source)
        return bool(run) and self.can_add_to_tableau(run[0], destination)

    # Transitions -------------------------------------------------------

    def move_run(self, source: int, destination: int) -> List[Card]:
        """Move the face-up run of ``source`` onto ``destination`` as one unit.

        On an illegal destination the run goes back onto ``source`` untouched.
        """
        self._pile(destination)
        if source == destination:
            raise InvalidMove("Source and destination piles must differ.")
        run = self._remove_face_up_run(source)
        if not run or not self.can_add_to_tableau(run[0], destination):
            self.piles[source].extend(run)
            raise InvalidMove(f"Run from pile {source} cannot be placed on pile {destination}.")
        self.piles[destination].extend(run)
        return run

    def move_waste_to_pile(self, pile_index: int) -> Card:
        pile = self._pile(pile_index)
        card = self._require_top(self.waste, "waste")
        if not self.can_add_to_tableau(card, pile_index):
            raise InvalidMove(f"Waste card cannot be placed on pile {pile_index}.")
        pile.append(self.waste.pop())
        return card

    def move_waste_to_foundation(self, foundation_index: int) -> Card:
        foundation = self._foundation(foundation_index)
        card = self._require_top(self.waste, "waste")
        if not self.can_add_to_foundation(card, foundation_index):
            raise InvalidMove(f"Waste card cannot be placed on foundation {foundation_index}.")
        foundation.append(self.waste.pop())
        return card

    def move_pile_to_foundation(self, pile_index: int, foundation_index: int) -> Card:
        pile = self._pile(pile_index)
        foundation = self._foundation(foundation_index)
        card = self._require_top(pile, f"pile {pile_index}")
        if not card.is_face_up():
            raise InvalidMove(f"Top of pile {pile_index} is face-down.")
        if not self.can_add_to_foundation(card, foundation_index):
            raise InvalidMove(f"Pile {pile_index} card cannot be placed on foundation {foundation_index}.")
        foundation.append(pile.pop())
        return card

    def move_foundation_to_pile(self, foundation_index: int, pile_index: int) -> Card:
        foundation = self._foundation(foundation_index)
        pile = self._pile(pile_index)
        card = self._require_top(foundation, f"foundation {foundation_index}")
        if not self.can_add_to_tableau(card, pile_index):
            raise InvalidMove(f"Foundation {foundation_index} card cannot be placed on pile {pile_index}.")
        pile.append(foundation.pop())
        return card

    def reveal_pile_top(self, pile_index: int) -> Card:
        pile = self._pile(pile_index)
        card = self._require_top(pile, f"pile {pile_index}")
        if card.is_face_up():
            raise InvalidMove(f"Top of pile {pile_index} is already face-up.")
        card.turn_up()
        return card

    # Queries -----------------------------------------------------------

    def check_for_win(self) -> bool:
        return all(foundation and foundation[-1].rank == KING for foundation in self.foundations)

    def top_of_stock(self) -> Optional[Card]:
        return self.stock[-1] if self.stock else None

    def top_of_waste(self) -> Optional[Card]:
        return self.waste[-1] if self.waste else None

    def foundation_top(self, foundation_index: int) -> Optional[Card]:
        foundation = self._foundation(foundation_index)
        return foundation[-1] if foundation else None

    def pile(self, pile_index: int) -> Tuple[Card, ...]:
        return tuple(self._pile(pile_index))

    def all_cards(self) -> Iterator[Card]:
        yield from self.stock
        yield from self.waste
        for foundation in self.foundations:
            yield from foundation
        for pile in self.piles:
            yield from pile

    def card_count(self) -> int:
        return sum(1 for _ in self.all_cards())

    # Helpers -----------------------------------------------------------

    def _remove_face_up_run(self, pile_index: int) -> List[Card]:
        run = self.face_up_run(pile_index)
        if run:
            del self.piles[pile_index][-len(run):]
        return run

    def _pile(self, index: int) -> List[Card]:
        if not 0 <= index < PILE_COUNT:
            raise IndexError(f"Pile index must be in [0, {PILE_COUNT}), got {index}.")
        return self.piles[index]

    def _foundation(self, index: int) -> List[Card]:
        if not 0 <= index < FOUNDATION_COUNT:
            raise IndexError(f"Foundation index must be in [0, {FOUNDATION_COUNT}), got {index}.")
        return self.foundations[index]

    @staticmethod
    def _require_top(cards: List[Card], name: str) -> Card:
        if not cards:
            raise InvalidMove(f"The {name} is empty.")
        return cards[-1]

"""Selected-zone tracking for two-step click interactions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class Zone(Enum):
    NONE = auto()
    WASTE = auto()
    PILE = auto()
    FOUNDATION = auto()

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class Selection:
    """Either nothing, the waste, pile ``index`` or foundation ``index``."""

    zone: Zone = Zone.NONE
    index: Optional[int] = None

    def __post_init__(self) -> None:
        indexed = self.zone in (Zone.PILE, Zone.FOUNDATION)
        if indexed and self.index is None:
            raise ValueError(f"A {self.zone} selection needs an index.")
        if not indexed and self.index is not None:
            raise ValueError(f"A {self.zone} selection takes no index.")

    @classmethod
    def waste(cls) -> "Selection":
        return cls(Zone.WASTE)

    @classmethod
    def pile(cls, index: int) -> "Selection":
        return cls(Zone.PILE, index)

    @classmethod
    def foundation(cls, index: int) -> "Selection":
        return cls(Zone.FOUNDATION, index)

    def is_empty(self) -> bool:
        return self.zone is Zone.NONE

    def is_pile(self, index: Optional[int] = None) -> bool:
        return self.zone is Zone.PILE and (index is None or self.index == index)

    def is_foundation(self, index: Optional[int] = None) -> bool:
        return self.zone is Zone.FOUNDATION and (index is None or self.index == index)


NO_SELECTION = Selection()

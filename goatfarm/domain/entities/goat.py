"""Domain entities — pure Python business objects, no framework dependencies."""

from dataclasses import dataclass

from .barn import Barn, GoatGender, GoatStatus


@dataclass
class Goat:
    """Core domain entity representing one animal of the herd."""

    id: str
    tag: str
    weight: float
    age: int
    gender: GoatGender
    status: GoatStatus
    barn: Barn


@dataclass
class GoatStats:
    """Herd head count, total and per barn."""

    total: int = 0
    west: int = 0
    east: int = 0

    @property
    def is_consistent(self) -> bool:
        return self.total == self.west + self.east

    def count_for(self, barn: Barn) -> int:
        return self.west if barn is Barn.WEST else self.east

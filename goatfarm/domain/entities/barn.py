"""Barns and the other closed enumerations of the herd domain."""

from enum import Enum


class Barn(str, Enum):
    """The two farm sub-locations. Values are the names the farm API uses."""

    WEST = "barat"
    EAST = "timur"

    @property
    def label(self) -> str:
        return "Western Barn" if self is Barn.WEST else "Eastern Barn"

    @classmethod
    def parse(cls, value: "str | Barn") -> "Barn":
        """Accept a wire name (``barat``/``timur``) or an English name (``west``/``east``)."""
        if isinstance(value, Barn):
            return value
        normalized = str(value).strip().lower()
        for barn in cls:
            if normalized in (barn.value, barn.name.lower()):
                return barn
        raise ValueError(f"Unknown barn: {value!r}")


class GoatGender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class GoatStatus(str, Enum):
    HEALTHY = "healthy"
    SICK = "sick"
    DEAD = "dead"

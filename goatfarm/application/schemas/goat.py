"""Pydantic DTOs for goats: wire payloads and the add/edit form."""

import math
from typing import Any

from pydantic import BaseModel, Field

from goatfarm.domain.authorization import can_choose_barn, default_barn
from goatfarm.domain.entities import Actor, Barn, Goat, GoatGender, GoatStats, GoatStatus
from goatfarm.domain.exceptions import ValidationError


class GoatCreate(BaseModel):
    """Payload sent on create and on update (full replace of the mutable fields)."""

    tag: str = Field(..., min_length=1, examples=["G010"])
    weight: float = Field(..., ge=0, examples=[40.5])
    age: int = Field(..., ge=0, description="Age in months", examples=[6])
    gender: GoatGender = GoatGender.MALE
    status: GoatStatus = GoatStatus.HEALTHY
    barn: Barn


class GoatResponse(BaseModel):
    """Goat as returned by the farm API."""

    id: str
    tag: str
    weight: float
    age: int
    gender: GoatGender
    status: GoatStatus
    barn: Barn

    model_config = {"coerce_numbers_to_str": True}

    def to_entity(self) -> Goat:
        return Goat(
            id=self.id,
            tag=self.tag,
            weight=self.weight,
            age=self.age,
            gender=self.gender,
            status=self.status,
            barn=self.barn,
        )


class GoatStatsResponse(BaseModel):
    """Head count as returned by ``GET /goats/stats``."""

    total: int = 0
    barat: int = 0
    timur: int = 0

    def to_entity(self) -> GoatStats:
        return GoatStats(total=self.total, west=self.barat, east=self.timur)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class GoatForm(BaseModel):
    """Raw add/edit form input. Empty strings mean "not filled in".

    Selector fields left out of a submitted form stay ``None`` until
    ``with_defaults`` fills them.
    """

    tag: str = ""
    weight: str | float = ""
    age: str | int = ""
    gender: GoatGender | None = None
    status: GoatStatus | None = None
    barn: Barn | None = None
    barn_locked: bool = False

    @classmethod
    def blank(cls, actor: Actor) -> "GoatForm":
        return cls(
            gender=GoatGender.MALE,
            status=GoatStatus.HEALTHY,
            barn=default_barn(actor),
            barn_locked=not can_choose_barn(actor),
        )

    @classmethod
    def from_goat(cls, goat: Goat, actor: Actor | None = None) -> "GoatForm":
        return cls(
            tag=goat.tag,
            weight=goat.weight,
            age=goat.age,
            gender=goat.gender,
            status=goat.status,
            barn=goat.barn,
            barn_locked=actor is not None and not can_choose_barn(actor),
        )

    def with_defaults(self, actor: Actor, current: Goat | None = None) -> "GoatForm":
        """Fill omitted selectors from the edited goat, or for a new one from the actor."""
        if current is not None:
            fallback = {"gender": current.gender, "status": current.status, "barn": current.barn}
        else:
            fallback = {
                "gender": GoatGender.MALE,
                "status": GoatStatus.HEALTHY,
                "barn": default_barn(actor),
            }
        update = {key: value for key, value in fallback.items() if getattr(self, key) is None}
        return self.model_copy(update=update) if update else self

    def to_create(self) -> GoatCreate:
        """Validate the form and coerce it into a create/update payload.

        Raises ValidationError listing every offending field.
        """
        invalid: list[str] = []

        tag = self.tag.strip()
        if not tag:
            invalid.append("tag")

        weight = _coerce_number(self.weight, integral=False)
        if weight is None:
            invalid.append("weight")

        age = _coerce_number(self.age, integral=True)
        if age is None:
            invalid.append("age")

        invalid.extend(name for name in ("gender", "status", "barn") if getattr(self, name) is None)

        if invalid:
            raise ValidationError(invalid)

        return GoatCreate(
            tag=tag,
            weight=weight,
            age=int(age),
            gender=self.gender,
            status=self.status,
            barn=self.barn,
        )


def _coerce_number(raw: str | float | int, *, integral: bool) -> float | None:
    """Parse a non-negative number from form input; None when missing or invalid."""
    if _is_blank(raw):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    if integral and not value.is_integer():
        return None
    return value

"""Barn-based authorization rules shared by every list, form and mutation.

These checks are advisory: the farm API enforces the same rules on its side.
"""

from typing import Any

from goatfarm.domain.entities import Admin, Barn, Handler

ADMIN_DEFAULT_BARN = Barn.WEST


def can_manage(actor: Any, record_barn: Barn) -> bool:
    """Return True when ``actor`` may edit or delete a record of ``record_barn``.

    Anything that is neither an Admin nor a Handler is refused.
    """
    if isinstance(actor, Admin):
        return True
    if isinstance(actor, Handler):
        return actor.barn == record_barn
    return False


def default_barn(actor: Admin | Handler) -> Barn:
    """Barn a new record is pre-filled with for this actor."""
    if isinstance(actor, Handler):
        return actor.barn
    return ADMIN_DEFAULT_BARN


def can_choose_barn(actor: Any) -> bool:
    """Whether the barn selector of create/edit forms is enabled."""
    return isinstance(actor, Admin)

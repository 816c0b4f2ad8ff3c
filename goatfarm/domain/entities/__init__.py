from .barn import Barn, GoatGender, GoatStatus
from .actor import Actor, Admin, Handler, actor_from_payload, actor_to_payload
from .goat import Goat, GoatStats
from .feeding_log import FeedingLog

__all__ = [
    "Barn",
    "GoatGender",
    "GoatStatus",
    "Actor",
    "Admin",
    "Handler",
    "actor_from_payload",
    "actor_to_payload",
    "Goat",
    "GoatStats",
    "FeedingLog",
]

"""Domain entity for feeding logs: one feeding round in one barn."""

from dataclasses import dataclass
from datetime import date, time

from .barn import Barn


@dataclass
class FeedingLog:
    """A dated feeding record.

    ``user_id`` records who created the log. It is assigned by the server and
    plays no part in authorization, which is barn-based.
    """

    id: str
    date: date
    feed_time: time
    barn: Barn
    note: str = ""
    user_id: str | None = None

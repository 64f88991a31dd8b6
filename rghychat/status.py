"""Delivery status of a chat message."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from . import date


@dataclass
class Status:
    """Who has seen a message, who deleted it, and when it was delivered.

    ``size`` is the number of readers needed before the message counts as seen.
    """

    size: int = 1
    seen: bool = False
    seen_by: set[int] = field(default_factory=set)
    deleted_for: set[int] = field(default_factory=set)
    delivery_time: datetime = field(default_factory=date.now)

    def mark_seen(self, user_id: int) -> None:
        """Record that ``user_id`` saw the message; ignored once fully seen."""
        if self.seen:
            return
        self.seen_by.add(user_id)
        self.seen = len(self.seen_by) == self.size

    def is_deleted_for(self, user_id: int) -> bool:
        return user_id in self.deleted_for

    def mark_deleted_for(self, user_id: int) -> None:
        self.deleted_for.add(user_id)

    def to_json(self) -> dict:
        return {
            "size": self.size,
            "seen": self.seen,
            "SeenBy": [] if self.seen else sorted(self.seen_by),
            "DeletedFor": sorted(self.deleted_for),
            "time": int(self.delivery_time.timestamp()),
        }

    @classmethod
    def from_json(cls, data: dict) -> Status:
        return cls(
            size=int(data["size"]),
            seen=bool(data["seen"]),
            seen_by={int(x) for x in data["SeenBy"]},
            deleted_for={int(x) for x in data["DeletedFor"]},
            delivery_time=datetime.fromtimestamp(int(data["time"])),
        )
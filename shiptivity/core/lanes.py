"""Status lanes of the client board."""

from __future__ import annotations

from enum import Enum


class Lane(str, Enum):
    """Closed set of client statuses; each value names one swimlane."""

    BACKLOG = "backlog"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"

    @classmethod
    def values(cls) -> list[str]:
        return [lane.value for lane in cls]

    @classmethod
    def is_valid(cls, value: object) -> bool:
        return isinstance(value, str) and value in cls.values()


LANE_CHOICES = " | ".join(Lane.values())

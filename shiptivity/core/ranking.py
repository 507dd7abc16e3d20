"""Rank plans for the lanes touched by a reconcile.

Members are ``(client_id, priority)`` pairs already sorted by ascending
priority. Plans map client ids to the new priority they must be written
with; members whose rank does not change are left out.
"""

from __future__ import annotations

from collections.abc import Sequence

Member = tuple[int, int]


def clamp_position(desired: int, lane_size: int) -> int:
    """Clamp a desired rank into ``[1, lane_size + 1]``.

    ``lane_size`` counts the lane without the client being placed, so
    ``lane_size + 1`` appends at the tail.
    """
    return max(1, min(desired, lane_size + 1))


def plan_departure(members: Sequence[Member]) -> dict[int, int]:
    """Close the gap left in a lane: renumber members to their 1-based position."""
    return {
        client_id: position
        for position, (client_id, priority) in enumerate(members, start=1)
        if priority != position
    }


def plan_arrival(
    members: Sequence[Member], target_id: int, desired: int
) -> tuple[int, dict[int, int]]:
    """Place ``target_id`` at rank ``desired`` within ``members``.

    Walks the lane skipping the target. Once the walk reaches the target's
    position the shift counter turns on and every remaining member is pushed
    down one rank.

    Returns:
        (target priority after clamping, rank changes for the other members)
    """
    others = [member for member in members if member[0] != target_id]
    position = clamp_position(desired, len(others))

    changes: dict[int, int] = {}
    shift = 0
    for index, (client_id, priority) in enumerate(others, start=1):
        if index == position:
            shift = 1
        new_priority = index + shift
        if priority != new_priority:
            changes[client_id] = new_priority
    return position, changes

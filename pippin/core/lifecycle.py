"""
core/lifecycle.py
-----------------
The fixed four-stage ticket lifecycle.

    backlog → todo → in_progress → done

A move steps exactly one stage left or right; there is no skipping and no
wraparound. Direct field edits are not routed through here and may set any
state (see TicketService.update_ticket_fields).
"""

from enum import Enum
from typing import Union

from pippin.core.exceptions import InvalidMove


class TicketState(str, Enum):
    backlog = "backlog"
    todo = "todo"
    in_progress = "in_progress"
    done = "done"

    @property
    def index(self) -> int:
        return _ORDER.index(self)


class Direction(str, Enum):
    left = "left"
    right = "right"


_ORDER = list(TicketState)


def next_state(
    current: Union[TicketState, str],
    direction: Union[Direction, str],
) -> TicketState:
    """Return the state adjacent to ``current`` in ``direction``.

    Raises InvalidMove for an unknown state or direction, and when the step
    would leave the chain.
    """
    try:
        state = TicketState(current)
    except ValueError:
        raise InvalidMove(f"unknown ticket state '{current}'")
    try:
        step = Direction(direction)
    except ValueError:
        raise InvalidMove(f"unknown direction '{direction}', expected 'left' or 'right'")

    target = state.index + (1 if step is Direction.right else -1)
    if not 0 <= target < len(_ORDER):
        raise InvalidMove(f"cannot move {step.value} from '{state.value}'")
    return _ORDER[target]

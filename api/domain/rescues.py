# SPDX-License-Identifier: Apache-2.0

"""
Rescue request workflow.

This module contains the pure status state machine for rescue requests:

    pending  --assign-->  assigned --accept--> accepted --resolve--> resolved
    assigned --reject-->  pending
    assigned --assign-->  assigned   (re-assignment)
"""

from enum import Enum
from typing import Dict, FrozenSet

from domain.errors import InvalidStatusTransition
from models.enums import RescueStatus


class RescueAction(str, Enum):
    """Actions that move a rescue request between statuses."""
    ASSIGN = "assign"
    ACCEPT = "accept"
    REJECT = "reject"
    RESOLVE = "resolve"


# Statuses each action may start from, and the status it leads to.
_SOURCES: Dict[RescueAction, FrozenSet[RescueStatus]] = {
    RescueAction.ASSIGN: frozenset({RescueStatus.PENDING, RescueStatus.ASSIGNED}),
    RescueAction.ACCEPT: frozenset({RescueStatus.ASSIGNED}),
    RescueAction.REJECT: frozenset({RescueStatus.ASSIGNED}),
    RescueAction.RESOLVE: frozenset({RescueStatus.ACCEPTED}),
}

_TARGETS: Dict[RescueAction, RescueStatus] = {
    RescueAction.ASSIGN: RescueStatus.ASSIGNED,
    RescueAction.ACCEPT: RescueStatus.ACCEPTED,
    RescueAction.REJECT: RescueStatus.PENDING,
    RescueAction.RESOLVE: RescueStatus.RESOLVED,
}


def allowed_sources(action: RescueAction) -> FrozenSet[RescueStatus]:
    """Statuses from which the action is permitted."""
    return _SOURCES[action]


def can_transition(current: RescueStatus, action: RescueAction) -> bool:
    """Check whether the action is permitted from the current status."""
    return RescueStatus(current) in _SOURCES[action]


def next_status(current: RescueStatus, action: RescueAction) -> RescueStatus:
    """
    Compute the status reached by applying an action.

    Raises:
        InvalidStatusTransition: If the action is not permitted from current
    """
    if not can_transition(current, action):
        raise InvalidStatusTransition(RescueStatus(current).value, RescueAction(action).value)
    return _TARGETS[action]

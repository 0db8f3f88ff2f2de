# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Rescue assignment service.

Orchestrates the nearest-volunteer assignment: fetch eligible volunteers from
the registry, pick the nearest one, and record the assignment on the rescue
request. Also drives the accept/reject/resolve workflow actions.

Assignment is a read-then-write without a transaction. The write is
conditional on the rescue's status, so an accepted or resolved rescue is never
re-assigned, but two concurrent assignments of a pending rescue still race and
the last write wins.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from domain.clock import utc_now
from domain.errors import ConflictException, ValidationException
from domain.matching import find_nearest
from domain.rescues import RescueAction, allowed_sources, next_status
from models.entities import Coordinate
from models.enums import RescueStatus
from services.rescues import RescueRequestStore
from services.volunteers import VolunteerRegistry

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


@dataclass
class AssignmentResult:
    """Outcome of a successful assignment."""
    volunteer_id: str
    volunteer_name: Optional[str]
    distance_km: float


class RescueAssignmentService:
    """Assigns rescue requests to the nearest eligible volunteer."""

    def __init__(
        self,
        volunteer_registry: VolunteerRegistry,
        rescue_store: RescueRequestStore,
        clock: Callable[[], datetime] = utc_now
    ):
        self.volunteer_registry = volunteer_registry
        self.rescue_store = rescue_store
        self.clock = clock

    def assign(self, rescue_request_id: str, target: Coordinate) -> AssignmentResult:
        """
        Assign a rescue request to the nearest eligible volunteer.

        Args:
            rescue_request_id: Rescue request to assign
            target: Rescue location

        Returns:
            AssignmentResult with the distance rounded to one decimal

        Raises:
            NoEligibleVolunteer: No volunteer can be matched; nothing is written
            RescueRequestNotFound: The rescue request does not exist
            InvalidStatusTransition: The rescue is already accepted or resolved
            PersistenceError: The registry query or the update failed
        """
        with tracer.start_as_current_span("rescue.assign") as span:
            span.set_attribute("rescue.id", rescue_request_id)

            volunteers = self.volunteer_registry.list_eligible()
            span.set_attribute("rescue.candidates", len(volunteers))

            match = find_nearest(target, volunteers)
            volunteer = match.volunteer

            assigned = self.rescue_store.assign(
                rescue_request_id,
                volunteer.id,
                self.clock(),
                expected=allowed_sources(RescueAction.ASSIGN)
            )
            if not assigned:
                span.set_status(Status(StatusCode.ERROR, "rescue not assignable"))
                self._raise_not_applied(rescue_request_id, RescueAction.ASSIGN)

            result = AssignmentResult(
                volunteer_id=volunteer.id,
                volunteer_name=volunteer.full_name,
                distance_km=round(match.distance_km, 1)
            )

            span.set_attributes({
                "rescue.volunteer_id": volunteer.id,
                "rescue.distance_km": result.distance_km
            })
            logger.info(
                "Rescue assigned to nearest volunteer",
                extra={
                    "extra_fields": {
                        "rescue_request_id": rescue_request_id,
                        "volunteer_id": volunteer.id,
                        "distance_km": result.distance_km,
                        "candidates": len(volunteers)
                    }
                }
            )
            return result

    def accept(self, rescue_request_id: str) -> RescueStatus:
        """Mark an assigned rescue as accepted by its volunteer."""
        return self._transition(rescue_request_id, RescueAction.ACCEPT)

    def resolve(self, rescue_request_id: str) -> RescueStatus:
        """Mark an accepted rescue as resolved."""
        return self._transition(rescue_request_id, RescueAction.RESOLVE)

    def reject(self, rescue_request_id: str) -> AssignmentResult:
        """
        Return an assigned rescue to pending and assign it again.

        The rejecting volunteer is not excluded from the new match, so the
        same volunteer can be picked again if still nearest.

        Raises:
            RescueRequestNotFound: The rescue request does not exist
            InvalidStatusTransition: The rescue is not currently assigned
            ValidationException: The rescue has no stored location
            NoEligibleVolunteer: Nobody to re-assign to; the rescue stays pending
        """
        with tracer.start_as_current_span("rescue.reject") as span:
            span.set_attribute("rescue.id", rescue_request_id)

            rescue = self.rescue_store.get(rescue_request_id)
            next_status(rescue.status, RescueAction.REJECT)
            if rescue.location is None:
                raise ValidationException("Rescue request has no location to re-assign from")

            self._transition(rescue_request_id, RescueAction.REJECT, clear_assignment=True)

            logger.info(
                "Rescue rejected, re-assigning",
                extra={
                    "extra_fields": {
                        "rescue_request_id": rescue_request_id,
                        "previous_volunteer_id": rescue.assigned_volunteer_id
                    }
                }
            )
            return self.assign(rescue_request_id, rescue.location)

    def _transition(self, rescue_request_id: str, action: RescueAction,
                    clear_assignment: bool = False) -> RescueStatus:
        sources = allowed_sources(action)
        # Any allowed source leads to the same target status
        target_status = next_status(next(iter(sources)), action)

        with tracer.start_as_current_span(f"rescue.{action.value}") as span:
            span.set_attribute("rescue.id", rescue_request_id)

            applied = self.rescue_store.transition(
                rescue_request_id,
                target_status,
                expected=sources,
                changed_at=self.clock(),
                clear_assignment=clear_assignment
            )
            if not applied:
                span.set_status(Status(StatusCode.ERROR, "transition not applied"))
                self._raise_not_applied(rescue_request_id, action)

            logger.info(
                f"Rescue status changed to {target_status.value}",
                extra={
                    "extra_fields": {
                        "rescue_request_id": rescue_request_id,
                        "action": action.value
                    }
                }
            )
            return target_status

    def _raise_not_applied(self, rescue_request_id: str, action: RescueAction) -> None:
        """Explain why a conditional write matched nothing."""
        rescue = self.rescue_store.get(rescue_request_id)
        next_status(rescue.status, action)
        # The status allowed the action on re-read, so it changed concurrently
        raise ConflictException(
            f"Rescue request {rescue_request_id} changed while applying '{action.value}'"
        )

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Rescue request record store.

All writes are single conditional updates: the record must still be in one of
the expected statuses, otherwise nothing is written.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from pydantic import ValidationError

from domain.errors import PersistenceError, RescueRequestNotFound, UnrecognizedRescueStatus
from models.entities import RescueRequest
from models.enums import RescueStatus
from services.mongodb import MongoDBService

logger = logging.getLogger(__name__)

RESCUE_REQUESTS_COLLECTION = "rescue_requests"


def _status_condition(expected: Iterable[RescueStatus]) -> dict:
    return {"status": {"$in": [RescueStatus(s).value for s in expected]}}


class RescueRequestStore:
    """Reads and writes rescue request records."""

    def __init__(self, mongodb_service: MongoDBService):
        self.mongodb_service = mongodb_service

    def find(self, rescue_request_id: str) -> Optional[RescueRequest]:
        """
        Load a rescue request, or None if no record has this ID.

        Raises:
            UnrecognizedRescueStatus: The stored status is not a workflow status
            PersistenceError: The stored record cannot be read otherwise
        """
        document = self.mongodb_service.find_one(RESCUE_REQUESTS_COLLECTION, rescue_request_id)
        if not document:
            return None

        try:
            return RescueRequest.from_document(document)
        except ValidationError as e:
            status = document.get("status")
            logger.warning(
                "Stored rescue request is malformed",
                extra={"extra_fields": {"rescue_request_id": rescue_request_id, "status": status}}
            )
            if status and status not in [s.value for s in RescueStatus]:
                raise UnrecognizedRescueStatus(rescue_request_id, status) from e
            raise PersistenceError(
                f"Stored rescue request {rescue_request_id} is malformed", details=str(e)
            ) from e

    def get(self, rescue_request_id: str) -> RescueRequest:
        """
        Load a rescue request.

        Raises:
            RescueRequestNotFound: If no record has this ID
        """
        rescue = self.find(rescue_request_id)
        if rescue is None:
            raise RescueRequestNotFound(rescue_request_id)
        return rescue

    def assign(
        self,
        rescue_request_id: str,
        volunteer_id: str,
        assigned_at: datetime,
        expected: Iterable[RescueStatus]
    ) -> bool:
        """Record the assignment if the rescue is still in an expected status."""
        return self.mongodb_service.update_one(
            RESCUE_REQUESTS_COLLECTION,
            rescue_request_id,
            {
                "assignedVolunteerId": volunteer_id,
                "assignedAt": assigned_at,
                "status": RescueStatus.ASSIGNED.value,
                "updatedAt": assigned_at
            },
            conditions=_status_condition(expected)
        )

    def transition(
        self,
        rescue_request_id: str,
        new_status: RescueStatus,
        expected: Iterable[RescueStatus],
        changed_at: datetime,
        clear_assignment: bool = False
    ) -> bool:
        """Move the rescue to a new status if it is still in an expected status."""
        return self.mongodb_service.update_one(
            RESCUE_REQUESTS_COLLECTION,
            rescue_request_id,
            {"status": RescueStatus(new_status).value, "updatedAt": changed_at},
            conditions=_status_condition(expected),
            unset=["assignedVolunteerId", "assignedAt"] if clear_assignment else None
        )

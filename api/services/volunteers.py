# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Volunteer registry queries.
"""

import logging
from typing import List

from models.entities import Volunteer
from models.enums import VolunteerRole
from services.mongodb import MongoDBService

logger = logging.getLogger(__name__)

VOLUNTEERS_COLLECTION = "volunteers"

_PROJECTION = {
    "fullName": 1,
    "phone": 1,
    "whatsapp": 1,
    "latitude": 1,
    "longitude": 1,
    "isActive": 1,
    "role": 1
}


class VolunteerRegistry:
    """Read-only access to the volunteer registry."""

    def __init__(self, mongodb_service: MongoDBService):
        self.mongodb_service = mongodb_service

    def list_eligible(self) -> List[Volunteer]:
        """
        Fetch active volunteers that have a location.

        Results keep the database's natural order, which the matcher uses to
        break distance ties.
        """
        query = {
            "role": VolunteerRole.VOLUNTEER.value,
            "isActive": True,
            "latitude": {"$ne": None},
            "longitude": {"$ne": None}
        }
        documents = self.mongodb_service.find(VOLUNTEERS_COLLECTION, query, _PROJECTION)
        volunteers = [Volunteer.from_document(doc) for doc in documents]

        logger.debug(
            "Fetched eligible volunteers",
            extra={"extra_fields": {"count": len(volunteers)}}
        )
        return volunteers

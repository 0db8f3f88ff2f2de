# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Services package - External integrations and side effects.
"""

from .mongodb import MongoDBService
from .volunteers import VolunteerRegistry
from .rescues import RescueRequestStore
from .messaging import MessagingService, MessagingConfig, MessageReceipt, create_messaging_service
from .assignment import RescueAssignmentService, AssignmentResult
from .notifications import NotificationDispatcher, VolunteerNotification

__all__ = [
    "MongoDBService",
    "VolunteerRegistry",
    "RescueRequestStore",
    "MessagingService",
    "MessagingConfig",
    "MessageReceipt",
    "create_messaging_service",
    "RescueAssignmentService",
    "AssignmentResult",
    "NotificationDispatcher",
    "VolunteerNotification"
]

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Models package - Pydantic schemas and data models for the rescue dispatch service.
"""

# Base models
from .base import ApiModel, DomainModel

# Enumerations
from .enums import RescueStatus, MessageChannel, VolunteerRole

# Core entities
from .entities import Coordinate, Volunteer, RescueRequest, NotificationMessage

# Request models
from .requests import (
    LocatedRequest,
    AssignRescueRequest,
    NotifyVolunteerRequest,
    NotifyAdminRequest,
    PostToGroupRequest,
    RescueActionRequest
)

# Response models
from .responses import (
    AssignRescueResponse,
    ReassignRescueResponse,
    NotifyVolunteerResponse,
    NotifiedResponse,
    RescueStatusResponse,
    ErrorResponse,
    HealthCheckResponse
)

__all__ = [
    # Base models
    "ApiModel",
    "DomainModel",

    # Enumerations
    "RescueStatus",
    "MessageChannel",
    "VolunteerRole",

    # Core entities
    "Coordinate",
    "Volunteer",
    "RescueRequest",
    "NotificationMessage",

    # Request models
    "LocatedRequest",
    "AssignRescueRequest",
    "NotifyVolunteerRequest",
    "NotifyAdminRequest",
    "PostToGroupRequest",
    "RescueActionRequest",

    # Response models
    "AssignRescueResponse",
    "ReassignRescueResponse",
    "NotifyVolunteerResponse",
    "NotifiedResponse",
    "RescueStatusResponse",
    "ErrorResponse",
    "HealthCheckResponse"
]

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Request models for API endpoints.

Numbers must be sent as JSON numbers; numeric strings are rejected.
"""

from typing import Optional
from pydantic import Field, field_validator

from .base import ApiModel
from .entities import Coordinate


class LocatedRequest(ApiModel):
    """Request carrying the rescue location."""

    latitude: float = Field(..., ge=-90, le=90, strict=True, description="Rescue latitude")
    longitude: float = Field(..., ge=-180, le=180, strict=True, description="Rescue longitude")

    @property
    def location(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class AssignRescueRequest(LocatedRequest):
    """Request model for assigning a rescue to the nearest volunteer."""

    rescue_request_id: str = Field(..., min_length=1, strict=True, description="Rescue request ID")


class NotifyVolunteerRequest(LocatedRequest):
    """Request model for alerting the nearest volunteer."""

    reporter_phone: str = Field(..., min_length=1, strict=True, description="Reporter contact number")
    rescue_request_id: Optional[str] = Field(None, description="Rescue request ID, informational")

    @field_validator('reporter_phone')
    @classmethod
    def validate_reporter_phone(cls, v):
        """Reject blank phone numbers."""
        if not v.strip():
            raise ValueError('Reporter phone cannot be empty')
        return v.strip()


class NotifyAdminRequest(LocatedRequest):
    """Request model for alerting the admin about a status change."""

    rescue_request_id: str = Field(..., min_length=1, strict=True, description="Rescue request ID")
    reporter_phone: Optional[str] = Field(None, description="Reporter contact number")
    status: Optional[str] = Field(None, description="Rescue status the alert is about")
    volunteer_name: Optional[str] = Field(None, description="Name of the volunteer involved")


class PostToGroupRequest(ApiModel):
    """Request model for posting an announcement to the group channel."""

    message: str = Field(..., min_length=1, max_length=4096, strict=True, description="Announcement text")
    image_url: Optional[str] = Field(None, description="Optional image attachment URL")

    @field_validator('message')
    @classmethod
    def validate_message(cls, v):
        """Reject blank announcements."""
        if not v.strip():
            raise ValueError('Message is required')
        return v

    @field_validator('image_url')
    @classmethod
    def validate_image_url(cls, v):
        """Blank image URLs mean no attachment; anything else is passed to the provider."""
        if v is None or not v.strip():
            return None
        return v.strip()


class RescueActionRequest(ApiModel):
    """Request model for accept, reject and resolve actions."""

    rescue_request_id: str = Field(..., min_length=1, strict=True, description="Rescue request ID")

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Response models for API endpoints.
"""

from typing import Any, Dict, List, Optional
from pydantic import Field

from .base import ApiModel


class AssignRescueResponse(ApiModel):
    """Result of a successful assignment."""

    assigned: bool = Field(default=True, description="Always true on success")
    volunteer_id: str = Field(..., description="Assigned volunteer ID")
    volunteer_name: Optional[str] = Field(None, description="Assigned volunteer name")
    distance_km: float = Field(..., description="Distance to the rescue, one decimal")


class ReassignRescueResponse(ApiModel):
    """Result of rejecting a rescue and assigning it again."""

    reassigned: bool = Field(default=True, description="Always true on success")
    volunteer_id: str = Field(..., description="Newly assigned volunteer ID")
    volunteer_name: Optional[str] = Field(None, description="Newly assigned volunteer name")
    distance_km: float = Field(..., description="Distance to the rescue, one decimal")


class NotifyVolunteerResponse(ApiModel):
    """Result of alerting the nearest volunteer."""

    notified: bool = Field(default=True, description="Always true on success")
    volunteer_id: str = Field(..., description="Notified volunteer ID")
    distance_km: float = Field(..., description="Distance to the rescue")


class NotifiedResponse(ApiModel):
    """Result of an admin or group notification."""

    notified: bool = Field(..., description="Whether a message was sent")
    message: Optional[str] = Field(None, description="Reason when nothing was sent")


class RescueStatusResponse(ApiModel):
    """Result of a status transition."""

    rescue_request_id: str = Field(..., description="Rescue request ID")
    status: str = Field(..., description="New status")


class ErrorResponse(ApiModel):
    """JSON error body returned for every failed request."""

    error: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Problem type identifier")
    status: int = Field(..., description="HTTP status code")
    instance: str = Field(..., description="Request path")
    details: Optional[str] = Field(None, description="Upstream error details")
    errors: Optional[List[Dict[str, Any]]] = Field(None, description="Field validation errors")


class HealthCheckResponse(ApiModel):
    """Health check response."""

    status: str = Field(..., description="healthy or unhealthy")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    environment: str = Field(..., description="Deployment environment")
    timestamp: str = Field(..., description="Check timestamp (ISO 8601)")
    dependencies: Dict[str, Dict[str, Any]] = Field(default_factory=dict, description="Dependency checks")

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Core entity models for the rescue dispatch service.

Stored records use camelCase field names; the ``from_document`` constructors
translate a MongoDB document into the entity.
"""

import math
from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

from .base import DomainModel
from .enums import MessageChannel, RescueStatus


def _document_id(document: Dict[str, Any]) -> str:
    """Extract the opaque identifier from a stored document."""
    doc_id = document.get("_id", document.get("id"))
    return str(doc_id) if doc_id is not None else ""


def _is_degrees(value: Any, limit: float) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    return math.isfinite(value) and -limit <= value <= limit


class Coordinate(BaseModel):
    """Immutable latitude/longitude pair in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in degrees")

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> Optional["Coordinate"]:
        """
        Build a coordinate from 'latitude'/'longitude' keys.

        Returns None when either value is missing, non-numeric or out of range,
        so a bad stored location makes the record unlocated rather than unreadable.
        """
        latitude = document.get("latitude")
        longitude = document.get("longitude")
        if not (_is_degrees(latitude, 90) and _is_degrees(longitude, 180)):
            return None
        return cls(latitude=latitude, longitude=longitude)


class Volunteer(DomainModel):
    """Volunteer registry entry, read-only from the matcher's perspective."""

    id: str = Field(..., description="Volunteer identifier")
    full_name: Optional[str] = Field(None, description="Display name")
    phone: Optional[str] = Field(None, description="SMS phone number")
    whatsapp: Optional[str] = Field(None, description="WhatsApp phone number")
    location: Optional[Coordinate] = Field(None, description="Last known location")
    active: bool = Field(default=False, description="Whether the volunteer accepts rescues")

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Volunteer":
        return cls(
            id=_document_id(document),
            full_name=document.get("fullName"),
            phone=document.get("phone"),
            whatsapp=document.get("whatsapp"),
            location=Coordinate.from_document(document),
            active=document.get("isActive") is True
        )

    @property
    def display_name(self) -> str:
        return self.full_name or "Volunteer"


class RescueRequest(DomainModel):
    """Rescue request record created when a report is submitted."""

    id: str = Field(..., description="Rescue request identifier")
    location: Optional[Coordinate] = Field(None, description="Reported animal location")
    status: RescueStatus = Field(default=RescueStatus.PENDING, description="Workflow status")
    assigned_volunteer_id: Optional[str] = Field(None, description="Assigned volunteer")
    assigned_at: Optional[datetime] = Field(None, description="Assignment timestamp")
    reporter_phone: Optional[str] = Field(None, description="Reporter contact number")

    @field_validator("assigned_volunteer_id", mode="before")
    @classmethod
    def stringify_volunteer_id(cls, v):
        """Stored volunteer references may be ObjectIds."""
        return str(v) if v is not None else None

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "RescueRequest":
        return cls(
            id=_document_id(document),
            location=Coordinate.from_document(document),
            status=document.get("status") or RescueStatus.PENDING,
            assigned_volunteer_id=document.get("assignedVolunteerId"),
            assigned_at=document.get("assignedAt"),
            reporter_phone=document.get("reporterPhone")
        )

    def is_assigned(self) -> bool:
        return self.status != RescueStatus.PENDING and self.assigned_volunteer_id is not None


class NotificationMessage(BaseModel):
    """Outbound message; transient, sent once."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    recipient: str = Field(..., min_length=1, description="Phone number or group identifier")
    channel: MessageChannel = Field(..., description="Delivery channel")
    body: str = Field(..., min_length=1, description="Message text")
    media_url: Optional[str] = Field(None, description="Optional media attachment URL")

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Notification dispatcher.

Formats and sends the three outbound message shapes:

- rescue alert to the nearest volunteer, on WhatsApp and SMS
- status alert to the fixed admin number
- free-form announcement to the group channel, with optional image
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from opentelemetry import trace

from domain.clock import utc_now
from domain.errors import ConfigurationError, MissingRecipient, ValidationException
from domain.matching import find_nearest
from domain.messages import build_admin_alert, build_volunteer_alert, normalize_phone
from models.entities import Coordinate, NotificationMessage, Volunteer
from models.enums import MessageChannel
from services.messaging import MessageReceipt, MessagingService
from services.volunteers import VolunteerRegistry

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


@dataclass
class VolunteerNotification:
    """Outcome of alerting the nearest volunteer."""
    volunteer_id: str
    distance_km: float
    receipts: List[MessageReceipt] = field(default_factory=list)


def volunteer_contact(volunteer: Volunteer) -> str:
    """Number to reach a volunteer on, WhatsApp preferred; empty if none."""
    return normalize_phone(volunteer.whatsapp or volunteer.phone or "")


class NotificationDispatcher:
    """Sends volunteer, admin and group notifications."""

    def __init__(
        self,
        messaging_service: MessagingService,
        volunteer_registry: VolunteerRegistry,
        admin_number: str,
        group_id: Optional[str] = None,
        timezone_name: str = "Asia/Kolkata",
        clock: Callable[[], datetime] = utc_now
    ):
        if not admin_number:
            raise ConfigurationError(["ADMIN_WHATSAPP_NUMBER"])
        try:
            self.timezone = ZoneInfo(timezone_name)
        except (ZoneInfoNotFoundError, ValueError):
            raise ConfigurationError(["NOTIFICATION_TIMEZONE"])

        self.messaging_service = messaging_service
        self.volunteer_registry = volunteer_registry
        self.admin_number = admin_number
        self.group_id = group_id
        self.clock = clock

    def _send(
        self,
        channel: MessageChannel,
        recipient: str,
        body: str,
        media_url: Optional[str] = None
    ) -> MessageReceipt:
        if not recipient or not recipient.strip():
            raise ValidationException("Recipient is required")

        message = NotificationMessage(
            recipient=recipient.strip(),
            channel=channel,
            body=body,
            media_url=media_url
        )
        return self.messaging_service.send(message)

    def notify(
        self,
        channel: MessageChannel,
        recipient: str,
        body: str,
        media_url: Optional[str] = None
    ) -> bool:
        """
        Send one message on a channel.

        Raises:
            ValidationException: If the recipient is empty
            DeliveryError: If the provider call fails
        """
        self._send(channel, recipient, body, media_url)
        return True

    def notify_volunteer(self, target: Coordinate, reporter_phone: str) -> VolunteerNotification:
        """
        Alert the nearest eligible volunteer about a rescue.

        The same alert is sent on WhatsApp and then SMS. A volunteer without
        any phone number fails before anything is sent.

        Raises:
            NoEligibleVolunteer: No active volunteer with a location
            MissingRecipient: Nearest volunteer has no phone or WhatsApp number
            DeliveryError: Either send failed
        """
        with tracer.start_as_current_span("notification.volunteer") as span:
            match = find_nearest(target, self.volunteer_registry.list_eligible())
            volunteer = match.volunteer
            span.set_attribute("notification.volunteer_id", volunteer.id)

            contact = volunteer_contact(volunteer)
            if not contact:
                logger.warning(
                    "Nearest volunteer has no phone number",
                    extra={"extra_fields": {"volunteer_id": volunteer.id}}
                )
                raise MissingRecipient(volunteer.id)

            body = build_volunteer_alert(
                target.latitude,
                target.longitude,
                normalize_phone(reporter_phone)
            )

            receipts = [
                self._send(MessageChannel.WHATSAPP, contact, body),
                self._send(MessageChannel.SMS, contact, body)
            ]

            logger.info(
                "Volunteer notified",
                extra={
                    "extra_fields": {
                        "volunteer_id": volunteer.id,
                        "distance_km": round(match.distance_km, 2),
                        "sids": [r.sid for r in receipts]
                    }
                }
            )
            return VolunteerNotification(
                volunteer_id=volunteer.id,
                distance_km=match.distance_km,
                receipts=receipts
            )

    def notify_admin(
        self,
        rescue_request_id: str,
        target: Coordinate,
        reporter_phone: Optional[str] = None,
        status: Optional[str] = None,
        volunteer_name: Optional[str] = None
    ) -> bool:
        """Send a status alert to the admin WhatsApp number."""
        with tracer.start_as_current_span("notification.admin") as span:
            span.set_attributes({
                "rescue.id": rescue_request_id,
                "rescue.status": status or ""
            })
            body = build_admin_alert(
                rescue_request_id,
                target.latitude,
                target.longitude,
                reporter_phone,
                status,
                self.clock().astimezone(self.timezone),
                volunteer_name
            )
            return self.notify(MessageChannel.WHATSAPP, self.admin_number, body)

    def post_to_group(self, message: str, image_url: Optional[str] = None) -> bool:
        """
        Post an announcement to the group channel.

        Returns:
            False without sending anything when no group is configured
        """
        if not self.group_id:
            logger.info("Group post skipped, WhatsApp group not configured")
            return False

        with tracer.start_as_current_span("notification.group") as span:
            span.set_attribute("notification.has_media", bool(image_url))
            return self.notify(MessageChannel.WHATSAPP, self.group_id, message, media_url=image_url)

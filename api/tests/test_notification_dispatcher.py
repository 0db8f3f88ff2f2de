# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Tests for the notification dispatcher.
"""

import pytest

from domain.errors import (
    ConfigurationError, DeliveryError, MissingRecipient, NoEligibleVolunteer, ValidationException
)
from models.entities import Coordinate, Volunteer
from models.enums import MessageChannel
from services.notifications import NotificationDispatcher, volunteer_contact
from services.volunteers import VolunteerRegistry

MUMBAI = Coordinate(latitude=19.0760, longitude=72.8777)
ADMIN_NUMBER = "+919800000000"
GROUP_ID = "120363000000000000@g.us"


def sent_messages(messaging_service):
    return [c.args[0] for c in messaging_service.send.call_args_list]


class TestVolunteerContact:
    """Test contact resolution."""

    def test_prefers_whatsapp(self):
        volunteer = Volunteer(id="v", phone="911111", whatsapp="922222")
        assert volunteer_contact(volunteer) == "+922222"

    def test_falls_back_to_phone(self):
        volunteer = Volunteer(id="v", phone="911111")
        assert volunteer_contact(volunteer) == "+911111"

    def test_no_numbers(self):
        assert volunteer_contact(Volunteer(id="v", phone="  ")) == ""


class TestNotificationDispatcher:
    """Test volunteer, admin and group notifications."""

    @pytest.fixture
    def dispatcher(self, messaging_service, mongodb_service, fixed_clock):
        return NotificationDispatcher(
            messaging_service,
            VolunteerRegistry(mongodb_service),
            ADMIN_NUMBER,
            group_id=GROUP_ID,
            timezone_name="Asia/Kolkata",
            clock=fixed_clock
        )

    def test_requires_admin_number(self, messaging_service, mongodb_service):
        with pytest.raises(ConfigurationError) as exc_info:
            NotificationDispatcher(messaging_service, VolunteerRegistry(mongodb_service), "")

        assert exc_info.value.missing == ["ADMIN_WHATSAPP_NUMBER"]

    def test_rejects_unknown_timezone(self, messaging_service, mongodb_service):
        with pytest.raises(ConfigurationError) as exc_info:
            NotificationDispatcher(
                messaging_service,
                VolunteerRegistry(mongodb_service),
                ADMIN_NUMBER,
                timezone_name="Mars/Olympus_Mons"
            )

        assert exc_info.value.missing == ["NOTIFICATION_TIMEZONE"]

    def test_notify_volunteer_sends_whatsapp_then_sms(
        self, dispatcher, messaging_service, mongodb_service, volunteer_documents
    ):
        mongodb_service.find.return_value = volunteer_documents

        result = dispatcher.notify_volunteer(MUMBAI, "919800011122")

        assert result.volunteer_id == "65f000000000000000000002"
        assert result.distance_km == pytest.approx(0.4448, abs=0.001)
        assert len(result.receipts) == 2

        whatsapp, sms = sent_messages(messaging_service)
        assert whatsapp.channel == MessageChannel.WHATSAPP.value
        assert sms.channel == MessageChannel.SMS.value
        assert whatsapp.recipient == sms.recipient == "+919822222222"
        assert whatsapp.body == sms.body
        assert "📞 Reporter Phone: +919800011122" in whatsapp.body
        assert "https://maps.google.com/?q=19.076,72.8777" in whatsapp.body

    def test_notify_volunteer_without_phone_sends_nothing(self, dispatcher, messaging_service, mongodb_service):
        mongodb_service.find.return_value = [
            {"_id": "v1", "fullName": "No Phone", "latitude": 19.08, "longitude": 72.88, "isActive": True}
        ]

        with pytest.raises(MissingRecipient) as exc_info:
            dispatcher.notify_volunteer(MUMBAI, "919800011122")

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Volunteer has no valid phone number"
        messaging_service.send.assert_not_called()

    def test_notify_volunteer_with_nobody_available(self, dispatcher, messaging_service, mongodb_service):
        mongodb_service.find.return_value = []

        with pytest.raises(NoEligibleVolunteer):
            dispatcher.notify_volunteer(MUMBAI, "919800011122")

        messaging_service.send.assert_not_called()

    def test_delivery_failure_is_not_retried(
        self, dispatcher, messaging_service, mongodb_service, volunteer_documents
    ):
        mongodb_service.find.return_value = volunteer_documents
        messaging_service.send.side_effect = DeliveryError("Failed to send whatsapp message", details="boom")

        with pytest.raises(DeliveryError):
            dispatcher.notify_volunteer(MUMBAI, "919800011122")

        assert messaging_service.send.call_count == 1

    def test_notify_admin(self, dispatcher, messaging_service):
        notified = dispatcher.notify_admin(
            "65f0000000000000000000aa",
            MUMBAI,
            reporter_phone="+919800011122",
            status="accepted",
            volunteer_name="Asha Patil"
        )

        assert notified is True
        message, = sent_messages(messaging_service)
        assert message.channel == "whatsapp"
        assert message.recipient == ADMIN_NUMBER
        assert "🚀 Status: Accepted by Asha Patil" in message.body
        # 09:30 UTC is 15:00 in India
        assert "🕐 Time: 15/3/2024, 3:00:00 pm" in message.body

    def test_post_to_group_with_image(self, dispatcher, messaging_service):
        notified = dispatcher.post_to_group("Adoption drive on Sunday", "https://example.com/dog.jpg")

        assert notified is True
        message, = sent_messages(messaging_service)
        assert message.recipient == GROUP_ID
        assert message.body == "Adoption drive on Sunday"
        assert message.media_url == "https://example.com/dog.jpg"

    def test_post_to_group_not_configured(self, messaging_service, mongodb_service):
        dispatcher = NotificationDispatcher(messaging_service, VolunteerRegistry(mongodb_service), ADMIN_NUMBER)

        assert dispatcher.post_to_group("Hello") is False
        messaging_service.send.assert_not_called()

    def test_notify_requires_recipient(self, dispatcher, messaging_service):
        with pytest.raises(ValidationException):
            dispatcher.notify(MessageChannel.SMS, "  ", "Hello")

        messaging_service.send.assert_not_called()

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Tests for notification message templates.
"""

from datetime import datetime

from domain.messages import (
    build_admin_alert, build_volunteer_alert, channel_address, format_local_time,
    maps_link, normalize_phone, status_label
)
from models.enums import MessageChannel


class TestPhoneNumbers:
    """Test phone normalization and channel addressing."""

    def test_adds_plus_when_missing(self):
        assert normalize_phone("919876543210") == "+919876543210"

    def test_keeps_existing_plus(self):
        assert normalize_phone("+919876543210") == "+919876543210"

    def test_strips_whitespace(self):
        assert normalize_phone("  919876543210 ") == "+919876543210"

    def test_empty_input(self):
        assert normalize_phone(None) == ""
        assert normalize_phone("   ") == ""

    def test_whatsapp_address(self):
        assert channel_address(MessageChannel.WHATSAPP, "919876543210") == "whatsapp:+919876543210"

    def test_whatsapp_prefix_not_doubled(self):
        assert channel_address(MessageChannel.WHATSAPP, "whatsapp:+919876543210") == "whatsapp:+919876543210"

    def test_sms_address_is_plain(self):
        assert channel_address(MessageChannel.SMS, "919876543210") == "+919876543210"

    def test_group_identifier_not_normalized(self):
        assert channel_address("whatsapp", "120363000000000000@g.us") == "whatsapp:120363000000000000@g.us"


class TestVolunteerAlert:
    """Test the volunteer rescue alert."""

    def test_map_link(self):
        assert maps_link(19.076, 72.8777) == "https://maps.google.com/?q=19.076,72.8777"

    def test_body(self):
        body = build_volunteer_alert(19.076, 72.8777, "+919800011122")

        assert body == (
            "🚨 Animal Rescue Alert!\n"
            "📍 Location: https://maps.google.com/?q=19.076,72.8777\n"
            "📞 Reporter Phone: +919800011122\n"
            "🐾 Please respond immediately."
        )


class TestAdminAlert:
    """Test the admin status alert."""

    def test_status_labels(self):
        assert status_label("pending") == "📋 Status: New rescue request"
        assert status_label("assigned", "Asha") == "✅ Status: Assigned to Asha"
        assert status_label("accepted") == "🚀 Status: Accepted by Volunteer"
        assert status_label("resolved", "Rohan") == "✅ Status: Resolved by Rohan"

    def test_unknown_status_has_no_label(self):
        assert status_label("archived") is None
        assert status_label(None) is None

    def test_local_time_format(self):
        assert format_local_time(datetime(2024, 3, 15, 15, 0, 5)) == "15/3/2024, 3:00:05 pm"
        assert format_local_time(datetime(2024, 3, 15, 0, 7, 9)) == "15/3/2024, 12:07:09 am"
        assert format_local_time(datetime(2024, 3, 15, 12, 0, 0)) == "15/3/2024, 12:00:00 pm"
        assert format_local_time(datetime(2024, 3, 5, 9, 4, 0)) == "5/3/2024, 9:04:00 am"

    def test_body_with_status(self):
        body = build_admin_alert(
            "65f0000000000000000000aa",
            19.076,
            72.8777,
            "+919800011122",
            "assigned",
            datetime(2024, 3, 15, 15, 0, 0),
            volunteer_name="Asha Patil"
        )

        assert body.splitlines() == [
            "🔔 *Admin Alert - Rescue Request 65f00000*",
            "",
            "✅ Status: Assigned to Asha Patil",
            "📍 Location: https://maps.google.com/?q=19.076,72.8777",
            "📞 Reporter: +919800011122",
            "🕐 Time: 15/3/2024, 3:00:00 pm"
        ]

    def test_body_without_status_or_phone(self):
        body = build_admin_alert("abc", 1.5, 2.5, None, None, datetime(2024, 1, 1, 9, 0, 0))

        assert "Status" not in body
        assert "📞 Reporter: Unknown" in body
        assert body.startswith("🔔 *Admin Alert - Rescue Request abc*")

# SPDX-License-Identifier: Apache-2.0

"""
Notification message templates.

Pure formatting helpers for the three outbound message shapes: the rescue
alert sent to a matched volunteer, the status alert sent to the admin and the
free-form group announcement.
"""

from datetime import datetime
from typing import Optional

from models.enums import MessageChannel, RescueStatus

MAPS_URL = "https://maps.google.com/?q={latitude},{longitude}"
WHATSAPP_PREFIX = "whatsapp:"


def _format_degrees(value: float) -> str:
    return format(value, ".15g")


def maps_link(latitude: float, longitude: float) -> str:
    """Google Maps link for a coordinate."""
    return MAPS_URL.format(latitude=_format_degrees(latitude), longitude=_format_degrees(longitude))


def normalize_phone(phone: Optional[str]) -> str:
    """
    Normalize a phone number to international form.

    Surrounding whitespace is stripped and a leading '+' is added when absent.
    Empty input yields an empty string.
    """
    if not phone:
        return ""
    phone = phone.strip()
    if not phone:
        return ""
    return phone if phone.startswith("+") else f"+{phone}"


def channel_address(channel: MessageChannel, address: str) -> str:
    """
    Address a number on a channel.

    WhatsApp numbers are sent as 'whatsapp:+<number>'; SMS numbers are plain.
    Group identifiers (containing '@') are not phone-normalized.
    """
    channel = MessageChannel(channel)
    if address.startswith(WHATSAPP_PREFIX):
        address = address[len(WHATSAPP_PREFIX):]
    if "@" not in address:
        address = normalize_phone(address)
    if channel == MessageChannel.WHATSAPP:
        return f"{WHATSAPP_PREFIX}{address}"
    return address


def build_volunteer_alert(latitude: float, longitude: float, reporter_phone: str) -> str:
    """Rescue alert sent to the nearest volunteer."""
    return (
        "🚨 Animal Rescue Alert!\n"
        f"📍 Location: {maps_link(latitude, longitude)}\n"
        f"📞 Reporter Phone: {reporter_phone}\n"
        "🐾 Please respond immediately."
    )


def status_label(status: Optional[str], volunteer_name: Optional[str] = None) -> Optional[str]:
    """Human-readable status line for admin alerts, or None for unknown statuses."""
    name = volunteer_name or "Volunteer"
    labels = {
        RescueStatus.PENDING.value: "📋 Status: New rescue request",
        RescueStatus.ASSIGNED.value: f"✅ Status: Assigned to {name}",
        RescueStatus.ACCEPTED.value: f"🚀 Status: Accepted by {name}",
        RescueStatus.RESOLVED.value: f"✅ Status: Resolved by {name}",
    }
    return labels.get(status)


def format_local_time(moment: datetime) -> str:
    """Format a timestamp as 'D/M/YYYY, h:MM:SS am' with unpadded day and month."""
    hour = moment.hour % 12 or 12
    suffix = "am" if moment.hour < 12 else "pm"
    return f"{moment.day}/{moment.month}/{moment.year}, {hour}:{moment:%M:%S} {suffix}"


def build_admin_alert(
    rescue_request_id: str,
    latitude: float,
    longitude: float,
    reporter_phone: Optional[str],
    status: Optional[str],
    sent_at: datetime,
    volunteer_name: Optional[str] = None
) -> str:
    """Status-change alert sent to the admin number."""
    lines = [f"🔔 *Admin Alert - Rescue Request {rescue_request_id[:8]}*", ""]

    label = status_label(status, volunteer_name)
    if label:
        lines.append(label)

    lines.append(f"📍 Location: {maps_link(latitude, longitude)}")
    lines.append(f"📞 Reporter: {reporter_phone or 'Unknown'}")
    lines.append(f"🕐 Time: {format_local_time(sent_at)}")
    return "\n".join(lines)

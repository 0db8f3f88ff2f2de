# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Enumeration types for the rescue dispatch service.
"""

from enum import Enum


class RescueStatus(str, Enum):
    """Rescue request workflow status enumeration."""
    PENDING = "pending"
    ASSIGNED = "assigned"
    ACCEPTED = "accepted"
    RESOLVED = "resolved"


class MessageChannel(str, Enum):
    """Outbound messaging channels."""
    WHATSAPP = "whatsapp"
    SMS = "sms"


class VolunteerRole(str, Enum):
    """Roles stored on volunteer registry records."""
    VOLUNTEER = "volunteer"
    ADMIN = "admin"

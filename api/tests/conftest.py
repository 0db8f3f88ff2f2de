# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Pytest configuration and fixtures.

MongoDB and Twilio are replaced by mocks; no network access is needed.
"""

import os
import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock
from bson import ObjectId

# Set test environment
os.environ['ENVIRONMENT'] = 'test'
os.environ['OTEL_ENABLED'] = 'false'

from config import Settings
from services.messaging import MessageReceipt

FIXED_NOW = datetime(2024, 3, 15, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings():
    """Settings with every required value present and no group channel."""
    return Settings(
        mongodb_uri='mongodb://localhost:27017/rescue_dispatch_test',
        twilio_account_sid='ACtest',
        twilio_auth_token='test-token',
        twilio_whatsapp_from='+14155238886',
        twilio_sms_from='+15005550006',
        admin_whatsapp_number='+919800000000',
        mongodb_database='rescue_dispatch_test',
        environment='test',
        otel_enabled=False
    )


@pytest.fixture
def mongodb_service():
    """Mocked MongoDB service; tests set find/find_one/update_one results."""
    service = MagicMock()
    service.find.return_value = []
    service.find_one.return_value = None
    service.update_one.return_value = True
    service.health_check.return_value = {'status': 'healthy', 'ping': True, 'database': 'rescue_dispatch_test'}
    return service


@pytest.fixture
def messaging_service():
    """Mocked messaging service returning a receipt per send."""
    service = MagicMock()
    service.send.side_effect = lambda message: MessageReceipt(
        sid=f"SM{ObjectId()}",
        channel=message.channel,
        recipient=message.recipient,
        status='queued'
    )
    service.health_check.return_value = {'status': 'healthy', 'provider': 'twilio'}
    return service


@pytest.fixture
def app(settings, mongodb_service, messaging_service):
    """Application wired to the mocked services."""
    from app import create_app

    application = create_app(settings, mongodb_service=mongodb_service, messaging_service=messaging_service)
    application.config['TESTING'] = True
    return application


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def fixed_clock():
    """Clock returning a fixed UTC instant."""
    return lambda: FIXED_NOW


@pytest.fixture
def volunteer_documents():
    """Volunteer registry documents around Mumbai."""
    return [
        {
            "_id": ObjectId("65f000000000000000000001"),
            "fullName": "Asha Patil",
            "phone": "919811111111",
            "whatsapp": "+919811111111",
            "latitude": 19.1000,
            "longitude": 72.8777,
            "isActive": True,
            "role": "volunteer"
        },
        {
            "_id": ObjectId("65f000000000000000000002"),
            "fullName": "Rohan Mehta",
            "phone": "+919822222222",
            "whatsapp": None,
            "latitude": 19.0800,
            "longitude": 72.8777,
            "isActive": True,
            "role": "volunteer"
        }
    ]


@pytest.fixture
def rescue_document():
    """A pending rescue request document."""
    return {
        "_id": ObjectId("65f0000000000000000000aa"),
        "latitude": 19.0760,
        "longitude": 72.8777,
        "status": "pending",
        "reporterPhone": "919800011122"
    }

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Environment configuration.

All configuration is read once from the process environment when the
application is created. Missing required values abort startup with a
ConfigurationError instead of failing individual requests.
"""

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from domain.errors import ConfigurationError

REQUIRED_VARIABLES = (
    'MONGODB_URI',
    'TWILIO_ACCOUNT_SID',
    'TWILIO_AUTH_TOKEN',
    'TWILIO_WHATSAPP_FROM',
    'TWILIO_SMS_FROM',
    'ADMIN_WHATSAPP_NUMBER',
)


def _flag(value: Optional[str], default: bool) -> bool:
    if value is None or value == '':
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class Settings:
    """Process-wide settings for the rescue dispatch service."""
    mongodb_uri: str
    twilio_account_sid: str
    twilio_auth_token: str
    twilio_whatsapp_from: str
    twilio_sms_from: str
    admin_whatsapp_number: str
    mongodb_database: str = 'rescue_dispatch'
    mongodb_server_selection_timeout_ms: int = 5000
    whatsapp_group_id: Optional[str] = None
    notification_timezone: str = 'Asia/Kolkata'
    environment: str = 'development'
    otel_enabled: bool = True
    otel_exporter_endpoint: Optional[str] = None
    service_version: str = '1.0.0'
    cors_origins: List[str] = field(default_factory=list)

    @property
    def group_configured(self) -> bool:
        return bool(self.whatsapp_group_id)

    @property
    def is_production(self) -> bool:
        return self.environment == 'production'

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from, defaults to os.environ

        Raises:
            ConfigurationError: Listing every missing required variable
        """
        env = os.environ if environ is None else environ

        missing = [name for name in REQUIRED_VARIABLES if not (env.get(name) or '').strip()]
        if missing:
            raise ConfigurationError(missing)

        try:
            timeout_ms = int(env.get('MONGODB_SERVER_SELECTION_TIMEOUT_MS', '5000'))
        except ValueError:
            raise ConfigurationError(['MONGODB_SERVER_SELECTION_TIMEOUT_MS'])

        origins = [o.strip() for o in env.get('CORS_ORIGINS', '').split(',') if o.strip()]
        frontend_url = env.get('FRONTEND_URL')
        if frontend_url:
            origins.append(frontend_url.strip())

        return cls(
            mongodb_uri=env['MONGODB_URI'].strip(),
            twilio_account_sid=env['TWILIO_ACCOUNT_SID'].strip(),
            twilio_auth_token=env['TWILIO_AUTH_TOKEN'].strip(),
            twilio_whatsapp_from=env['TWILIO_WHATSAPP_FROM'].strip(),
            twilio_sms_from=env['TWILIO_SMS_FROM'].strip(),
            admin_whatsapp_number=env['ADMIN_WHATSAPP_NUMBER'].strip(),
            mongodb_database=env.get('MONGODB_DATABASE') or 'rescue_dispatch',
            mongodb_server_selection_timeout_ms=timeout_ms,
            whatsapp_group_id=(env.get('WHATSAPP_GROUP_ID') or '').strip() or None,
            notification_timezone=env.get('NOTIFICATION_TIMEZONE') or 'Asia/Kolkata',
            environment=env.get('ENVIRONMENT') or 'development',
            otel_enabled=_flag(env.get('OTEL_ENABLED'), True),
            otel_exporter_endpoint=env.get('OTEL_EXPORTER_OTLP_ENDPOINT') or None,
            service_version=env.get('SERVICE_VERSION') or '1.0.0',
            cors_origins=origins
        )

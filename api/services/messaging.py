# SPDX-License-Identifier: Apache-2.0

"""
Twilio messaging service.

Sends WhatsApp and SMS messages through a single Twilio client created at
process start. Each message is sent exactly once; provider failures are
raised as DeliveryError and never retried.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from twilio.base.exceptions import TwilioRestException
from twilio.rest import Client

from config import Settings
from domain.errors import DeliveryError
from domain.messages import channel_address
from models.entities import NotificationMessage
from models.enums import MessageChannel

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


@dataclass
class MessagingConfig:
    """Twilio credentials and sender numbers."""
    account_sid: str
    auth_token: str
    whatsapp_from: str
    sms_from: str


@dataclass
class MessageReceipt:
    """Provider acknowledgement of a sent message."""
    sid: str
    channel: str
    recipient: str
    status: Optional[str] = None


class MessagingService:
    """Thin wrapper around the Twilio REST client."""

    def __init__(self, config: MessagingConfig, client: Optional[Client] = None):
        self.config = config
        self.client = client or Client(config.account_sid, config.auth_token)

    def _sender(self, channel: MessageChannel) -> str:
        if channel == MessageChannel.WHATSAPP:
            return channel_address(channel, self.config.whatsapp_from)
        return self.config.sms_from

    def send(self, message: NotificationMessage) -> MessageReceipt:
        """
        Send a single message.

        Args:
            message: Message with recipient, channel, body and optional media

        Returns:
            MessageReceipt with the provider message SID

        Raises:
            DeliveryError: If the provider call fails
        """
        channel = MessageChannel(message.channel)
        payload: Dict[str, Any] = {
            "from_": self._sender(channel),
            "to": channel_address(channel, message.recipient),
            "body": message.body
        }
        if message.media_url:
            payload["media_url"] = [message.media_url]

        with tracer.start_as_current_span("messaging.send") as span:
            span.set_attributes({
                "messaging.system": "twilio",
                "messaging.channel": channel.value,
                "messaging.has_media": bool(message.media_url)
            })

            try:
                sent = self.client.messages.create(**payload)
            except TwilioRestException as e:
                span.record_exception(e)
                span.set_status(Status(StatusCode.ERROR, str(e)))
                logger.error(
                    "Twilio rejected message",
                    extra={
                        "extra_fields": {
                            "channel": channel.value,
                            "status": e.status,
                            "code": e.code,
                            "error": e.msg
                        }
                    }
                )
                raise DeliveryError(f"Failed to send {channel.value} message", details=e.msg)
            except Exception as e:
                span.record_exception(e)
                span.set_status(Status(StatusCode.ERROR, str(e)))
                logger.error(
                    "Messaging provider call failed",
                    extra={
                        "extra_fields": {
                            "channel": channel.value,
                            "error": str(e),
                            "error_type": type(e).__name__
                        }
                    },
                    exc_info=True
                )
                raise DeliveryError(f"Failed to send {channel.value} message", details=str(e))

            span.set_attribute("messaging.sid", sent.sid)
            logger.info(
                "Message sent",
                extra={"extra_fields": {"channel": channel.value, "sid": sent.sid}}
            )
            return MessageReceipt(
                sid=sent.sid,
                channel=channel.value,
                recipient=payload["to"],
                status=getattr(sent, "status", None)
            )

    def health_check(self) -> Dict[str, Any]:
        """Report whether sender numbers are configured; no provider call is made."""
        configured = bool(self.config.whatsapp_from and self.config.sms_from)
        return {
            "status": "healthy" if configured else "unhealthy",
            "provider": "twilio",
            "whatsapp_sender": bool(self.config.whatsapp_from),
            "sms_sender": bool(self.config.sms_from)
        }


def create_messaging_service(settings: Settings) -> MessagingService:
    """
    Factory function to create the messaging service from settings.

    Returns:
        MessagingService: Configured messaging service instance
    """
    config = MessagingConfig(
        account_sid=settings.twilio_account_sid,
        auth_token=settings.twilio_auth_token,
        whatsapp_from=settings.twilio_whatsapp_from,
        sms_from=settings.twilio_sms_from
    )
    return MessagingService(config)

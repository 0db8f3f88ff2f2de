# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Application exception hierarchy.

Every exception carries the HTTP status code and problem type it maps to, so
the error handler middleware can convert it into a JSON error response at the
entry-point boundary. None of these errors are retried.
"""

from typing import Any, Dict, List, Optional


class CustomException(Exception):
    """Base class for custom application exceptions."""

    def __init__(self, message: str, status_code: int = 500, error_type: str = "application-error"):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_type = error_type

    def response_fields(self) -> Dict[str, Any]:
        """Extra fields merged into the error response body."""
        return {}


class ValidationException(CustomException):
    """Exception for validation errors."""

    def __init__(self, message: str, validation_errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message, 400, "validation-error")
        self.validation_errors = validation_errors or []


class NotFoundException(CustomException):
    """Exception for resource not found errors."""

    def __init__(self, message: str):
        super().__init__(message, 404, "resource-not-found")


class ConflictException(CustomException):
    """Exception for resource conflict errors."""

    def __init__(self, message: str):
        super().__init__(message, 409, "resource-conflict")


class UpstreamException(CustomException):
    """Exception for failed calls to the database or the messaging provider."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message, 500, "upstream-error")
        self.details = details


class ConfigurationError(Exception):
    """Raised at startup when required environment values are missing."""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required configuration: {', '.join(self.missing)}")


class NoEligibleVolunteer(NotFoundException):
    """No active volunteer with a known location is available."""

    def __init__(self, message: str = "No active volunteers available"):
        super().__init__(message)

    def response_fields(self) -> Dict[str, Any]:
        return {"assigned": False}


class RescueRequestNotFound(NotFoundException):
    """The rescue request id does not match any stored record."""

    def __init__(self, rescue_request_id: str):
        super().__init__(f"Rescue request {rescue_request_id} not found")
        self.rescue_request_id = rescue_request_id


class InvalidStatusTransition(ConflictException):
    """The requested action is not allowed from the rescue's current status."""

    def __init__(self, current_status: str, action: str):
        super().__init__(f"Cannot {action} a rescue request with status '{current_status}'")
        self.current_status = current_status
        self.action = action


class UnrecognizedRescueStatus(ConflictException):
    """The stored rescue request has a status outside the workflow."""

    def __init__(self, rescue_request_id: str, current_status: Any):
        super().__init__(
            f"Rescue request {rescue_request_id} has unrecognized status '{current_status}'"
        )
        self.rescue_request_id = rescue_request_id
        self.current_status = current_status


class MissingRecipient(ValidationException):
    """The matched volunteer has no usable phone number."""

    def __init__(self, volunteer_id: str):
        super().__init__("Volunteer has no valid phone number")
        self.volunteer_id = volunteer_id


class PersistenceError(UpstreamException):
    """Reading or writing a record in the database failed."""


class DeliveryError(UpstreamException):
    """The messaging provider rejected or failed to send a message."""

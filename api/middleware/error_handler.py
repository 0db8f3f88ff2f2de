# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Error handling middleware with structured JSON responses.
Provides centralized error handling and formatting for Flask applications.

Every error raised while handling a request is converted here into a JSON
body of the form {"error", "type", "status", "instance", ...}. Errors are
logged once and never retried.
"""

from flask import Flask, request, jsonify
from werkzeug.exceptions import HTTPException
from typing import Dict, Any, List, Optional, Tuple
from opentelemetry import trace
import logging
import traceback

from domain.errors import CustomException, UpstreamException, ValidationException

tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)

HTTP_ERROR_TYPES = {
    400: ("bad-request", "Bad Request"),
    404: ("resource-not-found", "Resource Not Found"),
    405: ("method-not-allowed", "Method not allowed"),
    409: ("resource-conflict", "Resource Conflict"),
    413: ("payload-too-large", "Payload Too Large"),
    415: ("unsupported-media-type", "Unsupported Media Type"),
    500: ("internal-server-error", "Internal Server Error"),
}


def build_error_response(
    error_type: str,
    message: str,
    status: int,
    instance: str,
    details: Optional[str] = None,
    validation_errors: Optional[List[Dict[str, Any]]] = None,
    extra: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Build the JSON error body."""
    error_response = {
        'error': message,
        'type': error_type,
        'status': status,
        'instance': instance
    }

    if details:
        error_response['details'] = details

    if validation_errors:
        error_response['errors'] = validation_errors

    if extra:
        error_response.update(extra)

    return error_response


class ErrorHandlerMiddleware:
    """Centralized error handling middleware with JSON response formatting."""

    def __init__(self, app: Flask, expose_internal_errors: bool = True):
        self.app = app
        self.expose_internal_errors = expose_internal_errors
        self.register_error_handlers()

    def register_error_handlers(self):
        """Register error handlers with Flask application."""

        @self.app.errorhandler(CustomException)
        def handle_custom_exception(error: CustomException):
            return self.handle_application_error(error)

        @self.app.errorhandler(HTTPException)
        def handle_http_exception(error: HTTPException):
            if error.code is not None and error.code >= 500:
                return self.handle_server_error(error)
            return self.handle_client_error(error)

        # Handle generic exceptions
        @self.app.errorhandler(Exception)
        def handle_generic_exception(error):
            return self.handle_unexpected_error(error)

    def handle_application_error(self, error: CustomException) -> Tuple[Any, int]:
        """
        Handle exceptions raised by the domain and service layers.

        Args:
            error: Application exception carrying its status code

        Returns:
            Tuple of (JSON response, status code)
        """
        with tracer.start_as_current_span("error_handler.application_error") as span:
            span.set_attributes({
                "error.type": error.error_type,
                "error.status": error.status_code,
                "error.class": error.__class__.__name__,
                "http.method": request.method,
                "http.path": request.path
            })

            details = error.details if isinstance(error, UpstreamException) else None
            validation_errors = error.validation_errors if isinstance(error, ValidationException) else None

            log = logger.error if error.status_code >= 500 else logger.warning
            log(
                f"Request failed: {error.error_type}",
                extra={
                    "extra_fields": {
                        "error_type": error.error_type,
                        "error_class": error.__class__.__name__,
                        "status_code": error.status_code,
                        "message": error.message,
                        "details": details,
                        "path": request.path,
                        "method": request.method
                    }
                }
            )

            error_response = build_error_response(
                error.error_type,
                error.message,
                error.status_code,
                request.path,
                details=details,
                validation_errors=validation_errors,
                extra=error.response_fields()
            )
            return jsonify(error_response), error.status_code

    def handle_client_error(self, error: HTTPException) -> Tuple[Any, int]:
        """
        Handle client errors (4xx status codes).

        Args:
            error: HTTP exception

        Returns:
            Tuple of (JSON response, status code)
        """
        error_type, title = HTTP_ERROR_TYPES.get(error.code, ("client-error", error.name))

        with tracer.start_as_current_span("error_handler.client_error") as span:
            span.set_attributes({
                "error.type": error_type,
                "error.status": error.code,
                "http.method": request.method,
                "http.path": request.path
            })

            logger.warning(
                f"Client error: {title}",
                extra={
                    "extra_fields": {
                        "error_type": error_type,
                        "status_code": error.code,
                        "path": request.path,
                        "method": request.method,
                        "user_agent": request.headers.get('User-Agent'),
                        "ip_address": request.remote_addr
                    }
                }
            )

            error_response = build_error_response(error_type, title, error.code, request.path)
            response = jsonify(error_response)
            # Keep the Allow header on 405 responses
            headers = dict(error.get_headers())
            if 'Allow' in headers:
                response.headers['Allow'] = headers['Allow']
            return response, error.code

    def handle_server_error(self, error: HTTPException) -> Tuple[Any, int]:
        """
        Handle server errors (5xx status codes).

        Args:
            error: HTTP exception

        Returns:
            Tuple of (JSON response, status code)
        """
        error_type, title = HTTP_ERROR_TYPES.get(error.code, ("server-error", error.name))

        with tracer.start_as_current_span("error_handler.server_error") as span:
            span.set_attributes({
                "error.type": error_type,
                "error.status": error.code,
                "http.method": request.method,
                "http.path": request.path
            })

            logger.error(
                f"Server error: {title}",
                extra={
                    "extra_fields": {
                        "error_type": error_type,
                        "status_code": error.code,
                        "path": request.path,
                        "method": request.method
                    }
                },
                exc_info=True
            )

            error_response = build_error_response(error_type, title, error.code, request.path)
            return jsonify(error_response), error.code

    def handle_unexpected_error(self, error: Exception) -> Tuple[Any, int]:
        """
        Handle unexpected exceptions not caught by specific handlers.

        Args:
            error: Unexpected exception

        Returns:
            Tuple of (JSON response, status code)
        """
        with tracer.start_as_current_span("error_handler.unexpected_error") as span:
            span.set_attributes({
                "error.type": "unexpected-error",
                "error.class": error.__class__.__name__,
                "http.method": request.method,
                "http.path": request.path
            })

            # Record exception in span
            span.record_exception(error)

            logger.error(
                f"Unexpected error: {error.__class__.__name__}",
                extra={
                    "extra_fields": {
                        "error_type": "unexpected-error",
                        "error_class": error.__class__.__name__,
                        "error_message": str(error),
                        "path": request.path,
                        "method": request.method,
                        "traceback": traceback.format_exc()
                    }
                },
                exc_info=True
            )

            # Don't expose internal error details in production
            details = None
            if self.expose_internal_errors:
                details = f"{error.__class__.__name__}: {str(error)}"

            error_response = build_error_response(
                "internal-server-error",
                "An unexpected error occurred",
                500,
                request.path,
                details=details
            )
            return jsonify(error_response), 500

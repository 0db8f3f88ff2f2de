# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Request validation middleware using Pydantic models.
Provides request body parsing, validation and error formatting.
"""

import json
import logging
from typing import Any, Dict, List, Type, TypeVar

from flask import request
from opentelemetry import trace
from pydantic import BaseModel, ValidationError

from domain.errors import ValidationException

tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ValidationMiddleware:
    """Middleware for request validation using Pydantic models."""

    def format_validation_errors(self, validation_error: ValidationError) -> List[Dict[str, Any]]:
        """
        Format Pydantic validation errors for API response.

        Args:
            validation_error: Pydantic ValidationError

        Returns:
            List of formatted error dictionaries
        """
        errors = []

        for error in validation_error.errors():
            field_path = ".".join(str(loc) for loc in error["loc"])
            errors.append({
                "field": field_path,
                "message": error["msg"],
                "type": error["type"],
                "input": error.get("input")
            })

        return errors

    def load_json_body(self) -> Dict[str, Any]:
        """
        Read the request body as a JSON object.

        The body is parsed regardless of Content-Type, and a body that is
        itself a JSON-encoded string is decoded once more.

        Raises:
            ValidationException: If the body is empty, not JSON or not an object
        """
        raw = request.get_data(cache=True, as_text=True)
        if not raw or not raw.strip():
            raise ValidationException("Request body is required")

        try:
            data = json.loads(raw)
            if isinstance(data, str):
                data = json.loads(data)
        except ValueError as e:
            raise ValidationException(
                "Invalid JSON in request body",
                [{"field": "body", "message": str(e), "type": "json_error", "input": None}]
            )

        if not isinstance(data, dict):
            raise ValidationException(
                "Request body must be a JSON object",
                [{"field": "body", "message": "Expected an object", "type": "json_error", "input": None}]
            )
        return data

    def parse_json_body(self, model_class: Type[ModelT], message: str = "Missing required fields") -> ModelT:
        """
        Validate the JSON request body against a Pydantic model.

        Args:
            model_class: Pydantic model class for validation
            message: Error message returned when validation fails

        Returns:
            Validated model instance

        Raises:
            ValidationException: If the body is malformed or fails validation
        """
        with tracer.start_as_current_span("validation.parse_json_body") as span:
            span.set_attributes({
                "validation.model": model_class.__name__,
                "http.method": request.method,
                "http.path": request.path
            })

            try:
                json_data = self.load_json_body()
            except ValidationException:
                span.set_attribute("validation.result", "invalid_json")
                raise

            try:
                validated_data = model_class.model_validate(json_data)
            except ValidationError as e:
                span.set_attribute("validation.result", "validation_error")
                validation_errors = self.format_validation_errors(e)

                logger.warning(
                    "Request validation failed",
                    extra={
                        "extra_fields": {
                            "model": model_class.__name__,
                            "path": request.path,
                            "errors": validation_errors
                        }
                    }
                )
                raise ValidationException(message, validation_errors)

            span.set_attribute("validation.result", "success")
            logger.debug(
                "Request validation successful",
                extra={"extra_fields": {"model": model_class.__name__, "path": request.path}}
            )
            return validated_data

# SPDX-License-Identifier: Apache-2.0

"""
Rescue assignment endpoints.

Implements nearest-volunteer assignment and the volunteer workflow actions
(accept, reject with re-assignment, resolve). Errors propagate to the error
handler middleware, which turns them into JSON error responses.
"""

from flask import jsonify, current_app
from flask_openapi3 import APIBlueprint, Tag
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
import logging

from models.requests import AssignRescueRequest, RescueActionRequest
from models.responses import AssignRescueResponse, ReassignRescueResponse, RescueStatusResponse

# Set up logging and tracing
logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

# Create API blueprint
rescues_tag = Tag(name="Rescues", description="Rescue assignment and workflow")
rescues_bp = APIBlueprint(
    'rescues',
    __name__,
    url_prefix='/api',
    abp_tags=[rescues_tag]
)


@rescues_bp.post('/assignRescue', summary="Assign a rescue to the nearest volunteer")
def assign_rescue():
    """
    Assign a rescue request to the nearest active volunteer.

    Returns 404 when no active volunteer with a known location exists; the
    rescue record is left untouched in that case.
    """
    body = current_app.validation_middleware.parse_json_body(AssignRescueRequest)

    with tracer.start_as_current_span(
        "api.assign_rescue",
        attributes={"rescue.id": body.rescue_request_id}
    ) as span:
        result = current_app.assignment_service.assign(body.rescue_request_id, body.location)

        response = AssignRescueResponse(
            volunteer_id=result.volunteer_id,
            volunteer_name=result.volunteer_name,
            distance_km=result.distance_km
        )
        span.set_status(Status(StatusCode.OK))
        return jsonify(response.to_json_dict()), 200


@rescues_bp.post('/acceptRescue', summary="Accept an assigned rescue")
def accept_rescue():
    """Mark an assigned rescue as accepted by its volunteer."""
    body = current_app.validation_middleware.parse_json_body(RescueActionRequest)

    with tracer.start_as_current_span(
        "api.accept_rescue",
        attributes={"rescue.id": body.rescue_request_id}
    ):
        status = current_app.assignment_service.accept(body.rescue_request_id)

        response = RescueStatusResponse(rescue_request_id=body.rescue_request_id, status=status.value)
        return jsonify(response.to_json_dict()), 200


@rescues_bp.post('/rejectRescue', summary="Reject an assigned rescue and re-assign it")
def reject_rescue():
    """
    Reject an assigned rescue.

    The rescue goes back to pending and is immediately assigned to the nearest
    eligible volunteer, which may be the same volunteer again.
    """
    body = current_app.validation_middleware.parse_json_body(RescueActionRequest)

    with tracer.start_as_current_span(
        "api.reject_rescue",
        attributes={"rescue.id": body.rescue_request_id}
    ):
        result = current_app.assignment_service.reject(body.rescue_request_id)

        response = ReassignRescueResponse(
            volunteer_id=result.volunteer_id,
            volunteer_name=result.volunteer_name,
            distance_km=result.distance_km
        )
        return jsonify(response.to_json_dict()), 200


@rescues_bp.post('/resolveRescue', summary="Resolve an accepted rescue")
def resolve_rescue():
    """Mark an accepted rescue as resolved."""
    body = current_app.validation_middleware.parse_json_body(RescueActionRequest)

    with tracer.start_as_current_span(
        "api.resolve_rescue",
        attributes={"rescue.id": body.rescue_request_id}
    ):
        status = current_app.assignment_service.resolve(body.rescue_request_id)

        response = RescueStatusResponse(rescue_request_id=body.rescue_request_id, status=status.value)
        return jsonify(response.to_json_dict()), 200

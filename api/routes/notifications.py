# SPDX-License-Identifier: Apache-2.0

"""
Notification endpoints.

This module implements the outbound messaging endpoints: the rescue alert to
the nearest volunteer, the admin status alert and the group announcement.
"""

from flask import jsonify, current_app
from flask_openapi3 import APIBlueprint, Tag
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
import logging

from models.requests import NotifyVolunteerRequest, NotifyAdminRequest, PostToGroupRequest
from models.responses import NotifyVolunteerResponse, NotifiedResponse

# Set up logging and tracing
logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

# Create API blueprint
notifications_tag = Tag(name="Notifications", description="WhatsApp and SMS notifications")
notifications_bp = APIBlueprint(
    'notifications',
    __name__,
    url_prefix='/api',
    abp_tags=[notifications_tag]
)


@notifications_bp.post('/notifyVolunteer', summary="Alert the nearest volunteer")
def notify_volunteer():
    """
    Send a rescue alert to the nearest active volunteer.

    The alert goes out on both WhatsApp and SMS. Returns 404 when no volunteer
    is available and 400 when the nearest one has no phone number.
    """
    body = current_app.validation_middleware.parse_json_body(
        NotifyVolunteerRequest,
        "Missing or invalid request data"
    )

    with tracer.start_as_current_span(
        "api.notify_volunteer",
        attributes={"rescue.id": body.rescue_request_id or ""}
    ) as span:
        result = current_app.notification_dispatcher.notify_volunteer(body.location, body.reporter_phone)

        response = NotifyVolunteerResponse(volunteer_id=result.volunteer_id, distance_km=result.distance_km)
        span.set_status(Status(StatusCode.OK))
        return jsonify(response.to_json_dict()), 200


@notifications_bp.post('/notifyAdmin', summary="Alert the admin about a status change")
def notify_admin():
    """Send a rescue status alert to the admin WhatsApp number."""
    body = current_app.validation_middleware.parse_json_body(NotifyAdminRequest)

    with tracer.start_as_current_span(
        "api.notify_admin",
        attributes={"rescue.id": body.rescue_request_id}
    ):
        notified = current_app.notification_dispatcher.notify_admin(
            body.rescue_request_id,
            body.location,
            reporter_phone=body.reporter_phone,
            status=body.status,
            volunteer_name=body.volunteer_name
        )
        return jsonify(NotifiedResponse(notified=notified).to_json_dict(exclude_none=True)), 200


@notifications_bp.post('/postToGroup', summary="Post an announcement to the volunteer group")
def post_to_group():
    """
    Post a message, optionally with an image, to the WhatsApp group.

    When no group is configured nothing is sent and the response says so with
    notified=false.
    """
    body = current_app.validation_middleware.parse_json_body(PostToGroupRequest, "Message is required")

    with tracer.start_as_current_span("api.post_to_group"):
        notified = current_app.notification_dispatcher.post_to_group(body.message, body.image_url)

        response = NotifiedResponse(notified=notified)
        if not notified:
            response.message = "WhatsApp group not configured"
        return jsonify(response.to_json_dict(exclude_none=True)), 200

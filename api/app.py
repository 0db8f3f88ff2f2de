"""
Rescue Dispatch API - Flask Application Entry Point

This module builds the Flask application with OpenAPI 3.0 support, wires the
MongoDB and Twilio backed services, and registers middleware and routes.
"""

import os
from typing import Optional
from flask import jsonify
from flask_openapi3 import OpenAPI, Info, Tag

from config import Settings
from observability.config import setup_observability
from observability.middleware import add_observability_middleware
from middleware.cors import configure_cors
from middleware.error_handler import ErrorHandlerMiddleware
from middleware.validation import ValidationMiddleware
from services.mongodb import MongoDBService
from services.volunteers import VolunteerRegistry
from services.rescues import RescueRequestStore
from services.assignment import RescueAssignmentService
from services.messaging import MessagingService, create_messaging_service
from services.notifications import NotificationDispatcher
from services.health import HealthCheckService


def create_app(
    settings: Optional[Settings] = None,
    mongodb_service: Optional[MongoDBService] = None,
    messaging_service: Optional[MessagingService] = None
) -> OpenAPI:
    """
    Create and configure the Flask application.

    Args:
        settings: Settings to use, read from the environment when omitted
        mongodb_service: Pre-built database service, mainly for tests
        messaging_service: Pre-built messaging service, mainly for tests

    Raises:
        ConfigurationError: When required environment variables are missing
    """
    if settings is None:
        settings = Settings.from_env()

    # Initialize observability first
    setup_observability(settings)

    info = Info(
        title="Rescue Dispatch API",
        version=settings.service_version,
        description="Nearest-volunteer assignment and WhatsApp/SMS notifications for animal rescues"
    )
    # Rescues and Notifications tags come from the blueprints
    health_tag = Tag(name="Health", description="System health and status")

    app = OpenAPI(__name__, info=info)
    app.config['ENVIRONMENT'] = settings.environment
    app.config['DEBUG'] = settings.environment == 'development'

    add_observability_middleware(app)

    # Initialize services
    if mongodb_service is None:
        mongodb_service = MongoDBService(
            settings.mongodb_uri,
            settings.mongodb_database,
            server_selection_timeout_ms=settings.mongodb_server_selection_timeout_ms
        )
    if messaging_service is None:
        messaging_service = create_messaging_service(settings)

    volunteer_registry = VolunteerRegistry(mongodb_service)
    rescue_store = RescueRequestStore(mongodb_service)
    assignment_service = RescueAssignmentService(volunteer_registry, rescue_store)
    notification_dispatcher = NotificationDispatcher(
        messaging_service,
        volunteer_registry,
        settings.admin_whatsapp_number,
        group_id=settings.whatsapp_group_id,
        timezone_name=settings.notification_timezone
    )
    health_service = HealthCheckService(mongodb_service, messaging_service, settings)

    # Initialize middleware
    validation_middleware = ValidationMiddleware()
    ErrorHandlerMiddleware(app, expose_internal_errors=not settings.is_production)
    configure_cors(app, settings.cors_origins, settings.environment)

    # Make services available to routes
    app.settings = settings
    app.mongodb_service = mongodb_service
    app.messaging_service = messaging_service
    app.assignment_service = assignment_service
    app.notification_dispatcher = notification_dispatcher
    app.health_service = health_service
    app.validation_middleware = validation_middleware

    # Register routes
    from routes.rescues import rescues_bp
    from routes.notifications import notifications_bp

    app.register_api(rescues_bp)
    app.register_api(notifications_bp)

    @app.get('/api/healthz', tags=[health_tag], summary="Service health")
    def health_check():
        """Health check with dependency status; 503 when a dependency is down."""
        health_data = health_service.get_health()
        status_code = 200 if health_data["status"] == "healthy" else 503
        return jsonify(health_data), status_code

    return app


if __name__ == '__main__':
    # Development server
    app = create_app()
    app.run(
        host='0.0.0.0',
        port=int(os.getenv('PORT', 5000)),
        debug=app.config['DEBUG']
    )

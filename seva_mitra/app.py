"""
Seva Mitra API - Flask Application Entry Point

This module builds the Flask application with OpenAPI 3.0 support,
configures middleware, and wires the MongoDB service used by the
complaint and activity endpoints.
"""

import os
import atexit
import logging
from datetime import datetime
from typing import Any, Dict, Optional
from dotenv import load_dotenv, find_dotenv
from flask import jsonify
from flask_openapi3 import OpenAPI, Info, Tag

from .observability.config import setup_observability
from .observability.middleware import add_observability_middleware
from .middleware.cors import configure_cors
from .middleware.error_handler import register_error_handlers
from .services.mongodb import MongoDBService, DEFAULT_MONGODB_URI
from .services.health import HealthCheckService, SERVICE_NAME, SERVICE_VERSION

logger = logging.getLogger(__name__)

# OpenAPI info
info = Info(
    title="Seva Mitra API",
    version=SERVICE_VERSION,
    description="Civic complaint and community activity tracking API"
)

health_tag = Tag(name="Health", description="System health and status")


def load_config() -> Dict[str, Any]:
    """Read application configuration from the environment."""
    environment = os.getenv('ENVIRONMENT', 'development')
    return {
        'ENVIRONMENT': environment,
        'DEBUG': environment == 'development',
        'PORT': int(os.getenv('PORT', 5000)),
        'DOCS_ENABLED': os.getenv('DOCS_ENABLED', 'true').lower() == 'true',
        'OTEL_ENABLED': os.getenv('OTEL_ENABLED', 'false').lower() == 'true',

        # Database configuration
        'MONGODB_URI': os.getenv('MONGODB_URI', DEFAULT_MONGODB_URI),
        'MONGODB_DATABASE': os.getenv('MONGODB_DATABASE'),

        # JSON and form bodies are capped at 10 MB by default
        'MAX_CONTENT_LENGTH': int(os.getenv('MAX_CONTENT_LENGTH_MB', '10')) * 1024 * 1024
    }


def create_app(config: Optional[Dict[str, Any]] = None,
               mongodb_service: Optional[MongoDBService] = None) -> OpenAPI:
    """
    Build the Flask application.

    Args:
        config: Overrides applied on top of the environment configuration
        mongodb_service: Store to use instead of one built from MONGODB_URI

    Returns:
        Configured application
    """
    load_dotenv(find_dotenv(usecwd=True))

    settings = load_config()
    settings.update(config or {})

    setup_observability(settings['ENVIRONMENT'], settings['OTEL_ENABLED'])

    # Create Flask app with OpenAPI
    app = OpenAPI(__name__, info=info, doc_ui=settings['DOCS_ENABLED'])
    app.config.update(settings)

    # Add observability middleware
    add_observability_middleware(app)

    # Open cross-origin policy
    configure_cors(app)

    register_error_handlers(app)

    # Initialize services
    if mongodb_service is None:
        mongodb_service = MongoDBService(app.config['MONGODB_URI'], app.config['MONGODB_DATABASE'])
        atexit.register(mongodb_service.close_connection)

    health_service = HealthCheckService(mongodb_service, app.config['ENVIRONMENT'])

    # Make services available to routes
    app.mongodb_service = mongodb_service
    app.health_service = health_service

    # Register routes
    from .routes.complaints import complaints_bp
    from .routes.activities import activities_bp

    app.register_api(complaints_bp)
    app.register_api(activities_bp)

    @app.get('/', tags=[health_tag])
    def root():
        """Service status message"""
        return jsonify({"message": "Seva Mitra Backend Running!"})

    @app.get('/api/healthz', tags=[health_tag])
    def health_check():
        """Health check endpoint with MongoDB dependency status"""
        try:
            health_data = app.health_service.get_health()
        except Exception as e:
            logger.error(f"Health check service failed: {e}", exc_info=True)
            health_data = {
                "status": "unhealthy",
                "service": SERVICE_NAME,
                "version": SERVICE_VERSION,
                "environment": app.config['ENVIRONMENT'],
                "timestamp": datetime.utcnow().isoformat() + "Z",
                "error": f"Health check service failed: {str(e)}"
            }

        status_code = 200 if health_data["status"] == "healthy" else 503
        return jsonify(health_data), status_code

    return app


def main():
    """Run the development server."""
    app = create_app()

    # Connect eagerly so a misconfigured database shows up at startup
    mongodb_health = app.mongodb_service.health_check()
    if mongodb_health['status'] == 'healthy':
        logger.info(f"MongoDB connected: {mongodb_health['database']}")
    else:
        logger.error(f"MongoDB unavailable: {mongodb_health.get('error')}")

    port = app.config['PORT']
    logger.info(f"Server running on port {port}")
    app.run(
        host='0.0.0.0',
        port=port,
        debug=app.config['DEBUG']
    )


if __name__ == '__main__':
    main()

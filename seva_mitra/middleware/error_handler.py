# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Error handling middleware with structured JSON responses.
Provides centralized error handling and formatting for Flask applications.
"""

from flask import Flask, request, jsonify
from werkzeug.exceptions import HTTPException
from typing import Any, Tuple
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
import logging

tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)


def original_url() -> str:
    """Request path including the query string, as the client sent it."""
    query_string = request.query_string.decode('utf-8', errors='replace')
    return f"{request.path}?{query_string}" if query_string else request.path


def error_body(message: str) -> Any:
    return jsonify({"message": message})


class CustomException(Exception):
    """Base class for custom application exceptions."""

    def __init__(self, message: str, status_code: int = 500, error_type: str = "application-error"):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_type = error_type


class ValidationException(CustomException):
    """Exception for missing fields and failed schema validation."""

    def __init__(self, message: str, validation_errors: list = None):
        super().__init__(message, 400, "validation-error")
        self.validation_errors = validation_errors or []


class BadRequestException(CustomException):
    """Exception for write failures reported to the client as bad requests."""

    def __init__(self, message: str):
        super().__init__(message, 400, "bad-request")


class NotFoundException(CustomException):
    """Exception for resource not found errors."""

    def __init__(self, message: str):
        super().__init__(message, 404, "resource-not-found")


class StoreException(CustomException):
    """Exception for data-access failures."""

    def __init__(self, message: str):
        super().__init__(message, 500, "store-error")


class ErrorHandlerMiddleware:
    """Centralized error handling middleware with JSON response formatting."""

    def __init__(self, app: Flask):
        self.app = app
        self.register_error_handlers()

    def register_error_handlers(self):
        """Register error handlers with Flask application."""

        @self.app.errorhandler(404)
        def handle_not_found(error):
            return self.handle_route_not_found(error)

        @self.app.errorhandler(405)
        def handle_method_not_allowed(error):
            # An unregistered method on a known path is an unmatched route too
            return self.handle_route_not_found(error)

        @self.app.errorhandler(HTTPException)
        def handle_http_exception(error):
            return self.handle_http_error(error)

        @self.app.errorhandler(CustomException)
        def handle_custom_exception(error):
            return self.handle_custom_error(error)

        # Handle generic exceptions
        @self.app.errorhandler(Exception)
        def handle_generic_exception(error):
            return self.handle_unexpected_error(error)

    def handle_route_not_found(self, error: HTTPException) -> Tuple[Any, int]:
        """Answer requests that match no registered route."""
        url = original_url()

        logger.warning(
            "Route not found",
            extra={
                "path": url,
                "method": request.method,
                "ip_address": request.remote_addr
            }
        )

        return error_body(f"Route {url} not found"), 404

    def handle_http_error(self, error: HTTPException) -> Tuple[Any, int]:
        """
        Handle werkzeug HTTP errors such as malformed JSON (400) or
        oversized bodies (413).

        Args:
            error: HTTP exception

        Returns:
            Tuple of (error response, status code)
        """
        detail = str(error.description) if error.description else error.name
        status_code = error.code or 500

        log = logger.warning if status_code < 500 else logger.error
        log(
            f"HTTP error: {error.name}",
            extra={
                "status_code": status_code,
                "detail": detail,
                "path": request.path,
                "method": request.method
            }
        )

        return error_body(detail), status_code

    def handle_custom_error(self, error: CustomException) -> Tuple[Any, int]:
        """Translate an application exception into its JSON response."""
        span = trace.get_current_span()
        span.set_attributes({
            "error.type": error.error_type,
            "error.status": error.status_code,
            "http.method": request.method,
            "http.path": request.path
        })

        if error.status_code >= 500:
            span.record_exception(error)
            span.set_status(Status(StatusCode.ERROR, error.message))
            logger.error(
                f"Application error: {error.error_type}",
                extra={
                    "error_type": error.error_type,
                    "status_code": error.status_code,
                    "error_message": error.message,
                    "path": request.path,
                    "method": request.method
                },
                exc_info=error
            )
        else:
            logger.warning(
                f"Client error: {error.error_type}",
                extra={
                    "error_type": error.error_type,
                    "status_code": error.status_code,
                    "error_message": error.message,
                    "path": request.path,
                    "method": request.method
                }
            )

        return error_body(error.message), error.status_code

    def handle_unexpected_error(self, error: Exception) -> Tuple[Any, int]:
        """
        Handle unexpected exceptions not caught by specific handlers.

        Args:
            error: Unexpected exception

        Returns:
            Tuple of (error response, status code)
        """
        with tracer.start_as_current_span("error_handler.unexpected_error") as span:
            span.set_attributes({
                "error.type": "unexpected-error",
                "error.class": error.__class__.__name__,
                "http.method": request.method,
                "http.path": request.path
            })
            span.record_exception(error)

            logger.error(
                f"Unexpected error: {error.__class__.__name__}",
                extra={
                    "error_type": "unexpected-error",
                    "error_class": error.__class__.__name__,
                    "error_message": str(error),
                    "path": request.path,
                    "method": request.method
                },
                exc_info=error
            )

            # Don't expose internal error details in production
            detail = "An unexpected error occurred"
            if self.app.config.get('ENVIRONMENT') != 'production':
                detail = str(error) or error.__class__.__name__

            return error_body(detail), 500


def register_error_handlers(app: Flask) -> ErrorHandlerMiddleware:
    """
    Register centralized error handlers on a Flask application.

    Args:
        app: Flask application

    Returns:
        Configured ErrorHandlerMiddleware instance
    """
    return ErrorHandlerMiddleware(app)

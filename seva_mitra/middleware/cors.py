# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
CORS (Cross-Origin Resource Sharing) middleware.
Applies an open policy: every origin is permitted, credentials are not.
"""

from flask import Flask, request, make_response
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class CORSMiddleware:
    """CORS middleware for Flask applications."""

    def __init__(
        self,
        app: Flask,
        allowed_methods: Optional[List[str]] = None,
        allowed_headers: Optional[List[str]] = None,
        max_age: int = 86400  # 24 hours
    ):
        """
        Initialize CORS middleware.

        Args:
            app: Flask application
            allowed_methods: List of allowed HTTP methods
            allowed_headers: List of allowed headers
            max_age: Preflight cache duration in seconds
        """
        self.app = app
        self.allowed_methods = allowed_methods or [
            'GET', 'HEAD', 'PUT', 'PATCH', 'POST', 'DELETE'
        ]
        self.allowed_headers = allowed_headers
        self.max_age = max_age

        self.register_cors_handlers()

    def add_cors_headers(self, response, preflight: bool = False):
        """
        Add CORS headers to response.

        Args:
            response: Flask response object
            preflight: Whether the response answers an OPTIONS preflight
        """
        response.headers['Access-Control-Allow-Origin'] = '*'

        if preflight:
            response.headers['Access-Control-Allow-Methods'] = ', '.join(self.allowed_methods)
            # Without a configured list, reflect what the browser asked for
            requested_headers = request.headers.get('Access-Control-Request-Headers')
            if self.allowed_headers:
                response.headers['Access-Control-Allow-Headers'] = ', '.join(self.allowed_headers)
            elif requested_headers:
                response.headers['Access-Control-Allow-Headers'] = requested_headers
                response.vary.add('Access-Control-Request-Headers')
            response.headers['Access-Control-Max-Age'] = str(self.max_age)

        return response

    def register_cors_handlers(self):
        """Register CORS handlers with Flask application."""

        @self.app.before_request
        def handle_preflight():
            """Answer CORS preflight requests for any path."""
            if request.method == 'OPTIONS':
                response = make_response('', 204)
                self.add_cors_headers(response, preflight=True)

                logger.debug(f"CORS preflight handled for origin: {request.headers.get('Origin')}")
                return response

        @self.app.after_request
        def add_cors_headers_to_response(response):
            """Add CORS headers to all responses."""
            if request.method != 'OPTIONS':
                self.add_cors_headers(response)
            return response


def configure_cors(app: Flask, **kwargs) -> CORSMiddleware:
    """
    Configure CORS for Flask application.

    Args:
        app: Flask application
        **kwargs: CORS configuration options

    Returns:
        Configured CORSMiddleware instance
    """
    return CORSMiddleware(app, **kwargs)

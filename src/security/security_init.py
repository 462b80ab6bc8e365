"""
Security initialization module.

This module initializes all security features for the Flask application.
"""

from flask import Flask
from .security_headers import SecurityHeaders
from .csrf import init_csrf


def init_security(app: Flask):
    """
    Initialize all security features for the Flask app.

    Args:
        app: Flask application instance
    """
    SecurityHeaders.init_app(app)
    init_csrf(app)

    app.logger.info("Security features initialized")

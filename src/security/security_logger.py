"""
Security logging module.

This module provides specialized logging for security events
such as failed logins and access to pages outside a user's role.
"""

from flask import request, current_app
from datetime import datetime


class SecurityLogger:
    """
    Security event logger.

    Logs security-related events for monitoring and auditing.
    """

    @staticmethod
    def log_failed_login(username: str, reason: str = "Invalid credentials"):
        """
        Log a failed login attempt.

        Args:
            username: Username used in login attempt
            reason: Reason for failure
        """
        current_app.logger.warning(
            f"SECURITY: Failed login attempt - Username: {username}, "
            f"IP: {request.remote_addr}, Reason: {reason}, "
            f"Time: {datetime.utcnow().isoformat()}"
        )

    @staticmethod
    def log_successful_login(user_id: int, username: str):
        """
        Log a successful login.

        Args:
            user_id: User ID
            username: Username
        """
        current_app.logger.info(
            f"SECURITY: Successful login - User ID: {user_id}, "
            f"Username: {username}, IP: {request.remote_addr}, "
            f"Time: {datetime.utcnow().isoformat()}"
        )

    @staticmethod
    def log_csrf_violation(endpoint: str):
        """
        Log CSRF token violation.

        Args:
            endpoint: Endpoint where violation occurred
        """
        current_app.logger.warning(
            f"SECURITY: CSRF violation - Endpoint: {endpoint}, "
            f"IP: {request.remote_addr}, Time: {datetime.utcnow().isoformat()}"
        )

    @staticmethod
    def log_unauthorized_access(resource: str, user_id: int = None):
        """
        Log unauthorized access attempt.

        Args:
            resource: Resource that was accessed
            user_id: User ID if authenticated
        """
        user_info = f"User ID: {user_id}" if user_id else "Unauthenticated"
        current_app.logger.warning(
            f"SECURITY: Unauthorized access - {user_info}, "
            f"Resource: {resource}, IP: {request.remote_addr}, "
            f"Time: {datetime.utcnow().isoformat()}"
        )

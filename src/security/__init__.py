"""
Security module for the application.

This module provides:
- CSRF protection for form posts
- Security headers
- Security event logging
"""

from .csrf import csrf_protect, token_matches
from .security_headers import SecurityHeaders
from .security_logger import SecurityLogger
from .security_init import init_security

__all__ = [
    'token_matches',
    'csrf_protect',
    'SecurityHeaders',
    'SecurityLogger',
    'init_security',
]

"""
Form token checks for state-changing requests.

A random token is kept in the session and rendered into every form as the
``csrf_token`` field; a POST is only let through when it echoes that token
back (``X-CSRF-Token`` is accepted as well).
"""
import hmac
import secrets
from functools import wraps

from flask import request, session, current_app, render_template

from .security_logger import SecurityLogger

TOKEN_FIELD = 'csrf_token'
TOKEN_HEADER = 'X-CSRF-Token'

SAFE_METHODS = frozenset(['GET', 'HEAD', 'OPTIONS'])


def submitted_token() -> str:
    return request.headers.get(TOKEN_HEADER) or request.form.get(TOKEN_FIELD, '')


def token_matches(submitted: str, expected: str) -> bool:
    if not submitted or not expected:
        return False
    return hmac.compare_digest(submitted, expected)


def csrf_protect(view):
    """Reject a non-safe request whose form token does not match the session's."""
    @wraps(view)
    def checked_view(*args, **kwargs):
        if request.method in SAFE_METHODS or not current_app.config.get('CSRF_ENABLED', True):
            return view(*args, **kwargs)

        if not token_matches(submitted_token(), session.get(TOKEN_FIELD)):
            SecurityLogger.log_csrf_violation(request.path)
            return render_template(
                'access_denied.html',
                message='Invalid form token. Please refresh the page and try again.'
            ), 403

        return view(*args, **kwargs)

    return checked_view


def init_csrf(app):
    @app.before_request
    def ensure_session_token():
        if TOKEN_FIELD not in session:
            session[TOKEN_FIELD] = secrets.token_urlsafe(32)

    @app.context_processor
    def inject_csrf_token():
        return {TOKEN_FIELD: session.get(TOKEN_FIELD, '')}

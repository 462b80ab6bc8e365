from functools import wraps
from flask import redirect, url_for, flash, render_template, request
from flask_login import current_user

from src.auth.roles import Role
from src.security import SecurityLogger


def role_required(role: Role):
    """Decorator to require a logged-in user holding ``role``."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                flash('Please log in to access this page.', 'error')
                return redirect(url_for('auth.login'))
            if current_user.role is not role:
                SecurityLogger.log_unauthorized_access(request.path, current_user.id)
                return render_template('access_denied.html'), 403
            return f(*args, **kwargs)
        return decorated_function
    return decorator


admin_required = role_required(Role.ADMIN)
participant_required = role_required(Role.PARTICIPANT)

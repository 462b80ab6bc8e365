from flask import Blueprint

# Blueprint for login, registration and role-based landing
auth_bp = Blueprint("auth", __name__, cli_group=None)

# Import routes so that they are registered with the blueprint
from src.auth import routes  # noqa: E402,F401
from src.auth import cli  # noqa: E402,F401

from flask import Blueprint

participant_bp = Blueprint('participant', __name__, url_prefix='/participant')

from src.participant import routes  # noqa: E402,F401

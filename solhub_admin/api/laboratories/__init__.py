from flask import Blueprint

laboratories_bp = Blueprint("laboratories", __name__)

from . import routes  # noqa: E402,F401

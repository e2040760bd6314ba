from flask import Blueprint

modules_bp = Blueprint("modules", __name__)

from . import routes  # noqa: E402,F401

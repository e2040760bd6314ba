from flask import Blueprint

codes_bp = Blueprint("codes", __name__)

from . import routes  # noqa: E402,F401

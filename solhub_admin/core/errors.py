# solhub_admin/core/errors.py
import logging

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class APIError(Exception):
    error = "API Error"

    def __init__(self, message, status_code=400, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv["error"] = self.error
        rv["message"] = self.message
        return rv

    def __str__(self):
        return self.message


def handle_api_error(error):
    """Handle APIError exceptions"""
    if error.status_code >= 500:
        logger.error(f"API Error: {error}")
    else:
        logger.warning(f"API Error ({error.status_code}): {error}")
    response = jsonify(error.to_dict())
    response.status_code = error.status_code
    return response


def handle_not_found(error):
    logger.warning(f"404 Error: {request.url}")
    return (
        jsonify({"error": "Not Found", "message": f"The requested URL {request.path} was not found"}),
        404,
    )


def handle_http_exception(error):
    logger.warning(f"{error.code} Error: {request.method} {request.path}")
    return jsonify({"error": error.name, "message": error.description}), error.code


def handle_unexpected_error(error):
    logger.error(f"Unhandled Exception: {str(error)}", exc_info=True)
    return jsonify({"error": error.__class__.__name__, "message": str(error)}), 500


def register_error_handlers(app):
    """Register error handlers with the Flask app"""
    app.register_error_handler(APIError, handle_api_error)
    app.register_error_handler(404, handle_not_found)
    app.register_error_handler(HTTPException, handle_http_exception)
    app.register_error_handler(Exception, handle_unexpected_error)

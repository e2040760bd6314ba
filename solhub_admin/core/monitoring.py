# solhub_admin/core/monitoring.py

from flask import request, has_request_context
import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
from sentry_sdk.integrations.redis import RedisIntegration
from functools import wraps


def should_capture_error(exception):
    """Client errors (4xx) are expected; everything else goes to Sentry"""
    status_code = getattr(exception, "status_code", None) or getattr(exception, "code", None)
    if isinstance(status_code, int) and status_code < 500:
        return False
    return True


def _laboratory_tag():
    if not has_request_context() or not request.view_args:
        return None
    return request.view_args.get("lab_id")


def init_sentry(app):
    """Initialize Sentry with optimized settings for free tier"""
    if not app.config.get("SENTRY_DSN"):
        app.logger.warning("SENTRY_DSN not configured, skipping Sentry initialization")
        return

    def before_send(event, hint):
        """Process and filter events before sending to Sentry"""
        exc_info = hint.get("exc_info")
        if exc_info and not should_capture_error(exc_info[1]):
            return None

        laboratory_id = _laboratory_tag()
        if laboratory_id:
            event.setdefault("tags", {})
            event["tags"]["laboratory_id"] = laboratory_id

        # Only include essential request info
        if has_request_context():
            event.setdefault("request", {})
            event["request"]["url"] = request.url
            event["request"]["method"] = request.method

        return event

    sentry_sdk.init(
        dsn=app.config["SENTRY_DSN"],
        integrations=[
            FlaskIntegration(transaction_style="url"),
            SqlalchemyIntegration(),
            RedisIntegration(),
        ],
        before_send=before_send,
        traces_sample_rate=0.01,  # Only sample 1% of transactions
        profiles_sample_rate=0.0,
        environment=app.config.get("FLASK_ENV", "production"),
        max_breadcrumbs=20,
        send_default_pii=False,
    )


def capture_error(func):
    """Selective error capturing decorator"""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if should_capture_error(e):
                tags = {}
                laboratory_id = _laboratory_tag()
                if laboratory_id:
                    tags["laboratory_id"] = laboratory_id
                sentry_sdk.capture_exception(e, tags=tags)
            raise

    return wrapper

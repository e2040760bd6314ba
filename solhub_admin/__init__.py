# solhub_admin/__init__.py
import logging

from flask import Flask, jsonify, request
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import config_by_name
from .extensions import init_extensions, jwt
from .core.errors import register_error_handlers
from .core.security import register_jwt_callbacks
from .core.security.sanitization import init_request_checks
from .core.security.security_headers import init_security_headers
from .core.monitoring import init_sentry
from .api.auth import auth_bp
from .api.laboratories import laboratories_bp
from .api.features import features_bp
from .api.modules import modules_bp
from .api.codes import codes_bp
from .api.users import users_bp
from .api.dashboard import dashboard_bp
from .api.health import health_bp
from .commands import register_commands

logger = logging.getLogger(__name__)


def create_app(config_name="development"):
    app = Flask(__name__)

    # Load config
    app.config.from_object(config_by_name[config_name])

    # Audit IPs and rate-limit keys must see the real client address
    if app.config.get("BEHIND_PROXY"):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1, x_prefix=1)

    init_extensions(app)
    register_jwt_callbacks(jwt)
    register_error_handlers(app)
    init_security_headers(app)
    init_request_checks(app, exempt_paths=[r"/api/health"])
    init_sentry(app)

    @app.route("/")
    def root():
        return jsonify({"service": "Solhub Admin API", "version": "1.0.0", "status": "running"})

    # Request logging; bodies may carry passwords and are not logged
    @app.before_request
    def log_request_info():
        logger.info(f"{request.method} {request.path}")

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(laboratories_bp, url_prefix="/api/laboratories")
    app.register_blueprint(features_bp, url_prefix="/api/features")
    app.register_blueprint(modules_bp, url_prefix="/api/modules")
    app.register_blueprint(codes_bp, url_prefix="/api/codes")
    app.register_blueprint(users_bp, url_prefix="/api/users")
    app.register_blueprint(dashboard_bp, url_prefix="/api/dashboard")
    app.register_blueprint(health_bp, url_prefix="/api")

    register_commands(app)

    logger.debug("Registered routes:")
    for rule in app.url_map.iter_rules():
        logger.debug(f"{rule.endpoint}: {sorted(rule.methods)} {rule.rule}")

    return app

from flask import current_app


class SecurityHeaders:
    """Middleware to add security headers to all responses"""

    @staticmethod
    def init_app(app):
        """Initialize security headers for the application"""

        @app.after_request
        def add_security_headers(response):
            # Protect against clickjacking attacks
            response.headers["X-Frame-Options"] = "DENY"

            response.headers["X-Content-Type-Options"] = "nosniff"

            # Strict Transport Security (only in production)
            if not current_app.debug and not current_app.testing:
                response.headers["Strict-Transport-Security"] = (
                    "max-age=31536000; includeSubDomains"
                )

            # JSON API; nothing here should ever be rendered as a page
            response.headers["Content-Security-Policy"] = (
                "default-src 'none'; frame-ancestors 'none'"
            )

            response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

            # Admin responses carry tenant configuration
            if _is_api_response(response):
                response.headers.setdefault("Cache-Control", "no-store")

            return response


def _is_api_response(response):
    return response.mimetype in ("application/json", "text/event-stream")


def init_security_headers(app):
    """Initialize security headers for the application"""
    SecurityHeaders.init_app(app)

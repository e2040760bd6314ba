# solhub_admin/core/security/sanitization.py
from flask import request, abort
import bleach
import html
import re
from typing import Any, Optional, List


class RequestSanitizer:
    def __init__(self, max_content_length: int = 2 * 1024 * 1024):
        self.max_content_length = max_content_length
        self.allowed_content_types = {
            'application/json',
            'application/x-www-form-urlencoded',
            'text/plain'
        }
        # Dashboard payloads are plain text; no markup survives
        self.allowed_tags = frozenset()

    def sanitize_string(self, value: str) -> str:
        """Sanitize a single string value."""
        if not isinstance(value, str):
            return str(value)
        value = value.replace('\x00', '')
        value = ''.join(char for char in value if char >= ' ' or char in '\n\t')
        # bleach escapes bare ampersands, which would corrupt URLs and names
        return html.unescape(bleach.clean(value, tags=self.allowed_tags, strip=True))

    def sanitize(self, obj: Any) -> Any:
        if isinstance(obj, str):
            return self.sanitize_string(obj)
        elif isinstance(obj, dict):
            return {k: self.sanitize(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self.sanitize(item) for item in obj]
        return obj

    def validate_content_type(self, content_type: str) -> bool:
        """Validate that the content type is allowed."""
        if not content_type:
            return True
        base_content_type = content_type.split(';')[0].strip().lower()
        return base_content_type in self.allowed_content_types

    def validate_content_length(self, content_length: int) -> bool:
        """Validate that the content length is within limits."""
        if not content_length:
            return True
        return content_length <= self.max_content_length


sanitizer = RequestSanitizer()


def init_request_checks(app, exempt_paths: Optional[List[str]] = None):
    """Reject oversized or non-JSON write requests before they reach a view"""
    checker = RequestSanitizer(app.config.get("MAX_CONTENT_LENGTH") or sanitizer.max_content_length)
    exempt = [re.compile(path) for path in (exempt_paths or [])]

    @app.before_request
    def check_api_request():
        if not request.path.startswith("/api/"):
            return None
        if any(pattern.match(request.path) for pattern in exempt):
            return None
        if request.method not in ('POST', 'PUT', 'PATCH'):
            return None

        if not checker.validate_content_length(request.content_length or 0):
            abort(413, description="Request entity too large")

        content_type = request.headers.get('Content-Type', '')
        if not checker.validate_content_type(content_type):
            abort(415, description=f"Unsupported content type: {content_type}")

        return None

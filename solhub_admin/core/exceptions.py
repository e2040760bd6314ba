from .errors import APIError


class ValidationFailed(APIError):
    """Raised when a payload is missing required data or is malformed"""

    error = "Validation Error"

    def __init__(self, message="Invalid request data", status_code=400, payload=None):
        super().__init__(message, status_code, payload)


class InvalidCredentials(APIError):
    """Raised when email/password or access code do not match"""

    error = "Invalid Credentials"

    def __init__(self, message="Invalid email or password", status_code=401):
        super().__init__(message, status_code)


class PermissionDenied(APIError):
    """Raised when the caller is authenticated but not a dashboard admin"""

    error = "Permission Denied"

    def __init__(self, message="Permission denied", status_code=403):
        super().__init__(message, status_code)


class NotFoundError(APIError):
    """Raised when the target row does not exist (or vanished)"""

    error = "Not Found"

    def __init__(self, message="Resource not found", status_code=404):
        super().__init__(message, status_code)


class LaboratoryNotFoundError(NotFoundError):
    def __init__(self, message="Laboratory not found"):
        super().__init__(message)


class FeatureNotFoundError(NotFoundError):
    def __init__(self, message="Feature not found"):
        super().__init__(message)


class ModuleCatalogNotFoundError(NotFoundError):
    def __init__(self, message="Module not found"):
        super().__init__(message)


class CodeNotFoundError(NotFoundError):
    def __init__(self, message="Access code not found"):
        super().__init__(message)


class ProfileNotFoundError(NotFoundError):
    def __init__(self, message="User not found"):
        super().__init__(message)


class BackendError(APIError):
    """Raised when the database fails; the message is surfaced verbatim"""

    error = "Backend Error"

    def __init__(self, message="Database error", status_code=500):
        super().__init__(message, status_code)

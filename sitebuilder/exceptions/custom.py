from typing import Any, Optional


class AppError(Exception):
    """Error raised at the point of detection and rendered by the app handlers."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.details = details
        super().__init__(message)


class ValidationFailed(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"

    def __init__(self, errors: list[dict[str, Any]], message: str = "Validation failed"):
        super().__init__(message, details={"errors": errors})
        self.errors = errors


class DomainRuleError(AppError):
    """A lifecycle rule was violated; `code` names the rule."""

    status_code = 400

    def __init__(self, message: str, code: str):
        super().__init__(message, code=code)


class AuthenticationError(AppError):
    status_code = 401
    code = "AUTH_FAILED"


class PermissionDenied(AppError):
    status_code = 403
    code = "ACCESS_DENIED"

    def __init__(self, message: str = "Access denied", code: Optional[str] = None):
        super().__init__(message, code=code)


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, message: str = "Resource not found", code: Optional[str] = None):
        super().__init__(message, code=code)


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"

    def __init__(self, message: str, code: Optional[str] = None, details=None):
        super().__init__(message, code=code, details=details)

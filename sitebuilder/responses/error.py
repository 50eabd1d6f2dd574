from typing import Optional

from .base import build_response


def error_response(
    status_code: int, message: str, code: str, details: Optional[dict] = None
):
    return build_response(
        status_code,
        "error",
        message=message,
        code=code,
        details=details,
    )

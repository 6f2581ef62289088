from typing import Any, Dict, Optional
from fastapi import status


class BaseAPIException(Exception):
    """
    Parent class for every custom error raised by the portal.
    Keeps the error envelope returned to the dashboard uniform.
    """
    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

# =========================================================
# 1. COMMON ERRORS
# =========================================================

class ValidationException(BaseAPIException):
    """400: missing or malformed input"""
    def __init__(self, message: str = "Validation failed", details: dict = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )

class NotFoundException(BaseAPIException):
    """404: resource not found"""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND
        )

# =========================================================
# 2. RECORDS DOMAIN ERRORS
# =========================================================

class ConflictException(BaseAPIException):
    """
    400: a result already exists for the same student and exam
    (and subject, when one is given).
    """
    def __init__(self, message: str, details: dict = None):
        super().__init__(
            message=message,
            code="DUPLICATE_RESULT",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )

class StoreError(BaseAPIException):
    """
    500: unexpected persistence failure. Not retried.
    """
    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="STORE_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

"""
Base services module for the student transport fee service.

Provides the foundational service layer components:
- Base service class with shared logging and transaction handling
- ServiceResult success/failure pattern with error codes
"""

from app.services.base.service_result import (
    ServiceResult,
    ServiceError,
    ErrorCode,
    ErrorSeverity,
    HTTP_STATUS_BY_CODE,
)

from app.services.base.base_service import BaseService


__all__ = [
    # Service Result Types
    "ServiceResult",
    "ServiceError",
    "ErrorCode",
    "ErrorSeverity",
    "HTTP_STATUS_BY_CODE",

    # Base Classes
    "BaseService",
]

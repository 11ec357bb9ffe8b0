"""
Custom Exceptions for the Student Transport Fee Application

This module defines custom exception classes used throughout the application
for better error handling and debugging.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    INVALID_FORMAT = "INVALID_FORMAT"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"

    # Transport fee errors
    STUDENT_NOT_FOUND = "STUDENT_NOT_FOUND"
    FEE_SCHEDULE_NOT_FOUND = "FEE_SCHEDULE_NOT_FOUND"
    PAYMENT_NOT_FOUND = "PAYMENT_NOT_FOUND"
    PAYMENT_NOT_ELIGIBLE = "PAYMENT_NOT_ELIGIBLE"
    PAYMENT_INVALID_STATE = "PAYMENT_INVALID_STATE"
    INVALID_AMOUNT = "INVALID_AMOUNT"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# General Application Exceptions
# ========================================

class MissingParameterError(BaseAppException):
    """Exception raised when a required request field is absent"""

    def __init__(
        self,
        message: str = "Required parameter is missing",
        fields: Optional[List[str]] = None
    ):
        details = {"fields": fields} if fields else {}
        super().__init__(message, ErrorCode.MISSING_REQUIRED_FIELD, details, 400)


class InvalidPaymentRequestError(BaseAppException):
    """Exception raised when a payment request field has an unsupported value"""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details, 400)


class InvalidAcademicYearError(BaseAppException):
    """Exception raised when an academic year string cannot be parsed"""

    def __init__(self, academic_year: str):
        super().__init__(
            f"Invalid academic year: {academic_year!r}",
            ErrorCode.INVALID_FORMAT,
            {"academic_year": academic_year},
            400
        )


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, error_code, details, 404)


# ========================================
# Transport Fee Exceptions
# ========================================

class StudentOrRouteNotFoundError(ResourceNotFoundError):
    """Exception raised when a student or their route/boarding stop is missing"""

    def __init__(self, student_id: Optional[str] = None, message: Optional[str] = None):
        super().__init__(
            "Student",
            student_id,
            message=message or "Student not found",
            error_code=ErrorCode.STUDENT_NOT_FOUND
        )


class FeeScheduleNotFoundError(ResourceNotFoundError):
    """Exception raised when no active fee rows exist for a route stop"""

    def __init__(
        self,
        route_id: Optional[str] = None,
        stop_name: Optional[str] = None,
        academic_year: Optional[str] = None,
        message: Optional[str] = None
    ):
        super().__init__(
            "Fee structure",
            message=message or "Fee structure not found",
            error_code=ErrorCode.FEE_SCHEDULE_NOT_FOUND
        )
        self.details.update({
            "route_id": route_id,
            "stop_name": stop_name,
            "academic_year": academic_year
        })


class PaymentNotFoundError(ResourceNotFoundError):
    """Exception raised when a semester payment does not exist"""

    def __init__(self, payment_id: Optional[str] = None):
        super().__init__(
            "Payment",
            payment_id,
            message="Payment not found",
            error_code=ErrorCode.PAYMENT_NOT_FOUND
        )


class PaymentNotEligibleError(BaseAppException):
    """Exception raised when existing payments block a new payment"""

    def __init__(self, reason: str, payment_type: Optional[str] = None, term_number: Optional[str] = None):
        details = {
            "payment_type": payment_type,
            "term_number": term_number
        }
        super().__init__(reason, ErrorCode.PAYMENT_NOT_ELIGIBLE, details, 409)


class PaymentStateError(BaseAppException):
    """Exception raised when a payment is not in a processable state"""

    def __init__(self, payment_id: str, current_status: str):
        super().__init__(
            f"Payment is already {current_status}",
            ErrorCode.PAYMENT_INVALID_STATE,
            {"payment_id": payment_id, "status": current_status},
            409
        )


class InvalidAmountError(BaseAppException):
    """Exception raised when a computed fee amount is not positive"""

    def __init__(self, amount: Any = None):
        super().__init__(
            "Invalid fee amount",
            ErrorCode.INVALID_AMOUNT,
            {"amount": str(amount) if amount is not None else None},
            400
        )


# ========================================
# Database Exceptions
# ========================================

class RepositoryError(BaseAppException):
    """Exception raised when a repository operation fails"""

    def __init__(self, message: str = "Repository operation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.DATABASE_ERROR, details, 500)


class EntityNotFoundError(RepositoryError):
    """Exception raised when a repository lookup by id finds nothing"""

    def __init__(self, message: str = "Entity not found"):
        super().__init__(message)
        self.error_code = ErrorCode.RESOURCE_NOT_FOUND
        self.status_code = 404


class EntityAlreadyExistsError(RepositoryError):
    """Exception raised when an insert violates a unique constraint"""

    def __init__(self, message: str = "Entity already exists"):
        super().__init__(message)
        self.error_code = ErrorCode.DUPLICATE_ENTRY
        self.status_code = 409


# Export all exception classes
__all__ = [
    # Enums
    'ErrorCode',

    # Base exceptions
    'BaseAppException',

    # General exceptions
    'MissingParameterError',
    'InvalidPaymentRequestError',
    'InvalidAcademicYearError',
    'ResourceNotFoundError',

    # Transport fee exceptions
    'StudentOrRouteNotFoundError',
    'FeeScheduleNotFoundError',
    'PaymentNotFoundError',
    'PaymentNotEligibleError',
    'PaymentStateError',
    'InvalidAmountError',

    # Database exceptions
    'RepositoryError',
    'EntityNotFoundError',
    'EntityAlreadyExistsError',
]

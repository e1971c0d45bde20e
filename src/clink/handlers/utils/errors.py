"""
Error taxonomy and error response helpers for the Clink handlers.

Every failure a handler can report is a ``BaseServiceError`` subclass, so callers
branch on the error type (or ``error_code``) instead of matching message text.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from aws_lambda_powertools.metrics import MetricUnit

from clink.handlers.utils.observability import logger, metrics, tracer


class ErrorSeverity(str, Enum):
    """Error severity levels for classification."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    VALIDATION = "VALIDATION"
    SECURITY = "SECURITY"
    BUSINESS_LOGIC = "BUSINESS_LOGIC"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE"
    INFRASTRUCTURE = "INFRASTRUCTURE"


class BaseServiceError(Exception):
    """Base exception class for service errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.BUSINESS_LOGIC,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.category = category
        self.user_message = user_message or message
        self.error_id = str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "error_id": self.error_id,
            "error_code": self.error_code,
            "message": self.message,
            "user_message": self.user_message,
            "severity": self.severity.value,
            "category": self.category.value,
        }


class ValidationError(BaseServiceError):
    """Raised when request input is missing or malformed."""

    def __init__(self, message: str, field_errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.VALIDATION,
        )
        self.field_errors = field_errors or []


class AuthenticationError(BaseServiceError):
    """Raised when a protected operation is called without a caller identity."""

    def __init__(self, message: str = "User must be authenticated"):
        super().__init__(
            message=message,
            error_code="UNAUTHENTICATED",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.SECURITY,
        )


class ResourceNotFoundError(BaseServiceError):
    """Raised when a referenced record does not exist."""

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            message=f"{resource_type} '{resource_id}' not found",
            error_code="RESOURCE_NOT_FOUND",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.BUSINESS_LOGIC,
            user_message=f"{resource_type} not found",
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ExternalServiceError(BaseServiceError):
    """Raised when a collaborator call fails."""

    def __init__(self, message: str, service_name: str):
        super().__init__(
            message=message,
            error_code="EXTERNAL_SERVICE_ERROR",
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.EXTERNAL_SERVICE,
            user_message="A required service is temporarily unavailable. Please try again later.",
        )
        self.service_name = service_name

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "service_name": self.service_name}


class DataIntegrityError(BaseServiceError):
    """Raised when a stored document does not match the shape the handlers expect."""

    def __init__(self, collection: str, document_id: str, field_errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(
            message=f"Stored {collection} document '{document_id}' is malformed",
            error_code="DATA_INTEGRITY_ERROR",
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.INFRASTRUCTURE,
            user_message="An internal error occurred. Please try again later.",
        )
        self.collection = collection
        self.document_id = document_id
        self.field_errors = field_errors or []

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "collection": self.collection, "field_errors": self.field_errors}


_STATUS_CODES = {
    "VALIDATION_ERROR": 400,
    "UNAUTHENTICATED": 401,
    "RESOURCE_NOT_FOUND": 404,
    "EXTERNAL_SERVICE_ERROR": 502,
    "DATA_INTEGRITY_ERROR": 500,
}


def get_http_status_code(error: BaseServiceError) -> int:
    """Get appropriate HTTP status code for error."""
    return _STATUS_CODES.get(error.error_code, 500)


def format_error_response(error: BaseServiceError) -> Dict[str, Any]:
    """Format error for API response."""
    response = {
        "error": {
            "code": error.error_code,
            "message": error.user_message,
            "error_id": error.error_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    }

    if isinstance(error, ValidationError) and error.field_errors:
        response["error"]["field_errors"] = error.field_errors

    return response


@tracer.capture_method
def log_error_metrics(error: BaseServiceError) -> None:
    """Log error metrics for monitoring and alerting."""
    metrics.add_metric(name="ErrorCount", unit=MetricUnit.Count, value=1)
    metrics.add_metric(name=f"Error{error.category.value}Count", unit=MetricUnit.Count, value=1)

    tracer.put_annotation("error_code", error.error_code)
    tracer.put_metadata("error_details", error.to_dict())

    log = logger.error if error.severity in (ErrorSeverity.HIGH, ErrorSeverity.CRITICAL) else logger.warning
    details = error.to_dict()
    # "message" is a reserved LogRecord attribute
    details["error_message"] = details.pop("message")
    log("Service error occurred", extra=details)

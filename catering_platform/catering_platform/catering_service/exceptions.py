"""
Domain errors raised by the service and repository layers.

Each error kind is its own class carrying a machine-readable ``error_code``
and a structured ``context``. The HTTP boundary maps kinds to status codes
in ``error_handlers``.
"""
from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for all domain errors."""

    error_code = "DOMAIN_ERROR"
    error_type = "internal_error"
    status_code = 500

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "error_type": self.error_type,
            "error_code": self.error_code,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code}')"


class ResourceNotFoundError(DomainError):
    error_code = "RESOURCE_NOT_FOUND"
    error_type = "resource_not_found"
    status_code = 404

    def __init__(self, resource_type: str, identifier: Any):
        super().__init__(
            f"{resource_type} with identifier '{identifier}' not found",
            {"resource_type": resource_type, "identifier": identifier},
        )


class BusinessRuleError(DomainError):
    """Client-side violations that map to 400."""

    error_type = "business_rule_violation"
    status_code = 400


class DuplicateResourceError(BusinessRuleError):
    error_code = "DUPLICATE_RESOURCE"

    def __init__(self, resource_type: str, field: str, value: Any):
        super().__init__(
            f"{resource_type} with {field} '{value}' already exists",
            {"resource_type": resource_type, "field": field, "value": value},
        )


class ResourceInUseError(BusinessRuleError):
    error_code = "RESOURCE_IN_USE"

    def __init__(self, resource_type: str, identifier: Any, used_by: str):
        super().__init__(
            f"This {resource_type} cannot be deleted because it is currently in use by related {used_by}.",
            {"resource_type": resource_type, "resource_id": identifier, "used_by": used_by},
        )


class InvalidOperationError(BusinessRuleError):
    error_code = "INVALID_OPERATION"

    def __init__(self, operation: str, reason: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            f"Cannot {operation}: {reason}",
            {"operation": operation, "reason": reason, **(context or {})},
        )


class BusinessRuleViolationError(BusinessRuleError):
    error_code = "BUSINESS_RULE_VIOLATION"

    def __init__(self, rule: str, reason: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            f"Business rule '{rule}' violated: {reason}",
            {"rule": rule, "reason": reason, **(context or {})},
        )


class DatabaseError(DomainError):
    error_code = "DATABASE_ERROR"

    def __init__(
        self,
        operation: str,
        table: str,
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"Database operation failed: {operation} on {table}"
        if details:
            message += f" - {details}"
        super().__init__(
            message,
            {"operation": operation, "table": table, "details": details, **(context or {})},
        )


class ExternalServiceError(DomainError):
    error_code = "EXTERNAL_SERVICE_ERROR"

    def __init__(
        self,
        service: str,
        operation: str,
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"External service '{service}' failed during '{operation}'"
        if reason:
            message += f": {reason}"
        super().__init__(
            message,
            {"service": service, "operation": operation, "reason": reason, **(context or {})},
        )


class ValidationError(DomainError):
    """Field-level validation failure; ``field_errors`` maps field name to message."""

    error_code = "VALIDATION_ERROR"
    error_type = "validation_error"
    status_code = 400

    def __init__(self, field_errors: Dict[str, str], message: str = "Validation failed"):
        self.field_errors = field_errors
        super().__init__(message, {"field_errors": field_errors})

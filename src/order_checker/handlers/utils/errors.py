"""
Error types for the order checker service.

All service errors share ``BaseServiceError`` so they can be logged and
classified the same way. ``OrderCheckError`` subclasses additionally carry the
``FailureKind`` the checker reports when it gives up on an order.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from order_checker.models.output import FailureKind


class ErrorSeverity(str, Enum):
    """Error severity levels for classification."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    VALIDATION = "VALIDATION"
    BUSINESS_LOGIC = "BUSINESS_LOGIC"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE"
    INFRASTRUCTURE = "INFRASTRUCTURE"


class ErrorContext(BaseModel):
    """Context information for errors."""

    request_id: str = Field(description="Unique request identifier")
    operation: str = Field(description="Operation being performed")
    resource_id: Optional[str] = Field(default=None, description="Resource identifier")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    additional_data: Dict[str, Any] = Field(default_factory=dict)


class BaseServiceError(Exception):
    """Base exception class for service errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.BUSINESS_LOGIC,
        context: Optional[ErrorContext] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.category = category
        self.context = context
        self.user_message = user_message or "An error occurred while processing your request."
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
            "context": self.context.model_dump(mode="json") if self.context else None,
        }


class CatalogStoreError(BaseServiceError):
    """Raised when a catalog store read or write fails."""

    def __init__(
        self,
        message: str,
        operation: str,
        table_name: str,
        error_code: str = "CATALOG_STORE_ERROR",
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.INFRASTRUCTURE,
            context=context,
            user_message="A database error occurred. Please try again later.",
        )
        self.operation = operation
        self.table_name = table_name


class OrderCheckError(BaseServiceError):
    """Base class for errors that end an order check in the failed state."""

    kind: FailureKind
    error_code_name = "ORDER_CHECK_FAILED"
    category_value = ErrorCategory.INFRASTRUCTURE

    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(
            message=message,
            error_code=self.error_code_name,
            severity=ErrorSeverity.HIGH,
            category=self.category_value,
            context=context,
            user_message=self.kind.response_message,
        )


class LookupFailedError(OrderCheckError):
    """A meal or ingredient record could not be read. Raised before any write."""

    kind = FailureKind.LOOKUP_FAILED
    error_code_name = "LOOKUP_FAILED"


class MealNotFoundError(LookupFailedError):
    """Raised when an ordered meal has no record in the Meals table."""

    error_code_name = "MEAL_NOT_FOUND"
    category_value = ErrorCategory.BUSINESS_LOGIC

    def __init__(self, meal_name: str, context: Optional[ErrorContext] = None):
        super().__init__(f"Meal '{meal_name}' not found", context=context)
        self.meal_name = meal_name


class IngredientNotFoundError(LookupFailedError):
    """Raised when a required ingredient has no record in the Ingredients table."""

    error_code_name = "INGREDIENT_NOT_FOUND"
    category_value = ErrorCategory.BUSINESS_LOGIC

    def __init__(self, ingredient_name: str, context: Optional[ErrorContext] = None):
        super().__init__(f"Ingredient '{ingredient_name}' not found", context=context)
        self.ingredient_name = ingredient_name


class MenuUpdateFailedError(OrderCheckError):
    """The menu updater rejected the unavailable meals. The order is already stored."""

    kind = FailureKind.MENU_UPDATE_FAILED
    error_code_name = "MENU_UPDATE_FAILED"
    category_value = ErrorCategory.EXTERNAL_SERVICE


class PersistFailedError(OrderCheckError):
    """A write to Orders or Ingredients failed. Earlier writes are not rolled back."""

    error_code_name = "PERSIST_FAILED"

    def __init__(self, message: str, kind: FailureKind, context: Optional[ErrorContext] = None):
        self.kind = kind
        super().__init__(message, context=context)


def create_error_context(
    request_id: str,
    operation: str,
    resource_id: Optional[str] = None,
    **additional_data: Any,
) -> ErrorContext:
    """
    Create error context for consistent error tracking.

    Args:
        request_id: Unique request identifier
        operation: Operation being performed
        resource_id: Resource identifier if applicable
        **additional_data: Additional context data

    Returns:
        ErrorContext instance
    """
    return ErrorContext(
        request_id=request_id,
        operation=operation,
        resource_id=resource_id,
        additional_data=additional_data,
    )

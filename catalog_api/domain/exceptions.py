"""Domain exceptions.

All catalog-level errors that represent rejected queries, rejected
payloads, or business rule violations. Every error carries a
machine-readable ``error_code`` so the API layer can render it
without inspecting the message.
"""

from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation failure."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary."""
        return {"field": self.field, "message": self.message}


class CatalogError(Exception):
    """Base class for all catalog exceptions.

    All catalog errors should inherit from this class to allow
    catching them at the API layer.
    """

    error_code: ClassVar[str] = "CATALOG_ERROR"

    def __init__(
        self,
        message: str,
        details: list[FieldError] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional field-level details.
            context: Optional dictionary with additional error context for logs.
        """
        super().__init__(message)
        self.message = message
        self.details = details or []
        self.context = context or {}


# ============================================================================
# Caller Errors
# ============================================================================


class InvalidQueryError(CatalogError):
    """Raised when pagination or sort parameters are out of range."""

    error_code = "INVALID_QUERY"

    def __init__(self, parameter: str, reason: str) -> None:
        """Initialize invalid query error.

        Args:
            parameter: Name of the offending query parameter.
            reason: Explanation of why the value is rejected.
        """
        super().__init__(
            reason,
            details=[FieldError(parameter, reason)],
            context={"parameter": parameter},
        )


class ValidationFailedError(CatalogError):
    """Raised when a mutation payload fails structural or business validation."""

    error_code = "VALIDATION_FAILED"

    def __init__(self, errors: list[FieldError]) -> None:
        """Initialize validation error.

        Args:
            errors: Field errors, in the order they were detected.
        """
        super().__init__("Validation failed", details=list(errors))

    @property
    def fields(self) -> list[str]:
        """Names of the fields that failed."""
        return [error.field for error in self.details]


# ============================================================================
# Access Errors
# ============================================================================


class UnauthenticatedError(CatalogError):
    """Raised when a credential is missing, malformed, expired or forged."""

    error_code = "UNAUTHORIZED"

    def __init__(self, message: str, error_code: str | None = None) -> None:
        """Initialize unauthenticated error.

        Args:
            message: Human-readable error message.
            error_code: Optional override of the default error code.
        """
        super().__init__(message)
        if error_code:
            self.error_code = error_code


class ForbiddenError(CatalogError):
    """Raised when an authenticated principal lacks the required role.

    The message never mentions the target product, so a rejected
    caller learns nothing about which ids exist.
    """

    error_code = "FORBIDDEN"

    def __init__(self, action: str) -> None:
        """Initialize forbidden error.

        Args:
            action: The attempted operation (e.g. "create").
        """
        super().__init__(
            "Admin privileges required",
            context={"action": action},
        )


# ============================================================================
# Product Errors
# ============================================================================


class ProductNotFoundError(CatalogError):
    """Raised when a mutation or lookup targets an unknown product id."""

    error_code = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: int) -> None:
        """Initialize product not found error.

        Args:
            product_id: The missing product id.
        """
        super().__init__(
            f"Product not found: {product_id}",
            context={"product_id": product_id},
        )
        self.product_id = product_id


class InvalidStateTransitionError(CatalogError):
    """Raised when a status change is not allowed from the current status."""

    error_code = "INVALID_STATE_TRANSITION"

    def __init__(self, product_id: int, current_status: str, target_status: str) -> None:
        """Initialize invalid state transition error.

        Args:
            product_id: ID of the product.
            current_status: Current status of the product.
            target_status: Attempted target status.
        """
        super().__init__(
            f"Cannot change product {product_id} from '{current_status}' to '{target_status}'",
            details=[FieldError("status", f"Cannot change status from {current_status} to {target_status}")],
            context={
                "product_id": product_id,
                "current_status": current_status,
                "target_status": target_status,
            },
        )

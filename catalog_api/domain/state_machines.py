"""Product status state machine.

A product is either ACTIVE or DISCONTINUED. Discontinuing is one-way:
once a product is DISCONTINUED it cannot be made ACTIVE again.
"""

from enum import Enum

from catalog_api.domain.exceptions import InvalidStateTransitionError


class ProductStatus(str, Enum):
    """Product lifecycle states.

    State diagram:
        ACTIVE ──── discontinue ────► DISCONTINUED
    """

    ACTIVE = "ACTIVE"
    DISCONTINUED = "DISCONTINUED"

    def can_transition_to(self, target: "ProductStatus") -> bool:
        """Check if transition to target state is valid.

        Staying in the same state is always allowed.

        Args:
            target: Target state to transition to.

        Returns:
            True if transition is valid.
        """
        return target == self or target in _PRODUCT_TRANSITIONS.get(self, set())

    def allowed_transitions(self) -> list["ProductStatus"]:
        """Get list of valid target states (excluding staying put)."""
        return sorted(_PRODUCT_TRANSITIONS.get(self, set()), key=lambda s: s.value)

    def is_terminal(self) -> bool:
        """Check if no further transitions are possible."""
        return len(_PRODUCT_TRANSITIONS.get(self, set())) == 0

    @classmethod
    def parse(cls, value: "str | ProductStatus") -> "ProductStatus":
        """Parse a status name, ignoring case and surrounding whitespace.

        Raises:
            ValueError: If the value names no status.
        """
        if isinstance(value, ProductStatus):
            return value
        return cls(value.strip().upper())


_PRODUCT_TRANSITIONS: dict[ProductStatus, set[ProductStatus]] = {
    ProductStatus.ACTIVE: {ProductStatus.DISCONTINUED},
    ProductStatus.DISCONTINUED: set(),  # Terminal state
}


def validate_status_transition(
    product_id: int,
    current: ProductStatus,
    target: ProductStatus,
) -> None:
    """Validate a product status transition.

    Args:
        product_id: ID of the product being changed.
        current: Current status.
        target: Requested status.

    Raises:
        InvalidStateTransitionError: If the transition is not allowed.
    """
    if not current.can_transition_to(target):
        raise InvalidStateTransitionError(product_id, current.value, target.value)

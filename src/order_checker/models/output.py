"""
Output models for order check results.

The checker reports its outcome as a tagged result: accepted, rejected with
the unavailable meals, or failed with the kind of failure. The response body
strings are kept exactly as existing clients match them.
"""

from enum import Enum
from typing import Annotated, List, Optional

from pydantic import BaseModel, Field


class OrderOutcome(str, Enum):
    """Terminal state of an order check."""

    ACCEPTED = 'accepted'
    REJECTED = 'rejected'
    FAILED = 'failed'


class FailureKind(str, Enum):
    """Reason an order check could not reach a decision."""

    LOOKUP_FAILED = 'lookup_failed'
    MENU_UPDATE_FAILED = 'menu_update_failed'
    ORDER_PERSIST_FAILED = 'order_persist_failed'
    INVENTORY_PERSIST_FAILED = 'inventory_persist_failed'

    @property
    def response_message(self) -> str:
        return _FAILURE_MESSAGES[self]


_FAILURE_MESSAGES = {
    FailureKind.LOOKUP_FAILED: 'Unable to retrieve ingredient counts from table',
    FailureKind.MENU_UPDATE_FAILED: 'Unable to update menu',
    FailureKind.ORDER_PERSIST_FAILED: 'Unable to update orderAccepted in Table',
    FailureKind.INVENTORY_PERSIST_FAILED: 'Unable to update ingredient counts in Table',
}


class OrderCheckResult(BaseModel):
    """Result of checking one order against ingredient inventory."""

    order_id: Annotated[str, Field(
        description='Identifier of the checked order',
        examples=['o1']
    )]

    outcome: Annotated[OrderOutcome, Field(
        description='Terminal state of the check'
    )]

    unavailable_meals: Annotated[List[str], Field(
        default_factory=list,
        description='Ordered meals that need a missing ingredient (rejected only)',
        examples=[['burger']]
    )]

    missing_ingredients: Annotated[List[str], Field(
        default_factory=list,
        description='One entry per unmet ingredient demand (rejected only)',
        examples=[['patty']]
    )]

    failure: Annotated[Optional[FailureKind], Field(
        description='Failure kind (failed only)'
    )] = None

    @classmethod
    def accepted(cls, order_id: str) -> 'OrderCheckResult':
        return cls(order_id=order_id, outcome=OrderOutcome.ACCEPTED)

    @classmethod
    def rejected(cls, order_id: str, unavailable_meals: List[str], missing_ingredients: List[str]) -> 'OrderCheckResult':
        return cls(
            order_id=order_id,
            outcome=OrderOutcome.REJECTED,
            unavailable_meals=unavailable_meals,
            missing_ingredients=missing_ingredients,
        )

    @classmethod
    def failed(cls, order_id: str, failure: FailureKind) -> 'OrderCheckResult':
        return cls(order_id=order_id, outcome=OrderOutcome.FAILED, failure=failure)

    @property
    def response_body(self) -> str:
        """Body string returned to API callers."""
        if self.outcome == OrderOutcome.ACCEPTED:
            return 'true'
        if self.outcome == OrderOutcome.REJECTED:
            return 'false'
        return self.failure.response_message

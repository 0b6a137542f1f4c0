"""Error taxonomy for the ordering context.

Field-level validation failures use Protean's ``ValidationError`` directly;
the classes here cover the conditions callers need to tell apart.
"""

from protean.exceptions import ValidationError


class InvalidTransition(ValidationError):
    """A status change that the order lifecycle does not allow."""

    def __init__(self, order_id, current, requested):
        self.order_id = str(order_id)
        self.current = current
        self.requested = requested
        super().__init__(
            {"status": [f"Order {self.order_id} cannot move from {current} to {requested}"]}
        )


class RepositoryFailure(Exception):
    """Storage could not complete a create, update or list call."""


class HandoffFailure(Exception):
    """The external hand-off channel rejected an order summary."""


class AccessDenied(Exception):
    """No staff session is available for a dashboard operation."""

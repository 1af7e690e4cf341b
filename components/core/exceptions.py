"""Domain errors raised by repositories and services."""


class BudgetAppError(Exception):
    """Base class for every error raised by the household budget core."""


class AuthenticationError(BudgetAppError):
    """No authenticated user was available for a write."""


class NotFoundError(BudgetAppError):
    """The requested row does not exist or belongs to another household."""

    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        message = f"{entity} not found" if entity_id is None else f"{entity} {entity_id} not found"
        super().__init__(message)


class InvalidTransitionError(BudgetAppError):
    """A lifecycle transition that the current state does not allow."""

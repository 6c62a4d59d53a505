"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class PersistenceError(RuntimeError):
    """The durable store could not load or save the farm state.

    Attributes:
        recoverable: True when the state was kept somewhere (local cache)
            and a later retry can still reach the primary store.
    """

    def __init__(self, message: str, recoverable: bool = True):
        super().__init__(message)
        self.recoverable = recoverable


def flock_not_found(flock_id: str) -> str:
    """Return message for missing flock."""
    return f"Flock {flock_id} not found"


def inventory_item_not_found(item_id: str) -> str:
    """Return message for missing inventory item."""
    return f"Inventory item {item_id} not found"


def protected_flock_fields(fields: list[str]) -> str:
    """Return message when a partial flock update names derived or owned fields."""
    return (
        f"Cannot update {', '.join(sorted(fields))} through a flock update. "
        "Record mortality or use the count override instead."
    )

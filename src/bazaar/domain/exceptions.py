"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    #: True when repeating the exact same call is safe.
    retryable = False


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InvalidLineError(DomainException):
    """Malformed cart input (missing item reference, bad quantity, ...)."""


class InvalidTransitionError(DomainException):
    """A status change is illegal, outside the actor's role, or stale.

    ``stale`` is set when the entity moved on between read and write;
    the caller should re-fetch before trying again.
    """

    def __init__(self, message: str, *, stale: bool = False) -> None:
        super().__init__(message)
        self.stale = stale

    @classmethod
    def stale_state(cls, entity: str, expected: str) -> InvalidTransitionError:
        return cls(
            f"{entity} is no longer {expected}; it was changed by someone "
            f"else. Refresh and try again.",
            stale=True,
        )


class InsufficientBalanceError(DomainException):
    """A withdrawal would exceed the seller's withdrawable funds."""

    def __init__(self, requested, withdrawable) -> None:
        super().__init__(
            f"Insufficient balance to withdraw {requested}: "
            f"only {withdrawable} is available"
        )
        self.requested = requested
        self.withdrawable = withdrawable


class StoreUnavailableError(DomainException):
    """The persistence layer failed or timed out."""

    retryable = True


class PaymentFailedError(DomainException):
    """The payment collaborator declined the charge."""

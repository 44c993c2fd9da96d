"""Exception types raised by kitchenpos services and repositories.

Validation failures and storage failures are kept apart so the HTTP layer
can map them to client and server errors respectively.
"""


class KitchenPosError(Exception):
    """Base class for all kitchenpos errors."""


class InvalidArgumentError(KitchenPosError, ValueError):
    """Raised when a request violates a business rule.

    Attributes:
        reason: Short machine-readable code (e.g. 'price_mismatch')
    """

    def __init__(self, message: str, reason: str = "invalid_argument") -> None:
        super().__init__(message)
        self.reason = reason


class PersistenceError(KitchenPosError):
    """Raised when the storage layer fails to read or write."""

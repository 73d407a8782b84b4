"""Checkout errors surfaced to the hosting shell.

Step guard failures are deliberately absent: a failed guard is reported by
the step not advancing, never by an exception.
"""


class CheckoutError(Exception):
    """Base class for checkout errors."""


class CheckoutAccessDenied(CheckoutError):
    """Checkout was requested without an authenticated user."""


class CheckoutNotStarted(CheckoutError):
    """An operation needed a checkout session but none is active."""


class ConcurrentSubmissionError(CheckoutError):
    """A submission is already in flight for this session; nothing was done."""


class SubmissionError(CheckoutError):
    """The order service rejected the order or failed while placing it."""

    def __init__(self, error) -> None:
        self.error = error
        super().__init__(error.message)


class SubmissionCancelled(CheckoutError):
    """The session was torn down while its submission was in flight."""

"""Payment error types."""


class PaymentsUnavailableError(Exception):
    """Raised when no Stripe secret key is configured."""

    def __init__(self, message: str = "Payments are not configured") -> None:
        super().__init__(message)

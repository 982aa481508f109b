"""Settlement-related domain exceptions."""

from .base import DomainException


class PaymentExecutionError(DomainException):
    """Raised when the ledger reports a non-success settlement status."""

    def __init__(
        self,
        message: str,
        status: str | None = None,
        code: str = "PAYMENT_FAILED",
    ):
        super().__init__(message=message, code=code)
        self.status = status


class LedgerTimeoutError(PaymentExecutionError):
    """Raised when a ledger submission does not settle within the timeout."""

    def __init__(self, timeout: float):
        super().__init__(
            message=f"Ledger settlement timed out after {timeout}s",
            status=None,
            code="LEDGER_TIMEOUT",
        )
        self.timeout = timeout

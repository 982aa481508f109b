"""Proof-related domain exceptions."""

from .base import DomainException
from .validation import ValidationError


class ProofInsufficientError(ValidationError):
    """Raised when a private metric is below the requested proof threshold."""

    def __init__(self, proof_type: str, threshold):
        super().__init__(
            message=f"{proof_type} does not meet the proof threshold of {threshold}",
            code="PROOF_INSUFFICIENT",
        )
        self.proof_type = proof_type
        self.threshold = threshold


class ProofProviderError(DomainException):
    """Raised when the proving or verification service fails."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str = "PROOF_PROVIDER_ERROR",
    ):
        super().__init__(message=message, code=code)
        self.status_code = status_code


class ProofTimeoutError(ProofProviderError):
    """Raised when proof generation does not complete within the timeout."""

    def __init__(self, proof_type: str, timeout: float):
        super().__init__(
            message=f"{proof_type} proof timed out after {timeout}s",
            code="PROOF_TIMEOUT",
        )
        self.proof_type = proof_type
        self.timeout = timeout

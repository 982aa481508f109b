"""Zero-knowledge proof requests, artifacts and loan application bundles."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict

from .summary import ZkAttributes


class ProofType(str, Enum):
    INCOME = "income"
    CREDIT_HISTORY = "credit_history"
    COLLATERAL = "collateral"


@dataclass(frozen=True)
class ProofRequest:
    """
    Inputs sent to the proving service.

    ``public_inputs`` are revealed to verifiers; ``witness`` holds the
    private values the circuit proves a statement about.
    """

    proof_type: ProofType
    worker_id: str
    public_inputs: Dict[str, Any]
    witness: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ProofArtifact:
    """Opaque proof returned by the proving service."""

    proof_type: ProofType
    proof: str
    public_inputs: Dict[str, Any]

    def to_dict(self) -> dict:
        return {
            "proof_type": self.proof_type.value,
            "proof": self.proof,
            "public_inputs": self.public_inputs,
        }


@dataclass(frozen=True)
class LoanApplication:
    """Everything the credit engine needs to assess a loan request."""

    worker_id: str
    requested_amount: Decimal
    proofs: Dict[ProofType, ProofArtifact]
    attributes: ZkAttributes

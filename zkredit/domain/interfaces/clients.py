"""External client interfaces."""

from abc import ABC, abstractmethod

from zkredit.domain.entities import LedgerReceipt, ProofArtifact, ProofRequest


class LedgerClient(ABC):
    """
    Narrow capability set of the distributed-ledger client.

    Key management, signing and network submission live behind
    this port; the payment router only moves value.
    """

    @abstractmethod
    async def transfer(
        self,
        sender: str,
        receiver: str,
        amount: int,
    ) -> LedgerReceipt:
        """
        Transfer value directly between two accounts.

        Args:
            sender: Account debited
            receiver: Account credited
            amount: Amount in the smallest settlement unit

        Returns:
            The settlement receipt
        """
        ...

    @abstractmethod
    async def call_contract(
        self,
        contract_id: str,
        function: str,
        receiver_address: str,
        amount: int,
        payable_amount: int,
        gas_limit: int,
    ) -> LedgerReceipt:
        """
        Invoke a payable contract function with ``(address, uint256)`` params.

        Args:
            contract_id: Deployed payment contract
            function: Function name, e.g. ``pay``
            receiver_address: Canonical hex address passed as first param
            amount: Amount passed as second param, smallest unit
            payable_amount: Value attached to the call, smallest unit
            gas_limit: Maximum gas for the call

        Returns:
            The settlement receipt
        """
        ...


class ProofProvider(ABC):
    """Abstract client for the zero-knowledge proving service."""

    @abstractmethod
    async def generate(self, request: ProofRequest) -> ProofArtifact:
        """
        Generate a proof for the given statement.

        Raises:
            ProofInsufficientError: If the witness does not satisfy the threshold
            ProofProviderError: If the service fails
        """
        ...


class ProofVerifier(ABC):
    """Abstract client for the proof verification service."""

    @abstractmethod
    async def verify(self, artifact: ProofArtifact) -> bool:
        """Return True if the artifact verifies against its public inputs."""
        ...

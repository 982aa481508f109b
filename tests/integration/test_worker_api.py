"""
Integration tests for the worker API.

These tests verify:
1. POST /v1/workers registers a profile
2. POST /v1/workers/{worker_id}/remittances settles and records
3. GET /v1/workers/{worker_id}/attributes returns bands, not raw history
4. POST /v1/workers/{worker_id}/loan-applications decides and disburses
5. Domain errors map to the documented status codes
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from httpx import AsyncClient

from tests.conftest import FUNDING, SENDER


def ms(year: int, month: int, day: int) -> int:
    return int(datetime(year, month, day, tzinfo=timezone.utc).timestamp() * 1000)


# =============================================================================
# Health & registration
# =============================================================================

class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["network"] in {"testnet", "previewnet", "mainnet"}

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, client: AsyncClient):
        response = await client.get("/v1/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"


class TestRegisterWorker:

    @pytest.mark.asyncio
    async def test_register(self, client: AsyncClient, worker_payload: dict):
        response = await client.post("/v1/workers", json=worker_payload)

        assert response.status_code == 201
        data = response.json()
        assert data == {
            "worker_id": "worker-maria",
            "default_corridor": None,
            "transaction_count": 0,
        }

    @pytest.mark.asyncio
    async def test_duplicate_registration_rejected(self, client: AsyncClient, registered_worker: str, worker_payload: dict):
        response = await client.post("/v1/workers", json=worker_payload)

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_blank_worker_id_rejected(self, client: AsyncClient):
        response = await client.post("/v1/workers", json={"worker_id": "   "})

        assert response.status_code == 422


# =============================================================================
# Remittances
# =============================================================================

class TestRemittances:

    @pytest.mark.asyncio
    async def test_send_remittance(self, client: AsyncClient, registered_worker: str, mock_ledger):
        response = await client.post(
            f"/v1/workers/{registered_worker}/remittances",
            json={"amount": "250.72", "timestamp": ms(2024, 1, 15)},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["amount"] == "250.72"
        assert data["fee"] == "1.75504"
        assert data["net_amount"] == "248.96496"
        assert data["currency"] == "HBAR"
        assert data["topic"] == "0.0.920393"
        assert data["event_id"].startswith("remit_")
        assert data["payment"]["mode"] == "direct_transfer"
        assert data["payment"]["amount_smallest_unit"] == 24896496000
        assert Decimal(data["payment"]["settled_amount"]) == Decimal("248.96496")
        assert mock_ledger.transfers[0]["sender"] == SENDER

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", ["0", "-1", "1001"])
    async def test_invalid_amount_is_400(self, client: AsyncClient, registered_worker: str, mock_ledger, amount):
        response = await client.post(
            f"/v1/workers/{registered_worker}/remittances",
            json={"amount": amount},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"
        assert mock_ledger.call_count == 0

        attributes = await client.get(f"/v1/workers/{registered_worker}/attributes")
        assert attributes.json()["summary"]["total_transactions"] == 0

    @pytest.mark.asyncio
    async def test_unknown_worker_is_404(self, client: AsyncClient):
        response = await client.post("/v1/workers/nobody/remittances", json={"amount": "10"})

        assert response.status_code == 404
        assert response.json()["error"] == "WORKER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_ledger_failure_is_502(self, client_with_failing_ledger: AsyncClient, worker_payload: dict):
        client = client_with_failing_ledger
        await client.post("/v1/workers", json=worker_payload)

        response = await client.post("/v1/workers/worker-maria/remittances", json={"amount": "100"})

        assert response.status_code == 502
        assert response.json()["error"] == "PAYMENT_FAILED"


# =============================================================================
# Attributes
# =============================================================================

class TestAttributes:

    @pytest.mark.asyncio
    async def test_attributes_after_four_monthly_remittances(self, client: AsyncClient, registered_worker: str):
        now = int(datetime.now(timezone.utc).timestamp() * 1000)
        day = 24 * 60 * 60 * 1000
        for days_ago in (95, 65, 35, 5):
            response = await client.post(
                f"/v1/workers/{registered_worker}/remittances",
                json={"amount": "250.72", "timestamp": now - days_ago * day},
            )
            assert response.status_code == 201

        response = await client.get(f"/v1/workers/{registered_worker}/attributes")

        assert response.status_code == 200
        data = response.json()
        assert data["summary"]["total_transactions"] == 4
        assert data["summary"]["total_volume"] == "1002.88"
        assert data["attributes"]["total_remitted_band"] == "900+"
        assert data["attributes"]["account_age_band"] == "3-6m"
        assert data["attributes"]["months_with_activity"] >= 3
        assert data["attributes"]["stable_remitter"] is True

    @pytest.mark.asyncio
    async def test_new_worker_attributes(self, client: AsyncClient, registered_worker: str):
        response = await client.get(f"/v1/workers/{registered_worker}/attributes")

        assert response.json()["attributes"] == {
            "stable_remitter": False,
            "total_remitted_band": "0-300",
            "account_age_band": "0-3m",
            "months_with_activity": 0,
            "total_transactions": 0,
        }


# =============================================================================
# Loan applications
# =============================================================================

class TestLoanApplications:

    @pytest.mark.asyncio
    async def test_apply_and_disburse(self, client: AsyncClient, registered_worker: str, mock_ledger, mock_proofs):
        await client.post(f"/v1/workers/{registered_worker}/remittances", json={"amount": "250.72"})

        response = await client.post(
            f"/v1/workers/{registered_worker}/loan-applications",
            json={"requested_amount": "400", "receiver_address": "0.0.6006"},
        )

        assert response.status_code == 200
        data = response.json()
        decision = data["decision"]
        assert decision["approved"] is True
        assert decision["repayment_months"] == 4
        assert decision["max_amount"] == "400"
        assert data["disbursement"]["funding_account"] == FUNDING
        assert data["disbursement"]["tenure_months"] == 4
        assert mock_ledger.transfers[-1] == {"sender": FUNDING, "receiver": "0.0.6006", "amount": 40000000000}
        assert len(mock_proofs.verified) == 3

    @pytest.mark.asyncio
    async def test_decide_without_disbursement(self, client: AsyncClient, registered_worker: str, mock_ledger):
        await client.post(f"/v1/workers/{registered_worker}/remittances", json={"amount": "100"})
        transfers_before = len(mock_ledger.transfers)

        response = await client.post(
            f"/v1/workers/{registered_worker}/loan-applications",
            json={"requested_amount": "900"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["decision"]["max_amount"] == "500"
        assert data["disbursement"] is None
        assert len(mock_ledger.transfers) == transfers_before

    @pytest.mark.asyncio
    async def test_insufficient_income_is_422(self, client: AsyncClient):
        await client.post("/v1/workers", json={"worker_id": "worker-low", "monthly_income": "300"})

        response = await client.post(
            "/v1/workers/worker-low/loan-applications",
            json={"requested_amount": "100"},
        )

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "PROOF_INSUFFICIENT"
        assert "300" not in data["message"]

    @pytest.mark.asyncio
    async def test_prover_failure_is_503(self, client_with_failing_prover: AsyncClient, worker_payload: dict):
        client = client_with_failing_prover
        await client.post("/v1/workers", json=worker_payload)
        await client.post("/v1/workers/worker-maria/remittances", json={"amount": "100"})

        response = await client.post(
            "/v1/workers/worker-maria/loan-applications",
            json={"requested_amount": "100"},
        )

        assert response.status_code == 503
        assert response.json()["error"] == "PROOF_PROVIDER_ERROR"

    @pytest.mark.asyncio
    async def test_non_positive_request_is_422(self, client: AsyncClient, registered_worker: str):
        response = await client.post(
            f"/v1/workers/{registered_worker}/loan-applications",
            json={"requested_amount": "0"},
        )

        assert response.status_code == 422

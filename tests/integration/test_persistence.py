"""
Integration tests for the SQL event store.

These tests verify:
1. Remittance and loan events round-trip through the database
2. Reads are ordered most recent first
3. Duplicate event ids are rejected
4. The API works end to end on the SQL backend
"""

from decimal import Decimal

import pytest
from httpx import AsyncClient

from zkredit.domain.entities import LoanDisbursementEvent, RemittanceEvent
from zkredit.domain.exceptions import DuplicateEventError
from zkredit.infrastructure.database import DatabaseSessionManager
from zkredit.infrastructure.repositories import SqlAlchemyEventStore


def remittance(timestamp: int, amount: str = "250.72", **kwargs) -> RemittanceEvent:
    gross = Decimal(amount)
    fee = max(gross * Decimal("0.007"), Decimal("0.5"))
    return RemittanceEvent(
        worker_id=kwargs.pop("worker_id", "worker-maria"),
        receiver_id="0.0.5005",
        corridor="middle-east-to-philippines",
        amount=gross,
        fee=fee,
        net_amount=gross - fee,
        currency="HBAR",
        transaction_hash=f"0x{timestamp:064x}",
        timestamp=timestamp,
        topic="0.0.920393",
        **kwargs,
    )


class TestSqlAlchemyEventStore:

    @pytest.mark.asyncio
    async def test_remittance_round_trip(self, sql_event_store: SqlAlchemyEventStore):
        event = await sql_event_store.record_remittance(remittance(1705276800000))

        stored = await sql_event_store.events_for_worker("worker-maria")

        assert len(stored) == 1
        assert stored[0].id == event.id
        assert stored[0].amount == Decimal("250.72")
        assert stored[0].fee == Decimal("1.75504")
        assert stored[0].net_amount == Decimal("248.96496")
        assert stored[0].timestamp == 1705276800000

    @pytest.mark.asyncio
    async def test_ordering_and_filtering(self, sql_event_store: SqlAlchemyEventStore):
        for ts in (2000, 3000, 1000):
            await sql_event_store.record_remittance(remittance(ts))
        await sql_event_store.record_remittance(remittance(4000, worker_id="worker-juan"))

        stored = await sql_event_store.events_for_worker("worker-maria")

        assert [e.timestamp for e in stored] == [3000, 2000, 1000]

    @pytest.mark.asyncio
    async def test_duplicate_id_rejected(self, sql_event_store: SqlAlchemyEventStore):
        await sql_event_store.record_remittance(remittance(1000, id="remit_fixed"))

        with pytest.raises(DuplicateEventError):
            await sql_event_store.record_remittance(remittance(2000, id="remit_fixed"))

    @pytest.mark.asyncio
    async def test_loan_disbursement_round_trip(self, sql_event_store: SqlAlchemyEventStore):
        event = LoanDisbursementEvent(
            worker_id="worker-maria",
            credit_agent_id="credit-agent-2",
            amount=Decimal("400"),
            interest_rate=Decimal("9"),
            tenure_months=4,
            funding_account="0.0.7007",
            transaction_hash="0xloan",
            timestamp=1705276800000,
            corridor="MENA->PHL",
            notes="Offer with stable remittance discount",
        )
        await sql_event_store.record_loan_disbursement(event)

        mine = await sql_event_store.loan_disbursements_for_worker("worker-maria")
        everything = await sql_event_store.all_loan_disbursements()

        assert [e.id for e in mine] == [event.id]
        assert everything[0].interest_rate == Decimal("9")
        assert everything[0].notes == "Offer with stable remittance discount"


class TestDatabaseSessionManager:

    @pytest.mark.asyncio
    async def test_init_and_create_tables(self, tmp_path):
        manager = DatabaseSessionManager()
        manager.init(f"sqlite+aiosqlite:///{tmp_path / 'events.db'}")
        await manager.create_tables()

        store = SqlAlchemyEventStore(manager.sessionmaker)
        await store.record_remittance(remittance(1000))

        assert len(await store.events_for_worker("worker-maria")) == 1
        await manager.close()

    def test_sessionmaker_requires_init(self):
        with pytest.raises(RuntimeError):
            DatabaseSessionManager().sessionmaker


class TestSqlBackedApi:

    @pytest.mark.asyncio
    async def test_remittances_persist(self, sql_client: AsyncClient, worker_payload: dict, sql_event_store):
        await sql_client.post("/v1/workers", json=worker_payload)

        response = await sql_client.post("/v1/workers/worker-maria/remittances", json={"amount": "100"})

        assert response.status_code == 201
        stored = await sql_event_store.events_for_worker("worker-maria")
        assert [e.id for e in stored] == [response.json()["event_id"]]

        attributes = await sql_client.get("/v1/workers/worker-maria/attributes")
        assert attributes.json()["summary"]["total_volume"] in {"100", "100.00000000"}

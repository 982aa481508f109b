"""SQLAlchemy implementation of EventStore."""

from typing import List

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from zkredit.domain.entities import LoanDisbursementEvent, RemittanceEvent
from zkredit.domain.exceptions import DuplicateEventError
from zkredit.domain.interfaces import EventStore
from zkredit.infrastructure.database.models import (
    LoanDisbursementEventModel,
    RemittanceEventModel,
)

logger = structlog.get_logger(__name__)


class SqlAlchemyEventStore(EventStore):
    """
    Database-backed event store.

    Each operation runs in its own transaction, so the store can be
    shared by concurrent requests; the primary key enforces unique
    event ids.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def record_remittance(self, event: RemittanceEvent) -> RemittanceEvent:
        model = RemittanceEventModel(
            id=event.id,
            worker_id=event.worker_id,
            receiver_id=event.receiver_id,
            corridor=event.corridor,
            amount=event.amount,
            fee=event.fee,
            net_amount=event.net_amount,
            currency=event.currency,
            transaction_hash=event.transaction_hash,
            timestamp=event.timestamp,
            topic=event.topic,
        )
        await self._insert(model, event.id)
        logger.info(
            "remittance_event_recorded",
            event_id=event.id,
            topic=event.topic,
            worker_id=event.worker_id,
            amount=str(event.amount),
        )
        return event

    async def record_loan_disbursement(
        self,
        event: LoanDisbursementEvent,
    ) -> LoanDisbursementEvent:
        model = LoanDisbursementEventModel(
            id=event.id,
            worker_id=event.worker_id,
            credit_agent_id=event.credit_agent_id,
            amount=event.amount,
            interest_rate=event.interest_rate,
            tenure_months=event.tenure_months,
            funding_account=event.funding_account,
            transaction_hash=event.transaction_hash,
            timestamp=event.timestamp,
            corridor=event.corridor,
            notes=event.notes,
        )
        await self._insert(model, event.id)
        logger.info(
            "loan_disbursement_event_recorded",
            event_id=event.id,
            worker_id=event.worker_id,
            amount=str(event.amount),
        )
        return event

    async def events_for_worker(self, worker_id: str) -> List[RemittanceEvent]:
        stmt = (
            select(RemittanceEventModel)
            .where(RemittanceEventModel.worker_id == worker_id)
            .order_by(RemittanceEventModel.timestamp.desc())
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [self._to_remittance(m) for m in result.scalars().all()]

    async def loan_disbursements_for_worker(
        self,
        worker_id: str,
    ) -> List[LoanDisbursementEvent]:
        stmt = (
            select(LoanDisbursementEventModel)
            .where(LoanDisbursementEventModel.worker_id == worker_id)
            .order_by(LoanDisbursementEventModel.timestamp.desc())
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [self._to_loan(m) for m in result.scalars().all()]

    async def all_loan_disbursements(self) -> List[LoanDisbursementEvent]:
        stmt = select(LoanDisbursementEventModel).order_by(
            LoanDisbursementEventModel.timestamp.desc()
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [self._to_loan(m) for m in result.scalars().all()]

    async def _insert(self, model, event_id: str) -> None:
        async with self._session_factory() as session:
            if await session.get(type(model), event_id) is not None:
                raise DuplicateEventError(event_id)
            session.add(model)
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                raise DuplicateEventError(event_id)

    def _to_remittance(self, model: RemittanceEventModel) -> RemittanceEvent:
        """Convert database model to domain entity."""
        return RemittanceEvent(
            id=model.id,
            worker_id=model.worker_id,
            receiver_id=model.receiver_id,
            corridor=model.corridor,
            amount=model.amount,
            fee=model.fee,
            net_amount=model.net_amount,
            currency=model.currency,
            transaction_hash=model.transaction_hash,
            timestamp=model.timestamp,
            topic=model.topic,
        )

    def _to_loan(self, model: LoanDisbursementEventModel) -> LoanDisbursementEvent:
        """Convert database model to domain entity."""
        return LoanDisbursementEvent(
            id=model.id,
            worker_id=model.worker_id,
            credit_agent_id=model.credit_agent_id,
            amount=model.amount,
            interest_rate=model.interest_rate,
            tenure_months=model.tenure_months,
            funding_account=model.funding_account,
            transaction_hash=model.transaction_hash,
            timestamp=model.timestamp,
            corridor=model.corridor,
            notes=model.notes,
        )

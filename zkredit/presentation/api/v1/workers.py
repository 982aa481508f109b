"""Worker API endpoints: registration, remittances, attributes and loans."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends

from zkredit.application.services import LoanService, WorkerService
from zkredit.core.dependencies import (
    get_loan_service,
    get_worker_repository,
    get_worker_service,
)
from zkredit.domain.entities import WorkerProfile
from zkredit.domain.exceptions import ValidationError
from zkredit.domain.interfaces import WorkerRepository
from zkredit.presentation.schemas import (
    AttributesResponseSchema,
    CreditDecisionSchema,
    DisbursementSchema,
    ErrorResponseSchema,
    LoanApplicationRequestSchema,
    LoanApplicationResponseSchema,
    PaymentSchema,
    RemittanceRequestSchema,
    RemittanceResponseSchema,
    WindowSummarySchema,
    WorkerCreateSchema,
    WorkerResponseSchema,
    ZkAttributesSchema,
)

logger = structlog.get_logger(__name__)

workers_router = APIRouter(
    prefix="/workers",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        404: {"model": ErrorResponseSchema, "description": "Worker not found"},
    },
)


@workers_router.post(
    "",
    response_model=WorkerResponseSchema,
    status_code=201,
    summary="Register Worker",
    description="Register a worker profile holding the private inputs behind loan proofs.",
)
async def register_worker(
    request: WorkerCreateSchema,
    workers: Annotated[WorkerRepository, Depends(get_worker_repository)],
) -> WorkerResponseSchema:
    if await workers.get_by_id(request.worker_id) is not None:
        raise ValidationError(f"Worker already registered: {request.worker_id}")

    profile = await workers.save(
        WorkerProfile(
            worker_id=request.worker_id,
            monthly_income=request.monthly_income,
            collateral_value=request.collateral_value,
            collateral_title_ref=request.collateral_title_ref,
            coordinates=request.coordinates,
            employer_attestation=request.employer_attestation,
            default_corridor=request.default_corridor,
        )
    )
    logger.info("worker_registered", worker_id=profile.worker_id)

    return WorkerResponseSchema(
        worker_id=profile.worker_id,
        default_corridor=profile.default_corridor,
        transaction_count=profile.transaction_count,
    )


@workers_router.post(
    "/{worker_id}/remittances",
    response_model=RemittanceResponseSchema,
    status_code=201,
    summary="Send Remittance",
    description="""
    Settle a remittance on the ledger and record it in the worker's event history.

    A 0.7% fee (minimum 0.50) is deducted; the receiver gets the net amount.
    """,
    responses={
        502: {"model": ErrorResponseSchema, "description": "Settlement failed"},
        504: {"model": ErrorResponseSchema, "description": "Settlement timed out"},
    },
)
async def send_remittance(
    request: RemittanceRequestSchema,
    worker_service: Annotated[WorkerService, Depends(get_worker_service)],
) -> RemittanceResponseSchema:
    result = await worker_service.send_remittance(
        amount=request.amount,
        receiver_id=request.receiver_id,
        corridor=request.corridor,
        now=request.timestamp,
    )
    event = result.event

    return RemittanceResponseSchema(
        event_id=event.id,
        worker_id=event.worker_id,
        receiver_id=event.receiver_id,
        corridor=event.corridor,
        amount=event.amount,
        fee=event.fee,
        net_amount=event.net_amount,
        currency=event.currency,
        timestamp=event.timestamp,
        topic=event.topic,
        payment=PaymentSchema(**result.payment.to_dict()),
    )


@workers_router.get(
    "/{worker_id}/attributes",
    response_model=AttributesResponseSchema,
    summary="Get Remittance Attributes",
    description="Windowed remittance summary and the bucketed attributes derived from it.",
)
async def get_attributes(
    worker_service: Annotated[WorkerService, Depends(get_worker_service)],
) -> AttributesResponseSchema:
    summary = await worker_service.remittance_summary()
    attributes = await worker_service.attributes()

    return AttributesResponseSchema(
        worker_id=worker_service.worker_id,
        summary=WindowSummarySchema(
            months_with_activity=summary.months_with_activity,
            total_volume=summary.total_volume,
            account_age_months=summary.account_age_months,
            total_transactions=summary.total_transactions,
        ),
        attributes=ZkAttributesSchema(**attributes.model_dump()),
    )


@workers_router.post(
    "/{worker_id}/loan-applications",
    response_model=LoanApplicationResponseSchema,
    status_code=200,
    summary="Apply for Microloan",
    description="""
    Generate income, credit-history and collateral proofs, assess them with
    the configured credit strategy, and disburse the loan when approved and
    a receiver address is given.
    """,
    responses={
        422: {"model": ErrorResponseSchema, "description": "Proof threshold not met"},
        503: {"model": ErrorResponseSchema, "description": "Proof service unavailable"},
        504: {"model": ErrorResponseSchema, "description": "Proof or settlement timed out"},
    },
)
async def apply_for_loan(
    request: LoanApplicationRequestSchema,
    worker_service: Annotated[WorkerService, Depends(get_worker_service)],
    loan_service: Annotated[LoanService, Depends(get_loan_service)],
) -> LoanApplicationResponseSchema:
    application = await worker_service.apply_for_loan(
        request.requested_amount,
        now=request.timestamp,
    )
    decision = await loan_service.assess(application)

    disbursement = None
    if decision.approved and request.receiver_address:
        paid = await loan_service.disburse(
            worker_service.worker_id,
            decision,
            request.receiver_address,
            now=request.timestamp,
        )
        disbursement = DisbursementSchema(
            event_id=paid.event.id,
            amount=paid.event.amount,
            interest_rate=paid.event.interest_rate,
            tenure_months=paid.event.tenure_months,
            funding_account=paid.event.funding_account,
            transaction_hash=paid.event.transaction_hash,
            timestamp=paid.event.timestamp,
            payment=PaymentSchema(**paid.payment.to_dict()),
        )

    return LoanApplicationResponseSchema(
        worker_id=worker_service.worker_id,
        decision=CreditDecisionSchema(
            approved=decision.approved,
            max_amount=decision.max_amount,
            interest_rate=decision.interest_rate,
            installment=decision.installment,
            repayment_months=decision.repayment_months,
            reason=decision.reason,
            strategy=decision.strategy,
            analysis=decision.analysis,
        ),
        disbursement=disbursement,
    )

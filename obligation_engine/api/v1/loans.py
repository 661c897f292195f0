"""POST /v1/loans/* - Amortization schedules and loan summaries"""

import time
from fastapi import APIRouter, Depends, Request

from obligation_engine.api.dependencies import get_request_id, get_settings, reject, wall_clock
from obligation_engine.api.v1.schemas import (
    AmortizationEntrySchema,
    LoanSummaryRequest,
    LoanSummaryResponse,
    LoanTermsSchema,
    PortfolioRequest,
    PortfolioResponse,
    ScheduleResponse,
)
from obligation_engine.config import Settings
from obligation_engine.domain.amortization import (
    generate_schedule,
    monthly_payment,
    summarize_loan,
    summarize_portfolio,
    total_interest,
)
from obligation_engine.domain.exceptions import DomainException
from obligation_engine.infrastructure.observability.logging import log_schedule
from obligation_engine.infrastructure.observability.metrics import record_schedule

router = APIRouter()


@router.post("/loans/schedule", response_model=ScheduleResponse)
def create_schedule(request_body: LoanTermsSchema, request: Request):
    """
    Generate the payment-by-payment amortization schedule for a loan.

    Returns:
        Fixed monthly payment, total interest and one entry per payment
        (fewer than term when the balance is paid off early)
    """
    start_time = time.time()
    request_id = get_request_id(request)
    terms = request_body.to_domain()

    try:
        schedule = generate_schedule(terms)
    except DomainException as e:
        raise reject(e, request_id)

    payment = monthly_payment(terms.principal, terms.annual_rate, terms.term)

    duration_ms = (time.time() - start_time) * 1000
    record_schedule(terms.term, len(schedule))
    log_schedule(request_id, terms.term, len(schedule), payment, duration_ms)

    return ScheduleResponse(
        monthly_payment=round(payment, 2),
        total_interest=round(total_interest(terms), 2),
        entries=[AmortizationEntrySchema.from_domain(entry) for entry in schedule],
    )


@router.post("/loans/summary", response_model=LoanSummaryResponse)
def get_loan_summary(request_body: LoanSummaryRequest, request: Request):
    """Next payment date, progress, remaining payments and status of a loan"""
    loan = request_body.loan.to_domain()
    try:
        summary = summarize_loan(loan, wall_clock(request_body.now))
    except DomainException as e:
        raise reject(e, get_request_id(request))

    return LoanSummaryResponse.from_domain(loan.id, summary)


@router.post("/loans/portfolio", response_model=PortfolioResponse)
def get_portfolio(
    request_body: PortfolioRequest,
    request: Request,
    app_settings: Settings = Depends(get_settings),
):
    """Totals across a user's loans and the ones with a payment coming up"""
    loans = [loan.to_domain() for loan in request_body.loans]
    try:
        summary = summarize_portfolio(
            loans,
            wall_clock(request_body.now),
            due_soon_days=app_settings.loan_due_soon_days,
        )
    except DomainException as e:
        raise reject(e, get_request_id(request))

    return PortfolioResponse.from_domain(summary)

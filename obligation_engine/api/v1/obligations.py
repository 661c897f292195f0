"""POST /v1/bills/*, /v1/budgets/status, /v1/goals/progress - Obligation status"""

import logging
from fastapi import APIRouter, Request

from obligation_engine.api.dependencies import get_request_id, reject, wall_clock
from obligation_engine.api.v1.schemas import (
    BillSchema,
    BillStatusItem,
    BillStatusRequest,
    BillStatusResponse,
    BudgetStatusItem,
    BudgetStatusRequest,
    BudgetStatusResponse,
    GoalProgressItem,
    GoalProgressRequest,
    GoalProgressResponse,
    MarkPaidRequest,
    MarkUnpaidRequest,
)
from obligation_engine.domain.exceptions import DomainException
from obligation_engine.domain.status import (
    bill_status,
    days_until_due,
    evaluate_budget,
    goal_progress,
    mark_as_paid,
    mark_as_unpaid,
)

router = APIRouter()


@router.post("/bills/status", response_model=BillStatusResponse)
def get_bill_statuses(request_body: BillStatusRequest, request: Request):
    """Classify each bill as paid, overdue, dueSoon or upcoming"""
    now = wall_clock(request_body.now)
    try:
        items = []
        for schema in request_body.bills:
            bill = schema.to_domain()
            items.append(
                BillStatusItem(
                    bill_id=bill.id,
                    status=bill_status(bill, now),
                    days_until_due=days_until_due(bill, now),
                )
            )
    except DomainException as e:
        raise reject(e, get_request_id(request))

    return BillStatusResponse(bills=items)


@router.post("/bills/mark-paid", response_model=BillSchema)
def pay_bill(request_body: MarkPaidRequest, request: Request):
    """
    Mark a bill paid and roll its due date forward from the payment moment.

    Returns:
        The updated bill; persisting it is up to the caller
    """
    request_id = get_request_id(request)
    try:
        paid = mark_as_paid(request_body.bill.to_domain(), wall_clock(request_body.now))
    except DomainException as e:
        raise reject(e, request_id)

    logging.info(
        "Bill marked paid",
        extra={
            "request_id": request_id,
            "step": "bill_paid",
            "bill_id": paid.id,
            "next_due_date": paid.next_due_date.isoformat(),
        },
    )
    return BillSchema.from_domain(paid)


@router.post("/bills/mark-unpaid", response_model=BillSchema)
def unpay_bill(request_body: MarkUnpaidRequest):
    """Reset a bill to unpaid without touching its due date"""
    return BillSchema.from_domain(mark_as_unpaid(request_body.bill.to_domain()))


@router.post("/budgets/status", response_model=BudgetStatusResponse)
def get_budget_statuses(request_body: BudgetStatusRequest, request: Request):
    """Usage percentage, alert state and next period start for each budget"""
    try:
        items = [
            BudgetStatusItem.from_domain(schema.id, evaluate_budget(schema.to_domain()))
            for schema in request_body.budgets
        ]
    except DomainException as e:
        raise reject(e, get_request_id(request))

    return BudgetStatusResponse(budgets=items)


@router.post("/goals/progress", response_model=GoalProgressResponse)
def get_goal_progress(request_body: GoalProgressRequest, request: Request):
    """Progress, completion and monthly contribution needed for each goal"""
    now = wall_clock(request_body.now)
    try:
        items = [
            GoalProgressItem.from_domain(schema.id, goal_progress(schema.to_domain(), now))
            for schema in request_body.goals
        ]
    except DomainException as e:
        raise reject(e, get_request_id(request))

    return GoalProgressResponse(goals=items)

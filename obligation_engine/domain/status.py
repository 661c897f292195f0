"""Status derivation for bills, budgets and goals"""

from dataclasses import replace
from datetime import date, datetime

from obligation_engine.domain.exceptions import InvalidInputError
from obligation_engine.domain.models import (
    Bill,
    BillStatus,
    Budget,
    BudgetEvaluation,
    BudgetStatus,
    Goal,
    GoalProgress,
    RecurrenceRule,
)
from obligation_engine.domain.recurrence import next_occurrence
from obligation_engine.utils.date_utils import as_datetime, days_between
from obligation_engine.utils.validation import non_negative

DAYS_PER_MONTH = 30


def validate_bill(bill: Bill) -> None:
    if not non_negative(bill.amount):
        raise InvalidInputError(f"Bill {bill.id}: amount must be a finite amount >= 0")
    if not 1 <= bill.due_day <= 31:
        raise InvalidInputError(f"Bill {bill.id}: due_day must be between 1 and 31")
    if bill.reminder_days_before < 0:
        raise InvalidInputError(f"Bill {bill.id}: reminder_days_before must be >= 0")


def validate_budget(budget: Budget) -> None:
    if not (non_negative(budget.budget_amount) and non_negative(budget.spent)):
        raise InvalidInputError(f"Budget {budget.id}: amounts must be finite and >= 0")
    if not 0 <= budget.alert_threshold <= 1:
        raise InvalidInputError(f"Budget {budget.id}: alert_threshold must be between 0 and 1")


def validate_goal(goal: Goal) -> None:
    if not (non_negative(goal.target_amount) and non_negative(goal.current_amount)):
        raise InvalidInputError(f"Goal {goal.id}: amounts must be finite and >= 0")


# Bills


def days_until_due(bill: Bill, now: date | datetime) -> int:
    """Calendar days from today to the next due date"""
    return days_between(now, bill.next_due_date)


def is_overdue(bill: Bill, now: date | datetime) -> bool:
    return not bill.is_paid and as_datetime(bill.next_due_date) < as_datetime(now)


def is_due_soon(bill: Bill, now: date | datetime) -> bool:
    days = days_until_due(bill, now)
    return not bill.is_paid and 0 < days <= bill.reminder_days_before


def bill_status(bill: Bill, now: date | datetime) -> BillStatus:
    """
    Classify a bill as of ``now``.

    Precedence: paid, then overdue (due date already passed),
    then due soon (within the reminder window), otherwise upcoming.
    """
    validate_bill(bill)
    if bill.is_paid:
        return BillStatus.PAID
    if is_overdue(bill, now):
        return BillStatus.OVERDUE
    if is_due_soon(bill, now):
        return BillStatus.DUE_SOON
    return BillStatus.UPCOMING


def mark_as_paid(bill: Bill, now: datetime) -> Bill:
    """
    Return the bill marked paid at ``now``.

    The next due date rolls forward from the payment moment, so a late
    payment produces a single future occurrence instead of catching up on
    missed periods. A payment made ahead of the due date settles that
    occurrence, so the roll starts from the due date it paid.
    """
    validate_bill(bill)
    reference = max(as_datetime(now), as_datetime(bill.next_due_date))
    return replace(
        bill,
        is_paid=True,
        last_paid_date=now,
        next_due_date=next_occurrence(RecurrenceRule.day_of_month(bill.due_day), after=reference),
    )


def mark_as_unpaid(bill: Bill) -> Bill:
    """Return the bill reset to unpaid; the due date is left alone"""
    return replace(bill, is_paid=False, last_paid_date=None)


# Budgets


def evaluate_budget(budget: Budget) -> BudgetEvaluation:
    """Usage figures and alert state for a budget"""
    validate_budget(budget)

    percentage_used = 0.0
    if budget.budget_amount > 0:
        percentage_used = budget.spent / budget.budget_amount * 100

    is_over_budget = budget.spent > budget.budget_amount
    should_alert = percentage_used >= budget.alert_threshold * 100

    if is_over_budget:
        status = BudgetStatus.OVER_LIMIT
    elif should_alert:
        status = BudgetStatus.NEAR_LIMIT
    else:
        status = BudgetStatus.ON_TRACK

    return BudgetEvaluation(
        percentage_used=percentage_used,
        remaining=budget.budget_amount - budget.spent,
        is_over_budget=is_over_budget,
        should_alert=should_alert,
        status=status,
        next_period_start=next_occurrence(RecurrenceRule.every(budget.period), after=budget.start_date),
    )


# Goals


def goal_progress(goal: Goal, now: date | datetime) -> GoalProgress:
    """
    Progress toward a savings goal.

    Contribution needed spreads the remaining amount over the months left,
    with at least one month so an expired goal asks for the full remainder.
    """
    validate_goal(goal)

    progress = 0.0
    if goal.target_amount > 0:
        progress = min(goal.current_amount / goal.target_amount * 100, 100.0)

    remaining = max(0.0, goal.target_amount - goal.current_amount)
    days_remaining = max(0, days_between(now, goal.target_date))
    months_remaining = max(1.0, days_remaining / DAYS_PER_MONTH)

    return GoalProgress(
        progress_percentage=progress,
        is_completed=goal.current_amount >= goal.target_amount,
        remaining_amount=remaining,
        days_remaining=days_remaining,
        monthly_contribution_needed=remaining / months_remaining,
    )

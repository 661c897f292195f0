"""Alert planning - decides which notifications should fire for a batch of records"""

from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Mapping, Optional, Set

from obligation_engine.domain.exceptions import InvalidInputError
from obligation_engine.domain.models import (
    AlertCategory,
    AlertIntent,
    AlertSeverity,
    Bill,
    BillStatus,
    Budget,
    Goal,
    Transaction,
    TransactionType,
)
from obligation_engine.domain.status import bill_status, days_until_due, evaluate_budget, goal_progress
from obligation_engine.utils.validation import non_negative

GOAL_MILESTONES = (25, 50, 75, 90, 100)
BUDGET_CRITICAL_PERCENTAGE = 90.0
DEFAULT_SUSPICIOUS_THRESHOLD = 1000.0
REMINDER_TIME = time(hour=9)


def bill_identifier(bill_id: str) -> str:
    return f"bill:{bill_id}"


def budget_identifier(budget_id: str) -> str:
    return f"budget:{budget_id}"


def milestone_identifier(goal_id: str, milestone: int) -> str:
    return f"goal:{goal_id}:{milestone}"


def suspicious_identifier(transaction_id: str) -> str:
    return f"suspicious:{transaction_id}"


def plan_bill_alert(bill: Bill, now: date | datetime) -> Optional[AlertIntent]:
    """Reminder for an unpaid bill that is due soon or already overdue"""
    if not bill.is_active:
        return None

    status = bill_status(bill, now)
    if status not in (BillStatus.DUE_SOON, BillStatus.OVERDUE):
        return None

    remind_on = datetime.combine(bill.next_due_date - timedelta(days=bill.reminder_days_before), REMINDER_TIME)
    return AlertIntent(
        identifier=bill_identifier(bill.id),
        category=AlertCategory.BILL_REMINDER,
        severity=AlertSeverity.CRITICAL if status == BillStatus.OVERDUE else AlertSeverity.WARNING,
        payload={
            "bill_id": bill.id,
            "name": bill.name,
            "amount": bill.amount,
            "due_date": bill.next_due_date,
            "days_until_due": days_until_due(bill, now),
            "status": status.value,
            "remind_on": remind_on,
        },
    )


def plan_budget_alert(budget: Budget) -> Optional[AlertIntent]:
    """
    Threshold alert for a budget.

    Fires once usage crosses the budget's alert threshold; escalates to
    critical when over budget or at 90% and above.
    """
    if not budget.is_active:
        return None

    evaluation = evaluate_budget(budget)
    if not evaluation.should_alert:
        return None

    critical = evaluation.is_over_budget or evaluation.percentage_used >= BUDGET_CRITICAL_PERCENTAGE
    return AlertIntent(
        identifier=budget_identifier(budget.id),
        category=AlertCategory.BUDGET_ALERT,
        severity=AlertSeverity.CRITICAL if critical else AlertSeverity.WARNING,
        payload={
            "budget_id": budget.id,
            "name": budget.name,
            "percentage_used": evaluation.percentage_used,
            "spent": budget.spent,
            "budget_amount": budget.budget_amount,
            "remaining": evaluation.remaining,
            "is_over_budget": evaluation.is_over_budget,
        },
    )


def reached_milestone(progress_percentage: float) -> Optional[int]:
    """Highest milestone at or below the given progress, None below the first one"""
    reached = [m for m in GOAL_MILESTONES if progress_percentage >= m]
    return reached[-1] if reached else None


def plan_goal_milestone(
    goal: Goal,
    now: date | datetime,
    notified: Iterable[str] = (),
) -> Optional[AlertIntent]:
    """
    Milestone notification for a goal.

    Only the highest milestone reached is considered, so a jump from 20%
    to 60% announces 50% and never the skipped 25%. Nothing is emitted when
    that milestone's identifier is already in ``notified``.
    """
    if not goal.is_active:
        return None

    progress = goal_progress(goal, now)
    milestone = reached_milestone(progress.progress_percentage)
    if milestone is None:
        return None

    identifier = milestone_identifier(goal.id, milestone)
    if identifier in set(notified):
        return None

    completed = milestone == GOAL_MILESTONES[-1]
    return AlertIntent(
        identifier=identifier,
        category=AlertCategory.GOAL_COMPLETED if completed else AlertCategory.GOAL_PROGRESS,
        severity=AlertSeverity.INFO,
        payload={
            "goal_id": goal.id,
            "name": goal.name,
            "milestone": milestone,
            "progress_percentage": progress.progress_percentage,
            "current_amount": goal.current_amount,
            "target_amount": goal.target_amount,
        },
    )


def screen_transaction(
    transaction: Transaction,
    threshold: float = DEFAULT_SUSPICIOUS_THRESHOLD,
) -> Optional[AlertIntent]:
    """Flag an expense strictly above the threshold; income never fires"""
    if not non_negative(transaction.amount):
        raise InvalidInputError(f"Transaction {transaction.id}: amount must be a finite amount >= 0")
    if not non_negative(threshold):
        raise InvalidInputError("suspicious activity threshold must be finite and >= 0")

    if transaction.type != TransactionType.EXPENSE or transaction.amount <= threshold:
        return None

    return AlertIntent(
        identifier=suspicious_identifier(transaction.id),
        category=AlertCategory.SUSPICIOUS_ACTIVITY,
        severity=AlertSeverity.CRITICAL,
        payload={
            "transaction_id": transaction.id,
            "amount": transaction.amount,
            "description": transaction.description,
            "date": transaction.occurred_on,
            "threshold": threshold,
        },
    )


def plan_alerts(
    now: date | datetime,
    bills: Iterable[Bill] = (),
    budgets: Iterable[Budget] = (),
    goals: Iterable[Goal] = (),
    transactions: Iterable[Transaction] = (),
    notified_milestones: Optional[Mapping[str, Set[str]]] = None,
    suspicious_threshold: float = DEFAULT_SUSPICIOUS_THRESHOLD,
) -> List[AlertIntent]:
    """
    Main entry point: every alert that should fire now for the batch.

    Intents come out grouped as bills, budgets, goals, transactions, each in
    input order. ``notified_milestones`` maps goal id to the milestone
    identifiers already delivered for it. Identifiers are deterministic, so
    repeated passes over unresolved records can be deduplicated downstream.
    """
    notified_milestones = notified_milestones or {}

    candidates: List[Optional[AlertIntent]] = []
    candidates.extend(plan_bill_alert(bill, now) for bill in bills)
    candidates.extend(plan_budget_alert(budget) for budget in budgets)
    candidates.extend(
        plan_goal_milestone(goal, now, notified_milestones.get(goal.id, ())) for goal in goals
    )
    candidates.extend(screen_transaction(txn, suspicious_threshold) for txn in transactions)

    return [intent for intent in candidates if intent is not None]

"""Unit tests for bill, budget and goal status"""

import math
import pytest
from dataclasses import replace
from datetime import date, datetime
from obligation_engine.domain.exceptions import InvalidInputError
from obligation_engine.domain.models import (
    Bill,
    BillStatus,
    Budget,
    BudgetPeriod,
    BudgetStatus,
    Goal,
)
from obligation_engine.domain.status import (
    bill_status,
    days_until_due,
    evaluate_budget,
    goal_progress,
    mark_as_paid,
    mark_as_unpaid,
)


def test_bill_status_each_state(sample_bills, now):
    """Test precedence paid > overdue > dueSoon > upcoming"""
    statuses = {bill.id: bill_status(bill, now) for bill in sample_bills}

    assert statuses == {
        "rent": BillStatus.OVERDUE,  # due 5th, now 10th
        "power": BillStatus.DUE_SOON,  # due in 2 days, reminder 3
        "gym": BillStatus.UPCOMING,  # due in 18 days
        "phone": BillStatus.PAID,
    }


def test_bill_due_today_is_overdue_after_midnight(now):
    bill = Bill(id="b", name="Water", amount=30.0, due_day=10, next_due_date=date(2025, 3, 10))
    assert days_until_due(bill, now) == 0
    assert bill_status(bill, now) == BillStatus.OVERDUE


def test_bill_due_soon_window_edges(now):
    """Test dueSoon needs 0 < days <= reminder_days_before"""
    at_edge = Bill(id="b", name="Water", amount=30.0, due_day=13, next_due_date=date(2025, 3, 13))
    past_edge = replace(at_edge, due_day=14, next_due_date=date(2025, 3, 14))
    no_reminder = replace(at_edge, reminder_days_before=0)

    assert bill_status(at_edge, now) == BillStatus.DUE_SOON
    assert bill_status(past_edge, now) == BillStatus.UPCOMING
    assert bill_status(no_reminder, now) == BillStatus.UPCOMING


def test_mark_as_paid_early_rolls_to_following_month():
    """Test a bill due on the 15th paid on the 10th is next due on the 15th of the following month"""
    bill = Bill(id="b", name="Internet", amount=90.0, due_day=15, next_due_date=date(2025, 3, 15))
    paid_at = datetime(2025, 3, 10, 8, 0)

    paid = mark_as_paid(bill, paid_at)

    assert paid.is_paid is True
    assert paid.last_paid_date == paid_at
    assert paid.next_due_date == date(2025, 4, 15)
    assert bill.is_paid is False  # original untouched


def test_mark_as_paid_late_does_not_catch_up():
    """Test a bill paid months late gets a single future occurrence from the payment date"""
    bill = Bill(id="b", name="Internet", amount=90.0, due_day=15, next_due_date=date(2025, 1, 15))

    paid = mark_as_paid(bill, datetime(2025, 3, 20, 8, 0))

    assert paid.next_due_date == date(2025, 4, 15)


def test_mark_as_paid_on_due_day():
    bill = Bill(id="b", name="Internet", amount=90.0, due_day=15, next_due_date=date(2025, 3, 15))
    assert mark_as_paid(bill, datetime(2025, 3, 15, 18, 0)).next_due_date == date(2025, 4, 15)


def test_mark_as_paid_clamps_short_month():
    bill = Bill(id="b", name="Rent", amount=1500.0, due_day=31, next_due_date=date(2025, 1, 31))
    assert mark_as_paid(bill, datetime(2025, 2, 3, 10, 0)).next_due_date == date(2025, 2, 28)


def test_mark_as_unpaid_keeps_due_date(sample_bills):
    phone = sample_bills[3]

    unpaid = mark_as_unpaid(phone)

    assert unpaid.is_paid is False
    assert unpaid.last_paid_date is None
    assert unpaid.next_due_date == phone.next_due_date


@pytest.mark.parametrize(
    "changes",
    [
        {"amount": -1.0},
        {"amount": math.nan},
        {"amount": math.inf},
        {"due_day": 0},
        {"due_day": 32},
        {"reminder_days_before": -1},
    ],
)
def test_invalid_bill_rejected(sample_bills, now, changes):
    with pytest.raises(InvalidInputError):
        bill_status(replace(sample_bills[0], **changes), now)


def test_budget_near_limit():
    """Test 850 of 1000 with an 80% threshold alerts without being over budget"""
    budget = Budget(
        id="dining",
        name="Dining out",
        budget_amount=1000.0,
        spent=850.0,
        period=BudgetPeriod.MONTHLY,
        start_date=date(2025, 3, 1),
        alert_threshold=0.8,
    )
    evaluation = evaluate_budget(budget)

    assert evaluation.percentage_used == pytest.approx(85.0)
    assert evaluation.should_alert is True
    assert evaluation.is_over_budget is False
    assert evaluation.remaining == pytest.approx(150.0)
    assert evaluation.status == BudgetStatus.NEAR_LIMIT
    assert evaluation.next_period_start == date(2025, 4, 1)


def test_budget_statuses(sample_budgets):
    statuses = [evaluate_budget(budget).status for budget in sample_budgets]
    assert statuses == [BudgetStatus.ON_TRACK, BudgetStatus.NEAR_LIMIT, BudgetStatus.OVER_LIMIT]


def test_budget_over_limit_not_capped(sample_budgets):
    evaluation = evaluate_budget(sample_budgets[2])

    assert evaluation.percentage_used == pytest.approx(125.0)
    assert evaluation.is_over_budget is True
    assert evaluation.remaining == pytest.approx(-50.0)
    assert evaluation.next_period_start == date(2025, 3, 10)


def test_budget_zero_amount_guard():
    """Test zero budget yields 0% instead of dividing by zero"""
    budget = Budget(
        id="z",
        name="Zero",
        budget_amount=0.0,
        spent=10.0,
        period=BudgetPeriod.YEARLY,
        start_date=date(2025, 1, 1),
    )
    evaluation = evaluate_budget(budget)

    assert evaluation.percentage_used == 0.0
    assert evaluation.is_over_budget is True
    assert evaluation.status == BudgetStatus.OVER_LIMIT


@pytest.mark.parametrize(
    "changes",
    [
        {"spent": -1.0},
        {"spent": math.nan},
        {"budget_amount": -100.0},
        {"budget_amount": math.inf},
        {"alert_threshold": 1.5},
        {"alert_threshold": -0.1},
        {"alert_threshold": math.nan},
    ],
)
def test_invalid_budget_rejected(sample_budgets, changes):
    with pytest.raises(InvalidInputError):
        evaluate_budget(replace(sample_budgets[0], **changes))


def test_goal_progress(sample_goals, now):
    """Test progress and monthly contribution for a half-funded goal"""
    progress = goal_progress(sample_goals[0], now)

    assert progress.progress_percentage == pytest.approx(50.0)
    assert progress.is_completed is False
    assert progress.remaining_amount == pytest.approx(2000.0)
    assert progress.days_remaining == 296  # 2025-03-10 -> 2025-12-31
    assert progress.monthly_contribution_needed == pytest.approx(2000.0 / (296 / 30))


def test_goal_progress_capped_when_exceeded(now):
    goal = Goal(id="g", name="Fund", target_amount=1000.0, current_amount=1500.0, target_date=date(2025, 6, 1))
    progress = goal_progress(goal, now)

    assert progress.progress_percentage == 100.0
    assert progress.is_completed is True
    assert progress.remaining_amount == 0.0
    assert progress.monthly_contribution_needed == 0.0


def test_goal_past_target_date_asks_for_full_remainder(now):
    """Test days remaining clamps to zero and the divisor to one month"""
    goal = Goal(id="g", name="Late", target_amount=1000.0, current_amount=400.0, target_date=date(2025, 1, 1))
    progress = goal_progress(goal, now)

    assert progress.days_remaining == 0
    assert progress.monthly_contribution_needed == pytest.approx(600.0)


def test_goal_short_horizon_uses_one_month_minimum(now):
    goal = Goal(id="g", name="Soon", target_amount=1000.0, current_amount=700.0, target_date=date(2025, 3, 20))
    assert goal_progress(goal, now).monthly_contribution_needed == pytest.approx(300.0)


def test_goal_zero_target_guard(now):
    goal = Goal(id="g", name="Empty", target_amount=0.0, current_amount=0.0, target_date=date(2025, 6, 1))
    progress = goal_progress(goal, now)

    assert progress.progress_percentage == 0.0
    assert progress.is_completed is True


def test_invalid_goal_rejected(now):
    goal = Goal(id="g", name="Bad", target_amount=1000.0, current_amount=-5.0, target_date=date(2025, 6, 1))
    with pytest.raises(InvalidInputError):
        goal_progress(goal, now)


@pytest.mark.parametrize("changes", [{"target_amount": math.nan}, {"current_amount": math.inf}])
def test_non_finite_goal_rejected(sample_goals, now, changes):
    with pytest.raises(InvalidInputError):
        goal_progress(replace(sample_goals[0], **changes), now)

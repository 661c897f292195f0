"""Next-occurrence math for day-of-month and named-period recurrence rules"""

from datetime import date, datetime, timedelta

from obligation_engine.domain.exceptions import DateConstructionError, InvalidInputError
from obligation_engine.domain.models import BudgetPeriod, RecurrenceRule, RuleKind
from obligation_engine.utils.date_utils import add_months, add_years, as_date, as_datetime, clamped_date

FALLBACK_DAYS = 30

_PERIOD_MONTHS = {
    BudgetPeriod.MONTHLY: 1,
    BudgetPeriod.QUARTERLY: 3,
}


def validate_rule(rule: RecurrenceRule) -> None:
    if rule.kind == RuleKind.DAY_OF_MONTH:
        if rule.day is None or not 1 <= rule.day <= 31:
            raise InvalidInputError("day of month must be between 1 and 31")
    elif rule.kind == RuleKind.PERIOD:
        try:
            BudgetPeriod(rule.period)
        except ValueError:
            raise InvalidInputError(f"Unknown recurrence period: {rule.period!r}")
    else:
        raise InvalidInputError(f"Unknown recurrence rule kind: {rule.kind!r}")


def next_day_of_month(day: int, after: date | datetime) -> date:
    """
    First date falling on ``day`` (clamped to short months) strictly after ``after``.

    A plain date counts as midnight, so a bill due on the reference day itself
    rolls to the next month. Falls back to ``after`` + 30 days if the calendar
    cannot produce a date, and raises DateConstructionError when even that is
    out of range.
    """
    reference = as_datetime(after)
    try:
        candidate = clamped_date(reference.year, reference.month, day)
        if as_datetime(candidate) > reference:
            return candidate
        return add_months(candidate, 1, day=day)
    except DateConstructionError:
        try:
            return as_date(after) + timedelta(days=FALLBACK_DAYS)
        except OverflowError as e:
            raise DateConstructionError(f"No date {FALLBACK_DAYS} days after {as_date(after)}") from e


def next_period_start(period: BudgetPeriod, after: date | datetime) -> date:
    """Start of the period following the one beginning at ``after``"""
    period = BudgetPeriod(period)
    start = as_date(after)
    if period == BudgetPeriod.WEEKLY:
        try:
            return start + timedelta(days=7)
        except OverflowError as e:
            raise DateConstructionError(f"No date a week after {start}") from e
    if period == BudgetPeriod.YEARLY:
        return add_years(start, 1)
    return add_months(start, _PERIOD_MONTHS[period])


def next_occurrence(rule: RecurrenceRule, after: date | datetime) -> date:
    """
    Next due date for a rule, never earlier than ``after``.

    Pure: identical inputs always give the same date.
    """
    validate_rule(rule)
    if rule.kind == RuleKind.DAY_OF_MONTH:
        return next_day_of_month(rule.day, after)
    return next_period_start(rule.period, after)

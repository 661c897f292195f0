"""Loan amortization schedules and loan summaries"""

from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, List

from obligation_engine.domain.exceptions import InvalidInputError
from obligation_engine.domain.models import (
    AmortizationEntry,
    Loan,
    LoanStatus,
    LoanSummary,
    LoanTerms,
    PortfolioSummary,
    RecurrenceRule,
)
from obligation_engine.domain.recurrence import next_occurrence
from obligation_engine.utils.date_utils import add_months, as_date, days_between, months_between
from obligation_engine.utils.validation import non_negative

_EPS = 1e-6  # floating residue treated as a zero balance
LOAN_DUE_SOON_DAYS = 5


def validate_terms(terms: LoanTerms) -> None:
    """Reject terms that cannot describe a fixed-rate loan"""
    if not non_negative(terms.principal):
        raise InvalidInputError("principal must be a finite amount >= 0")
    if not non_negative(terms.annual_rate):
        raise InvalidInputError("annual_rate must be a finite rate >= 0")
    if terms.term < 0:
        raise InvalidInputError("term must be >= 0")
    if not 1 <= terms.payment_day <= 31:
        raise InvalidInputError("payment_day must be between 1 and 31")


def validate_loan(loan: Loan) -> None:
    validate_terms(loan.terms)
    if not non_negative(loan.balance):
        raise InvalidInputError(f"Loan {loan.id}: current_balance must be a finite amount >= 0")


def monthly_rate(annual_rate: float) -> float:
    """Convert an annual percentage rate to a monthly fraction (12.0 -> 0.01)"""
    return annual_rate / 100 / 12


def monthly_payment(principal: float, annual_rate: float, term: int) -> float:
    """
    Fixed monthly payment for a fully amortizing loan.

    payment = P * r * (1 + r)^n / ((1 + r)^n - 1), or P / n when the rate is zero.
    Evaluated as P * r / (1 - (1 + r)^-n): for very long terms the discount
    factor underflows to 0 and the payment approaches interest-only.
    """
    if term <= 0:
        return 0.0
    r = monthly_rate(annual_rate)
    if r <= 0:
        return principal / term
    return principal * r / (1 - (1 + r) ** -term)


def payment_date(terms: LoanTerms, payment_number: int) -> date:
    """Scheduled date of a payment: start month + (n - 1) months, on the payment day"""
    return add_months(terms.start_date, payment_number - 1, day=terms.payment_day)


def generate_schedule(terms: LoanTerms) -> List[AmortizationEntry]:
    """
    Build the payment-by-payment schedule for a loan.

    Requirements:
    - Fixed payment computed once up front
    - Interest recomputed each month from the unrounded remaining balance
    - Stops early when the balance reaches zero before the term ends
    - Payment day clamped to the last day of short months (31 -> Feb 28/29)

    Example:
        10000 at 12% over 12 months -> payment 888.49
        first entry: interest 100.00, principal 788.49, balance 9211.51
    """
    validate_terms(terms)

    payment = monthly_payment(terms.principal, terms.annual_rate, terms.term)
    r = monthly_rate(terms.annual_rate)
    balance = float(terms.principal)

    schedule: List[AmortizationEntry] = []
    for number in range(1, terms.term + 1):
        interest = balance * r
        principal_part = payment - interest
        balance = max(0.0, balance - principal_part)
        if balance < _EPS:
            balance = 0.0

        schedule.append(
            AmortizationEntry(
                payment_number=number,
                payment_date=payment_date(terms, number),
                total_payment=payment,
                principal_payment=principal_part,
                interest_payment=interest,
                remaining_balance=balance,
            )
        )

        # Zero-principal loans keep their full all-zero schedule
        if balance == 0.0 and terms.principal > 0:
            break

    return schedule


def total_interest(terms: LoanTerms) -> float:
    """Interest paid over the full term at the fixed payment"""
    payment = monthly_payment(terms.principal, terms.annual_rate, terms.term)
    return payment * terms.term - terms.principal


def end_date(terms: LoanTerms) -> date:
    return add_months(terms.start_date, terms.term)


def remaining_payments(terms: LoanTerms, now: date | datetime) -> int:
    today = as_date(now)
    if today >= end_date(terms):
        return 0
    elapsed = max(0, months_between(terms.start_date, today))
    return max(0, terms.term - elapsed)


def loan_status(loan: Loan, next_payment: date, now: date | datetime) -> LoanStatus:
    if not loan.is_active:
        return LoanStatus.INACTIVE
    if loan.balance <= 0:
        return LoanStatus.PAID_OFF
    if days_between(now, next_payment) <= LOAN_DUE_SOON_DAYS:
        return LoanStatus.DUE_SOON
    return LoanStatus.CURRENT


def summarize_loan(loan: Loan, now: date | datetime) -> LoanSummary:
    """Derived loan figures as of ``now``"""
    validate_loan(loan)
    terms = loan.terms

    progress = 0.0
    if terms.principal > 0:
        progress = (terms.principal - loan.balance) / terms.principal * 100

    next_payment = next_occurrence(RecurrenceRule.day_of_month(terms.payment_day), after=now)

    return LoanSummary(
        monthly_payment=monthly_payment(terms.principal, terms.annual_rate, terms.term),
        total_interest=total_interest(terms),
        end_date=end_date(terms),
        progress_percentage=progress,
        next_payment_date=next_payment,
        remaining_payments=remaining_payments(terms, now),
        status=loan_status(loan, next_payment, now),
    )


def apply_payment(loan: Loan, principal_amount: float) -> Loan:
    """
    Return a new loan with the principal portion of a payment applied.

    The loan deactivates once nothing is owed.
    """
    validate_loan(loan)
    if not non_negative(principal_amount):
        raise InvalidInputError("principal_amount must be a finite amount >= 0")
    new_balance = max(0.0, loan.balance - principal_amount)
    return replace(loan, current_balance=new_balance, is_active=new_balance > 0)


def summarize_portfolio(
    loans: Iterable[Loan],
    now: date | datetime,
    due_soon_days: int = 7,
) -> PortfolioSummary:
    """Totals across loans; balances and payments only count active loans"""
    loans = list(loans)
    for loan in loans:
        validate_loan(loan)
    active = [loan for loan in loans if loan.is_active]

    due_soon = []
    for loan in active:
        next_payment = next_occurrence(RecurrenceRule.day_of_month(loan.terms.payment_day), after=now)
        if days_between(now, next_payment) <= due_soon_days:
            due_soon.append(loan.id)

    return PortfolioSummary(
        total_principal=sum(loan.terms.principal for loan in loans),
        total_current_balance=sum(loan.balance for loan in active),
        total_monthly_payments=sum(
            monthly_payment(loan.terms.principal, loan.terms.annual_rate, loan.terms.term)
            for loan in active
        ),
        total_interest=sum(total_interest(loan.terms) for loan in loans),
        active_loan_ids=tuple(loan.id for loan in active),
        due_soon_loan_ids=tuple(due_soon),
    )

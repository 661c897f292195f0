"""Pydantic schemas for API request/response validation"""

from dataclasses import asdict
from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from obligation_engine.domain.models import (
    AlertIntent,
    AmortizationEntry,
    Bill,
    BillStatus,
    Budget,
    BudgetEvaluation,
    BudgetPeriod,
    BudgetStatus,
    Goal,
    GoalProgress,
    Loan,
    LoanStatus,
    LoanSummary,
    LoanTerms,
    LoanType,
    PortfolioSummary,
    RecurrenceRule,
    RuleKind,
    Transaction,
    TransactionType,
)


def money(value: float) -> float:
    """Two-decimal rounding, applied only when presenting amounts"""
    return round(value, 2)


# Loans


class LoanTermsSchema(BaseModel):
    """Fixed-rate loan terms"""

    principal: float = Field(..., description="Amount borrowed")
    annual_rate: float = Field(..., description="Annual interest rate in percent (12.0 = 12%)")
    term: int = Field(..., description="Number of monthly payments")
    start_date: date
    payment_day: int = Field(..., description="Day of month payments fall on (1-31)")

    def to_domain(self) -> LoanTerms:
        return LoanTerms(**self.model_dump())


class AmortizationEntrySchema(BaseModel):
    """Single payment in an amortization schedule"""

    payment_number: int
    payment_date: date
    total_payment: float
    principal_payment: float
    interest_payment: float
    remaining_balance: float
    is_paid: bool = False

    @classmethod
    def from_domain(cls, entry: AmortizationEntry) -> "AmortizationEntrySchema":
        return cls(
            payment_number=entry.payment_number,
            payment_date=entry.payment_date,
            total_payment=money(entry.total_payment),
            principal_payment=money(entry.principal_payment),
            interest_payment=money(entry.interest_payment),
            remaining_balance=money(entry.remaining_balance),
            is_paid=entry.is_paid,
        )


class ScheduleResponse(BaseModel):
    """Response for POST /v1/loans/schedule"""

    monthly_payment: float
    total_interest: float
    entries: List[AmortizationEntrySchema]


class LoanSchema(BaseModel):
    """Tracked loan"""

    id: str = Field(..., min_length=1)
    name: str
    terms: LoanTermsSchema
    current_balance: Optional[float] = None
    loan_type: LoanType = LoanType.PERSONAL
    is_active: bool = True

    def to_domain(self) -> Loan:
        return Loan(
            id=self.id,
            name=self.name,
            terms=self.terms.to_domain(),
            current_balance=self.current_balance,
            loan_type=self.loan_type,
            is_active=self.is_active,
        )


class LoanSummaryRequest(BaseModel):
    """Request body for POST /v1/loans/summary"""

    now: datetime
    loan: LoanSchema


class LoanSummaryResponse(BaseModel):
    """Response for POST /v1/loans/summary"""

    loan_id: str
    monthly_payment: float
    total_interest: float
    end_date: date
    progress_percentage: float
    next_payment_date: date
    remaining_payments: int
    status: LoanStatus

    @classmethod
    def from_domain(cls, loan_id: str, summary: LoanSummary) -> "LoanSummaryResponse":
        return cls(
            loan_id=loan_id,
            monthly_payment=money(summary.monthly_payment),
            total_interest=money(summary.total_interest),
            end_date=summary.end_date,
            progress_percentage=money(summary.progress_percentage),
            next_payment_date=summary.next_payment_date,
            remaining_payments=summary.remaining_payments,
            status=summary.status,
        )


class PortfolioRequest(BaseModel):
    """Request body for POST /v1/loans/portfolio"""

    now: datetime
    loans: List[LoanSchema]


class PortfolioResponse(BaseModel):
    """Response for POST /v1/loans/portfolio"""

    total_principal: float
    total_current_balance: float
    total_monthly_payments: float
    total_interest: float
    active_loan_ids: List[str]
    due_soon_loan_ids: List[str]

    @classmethod
    def from_domain(cls, summary: PortfolioSummary) -> "PortfolioResponse":
        return cls(
            total_principal=money(summary.total_principal),
            total_current_balance=money(summary.total_current_balance),
            total_monthly_payments=money(summary.total_monthly_payments),
            total_interest=money(summary.total_interest),
            active_loan_ids=list(summary.active_loan_ids),
            due_soon_loan_ids=list(summary.due_soon_loan_ids),
        )


# Recurrence


class RecurrenceRequest(BaseModel):
    """Request body for POST /v1/recurrence/next"""

    kind: RuleKind
    day: Optional[int] = Field(None, description="Day of month for day_of_month rules")
    period: Optional[BudgetPeriod] = Field(None, description="Named period for period rules")
    after: datetime

    def to_rule(self) -> RecurrenceRule:
        return RecurrenceRule(kind=self.kind, day=self.day, period=self.period)


class RecurrenceResponse(BaseModel):
    """Response for POST /v1/recurrence/next"""

    next_occurrence: date


# Bills


class BillSchema(BaseModel):
    """Recurring bill"""

    id: str = Field(..., min_length=1)
    name: str
    amount: float
    due_day: int
    next_due_date: date
    reminder_days_before: int = 3
    is_paid: bool = False
    is_active: bool = True
    last_paid_date: Optional[datetime] = None
    category: str = "other"

    def to_domain(self) -> Bill:
        return Bill(**self.model_dump())

    @classmethod
    def from_domain(cls, bill: Bill) -> "BillSchema":
        return cls(**asdict(bill))


class BillStatusRequest(BaseModel):
    """Request body for POST /v1/bills/status"""

    now: datetime
    bills: List[BillSchema]


class BillStatusItem(BaseModel):
    bill_id: str
    status: BillStatus
    days_until_due: int


class BillStatusResponse(BaseModel):
    """Response for POST /v1/bills/status"""

    bills: List[BillStatusItem]


class MarkPaidRequest(BaseModel):
    """Request body for POST /v1/bills/mark-paid"""

    now: datetime
    bill: BillSchema


class MarkUnpaidRequest(BaseModel):
    """Request body for POST /v1/bills/mark-unpaid"""

    bill: BillSchema


# Budgets


class BudgetSchema(BaseModel):
    """Category budget"""

    id: str = Field(..., min_length=1)
    name: str
    budget_amount: float
    spent: float
    period: BudgetPeriod
    start_date: date
    alert_threshold: float = Field(0.8, description="Fraction of the budget that triggers an alert")
    is_active: bool = True
    category: str = "other"

    def to_domain(self) -> Budget:
        return Budget(**self.model_dump())


class BudgetStatusRequest(BaseModel):
    """Request body for POST /v1/budgets/status"""

    budgets: List[BudgetSchema]


class BudgetStatusItem(BaseModel):
    budget_id: str
    percentage_used: float
    remaining: float
    is_over_budget: bool
    should_alert: bool
    status: BudgetStatus
    next_period_start: date

    @classmethod
    def from_domain(cls, budget_id: str, evaluation: BudgetEvaluation) -> "BudgetStatusItem":
        return cls(
            budget_id=budget_id,
            percentage_used=money(evaluation.percentage_used),
            remaining=money(evaluation.remaining),
            is_over_budget=evaluation.is_over_budget,
            should_alert=evaluation.should_alert,
            status=evaluation.status,
            next_period_start=evaluation.next_period_start,
        )


class BudgetStatusResponse(BaseModel):
    """Response for POST /v1/budgets/status"""

    budgets: List[BudgetStatusItem]


# Goals


class GoalSchema(BaseModel):
    """Savings goal"""

    id: str = Field(..., min_length=1)
    name: str
    target_amount: float
    current_amount: float
    target_date: date
    is_active: bool = True
    category: str = "other"

    def to_domain(self) -> Goal:
        return Goal(**self.model_dump())


class GoalProgressRequest(BaseModel):
    """Request body for POST /v1/goals/progress"""

    now: datetime
    goals: List[GoalSchema]


class GoalProgressItem(BaseModel):
    goal_id: str
    progress_percentage: float
    is_completed: bool
    remaining_amount: float
    days_remaining: int
    monthly_contribution_needed: float

    @classmethod
    def from_domain(cls, goal_id: str, progress: GoalProgress) -> "GoalProgressItem":
        return cls(
            goal_id=goal_id,
            progress_percentage=money(progress.progress_percentage),
            is_completed=progress.is_completed,
            remaining_amount=money(progress.remaining_amount),
            days_remaining=progress.days_remaining,
            monthly_contribution_needed=money(progress.monthly_contribution_needed),
        )


class GoalProgressResponse(BaseModel):
    """Response for POST /v1/goals/progress"""

    goals: List[GoalProgressItem]


# Alerts


class TransactionSchema(BaseModel):
    """Transaction screened for unusually large expenses"""

    id: str = Field(..., min_length=1)
    type: TransactionType
    amount: float
    description: str = ""
    occurred_on: Optional[date] = None

    def to_domain(self) -> Transaction:
        return Transaction(**self.model_dump())


class AlertPlanRequest(BaseModel):
    """Request body for POST /v1/alerts/plan"""

    now: datetime
    bills: List[BillSchema] = []
    budgets: List[BudgetSchema] = []
    goals: List[GoalSchema] = []
    transactions: List[TransactionSchema] = []
    notified_milestones: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Goal id -> milestone identifiers already delivered (goal:{id}:{percent})",
    )
    suspicious_threshold: Optional[float] = Field(
        None, description="Overrides the configured suspicious activity threshold"
    )


class AlertIntentSchema(BaseModel):
    """Single planned notification"""

    identifier: str
    category: str
    severity: str
    payload: Dict[str, Any]

    @classmethod
    def from_domain(cls, intent: AlertIntent) -> "AlertIntentSchema":
        return cls(
            identifier=intent.identifier,
            category=intent.category.value,
            severity=intent.severity.value,
            payload={
                key: money(value) if isinstance(value, float) else value
                for key, value in intent.payload.items()
            },
        )


class AlertPlanResponse(BaseModel):
    """Response for POST /v1/alerts/plan"""

    intents: List[AlertIntentSchema]

"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional


class LoanType(str, Enum):
    PERSONAL = "personal"
    HOME = "home"
    AUTO = "auto"
    STUDENT = "student"
    BUSINESS = "business"
    CONSOLIDATION = "consolidation"
    OTHER = "other"


class LoanStatus(str, Enum):
    INACTIVE = "inactive"
    PAID_OFF = "paidOff"
    DUE_SOON = "dueSoon"
    CURRENT = "current"


class BudgetPeriod(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class RuleKind(str, Enum):
    DAY_OF_MONTH = "day_of_month"
    PERIOD = "period"


class BillStatus(str, Enum):
    PAID = "paid"
    OVERDUE = "overdue"
    DUE_SOON = "dueSoon"
    UPCOMING = "upcoming"


class BudgetStatus(str, Enum):
    ON_TRACK = "onTrack"
    NEAR_LIMIT = "nearLimit"
    OVER_LIMIT = "overLimit"


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class AlertCategory(str, Enum):
    BILL_REMINDER = "bill_reminder"
    BUDGET_ALERT = "budget_alert"
    GOAL_PROGRESS = "goal_progress"
    GOAL_COMPLETED = "goal_completed"
    SUSPICIOUS_ACTIVITY = "suspicious_activity"


class AlertSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class LoanTerms:
    """Fixed-rate loan terms; annual_rate is a percentage (12.0 = 12%)"""

    principal: float
    annual_rate: float
    term: int  # number of monthly payments
    start_date: date
    payment_day: int  # 1-31


@dataclass(frozen=True)
class Loan:
    """Tracked loan: its terms plus the balance still owed"""

    id: str
    name: str
    terms: LoanTerms
    current_balance: Optional[float] = None  # None means nothing repaid yet
    loan_type: LoanType = LoanType.PERSONAL
    is_active: bool = True

    @property
    def balance(self) -> float:
        if self.current_balance is None:
            return self.terms.principal
        return self.current_balance


@dataclass(frozen=True)
class AmortizationEntry:
    """Single payment in an amortization schedule"""

    payment_number: int
    payment_date: date
    total_payment: float
    principal_payment: float
    interest_payment: float
    remaining_balance: float
    is_paid: bool = False


@dataclass(frozen=True)
class LoanSummary:
    """Derived figures for a loan at a point in time"""

    monthly_payment: float
    total_interest: float
    end_date: date
    progress_percentage: float
    next_payment_date: date
    remaining_payments: int
    status: LoanStatus


@dataclass(frozen=True)
class PortfolioSummary:
    """Totals across a set of loans"""

    total_principal: float
    total_current_balance: float
    total_monthly_payments: float
    total_interest: float
    active_loan_ids: tuple
    due_soon_loan_ids: tuple


@dataclass(frozen=True)
class RecurrenceRule:
    """
    How a due date advances.

    Either a fixed day of month (bills) or a named period (budgets).
    Build with ``RecurrenceRule.day_of_month(15)`` or
    ``RecurrenceRule.every(BudgetPeriod.MONTHLY)``.
    """

    kind: RuleKind
    day: Optional[int] = None
    period: Optional[BudgetPeriod] = None

    @classmethod
    def day_of_month(cls, day: int) -> "RecurrenceRule":
        return cls(kind=RuleKind.DAY_OF_MONTH, day=day)

    @classmethod
    def every(cls, period: BudgetPeriod) -> "RecurrenceRule":
        return cls(kind=RuleKind.PERIOD, period=period)


@dataclass(frozen=True)
class Bill:
    """Recurring bill due on a fixed day of each month"""

    id: str
    name: str
    amount: float
    due_day: int  # 1-31
    next_due_date: date
    reminder_days_before: int = 3
    is_paid: bool = False
    is_active: bool = True
    last_paid_date: Optional[datetime] = None
    category: str = "other"


@dataclass(frozen=True)
class Budget:
    """Spending limit for a category over a named period"""

    id: str
    name: str
    budget_amount: float
    spent: float
    period: BudgetPeriod
    start_date: date
    alert_threshold: float = 0.8  # fraction of budget_amount, 0-1
    is_active: bool = True
    category: str = "other"


@dataclass(frozen=True)
class BudgetEvaluation:
    """Derived budget figures"""

    percentage_used: float
    remaining: float
    is_over_budget: bool
    should_alert: bool
    status: BudgetStatus
    next_period_start: date


@dataclass(frozen=True)
class Goal:
    """Savings goal with a target amount and date"""

    id: str
    name: str
    target_amount: float
    current_amount: float
    target_date: date
    is_active: bool = True
    category: str = "other"


@dataclass(frozen=True)
class GoalProgress:
    """Derived goal figures"""

    progress_percentage: float
    is_completed: bool
    remaining_amount: float
    days_remaining: int
    monthly_contribution_needed: float


@dataclass(frozen=True)
class Transaction:
    """Account transaction screened for unusually large expenses"""

    id: str
    type: TransactionType
    amount: float
    description: str = ""
    occurred_on: Optional[date] = None


@dataclass(frozen=True)
class AlertIntent:
    """Planned notification, handed to an external delivery layer"""

    identifier: str
    category: AlertCategory
    severity: AlertSeverity
    payload: Dict[str, Any] = field(default_factory=dict)

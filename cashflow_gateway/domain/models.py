"""Domain models - pure Python dataclasses representing accounts, history and projections"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

# Account types
BANK = "BANK"
CREDIT_CARD = "CREDIT_CARD"
CASH = "CASH"
WALLET = "WALLET"

# Transaction types
INGRESO = "INGRESO"  # income
EGRESO = "EGRESO"  # expense
TRANSFERENCIA = "TRANSFERENCIA"
PAGO_TARJETA = "PAGO_TARJETA"


@dataclass
class Account:
    """Active account as read from the data-access layer"""

    id: str
    name: str
    type: str  # BANK | CREDIT_CARD | CASH | WALLET
    currency: str  # GTQ | USD
    balance: Decimal  # owed debt for CREDIT_CARD
    credit_limit: Optional[Decimal] = None
    payment_day: Optional[int] = None
    cutoff_day: Optional[int] = None
    is_active: bool = True
    bank_name: Optional[str] = None
    bank_short_name: Optional[str] = None
    bank_color: Optional[str] = None

    @property
    def is_credit_card(self) -> bool:
        return self.type == CREDIT_CARD


@dataclass
class Transaction:
    """Historical transaction"""

    type: str  # INGRESO | EGRESO | TRANSFERENCIA | PAGO_TARJETA
    amount: Decimal
    date: date
    description: Optional[str] = None
    from_account_id: Optional[str] = None
    to_account_id: Optional[str] = None


@dataclass
class RecurringPattern:
    """Group of same-description transactions with consistent amounts"""

    key: str
    amounts: List[Decimal]
    days_of_month: List[int]
    transaction_type: str
    mean_amount: Decimal
    std_dev: Decimal
    coefficient_of_variation: Decimal
    avg_day: int
    confidence: str  # high | medium

    @property
    def occurrences(self) -> int:
        return len(self.amounts)


@dataclass
class ProjectedEvent:
    """Expected future cash-flow event"""

    date: date
    kind: str  # income | expense | card_payment
    amount: Decimal
    description: str
    source: str  # projected_from_history | recurring | card_due
    confidence: str  # high | medium | low

    @property
    def is_income(self) -> bool:
        return self.kind == "income"


@dataclass
class DailyProjection:
    """One simulated day"""

    date: date
    label: str
    balance: Decimal
    income: Decimal
    expense: Decimal
    events: List[ProjectedEvent] = field(default_factory=list)


@dataclass
class SimulationResult:
    """Output of the balance walk before presentation downsampling"""

    days: List[DailyProjection]
    starting_balance: Decimal
    projected_end_balance: Decimal
    lowest_point: Optional[DailyProjection]
    total_income: Decimal
    total_expense: Decimal


@dataclass
class CardPaymentInfo:
    """Payment metadata for a credit card"""

    id: str
    name: str
    balance: Decimal
    payment_day: Optional[int]
    cutoff_day: Optional[int]
    bank_name: Optional[str] = None
    bank_short_name: Optional[str] = None
    bank_color: Optional[str] = None


@dataclass
class CashFlowReport:
    """Summary returned to the presentation layer"""

    currency: str
    horizon_days: int
    current_balance: Decimal
    current_debt: Decimal
    projected_end_balance: Decimal
    projected_income: Decimal
    projected_expenses: Decimal
    lowest_point: Optional[DailyProjection]
    avg_daily_income: Decimal
    avg_daily_expense: Decimal
    daily_projection: List[DailyProjection]
    upcoming_events: List[ProjectedEvent]
    credit_card_payments: List[CardPaymentInfo]
    recurring_patterns: List[RecurringPattern]
    event_count: int

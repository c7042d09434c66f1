"""Pydantic schemas for API response validation"""

from pydantic import BaseModel
import datetime as dt
from typing import List, Optional


class ProjectedEventSchema(BaseModel):
    """Expected future cash-flow event"""

    date: dt.date
    kind: str
    amount: float
    description: str
    source: str
    confidence: str


class DailyProjectionSchema(BaseModel):
    """Running balance for one day"""

    date: dt.date
    label: str
    balance: float
    income: float
    expense: float
    events: List[ProjectedEventSchema]


class LowestPointSchema(BaseModel):
    """Day with the lowest projected balance"""

    date: Optional[dt.date] = None
    label: Optional[str] = None
    balance: Optional[float] = None


class BankSchema(BaseModel):
    name: str
    short_name: Optional[str] = None
    color: Optional[str] = None


class CardPaymentSchema(BaseModel):
    """Payment metadata for a credit card"""

    id: str
    name: str
    bank: Optional[BankSchema] = None
    balance: float
    payment_day: Optional[int] = None
    cutoff_day: Optional[int] = None


class RecurringPatternSchema(BaseModel):
    """Recurring history pattern behind projected events"""

    description: str
    transaction_type: str
    occurrences: int
    mean_amount: float
    std_dev: float
    avg_day: int
    confidence: str


class CashFlowResponse(BaseModel):
    """Response for GET /v1/cashflow"""

    currency: str
    horizon_days: int
    current_balance: float
    current_debt: float
    projected_end_balance: float
    projected_income: float
    projected_expenses: float
    lowest_point: LowestPointSchema
    avg_daily_income: float
    avg_daily_expense: float
    daily_projection: List[DailyProjectionSchema]
    upcoming_events: List[ProjectedEventSchema]
    credit_card_payments: List[CardPaymentSchema]
    recurring_patterns: List[RecurringPatternSchema]

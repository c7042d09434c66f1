"""Cash-flow projection engine - assembles the full report from accounts and history"""

from dataclasses import dataclass, replace
from datetime import date, timedelta
from decimal import Decimal
from typing import List

from cashflow_gateway.domain.currency import ZERO, convert_currency, round_money
from cashflow_gateway.domain.events import project_events
from cashflow_gateway.domain.exceptions import InvalidHorizonError
from cashflow_gateway.domain.models import (
    EGRESO,
    INGRESO,
    Account,
    CardPaymentInfo,
    CashFlowReport,
    Transaction,
)
from cashflow_gateway.domain.patterns import (
    DEFAULT_CV_THRESHOLD,
    HIGH_CONFIDENCE_OCCURRENCES,
    MIN_OCCURRENCES,
    extract_recurring_patterns,
)
from cashflow_gateway.domain.simulation import downsample, simulate_balance


@dataclass
class ProjectionOptions:
    """Tunables for a projection run"""

    display_currency: str = "GTQ"
    exchange_rate: Decimal = Decimal("7.85")  # GTQ per USD
    history_window_days: int = 90
    cv_threshold: Decimal = DEFAULT_CV_THRESHOLD
    min_occurrences: int = MIN_OCCURRENCES
    high_confidence_occurrences: int = HIGH_CONFIDENCE_OCCURRENCES
    upcoming_events_limit: int = 10
    project_all_occurrences: bool = False


def to_display_currency(accounts: List[Account], options: ProjectionOptions) -> List[Account]:
    """Copies of the active accounts with balances in the display currency"""
    return [
        replace(
            account,
            balance=round_money(
                convert_currency(account.balance, account.currency, options.display_currency, options.exchange_rate)
            ),
            currency=options.display_currency,
        )
        for account in accounts
        if account.is_active
    ]


def history_window(transactions: List[Transaction], today: date, window_days: int) -> List[Transaction]:
    """Transactions dated within the trailing window ending today"""
    start = today - timedelta(days=window_days)
    return [t for t in transactions if start <= t.date <= today]


def average_daily_flows(transactions: List[Transaction], window_days: int) -> tuple[Decimal, Decimal]:
    """
    Historical average daily income and expense.

    Only INGRESO and EGRESO count; transfers and card payments move money
    between own accounts.
    """
    total_income = sum((Decimal(t.amount) for t in transactions if t.type == INGRESO), start=ZERO)
    total_expense = sum((Decimal(t.amount) for t in transactions if t.type == EGRESO), start=ZERO)
    return round_money(total_income / window_days), round_money(total_expense / window_days)


def card_payment_info(cards: List[Account]) -> List[CardPaymentInfo]:
    return [
        CardPaymentInfo(
            id=card.id,
            name=card.name,
            balance=card.balance,
            payment_day=card.payment_day,
            cutoff_day=card.cutoff_day,
            bank_name=card.bank_name,
            bank_short_name=card.bank_short_name,
            bank_color=card.bank_color,
        )
        for card in cards
        if card.payment_day
    ]


def build_cashflow_report(
    accounts: List[Account],
    transactions: List[Transaction],
    days: int,
    today: date,
    options: ProjectionOptions | None = None,
) -> CashFlowReport:
    """
    Main entry point: project balances for the next `days` days.

    Pipeline:
    1. Convert active account balances to the display currency
    2. Extract recurring patterns from the trailing history window
    3. Project card payment and recurring events
    4. Simulate the running balance day by day

    Raises:
        InvalidHorizonError: If days is not positive
        UnsupportedCurrencyError: If an account uses an unknown currency
    """
    if days <= 0:
        raise InvalidHorizonError(f"Projection horizon must be positive, got {days}")
    options = options or ProjectionOptions()

    active = to_display_currency(accounts, options)
    cards = [a for a in active if a.is_credit_card]
    current_balance = sum((a.balance for a in active if not a.is_credit_card), start=ZERO)
    current_debt = sum((a.balance for a in cards), start=ZERO)

    history = history_window(transactions, today, options.history_window_days)
    avg_income, avg_expense = average_daily_flows(history, options.history_window_days)

    patterns = extract_recurring_patterns(
        history,
        cv_threshold=options.cv_threshold,
        min_occurrences=options.min_occurrences,
        high_confidence_occurrences=options.high_confidence_occurrences,
    )
    events = project_events(active, patterns, days, today, options.project_all_occurrences)
    result = simulate_balance(current_balance, events, days, avg_income, avg_expense, today)

    return CashFlowReport(
        currency=options.display_currency,
        horizon_days=days,
        current_balance=current_balance,
        current_debt=current_debt,
        projected_end_balance=result.projected_end_balance,
        projected_income=result.total_income,
        projected_expenses=result.total_expense,
        lowest_point=result.lowest_point,
        avg_daily_income=avg_income,
        avg_daily_expense=avg_expense,
        daily_projection=downsample(result.days, days),
        upcoming_events=events[: options.upcoming_events_limit],
        credit_card_payments=card_payment_info(cards),
        recurring_patterns=patterns,
        event_count=len(events),
    )

"""Event projection: card payment due dates plus recurring history patterns"""

from datetime import date, timedelta
from typing import List

from cashflow_gateway.domain.currency import ZERO, round_money
from cashflow_gateway.domain.models import (
    INGRESO,
    Account,
    ProjectedEvent,
    RecurringPattern,
)
from cashflow_gateway.utils.date_utils import monthly_occurrences


def horizon_bounds(today: date, days: int) -> tuple[date, date]:
    """Projection window: tomorrow through today + days (inclusive)"""
    return today + timedelta(days=1), today + timedelta(days=days)


def card_payment_description(card: Account) -> str:
    """'Pago <card>' with the bank's short name in parentheses when known"""
    bank = card.bank_short_name or card.bank_name
    return f"Pago {card.name} ({bank})" if bank else f"Pago {card.name}"


def pattern_description(pattern: RecurringPattern) -> str:
    """Normalized key with the first character capitalized"""
    return pattern.key[:1].upper() + pattern.key[1:]


def _due_dates(day: int, start: date, end: date, all_occurrences: bool) -> List[date]:
    occurrences = monthly_occurrences(day, start, end)
    return occurrences if all_occurrences else occurrences[:1]


def project_card_payments(
    accounts: List[Account],
    today: date,
    days: int,
    all_occurrences: bool = False,
) -> List[ProjectedEvent]:
    """
    Deterministic payment events for credit cards with a payment day and debt.

    Only the next due date inside the horizon is projected unless
    all_occurrences is set.
    """
    start, end = horizon_bounds(today, days)
    events = []
    for card in accounts:
        if not card.is_credit_card or not card.payment_day or card.balance <= ZERO:
            continue
        for due in _due_dates(card.payment_day, start, end, all_occurrences):
            events.append(
                ProjectedEvent(
                    date=due,
                    kind="card_payment",
                    amount=round_money(card.balance),
                    description=card_payment_description(card),
                    source="card_due",
                    confidence="high",
                )
            )
    return events


def project_recurring(
    patterns: List[RecurringPattern],
    today: date,
    days: int,
    all_occurrences: bool = False,
) -> List[ProjectedEvent]:
    """Next occurrence of each recurring pattern inside the horizon"""
    start, end = horizon_bounds(today, days)
    events = []
    for pattern in patterns:
        kind = "income" if pattern.transaction_type == INGRESO else "expense"
        for due in _due_dates(pattern.avg_day, start, end, all_occurrences):
            events.append(
                ProjectedEvent(
                    date=due,
                    kind=kind,
                    amount=round_money(pattern.mean_amount),
                    description=pattern_description(pattern),
                    source="recurring",
                    confidence=pattern.confidence,
                )
            )
    return events


def project_events(
    accounts: List[Account],
    patterns: List[RecurringPattern],
    days: int,
    today: date,
    all_occurrences: bool = False,
) -> List[ProjectedEvent]:
    """
    Calendar of expected cash-flow events for the next `days` days.

    Card payments come first, then recurring patterns; the result is sorted
    by ISO date, keeping that order for events on the same day.
    """
    events = project_card_payments(accounts, today, days, all_occurrences)
    events.extend(project_recurring(patterns, today, days, all_occurrences))
    events.sort(key=lambda e: e.date.isoformat())
    return events

"""Day-by-day balance simulation over the projection horizon"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from cashflow_gateway.domain.currency import ZERO, round_money
from cashflow_gateway.domain.exceptions import InvalidHorizonError
from cashflow_gateway.domain.models import (
    DailyProjection,
    ProjectedEvent,
    SimulationResult,
)
from cashflow_gateway.utils.date_utils import format_day_label, generate_date_range

# Horizons longer than this are downsampled to one point per week
DOWNSAMPLE_THRESHOLD_DAYS = 30
DOWNSAMPLE_STEP = 7


def _events_by_date(events: List[ProjectedEvent]) -> Dict[date, List[ProjectedEvent]]:
    by_date: Dict[date, List[ProjectedEvent]] = {}
    for event in events:
        by_date.setdefault(event.date, []).append(event)
    return by_date


def find_lowest_point(days: List[DailyProjection]) -> Optional[DailyProjection]:
    """First day with the minimum running balance"""
    lowest = None
    for day in days:
        if lowest is None or day.balance < lowest.balance:
            lowest = day
    return lowest


def simulate_balance(
    starting_balance: Decimal,
    events: List[ProjectedEvent],
    days: int,
    avg_daily_income: Decimal,
    avg_daily_expense: Decimal,
    today: date,
) -> SimulationResult:
    """
    Walk the horizon from today, applying each day's events.

    Days with at least one projected event apply only those events; days
    without events apply the historical baseline (avg income in, avg expense
    out). The running balance is rounded to cents after every day, so
    starting_balance + sum(income - expense) equals the final balance exactly.

    Raises:
        InvalidHorizonError: If days is not positive
    """
    if days <= 0:
        raise InvalidHorizonError(f"Projection horizon must be positive, got {days}")

    baseline_income = round_money(avg_daily_income)
    baseline_expense = round_money(avg_daily_expense)
    by_date = _events_by_date(events)

    running = round_money(starting_balance)
    series: List[DailyProjection] = []

    for current in generate_date_range(today, days):
        day_events = by_date.get(current, [])
        income = ZERO
        expense = ZERO

        if day_events:
            for event in day_events:
                if event.is_income:
                    income += event.amount
                else:
                    expense += event.amount
        else:
            income = baseline_income
            expense = baseline_expense

        running = round_money(running + income - expense)
        series.append(
            DailyProjection(
                date=current,
                label=format_day_label(current),
                balance=running,
                income=income,
                expense=expense,
                events=day_events,
            )
        )

    return SimulationResult(
        days=series,
        starting_balance=round_money(starting_balance),
        projected_end_balance=series[-1].balance,
        lowest_point=find_lowest_point(series),
        total_income=sum((d.income for d in series), start=ZERO),
        total_expense=sum((d.expense for d in series), start=ZERO),
    )


def downsample(series: List[DailyProjection], days: int) -> List[DailyProjection]:
    """
    Bound the serialized series for long horizons.

    Horizons over 30 days keep every 7th day plus the last day; shorter
    horizons keep every day.
    """
    if days <= DOWNSAMPLE_THRESHOLD_DAYS:
        return list(series)
    last = len(series) - 1
    return [day for i, day in enumerate(series) if i % DOWNSAMPLE_STEP == 0 or i == last]

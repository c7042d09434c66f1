"""Recurring pattern extraction from transaction history"""

import statistics
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from cashflow_gateway.domain.models import RecurringPattern, Transaction

# Coefficient of variation below which a group's amounts count as predictable
DEFAULT_CV_THRESHOLD = Decimal("0.20")
MIN_OCCURRENCES = 2
HIGH_CONFIDENCE_OCCURRENCES = 3


def normalize_description(description: Optional[str]) -> str:
    """Grouping key for a transaction description ('' when missing)"""
    return (description or "").strip().lower()


def group_by_description(transactions: List[Transaction]) -> Dict[str, List[Transaction]]:
    """Group transactions by normalized description, skipping blank descriptions"""
    groups: Dict[str, List[Transaction]] = {}
    for txn in transactions:
        key = normalize_description(txn.description)
        if not key:
            continue
        groups.setdefault(key, []).append(txn)
    return groups


def analyze_group(
    key: str,
    members: List[Transaction],
    cv_threshold: Decimal = DEFAULT_CV_THRESHOLD,
    min_occurrences: int = MIN_OCCURRENCES,
    high_confidence_occurrences: int = HIGH_CONFIDENCE_OCCURRENCES,
) -> Optional[RecurringPattern]:
    """
    Classify one description group.

    Returns a RecurringPattern when the group has enough members and its
    coefficient of variation (population std dev / mean) is below cv_threshold,
    otherwise None. A zero mean is never recurring.
    """
    if len(members) < min_occurrences:
        return None

    amounts = [Decimal(t.amount) for t in members]
    days = [t.date.day for t in members]

    mean_amount = statistics.mean(amounts)
    if mean_amount == 0:
        return None

    std_dev = statistics.pstdev(amounts, mu=mean_amount)
    cv = std_dev / mean_amount
    if not cv < cv_threshold:
        return None

    avg_day = int((Decimal(sum(days)) / len(days)).quantize(Decimal(1), rounding=ROUND_HALF_UP))

    return RecurringPattern(
        key=key,
        amounts=amounts,
        days_of_month=days,
        transaction_type=members[0].type,
        mean_amount=mean_amount,
        std_dev=std_dev,
        coefficient_of_variation=cv,
        avg_day=avg_day,
        confidence="high" if len(members) >= high_confidence_occurrences else "medium",
    )


def extract_recurring_patterns(
    transactions: List[Transaction],
    cv_threshold: Decimal = DEFAULT_CV_THRESHOLD,
    min_occurrences: int = MIN_OCCURRENCES,
    high_confidence_occurrences: int = HIGH_CONFIDENCE_OCCURRENCES,
) -> List[RecurringPattern]:
    """
    Find descriptions whose historical amounts cluster tightly enough to be
    treated as a predictable periodic event (rent, payroll, subscriptions).

    Patterns are returned in first-seen order of their description.
    """
    patterns = []
    for key, members in group_by_description(transactions).items():
        pattern = analyze_group(key, members, cv_threshold, min_occurrences, high_confidence_occurrences)
        if pattern is not None:
            patterns.append(pattern)
    return patterns

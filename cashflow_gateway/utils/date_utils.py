"""Date manipulation utilities"""

import calendar
from datetime import date, timedelta
from typing import List

# es-GT short names, matching the dashboard's "lun, 5 oct" labels
_WEEKDAYS_ES = ["lun", "mar", "mié", "jue", "vie", "sáb", "dom"]
_MONTHS_ES = ["ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sept", "oct", "nov", "dic"]


def generate_date_range(start: date, count: int) -> List[date]:
    """Generate `count` consecutive dates beginning at start"""
    return [start + timedelta(days=i) for i in range(count)]


def add_months(year: int, month: int, offset: int) -> tuple[int, int]:
    """Shift a (year, month) pair by offset months"""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def day_in_month(year: int, month: int, day: int) -> date:
    """Build a date, clamping day to 1..last day of the month"""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, max(1, min(day, last_day)))


def monthly_occurrences(day: int, start: date, end: date) -> List[date]:
    """
    All dates in [start, end] that fall on the given day-of-month.

    Days past a month's end (e.g. 31 in April) land on the month's last day.
    """
    occurrences = []
    offset = 0
    while True:
        year, month = add_months(start.year, start.month, offset)
        candidate = day_in_month(year, month, day)
        if candidate > end:
            break
        if candidate >= start:
            occurrences.append(candidate)
        offset += 1
    return occurrences


def format_day_label(day: date) -> str:
    """Short Spanish label, e.g. 'lun, 5 oct'"""
    return f"{_WEEKDAYS_ES[day.weekday()]}, {day.day} {_MONTHS_ES[day.month - 1]}"

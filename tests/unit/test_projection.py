"""Unit tests for cash flow report assembly"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from cashflow_gateway.domain.exceptions import InvalidHorizonError, UnsupportedCurrencyError
from cashflow_gateway.domain.models import INGRESO, EGRESO, TRANSFERENCIA, PAGO_TARJETA
from cashflow_gateway.domain.projection import (
    ProjectionOptions,
    average_daily_flows,
    build_cashflow_report,
    history_window,
)
from conftest import TODAY, make_account, make_transaction


@pytest.fixture
def accounts():
    return [
        make_account("Monetaria", "BANK", "20000"),
        make_account("Caja chica", "CASH", "500"),
        make_account("Visa Oro", "CREDIT_CARD", "5000", payment_day=10, cutoff_day=25, bank_name="Banco Industrial", bank_short_name="BI", bank_color="#1e40af"),
    ]


def test_report_combines_cards_and_recurring(accounts, mixed_history):
    report = build_cashflow_report(accounts, mixed_history, 30, TODAY)

    assert report.current_balance == Decimal("20500.00")
    assert report.current_debt == Decimal("5000.00")
    assert [(e.date, e.kind, e.amount) for e in report.upcoming_events] == [
        (date(2025, 4, 1), "income", Decimal("10000.00")),
        (date(2025, 4, 5), "expense", Decimal("3500.00")),
        (date(2025, 4, 10), "card_payment", Decimal("5000.00")),
    ]
    assert [p.key for p in report.recurring_patterns] == ["salario", "renta oficina"]
    assert report.event_count == 3


def test_report_totals_match_daily_series(accounts, mixed_history):
    report = build_cashflow_report(accounts, mixed_history, 30, TODAY)

    assert len(report.daily_projection) == 30
    assert report.projected_income == sum(d.income for d in report.daily_projection)
    assert report.projected_expenses == sum(d.expense for d in report.daily_projection)
    assert report.projected_end_balance == (
        report.current_balance + report.projected_income - report.projected_expenses
    )


def test_salary_projection(salary_history):
    report = build_cashflow_report([make_account("Monetaria", "BANK", "1000")], salary_history, 30, TODAY)

    assert report.avg_daily_income == Decimal("333.33")  # 30000 / 90
    assert report.avg_daily_expense == Decimal("0.00")
    assert len(report.upcoming_events) == 1
    salary = report.upcoming_events[0]
    assert salary.date == date(2025, 4, 1)
    assert salary.description == "Salario"
    assert salary.confidence == "high"


def test_empty_inputs_produce_baseline_only_report():
    report = build_cashflow_report([], [], 5, TODAY)

    assert report.current_balance == Decimal("0")
    assert report.upcoming_events == []
    assert report.recurring_patterns == []
    assert report.credit_card_payments == []
    assert len(report.daily_projection) == 5
    assert report.lowest_point.date == TODAY
    assert report.projected_end_balance == Decimal("0.00")


def test_flat_projection_for_cash_only():
    report = build_cashflow_report([make_account("Caja", "CASH", "1000")], [], 5, TODAY)

    assert [d.balance for d in report.daily_projection] == [Decimal("1000.00")] * 5
    assert report.lowest_point.date == TODAY


def test_usd_balances_converted():
    accounts = [
        make_account("Monetaria", "BANK", "1000"),
        make_account("Dólares", "BANK", "100", currency="USD"),
        make_account("Amex", "CREDIT_CARD", "100", currency="USD", payment_day=5),
    ]
    report = build_cashflow_report(accounts, [], 30, TODAY, ProjectionOptions(exchange_rate=Decimal("7.85")))

    assert report.current_balance == Decimal("1785.00")
    assert report.current_debt == Decimal("785.00")
    assert report.upcoming_events[0].amount == Decimal("785.00")
    assert report.credit_card_payments[0].balance == Decimal("785.00")


def test_unsupported_currency_raises():
    with pytest.raises(UnsupportedCurrencyError):
        build_cashflow_report([make_account("Euros", "BANK", "10", currency="EUR")], [], 5, TODAY)


def test_inactive_accounts_ignored():
    accounts = [
        make_account("Monetaria", "BANK", "1000"),
        make_account("Cerrada", "BANK", "9999", is_active=False),
        make_account("Vieja", "CREDIT_CARD", "800", payment_day=1, is_active=False),
    ]
    report = build_cashflow_report(accounts, [], 30, TODAY)

    assert report.current_balance == Decimal("1000.00")
    assert report.current_debt == Decimal("0")
    assert report.upcoming_events == []
    assert report.credit_card_payments == []


def test_card_metadata_lists_cards_with_payment_day(accounts):
    accounts.append(make_account("Mastercard", "CREDIT_CARD", "0", payment_day=28))
    accounts.append(make_account("Sin fecha", "CREDIT_CARD", "300"))
    report = build_cashflow_report(accounts, [], 30, TODAY)

    assert [c.name for c in report.credit_card_payments] == ["Visa Oro", "Mastercard"]
    visa = report.credit_card_payments[0]
    assert visa.cutoff_day == 25
    assert visa.bank_short_name == "BI"
    assert visa.bank_color == "#1e40af"
    # Zero balance card: listed, but no payment event
    assert [e.description for e in report.upcoming_events] == ["Pago Visa Oro (BI)"]


def test_baseline_ignores_transfers_and_card_payments():
    transactions = [
        make_transaction("Venta", "900", TODAY - timedelta(days=3), INGRESO),
        make_transaction("Papelería", "450", TODAY - timedelta(days=4), EGRESO),
        make_transaction("Traslado", "5000", TODAY - timedelta(days=5), TRANSFERENCIA),
        make_transaction("Pago Visa", "2000", TODAY - timedelta(days=6), PAGO_TARJETA),
    ]
    assert average_daily_flows(transactions, 90) == (Decimal("10.00"), Decimal("5.00"))


def test_history_window_drops_old_and_future_transactions():
    transactions = [
        make_transaction("Antigua", "10", TODAY - timedelta(days=91)),
        make_transaction("Límite", "10", TODAY - timedelta(days=90)),
        make_transaction("Hoy", "10", TODAY),
        make_transaction("Futura", "10", TODAY + timedelta(days=1)),
    ]
    assert [t.description for t in history_window(transactions, TODAY, 90)] == ["Límite", "Hoy"]


def test_upcoming_events_limited(accounts, mixed_history):
    options = ProjectionOptions(upcoming_events_limit=1)
    report = build_cashflow_report(accounts, mixed_history, 30, TODAY, options)

    assert len(report.upcoming_events) == 1
    assert report.event_count == 3


def test_all_occurrences_option(accounts, salary_history):
    options = ProjectionOptions(project_all_occurrences=True)
    report = build_cashflow_report(accounts, salary_history, 90, TODAY, options)

    assert [e.date for e in report.upcoming_events if e.kind == "income"] == [
        date(2025, 4, 1),
        date(2025, 5, 1),
        date(2025, 6, 1),
    ]


def test_long_horizon_downsampled(accounts):
    report = build_cashflow_report(accounts, [], 90, TODAY)
    assert len(report.daily_projection) == 14


@pytest.mark.parametrize("days", [0, -1])
def test_invalid_horizon(days):
    with pytest.raises(InvalidHorizonError):
        build_cashflow_report([], [], days, TODAY)

"""GET /v1/cashflow - Cash flow projection endpoint"""

import asyncio
import time
import logging
from datetime import date, timedelta
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from cashflow_gateway.api.v1.schemas import (
    BankSchema,
    CardPaymentSchema,
    CashFlowResponse,
    DailyProjectionSchema,
    LowestPointSchema,
    ProjectedEventSchema,
    RecurringPatternSchema,
)
from cashflow_gateway.api.dependencies import get_request_id, get_today
from cashflow_gateway.config import settings
from cashflow_gateway.domain.exceptions import InvalidHorizonError, UnsupportedCurrencyError
from cashflow_gateway.domain.events import pattern_description
from cashflow_gateway.domain.models import CashFlowReport, ProjectedEvent
from cashflow_gateway.domain.projection import build_cashflow_report
from cashflow_gateway.infrastructure.database.session import get_db
from cashflow_gateway.infrastructure.database.repositories import (
    AccountRepository,
    ExchangeRateRepository,
    TransactionRepository,
)
from cashflow_gateway.infrastructure.observability.metrics import record_projection, record_projection_failure
from cashflow_gateway.infrastructure.observability.logging import log_projection

router = APIRouter()


def _event_schema(event: ProjectedEvent) -> ProjectedEventSchema:
    return ProjectedEventSchema(
        date=event.date,
        kind=event.kind,
        amount=event.amount,
        description=event.description,
        source=event.source,
        confidence=event.confidence,
    )


def _to_response(report: CashFlowReport) -> CashFlowResponse:
    lowest = report.lowest_point
    return CashFlowResponse(
        currency=report.currency,
        horizon_days=report.horizon_days,
        current_balance=report.current_balance,
        current_debt=report.current_debt,
        projected_end_balance=report.projected_end_balance,
        projected_income=report.projected_income,
        projected_expenses=report.projected_expenses,
        lowest_point=(
            LowestPointSchema(date=lowest.date, label=lowest.label, balance=lowest.balance)
            if lowest
            else LowestPointSchema()
        ),
        avg_daily_income=report.avg_daily_income,
        avg_daily_expense=report.avg_daily_expense,
        daily_projection=[
            DailyProjectionSchema(
                date=day.date,
                label=day.label,
                balance=day.balance,
                income=day.income,
                expense=day.expense,
                events=[_event_schema(e) for e in day.events],
            )
            for day in report.daily_projection
        ],
        upcoming_events=[_event_schema(e) for e in report.upcoming_events],
        credit_card_payments=[
            CardPaymentSchema(
                id=card.id,
                name=card.name,
                bank=(
                    BankSchema(name=card.bank_name, short_name=card.bank_short_name, color=card.bank_color)
                    if card.bank_name
                    else None
                ),
                balance=card.balance,
                payment_day=card.payment_day,
                cutoff_day=card.cutoff_day,
            )
            for card in report.credit_card_payments
        ],
        recurring_patterns=[
            RecurringPatternSchema(
                description=pattern_description(p),
                transaction_type=p.transaction_type,
                occurrences=p.occurrences,
                mean_amount=p.mean_amount,
                std_dev=p.std_dev,
                avg_day=p.avg_day,
                confidence=p.confidence,
            )
            for p in report.recurring_patterns
        ],
    )


@router.get("/cashflow", response_model=CashFlowResponse)
async def get_cashflow(
    request: Request,
    days: int = Query(
        settings.default_horizon_days,
        ge=1,
        le=settings.max_horizon_days,
        description="Projection horizon in days",
    ),
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """
    Project account balances for the next `days` days.

    Flow:
    1. Load active accounts, 90-day history and the USD/GTQ rate
    2. Run the projection pipeline in a worker thread under a deadline
    3. Record metrics and logs
    4. Return the report
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        # 1. Load inputs
        accounts = AccountRepository(db).get_active_accounts()
        history_start = today - timedelta(days=settings.history_window_days)
        transactions = TransactionRepository(db).get_between(history_start, today)
        exchange_rate = ExchangeRateRepository(db).get_rate("USD", "GTQ")

        # 2. Project
        report = await asyncio.wait_for(
            run_in_threadpool(
                build_cashflow_report,
                accounts,
                transactions,
                days,
                today,
                settings.projection_options(exchange_rate),
            ),
            timeout=settings.projection_timeout_seconds,
        )

    except (InvalidHorizonError, UnsupportedCurrencyError) as e:
        record_projection_failure("invalid")
        logging.warning(f"Invalid projection request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except asyncio.TimeoutError:
        record_projection_failure("timeout")
        logging.error(
            f"Projection exceeded {settings.projection_timeout_seconds}s",
            extra={"request_id": request_id, "horizon_days": days},
        )
        raise HTTPException(status_code=504, detail="Projection timed out")

    except Exception as e:
        record_projection_failure("error")
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    # 3. Record metrics and logs
    duration = time.time() - start_time
    lowest_balance = report.lowest_point.balance if report.lowest_point else None
    record_projection(report.event_count, lowest_balance, duration)
    log_projection(
        request_id,
        days,
        report.event_count,
        len(report.recurring_patterns),
        str(lowest_balance) if lowest_balance is not None else None,
        duration * 1000,
    )

    return _to_response(report)

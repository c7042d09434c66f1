"""Data access layer: loads accounts, history and exchange rates as domain objects"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from cashflow_gateway.infrastructure.database import models
from cashflow_gateway.domain.models import Account, Transaction


class AccountRepository:
    """Repository for accounts"""

    def __init__(self, db: Session):
        self.db = db

    def get_active_accounts(self) -> List[Account]:
        """Fetch all active accounts with their bank"""
        rows = (
            self.db.query(models.Account)
            .options(joinedload(models.Account.bank))
            .filter(models.Account.is_active.is_(True))
            .order_by(models.Account.created_at)
            .all()
        )
        return [
            Account(
                id=str(row.id),
                name=row.name,
                type=row.type,
                currency=row.currency,
                balance=Decimal(row.balance),
                credit_limit=Decimal(row.credit_limit) if row.credit_limit is not None else None,
                payment_day=row.payment_day,
                cutoff_day=row.cutoff_day,
                is_active=row.is_active,
                bank_name=row.bank.name if row.bank else None,
                bank_short_name=row.bank.short_name if row.bank else None,
                bank_color=row.bank.color if row.bank else None,
            )
            for row in rows
        ]


class TransactionRepository:
    """Repository for transaction history"""

    def __init__(self, db: Session):
        self.db = db

    def get_between(self, start: date, end: date) -> List[Transaction]:
        """Fetch transactions dated in [start, end], newest first"""
        rows = (
            self.db.query(models.Transaction)
            .filter(models.Transaction.date >= start, models.Transaction.date <= end)
            .order_by(models.Transaction.date.desc())
            .all()
        )
        return [
            Transaction(
                type=row.type,
                amount=Decimal(row.amount),
                date=row.date,
                description=row.description,
                from_account_id=str(row.from_account_id) if row.from_account_id else None,
                to_account_id=str(row.to_account_id) if row.to_account_id else None,
            )
            for row in rows
        ]


class ExchangeRateRepository:
    """Repository for stored exchange rates"""

    def __init__(self, db: Session):
        self.db = db

    def get_rate(self, from_currency: str = "USD", to_currency: str = "GTQ") -> Optional[Decimal]:
        """Latest stored rate, or None when no rate has been saved"""
        row = (
            self.db.query(models.ExchangeRate)
            .filter(
                models.ExchangeRate.from_currency == from_currency,
                models.ExchangeRate.to_currency == to_currency,
            )
            .order_by(models.ExchangeRate.updated_at.desc())
            .first()
        )
        return Decimal(row.rate) if row else None

"""SQLAlchemy ORM models for the tables the projection reads"""

import uuid
from sqlalchemy import Column, String, Boolean, Date, DateTime, Integer, ForeignKey, Numeric, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class Bank(Base):
    """Issuing bank for accounts and cards"""

    __tablename__ = "bank"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    short_name = Column(Text, nullable=True)
    color = Column(String(20), nullable=True)  # hex, e.g. #1e40af

    accounts = relationship("Account", back_populates="bank")


class Account(Base):
    """Bank account, credit card, cash box or wallet"""

    __tablename__ = "account"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    type = Column(String(20), nullable=False)  # BANK | CREDIT_CARD | CASH | WALLET
    currency = Column(String(3), nullable=False, default="GTQ")
    balance = Column(Numeric(14, 2), nullable=False, default=0)
    credit_limit = Column(Numeric(14, 2), nullable=True)
    payment_day = Column(Integer, nullable=True)
    cutoff_day = Column(Integer, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    bank_id = Column(UUID(as_uuid=True), ForeignKey("bank.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    bank = relationship("Bank", back_populates="accounts")


class Transaction(Base):
    """Money movement into, out of or between accounts"""

    __tablename__ = "account_transaction"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    type = Column(String(20), nullable=False)  # INGRESO | EGRESO | TRANSFERENCIA | PAGO_TARJETA
    amount = Column(Numeric(14, 2), nullable=False)
    description = Column(Text, nullable=True)
    date = Column(Date, nullable=False, index=True)
    from_account_id = Column(UUID(as_uuid=True), ForeignKey("account.id", ondelete="SET NULL"), nullable=True)
    to_account_id = Column(UUID(as_uuid=True), ForeignKey("account.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class ExchangeRate(Base):
    """Stored conversion rate, e.g. USD -> GTQ"""

    __tablename__ = "exchange_rate"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    from_currency = Column(String(3), nullable=False)
    to_currency = Column(String(3), nullable=False)
    rate = Column(Numeric(12, 6), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

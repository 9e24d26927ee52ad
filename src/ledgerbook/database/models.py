"""SQLAlchemy models for ledgerbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Chart of accounts model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    code = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False, index=True)
    parent_id = Column(Integer, ForeignKey("accounts.id"), nullable=True, index=True)
    is_active = Column(Boolean, default=True, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    parent = relationship("Account", remote_side=[id], backref="children")


class Transaction(Base):
    """Journal transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False, index=True)
    description = Column(String, nullable=True)
    reference = Column(String, nullable=True)
    total_amount = Column(Numeric(14, 2), nullable=False)
    is_balanced = Column(Boolean, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    entries = relationship(
        "TransactionEntry",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="TransactionEntry.id",
    )


class TransactionEntry(Base):
    """Debit or credit line of a transaction."""

    __tablename__ = "transaction_entries"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    amount = Column(Numeric(14, 2), nullable=False)
    type = Column(String, nullable=False)
    description = Column(String, nullable=True)

    # Relationships
    transaction = relationship("Transaction", back_populates="entries")


def create_session_factory(database_url: str, echo: bool = False) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=echo)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)

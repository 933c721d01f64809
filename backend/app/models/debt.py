"""
Modelo SQLAlchemy para as dívidas Corte & Cose
Projeto: Gestor de Notas Fiscais
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, Date, Index, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models import Base
from app.models.mixins import TimestampMixin, UUIDMixin


class CorteCoseDebt(Base, UUIDMixin, TimestampMixin):
    """
    Dívida/bónus Corte & Cose: montante devido ao utilizador por um
    terceiro, somado ao saldo a receber.
    """

    __tablename__ = "corte_cose_debts"

    debt_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        doc="Data da dívida",
    )

    amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    __table_args__ = (
        Index("ix_corte_cose_debts_debt_date", "debt_date"),
        CheckConstraint("amount >= 0", name="ck_corte_cose_debts_amount_positive"),
    )

    def __repr__(self) -> str:
        return f"<CorteCoseDebt(id={self.id}, date={self.debt_date}, amount={self.amount})>"

"""
Modelo SQLAlchemy para as Receitas
Projeto: Gestor de Notas Fiscais
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, Date, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models import Base
from app.models.mixins import TimestampMixin, UUIDMixin


class Revenue(Base, UUIDMixin, TimestampMixin):
    """
    Receita (pagamento recebido).

    O mês de referência indica o período contabilístico que o pagamento
    liquida, independentemente da data em que foi efetivamente pago.

    Attributes:
        revenue_date: Data do pagamento
        amount: Valor recebido (EUR)
        description: Texto livre
        reference_month: Mês liquidado, formato YYYY-MM
    """

    __tablename__ = "revenues"

    revenue_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        doc="Data do pagamento",
    )

    amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        doc="Valor recebido",
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    reference_month: Mapped[Optional[str]] = mapped_column(
        String(7),
        nullable=True,
        doc="Mês de referência (YYYY-MM)",
    )

    __table_args__ = (
        Index("ix_revenues_revenue_date", "revenue_date"),
        Index("ix_revenues_reference_month", "reference_month"),
        CheckConstraint("amount >= 0", name="ck_revenues_amount_positive"),
    )

    def __repr__(self) -> str:
        return f"<Revenue(id={self.id}, date={self.revenue_date}, amount={self.amount})>"

"""
Modelos SQLAlchemy para as Notas Fiscais
Projeto: Gestor de Notas Fiscais

Contém:
- Invoice: Nota fiscal (digitalizada ou entrada manual)
- InvoiceItem: Itens da nota, por ordem
"""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models import Base
from app.models.mixins import TimestampMixin, UUIDMixin


class Invoice(Base, UUIDMixin, TimestampMixin):
    """
    Nota fiscal.

    Criada no upload (com extração por IA) ou por entrada manual.
    Depois de criada só muda a flag de validação: o valor total
    nunca é recalculado a partir dos itens.

    Attributes:
        id: UUID primary key
        invoice_number: Número da nota (opcional, a extração pode falhar)
        delivery_date: Data de entrega, usada em todos os filtros por período
        total_value: Valor total em EUR
        is_validated: Só as notas validadas entram nos totais
        is_manual_entry: True para entradas manuais, False para digitalizadas
        contact_name: Nome do cliente/contacto
        phone_number: Telefone do contacto
        image_url: Referência da fotografia da nota

    Relationships:
        items: Itens da nota, ordenados por posição
    """

    __tablename__ = "invoices"

    invoice_number: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        doc="Número da nota fiscal",
    )

    delivery_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        doc="Data de entrega",
    )

    total_value: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal("0.00"),
        doc="Valor total da nota (EUR)",
    )

    is_validated: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        doc="Nota confirmada pelo utilizador",
    )

    is_manual_entry: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        doc="Entrada manual (sem digitalização)",
    )

    contact_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    phone_number: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )

    image_url: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        doc="Referência da imagem digitalizada",
    )

    items: Mapped[List["InvoiceItem"]] = relationship(
        "InvoiceItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="InvoiceItem.position",
        doc="Itens da nota",
    )

    __table_args__ = (
        Index("ix_invoices_delivery_date", "delivery_date"),
        Index("ix_invoices_validated_date", "is_validated", "delivery_date"),
        CheckConstraint("total_value >= 0", name="ck_invoices_total_value_positive"),
    )

    def __repr__(self) -> str:
        return f"<Invoice(id={self.id}, number={self.invoice_number}, total={self.total_value})>"


class InvoiceItem(Base, UUIDMixin, TimestampMixin):
    """
    Item de uma nota fiscal (descrição e valor).
    """

    __tablename__ = "invoice_items"

    invoice_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("invoices.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="UUID da nota fiscal",
    )

    description: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
    )

    value: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal("0.00"),
    )

    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        doc="Ordem do item na nota",
    )

    invoice: Mapped["Invoice"] = relationship(
        "Invoice",
        back_populates="items",
    )

    def __repr__(self) -> str:
        return f"<InvoiceItem(id={self.id}, description={self.description!r}, value={self.value})>"

"""
Schemas Pydantic para os Relatórios
Projeto: Gestor de Notas Fiscais

O Report é o objeto normalizado que alimenta a pré-visualização JSON,
o PDF e a página pública partilhada. Todos os valores monetários já
vêm arredondados a duas casas decimais e a tabela já vem formatada.
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# -------------------------------------------------------------------
# Enum
# -------------------------------------------------------------------

class ReportType(str, Enum):
    """Tipos de relatório disponíveis."""
    COMPLETE = "complete"
    NUMBER_VALUE = "number-value"
    VALUE_ONLY = "value-only"
    NUMBER_ITEMS_VALUE = "number-items-value"
    CONTACTS = "contacts"
    PAYMENTS = "payments"
    PAYMENTS_BY_MONTH = "payments-by-month"


REPORT_TYPE_LABELS = {
    ReportType.COMPLETE: "Completo",
    ReportType.NUMBER_VALUE: "Nota + Valor",
    ReportType.VALUE_ONLY: "Apenas Valores",
    ReportType.NUMBER_ITEMS_VALUE: "Nota + Itens",
    ReportType.CONTACTS: "Contactos",
    ReportType.PAYMENTS: "Pagamentos",
    ReportType.PAYMENTS_BY_MONTH: "Pagamentos por Mês",
}


# -------------------------------------------------------------------
# Pedido
# -------------------------------------------------------------------

class ReportRequest(BaseModel):
    """
    Pedido de geração de relatório.

    Os tipos gerais usam start_date/end_date; payments-by-month usa
    reference_month (YYYY-MM). A coerência é validada pelo service.
    """

    report_type: ReportType = Field(..., description="Tipo de relatório")
    start_date: Optional[date] = Field(None, description="Data inicial (inclusiva)")
    end_date: Optional[date] = Field(None, description="Data final (inclusiva)")
    reference_month: Optional[str] = Field(None, description="Mês de referência YYYY-MM")


class RangePresetRead(BaseModel):
    """Intervalo pré-definido (semana ou mês atual)."""

    preset: str
    start_date: date
    end_date: date


# -------------------------------------------------------------------
# Linhas do relatório
# -------------------------------------------------------------------

class ReportItem(BaseModel):
    """Item de nota achatado, com os dados da nota a que pertence."""

    delivery_date: date
    invoice_number: Optional[str] = None
    description: str
    value: Decimal
    contact_name: Optional[str] = None
    phone_number: Optional[str] = None
    image_url: Optional[str] = None


class ReportInvoiceItem(BaseModel):
    description: str
    value: Decimal


class ReportInvoice(BaseModel):
    """Nota incluída no relatório."""

    id: uuid.UUID
    invoice_number: Optional[str] = None
    delivery_date: date
    total_value: Decimal
    is_manual_entry: bool = False
    contact_name: Optional[str] = None
    phone_number: Optional[str] = None
    image_url: Optional[str] = None
    items: list[ReportInvoiceItem] = Field(default_factory=list)


class ReportRevenue(BaseModel):
    """Pagamento incluído no relatório."""

    id: uuid.UUID
    revenue_date: date
    amount: Decimal
    description: Optional[str] = None
    reference_month: Optional[str] = None


class ReportDebt(BaseModel):
    id: uuid.UUID
    debt_date: date
    amount: Decimal
    description: Optional[str] = None


class ReportSummary(BaseModel):
    """Totais do relatório."""

    invoice_total: Decimal = Field(..., description="Notas digitalizadas")
    invoice_count: int
    manual_total: Decimal = Field(..., description="Entradas manuais")
    manual_count: int
    total_value: Decimal
    record_count: int = Field(..., description="Notas digitalizadas + entradas manuais")
    item_count: int
    projected_earnings: Decimal = Field(..., description="30% do valor total")
    debts_total: Decimal = Field(..., description="Bónus Corte & Cose")
    total_to_receive: Decimal = Field(..., description="Projeção + bónus")
    total_paid: Decimal = Field(..., description="Pagamentos atribuídos ao período")
    balance: Decimal = Field(..., description="Total a receber - total pago")


class ReportTable(BaseModel):
    """Tabela já formatada; os renderizadores só a desenham."""

    columns: list[str]
    rows: list[list[str]] = Field(default_factory=list)


class Report(BaseModel):
    """Relatório normalizado."""

    report_type: ReportType
    type_label: str
    title: str
    period_label: str
    start_date: date
    end_date: date
    reference_month: Optional[str] = None
    summary: ReportSummary
    invoices: list[ReportInvoice] = Field(default_factory=list)
    items: list[ReportItem] = Field(default_factory=list)
    matched_revenues: list[ReportRevenue] = Field(default_factory=list)
    unmatched_revenues: list[ReportRevenue] = Field(
        default_factory=list,
        description="Pagos no período mas referentes a outro mês",
    )
    debts: list[ReportDebt] = Field(default_factory=list)
    table: ReportTable
    generated_at: datetime

    @property
    def is_payments_by_month(self) -> bool:
        return self.report_type is ReportType.PAYMENTS_BY_MONTH

"""
Schemas Pydantic para o Dashboard
Projeto: Gestor de Notas Fiscais
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from app.services.period import PeriodMode


class ChartPoint(BaseModel):
    """Barra do gráfico: semana (vista mensal) ou mês (vista anual)."""

    label: str = Field(..., description="Semana N ou abreviatura do mês")
    start: date
    end: date
    value: Decimal = Field(..., description="Soma das notas validadas no intervalo")


class DashboardStats(BaseModel):
    """Estatísticas do dashboard para um período."""

    mode: PeriodMode
    year: int
    month: Optional[int] = Field(None, description="Índice do mês 0-11 (modo mensal)")
    period_key: str = Field(..., description="YYYY-MM ou YYYY")
    period_label: str
    previous_month_label: str

    total_value: Decimal = Field(..., description="Valor total das notas validadas do período")
    invoice_count: int = Field(..., description="Notas digitalizadas")
    invoice_value: Decimal
    manual_entry_count: int = Field(..., description="Entradas manuais")
    manual_entry_value: Decimal

    period_revenue: Decimal = Field(..., description="Receitas atribuídas ao período")
    projected_earnings: Decimal = Field(..., description="30% do valor total do período")
    corte_cose_debt: Decimal = Field(..., description="Dívidas Corte & Cose do período")
    balance_receivable: Decimal = Field(
        ...,
        description="Projeção + dívidas - receitas, acumulado desde o início",
    )
    previous_month_balance: Decimal = Field(
        ...,
        ge=0,
        description="Saldo acumulado até ao fim do mês anterior (mínimo 0)",
    )

    chart: list[ChartPoint] = Field(default_factory=list)

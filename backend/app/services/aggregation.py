"""
Motor de agregação
Projeto: Gestor de Notas Fiscais

Funções puras que transformam conjuntos de notas, receitas e dívidas
em totais, projeções e saldos. Sem acesso à base de dados e sem efeitos
secundários: o mesmo input dá sempre o mesmo output.

Os registos são lidos por atributo, por isso aceitam tanto modelos ORM
como qualquer objeto com os mesmos campos. Conjuntos vazios ou None
somam sempre zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Optional, Union

from app.schemas.dashboard import ChartPoint, DashboardStats
from app.services.period import (
    MONTH_ABBREVIATIONS,
    DateRange,
    Period,
    PeriodMode,
    PeriodWindows,
    month_range,
    parse_reference_month,
)

PROJECTION_RATE = Decimal("0.30")
ZERO = Decimal("0")
CENT = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """Converte um valor monetário em Decimal (None conta como zero)."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_currency(value: Any) -> Decimal:
    """Arredonda ao cêntimo (ROUND_HALF_UP) para apresentação."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


# -------------------------------------------------------------------
# Notas fiscais
# -------------------------------------------------------------------

@dataclass(frozen=True)
class InvoiceTotals:
    """Totais das notas validadas, separados por origem."""

    count: int = 0
    value: Decimal = ZERO
    scanned_count: int = 0
    scanned_value: Decimal = ZERO
    manual_count: int = 0
    manual_value: Decimal = ZERO


def validated(invoices: Optional[Iterable[Any]]) -> list[Any]:
    """Só as notas validadas participam em qualquer total."""
    return [inv for inv in invoices or [] if inv.is_validated]


def sum_invoice_value(invoices: Optional[Iterable[Any]]) -> InvoiceTotals:
    """
    Soma total_value das notas validadas.

    Separa as digitalizadas (is_manual_entry=False) das entradas manuais.
    """
    scanned_count = manual_count = 0
    scanned_value = manual_value = ZERO

    for inv in validated(invoices):
        amount = to_decimal(inv.total_value)
        if inv.is_manual_entry:
            manual_count += 1
            manual_value += amount
        else:
            scanned_count += 1
            scanned_value += amount

    return InvoiceTotals(
        count=scanned_count + manual_count,
        value=scanned_value + manual_value,
        scanned_count=scanned_count,
        scanned_value=scanned_value,
        manual_count=manual_count,
        manual_value=manual_value,
    )


def invoices_in_range(invoices: Optional[Iterable[Any]], date_range: DateRange) -> list[Any]:
    return [inv for inv in validated(invoices) if date_range.contains(inv.delivery_date)]


def sum_amounts(records: Optional[Iterable[Any]]) -> Decimal:
    """Soma o campo amount de receitas ou dívidas."""
    return sum((to_decimal(r.amount) for r in records or []), ZERO)


def debts_in_range(debts: Optional[Iterable[Any]], date_range: DateRange) -> list[Any]:
    return [d for d in debts or [] if date_range.contains(d.debt_date)]


# -------------------------------------------------------------------
# Receitas: atribuição por mês de referência ou por data
# -------------------------------------------------------------------

@dataclass(frozen=True)
class MatchedByReferenceMonth:
    """
    Receita com mês de referência: a data do pagamento é ignorada.
    """

    revenue: Any
    reference_month: str
    month_start: date

    def in_period(self, period: Period) -> bool:
        if period.mode is PeriodMode.MONTH:
            return self.reference_month == period.key
        return self.reference_month.startswith(str(period.year))

    def in_range(self, date_range: DateRange) -> bool:
        return date_range.contains(self.month_start)


@dataclass(frozen=True)
class MatchedByDate:
    """Receita sem mês de referência: conta a data do pagamento."""

    revenue: Any
    paid_on: date

    def in_period(self, period: Period) -> bool:
        return period.bounds.contains(self.paid_on)

    def in_range(self, date_range: DateRange) -> bool:
        return date_range.contains(self.paid_on)


RevenueAttribution = Union[MatchedByReferenceMonth, MatchedByDate]


def attribute_revenue(revenue: Any) -> RevenueAttribution:
    """
    Decide a regra de atribuição de uma receita.

    Um mês de referência mal formado é tratado como ausente.
    """
    reference = revenue.reference_month
    if reference:
        try:
            month_start = parse_reference_month(reference)
        except ValueError:
            pass
        else:
            return MatchedByReferenceMonth(revenue, reference, month_start)
    return MatchedByDate(revenue, revenue.revenue_date)


def match_revenues_to_period(
    revenues: Optional[Iterable[Any]],
    period: Period,
) -> list[RevenueAttribution]:
    """
    Receitas que pertencem ao período.

    Com mês de referência: igual à chave YYYY-MM (mensal) ou começa pelo
    ano (anual). Sem mês de referência: data do pagamento dentro do período.
    Um pagamento feito no mês N pode assim liquidar um mês anterior.
    """
    attributions = (attribute_revenue(r) for r in revenues or [])
    return [a for a in attributions if a.in_period(period)]


def match_revenues_to_range(
    revenues: Optional[Iterable[Any]],
    date_range: DateRange,
) -> list[RevenueAttribution]:
    """
    Mesma regra dupla para um intervalo arbitrário: o mês de referência
    pertence ao intervalo quando o seu primeiro dia está dentro dele.
    """
    attributions = (attribute_revenue(r) for r in revenues or [])
    return [a for a in attributions if a.in_range(date_range)]


def sum_matched(attributions: Iterable[RevenueAttribution]) -> Decimal:
    return sum((to_decimal(a.revenue.amount) for a in attributions), ZERO)


# -------------------------------------------------------------------
# Projeção e saldos
# -------------------------------------------------------------------

def projected_earnings(invoice_total: Any) -> Decimal:
    """Projeção de ganhos: exatamente 30% do valor total das notas."""
    return to_decimal(invoice_total) * PROJECTION_RATE


def balance_receivable(invoice_total: Any, debts_total: Any, revenues_total: Any) -> Decimal:
    """Projeção + dívidas Corte & Cose - receitas."""
    return (
        projected_earnings(invoice_total)
        + to_decimal(debts_total)
        - to_decimal(revenues_total)
    )


def previous_period_balance(invoice_total: Any, debts_total: Any, revenues_total: Any) -> Decimal:
    """
    Saldo transitado do período anterior.

    Um excedente (saldo negativo) não transita: o mínimo é zero.
    """
    return max(ZERO, balance_receivable(invoice_total, debts_total, revenues_total))


# -------------------------------------------------------------------
# Gráficos
# -------------------------------------------------------------------

def weekly_buckets(invoices: Optional[Iterable[Any]], date_range: DateRange) -> list[ChartPoint]:
    """
    Janelas consecutivas de 7 dias a partir do início do intervalo;
    a última é cortada no fim do intervalo.
    """
    in_range = invoices_in_range(invoices, date_range)
    buckets = []
    week_start = date_range.start
    week_number = 1

    while week_start <= date_range.end:
        week_end = min(week_start + timedelta(days=6), date_range.end)
        window = DateRange(week_start, week_end)
        value = sum(
            (to_decimal(inv.total_value) for inv in in_range if window.contains(inv.delivery_date)),
            ZERO,
        )
        buckets.append(
            ChartPoint(label=f"Semana {week_number}", start=week_start, end=week_end, value=value)
        )
        week_start += timedelta(days=7)
        week_number += 1

    return buckets


def monthly_buckets(invoices: Optional[Iterable[Any]], year: int) -> list[ChartPoint]:
    """Doze barras, uma por mês civil do ano."""
    buckets = []
    for month in range(1, 13):
        window = month_range(year, month)
        value = sum(
            (to_decimal(inv.total_value) for inv in invoices_in_range(invoices, window)),
            ZERO,
        )
        buckets.append(
            ChartPoint(
                label=MONTH_ABBREVIATIONS[month - 1],
                start=window.start,
                end=window.end,
                value=value,
            )
        )
    return buckets


# -------------------------------------------------------------------
# Dashboard
# -------------------------------------------------------------------

def compute_dashboard(
    windows: PeriodWindows,
    invoices: Optional[Iterable[Any]],
    revenues: Optional[Iterable[Any]],
    debts: Optional[Iterable[Any]],
) -> DashboardStats:
    """
    Calcula as estatísticas do dashboard.

    Args:
        windows: Intervalos resolvidos do período
        invoices: Notas que cobrem pelo menos desde o início até ao fim do período
        revenues: Todas as receitas
        debts: Dívidas que cobrem pelo menos desde o início até ao fim do período
    """
    invoices = list(invoices or [])
    revenues = list(revenues or [])
    debts = list(debts or [])
    period = windows.period

    period_totals = sum_invoice_value(invoices_in_range(invoices, windows.selected))
    period_revenue = sum_matched(match_revenues_to_period(revenues, period))
    period_debts = sum_amounts(debts_in_range(debts, windows.selected))

    inception = windows.since_inception
    balance = balance_receivable(
        sum_invoice_value(invoices_in_range(invoices, inception)).value,
        sum_amounts(debts_in_range(debts, inception)),
        sum_matched(match_revenues_to_range(revenues, inception)),
    )

    to_previous = windows.since_inception_to_previous_month
    previous_balance = previous_period_balance(
        sum_invoice_value(invoices_in_range(invoices, to_previous)).value,
        sum_amounts(debts_in_range(debts, to_previous)),
        sum_matched(match_revenues_to_range(revenues, to_previous)),
    )

    if period.mode is PeriodMode.MONTH:
        chart = weekly_buckets(invoices, windows.selected)
    else:
        chart = monthly_buckets(invoices, period.year)

    return DashboardStats(
        mode=period.mode,
        year=period.year,
        month=period.month,
        period_key=period.key,
        period_label=period.label,
        previous_month_label=windows.previous_month_label,
        total_value=to_currency(period_totals.value),
        invoice_count=period_totals.scanned_count,
        invoice_value=to_currency(period_totals.scanned_value),
        manual_entry_count=period_totals.manual_count,
        manual_entry_value=to_currency(period_totals.manual_value),
        period_revenue=to_currency(period_revenue),
        projected_earnings=to_currency(projected_earnings(period_totals.value)),
        corte_cose_debt=to_currency(period_debts),
        balance_receivable=to_currency(balance),
        previous_month_balance=to_currency(previous_balance),
        chart=[point.model_copy(update={"value": to_currency(point.value)}) for point in chart],
    )

"""
Construtor de relatórios
Projeto: Gestor de Notas Fiscais

Monta o Report normalizado a partir dos registos já carregados.
Não acede à base de dados: recebe notas, receitas e dívidas e devolve
um objeto pronto a serializar, a exportar em PDF ou a partilhar.

A forma da tabela depende do tipo de relatório e é decidida por um
único mapeamento fechado ReportType -> formatador.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from operator import attrgetter
from typing import Any, Callable, Iterable, Optional
from urllib.parse import urlsplit

from app.core.exceptions import BusinessValidationError
from app.schemas.report import (
    REPORT_TYPE_LABELS,
    Report,
    ReportDebt,
    ReportInvoice,
    ReportInvoiceItem,
    ReportItem,
    ReportRevenue,
    ReportSummary,
    ReportTable,
    ReportType,
)
from app.services.aggregation import (
    balance_receivable,
    debts_in_range,
    invoices_in_range,
    match_revenues_to_period,
    match_revenues_to_range,
    projected_earnings,
    sum_amounts,
    sum_invoice_value,
    sum_matched,
    to_currency,
)
from app.services.period import (
    MONTH_ABBREVIATIONS,
    DateRange,
    Period,
    PeriodMode,
    parse_reference_month,
)

PHOTO_REF_MAX = 15
PHOTO_REF_KEEP = 12


# -------------------------------------------------------------------
# Âmbito do relatório
# -------------------------------------------------------------------

@dataclass(frozen=True)
class ReportScope:
    """
    Âmbito resolvido de um pedido.

    period só existe para payments-by-month, em que as receitas são
    atribuídas ao mês de referência e não ao intervalo.
    """

    report_type: ReportType
    date_range: DateRange
    period: Optional[Period] = None


def resolve_scope(
    report_type: ReportType,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    reference_month: Optional[str] = None,
) -> ReportScope:
    """
    Valida o pedido e resolve o intervalo do relatório.

    Raises:
        BusinessValidationError: Datas em falta, início depois do fim ou
            mês de referência mal formado
    """
    report_type = ReportType(report_type)

    if report_type is ReportType.PAYMENTS_BY_MONTH:
        if not reference_month:
            raise BusinessValidationError("Por favor, selecione o mês e ano de referência")
        try:
            month_start = parse_reference_month(reference_month)
        except ValueError as e:
            raise BusinessValidationError(str(e)) from e
        period = Period(PeriodMode.MONTH, month_start.year, month_start.month - 1)
        return ReportScope(report_type, period.bounds, period)

    if not start_date or not end_date:
        raise BusinessValidationError("Por favor, selecione as datas inicial e final")
    if start_date > end_date:
        raise BusinessValidationError("A data inicial não pode ser posterior à data final")

    return ReportScope(report_type, DateRange(start_date, end_date))


# -------------------------------------------------------------------
# Formatação
# -------------------------------------------------------------------

def format_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def format_money(value: Any) -> str:
    return f"€ {to_currency(value)}"


def format_reference_month(value: Optional[str]) -> str:
    """2024-03 -> mar/2024; ausente ou inválido -> '-'."""
    if not value:
        return "-"
    try:
        month_start = parse_reference_month(value)
    except ValueError:
        return "-"
    return f"{MONTH_ABBREVIATIONS[month_start.month - 1]}/{month_start.year}"


def shorten_photo_reference(image_url: Optional[str]) -> str:
    """
    Referência curta da fotografia: o nome do ficheiro de um URL
    absoluto, ou a própria string, cortados a 12 caracteres + '...'
    quando passam de 15.
    """
    if not image_url:
        return "-"
    parts = urlsplit(image_url)
    if parts.scheme and parts.netloc:
        name = parts.path.rsplit("/", 1)[-1]
    else:
        name = image_url
    if len(name) > PHOTO_REF_MAX:
        return name[:PHOTO_REF_KEEP] + "..."
    return name


def _text(value: Optional[str]) -> str:
    return value or "-"


# -------------------------------------------------------------------
# Formatadores de tabela, um por tipo
# -------------------------------------------------------------------

def _complete_table(report: Report) -> ReportTable:
    return ReportTable(
        columns=["Data", "Nº Nota", "Descrição", "Valor", "Contacto", "Foto"],
        rows=[
            [
                format_date(item.delivery_date),
                _text(item.invoice_number),
                item.description,
                format_money(item.value),
                _text(item.contact_name),
                shorten_photo_reference(item.image_url),
            ]
            for item in report.items
        ],
    )


def _number_value_table(report: Report) -> ReportTable:
    return ReportTable(
        columns=["Nº Nota", "Data", "Valor Total"],
        rows=[
            [_text(inv.invoice_number), format_date(inv.delivery_date), format_money(inv.total_value)]
            for inv in report.invoices
        ],
    )


def _value_only_table(report: Report) -> ReportTable:
    return ReportTable(
        columns=["Data", "Valor"],
        rows=[
            [format_date(inv.delivery_date), format_money(inv.total_value)]
            for inv in report.invoices
        ],
    )


def _number_items_value_table(report: Report) -> ReportTable:
    rows = []
    for inv in report.invoices:
        for idx, item in enumerate(inv.items):
            first = idx == 0
            rows.append([
                _text(inv.invoice_number) if first else "",
                item.description,
                format_money(item.value),
                format_money(inv.total_value) if first else "",
            ])
    return ReportTable(columns=["Nº Nota", "Item", "Valor Item", "Total Nota"], rows=rows)


def _contacts_table(report: Report) -> ReportTable:
    return ReportTable(
        columns=["Nº Nota", "Nome", "Telefone", "Data", "Valor"],
        rows=[
            [
                _text(inv.invoice_number),
                _text(inv.contact_name),
                _text(inv.phone_number),
                format_date(inv.delivery_date),
                format_money(inv.total_value),
            ]
            for inv in report.invoices
            if inv.contact_name or inv.phone_number
        ],
    )


def _payments_table(report: Report) -> ReportTable:
    return ReportTable(
        columns=["Data", "Valor", "Mês Ref.", "Descrição"],
        rows=[
            [
                format_date(rev.revenue_date),
                format_money(rev.amount),
                format_reference_month(rev.reference_month),
                _text(rev.description),
            ]
            for rev in report.matched_revenues
        ],
    )


def _payments_by_month_table(report: Report) -> ReportTable:
    return ReportTable(
        columns=["Data do Pagamento", "Valor", "Descrição"],
        rows=[
            [format_date(rev.revenue_date), format_money(rev.amount), _text(rev.description)]
            for rev in report.matched_revenues
        ],
    )


TABLE_FORMATTERS: dict[ReportType, Callable[[Report], ReportTable]] = {
    ReportType.COMPLETE: _complete_table,
    ReportType.NUMBER_VALUE: _number_value_table,
    ReportType.VALUE_ONLY: _value_only_table,
    ReportType.NUMBER_ITEMS_VALUE: _number_items_value_table,
    ReportType.CONTACTS: _contacts_table,
    ReportType.PAYMENTS: _payments_table,
    ReportType.PAYMENTS_BY_MONTH: _payments_by_month_table,
}


# -------------------------------------------------------------------
# Conversão dos registos
# -------------------------------------------------------------------

def _report_invoice(inv: Any) -> ReportInvoice:
    return ReportInvoice(
        id=inv.id,
        invoice_number=inv.invoice_number,
        delivery_date=inv.delivery_date,
        total_value=to_currency(inv.total_value),
        is_manual_entry=bool(inv.is_manual_entry),
        contact_name=inv.contact_name,
        phone_number=inv.phone_number,
        image_url=inv.image_url,
        items=[
            ReportInvoiceItem(description=item.description, value=to_currency(item.value))
            for item in inv.items or []
        ],
    )


def _flatten_items(invoices: Iterable[ReportInvoice]) -> list[ReportItem]:
    return [
        ReportItem(
            delivery_date=inv.delivery_date,
            invoice_number=inv.invoice_number,
            description=item.description,
            value=item.value,
            contact_name=inv.contact_name,
            phone_number=inv.phone_number,
            image_url=inv.image_url,
        )
        for inv in invoices
        for item in inv.items
    ]


def _report_revenue(rev: Any) -> ReportRevenue:
    return ReportRevenue(
        id=rev.id,
        revenue_date=rev.revenue_date,
        amount=to_currency(rev.amount),
        description=rev.description,
        reference_month=rev.reference_month,
    )


def _report_debt(debt: Any) -> ReportDebt:
    return ReportDebt(
        id=debt.id,
        debt_date=debt.debt_date,
        amount=to_currency(debt.amount),
        description=debt.description,
    )


# -------------------------------------------------------------------
# Montagem
# -------------------------------------------------------------------

def _titles(scope: ReportScope) -> tuple[str, str]:
    if scope.period is not None:
        return f"Pagamentos - {scope.period.label}", scope.period.label
    period_label = f"{format_date(scope.date_range.start)} a {format_date(scope.date_range.end)}"
    return f"{REPORT_TYPE_LABELS[scope.report_type]} - {period_label}", period_label


def build_report(
    scope: ReportScope,
    invoices: Optional[Iterable[Any]],
    revenues: Optional[Iterable[Any]],
    debts: Optional[Iterable[Any]],
    generated_at: datetime,
) -> Report:
    """
    Monta o relatório de um âmbito já validado.

    Os registos podem cobrir mais do que o âmbito: as notas validadas e
    as dívidas são filtradas pelo intervalo e as receitas pela regra
    dupla (mês de referência, ou data do pagamento quando não existe).

    Args:
        scope: Âmbito devolvido por resolve_scope
        invoices: Notas candidatas (com itens)
        revenues: Receitas candidatas
        debts: Dívidas candidatas
        generated_at: Instante de geração
    """
    date_range = scope.date_range
    revenues = list(revenues or [])

    selected_invoices = sorted(
        invoices_in_range(invoices, date_range),
        key=lambda inv: inv.delivery_date,
        reverse=True,
    )
    selected_debts = sorted(debts_in_range(debts, date_range), key=lambda d: d.debt_date)

    if scope.period is not None:
        matched = match_revenues_to_period(revenues, scope.period)
    else:
        matched = match_revenues_to_range(revenues, date_range)
    matched_ids = {id(a.revenue) for a in matched}
    unmatched = [
        r for r in revenues
        if id(r) not in matched_ids and date_range.contains(r.revenue_date)
    ]

    totals = sum_invoice_value(selected_invoices)
    debts_total = sum_amounts(selected_debts)
    paid_total = sum_matched(matched)
    projection = projected_earnings(totals.value)

    report_invoices = [_report_invoice(inv) for inv in selected_invoices]
    items = _flatten_items(report_invoices)

    summary = ReportSummary(
        invoice_total=to_currency(totals.scanned_value),
        invoice_count=totals.scanned_count,
        manual_total=to_currency(totals.manual_value),
        manual_count=totals.manual_count,
        total_value=to_currency(totals.value),
        record_count=totals.count,
        item_count=len(items),
        projected_earnings=to_currency(projection),
        debts_total=to_currency(debts_total),
        total_to_receive=to_currency(projection + debts_total),
        total_paid=to_currency(paid_total),
        balance=to_currency(balance_receivable(totals.value, debts_total, paid_total)),
    )

    title, period_label = _titles(scope)
    by_payment_date = attrgetter("revenue_date")

    report = Report(
        report_type=scope.report_type,
        type_label=REPORT_TYPE_LABELS[scope.report_type],
        title=title,
        period_label=period_label,
        start_date=date_range.start,
        end_date=date_range.end,
        reference_month=scope.period.key if scope.period is not None else None,
        summary=summary,
        invoices=report_invoices,
        items=items,
        matched_revenues=sorted(
            (_report_revenue(a.revenue) for a in matched), key=by_payment_date
        ),
        unmatched_revenues=sorted(
            (_report_revenue(r) for r in unmatched), key=by_payment_date
        ),
        debts=[_report_debt(d) for d in selected_debts],
        table=ReportTable(columns=[]),
        generated_at=generated_at,
    )
    report.table = TABLE_FORMATTERS[scope.report_type](report)
    return report

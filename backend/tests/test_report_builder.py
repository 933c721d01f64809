"""
Testes do construtor de relatórios.
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from conftest import MockDebt, MockInvoice, MockInvoiceItem, MockRevenue

from app.core.exceptions import BusinessValidationError
from app.schemas.report import Report, ReportType
from app.services.report_builder import (
    TABLE_FORMATTERS,
    build_report,
    format_money,
    format_reference_month,
    resolve_scope,
    shorten_photo_reference,
)

GENERATED_AT = datetime(2024, 4, 2, 10, 30, tzinfo=timezone.utc)


def march_scope(report_type=ReportType.COMPLETE):
    return resolve_scope(report_type, date(2024, 3, 1), date(2024, 3, 31))


# ============================================================
# Validação do pedido
# ============================================================


class TestResolveScope:

    def test_general_types_need_both_dates(self):
        with pytest.raises(BusinessValidationError, match="datas inicial e final"):
            resolve_scope(ReportType.COMPLETE, date(2024, 3, 1), None)

    def test_start_after_end(self):
        with pytest.raises(BusinessValidationError, match="posterior"):
            resolve_scope(ReportType.CONTACTS, date(2024, 3, 31), date(2024, 3, 1))

    def test_payments_by_month_needs_reference_month(self):
        with pytest.raises(BusinessValidationError, match="mês e ano de referência"):
            resolve_scope(ReportType.PAYMENTS_BY_MONTH, date(2024, 3, 1), date(2024, 3, 31))

    def test_payments_by_month_rejects_malformed_month(self):
        with pytest.raises(BusinessValidationError):
            resolve_scope(ReportType.PAYMENTS_BY_MONTH, reference_month="2024-13")

    def test_payments_by_month_ignores_dates(self):
        scope = resolve_scope(
            ReportType.PAYMENTS_BY_MONTH,
            date(2020, 1, 1),
            date(2020, 1, 2),
            reference_month="2024-02",
        )

        assert scope.date_range.start == date(2024, 2, 1)
        assert scope.date_range.end == date(2024, 2, 29)
        assert scope.period.key == "2024-02"

    def test_single_day_range(self):
        scope = resolve_scope("value-only", date(2024, 3, 5), date(2024, 3, 5))

        assert scope.report_type is ReportType.VALUE_ONLY
        assert scope.date_range.days == 1


# ============================================================
# Formatação
# ============================================================


class TestFormatting:

    def test_money(self):
        assert format_money(Decimal("12.5")) == "€ 12.50"

    def test_reference_month(self):
        assert format_reference_month("2024-03") == "mar/2024"
        assert format_reference_month(None) == "-"
        assert format_reference_month("03/2024") == "-"

    def test_photo_reference_uses_file_name_of_url(self):
        assert shorten_photo_reference("https://cdn.example.com/a/nota.jpg") == "nota.jpg"

    def test_photo_reference_is_shortened(self):
        assert shorten_photo_reference("https://cdn.example.com/a/foto_nota_marco.jpg") == "foto_nota_ma..."
        assert shorten_photo_reference("upload-0123456789abcdef") == "upload-01234..."

    def test_photo_reference_missing(self):
        assert shorten_photo_reference(None) == "-"

    def test_every_report_type_has_a_formatter(self):
        assert set(TABLE_FORMATTERS) == set(ReportType)


# ============================================================
# Montagem
# ============================================================


class TestBuildReport:

    def test_complete_report(self, march_invoice):
        other = MockInvoice(date(2024, 3, 20), "50.00", is_manual_entry=True)
        outside = MockInvoice(date(2024, 4, 1), "70.00")
        pending = MockInvoice(date(2024, 3, 10), "90.00", is_validated=False)

        report = build_report(march_scope(), [march_invoice, other, outside, pending], [], [], GENERATED_AT)

        assert report.title == "Completo - 01/03/2024 a 31/03/2024"
        assert [inv.delivery_date for inv in report.invoices] == [date(2024, 3, 20), date(2024, 3, 15)]
        assert report.summary.invoice_total == Decimal("1000.00")
        assert report.summary.invoice_count == 1
        assert report.summary.manual_total == Decimal("50.00")
        assert report.summary.manual_count == 1
        assert report.summary.total_value == Decimal("1050.00")
        assert report.summary.record_count == 2
        assert report.summary.projected_earnings == Decimal("315.00")
        assert report.summary.item_count == 2
        assert report.table.columns == ["Data", "Nº Nota", "Descrição", "Valor", "Contacto", "Foto"]
        assert report.table.rows[0] == [
            "15/03/2024", "123", "Vestido", "€ 600.00", "Maria", "foto_nota_ma...",
        ]

    def test_number_items_value_shows_number_and_total_once(self, march_invoice):
        report = build_report(
            march_scope(ReportType.NUMBER_ITEMS_VALUE), [march_invoice], [], [], GENERATED_AT
        )

        assert report.table.rows == [
            ["123", "Vestido", "€ 600.00", "€ 1000.00"],
            ["", "Calças", "€ 400.00", ""],
        ]

    def test_contacts_skip_invoices_without_contact(self, march_invoice):
        anonymous = MockInvoice(date(2024, 3, 2), "10.00", invoice_number="7")

        report = build_report(
            march_scope(ReportType.CONTACTS), [march_invoice, anonymous], [], [], GENERATED_AT
        )

        assert report.table.rows == [["123", "Maria", "912345678", "15/03/2024", "€ 1000.00"]]

    def test_value_only_and_number_value(self, march_invoice):
        value_only = build_report(march_scope(ReportType.VALUE_ONLY), [march_invoice], [], [], GENERATED_AT)
        number_value = build_report(march_scope(ReportType.NUMBER_VALUE), [march_invoice], [], [], GENERATED_AT)

        assert value_only.table.rows == [["15/03/2024", "€ 1000.00"]]
        assert number_value.table.rows == [["123", "15/03/2024", "€ 1000.00"]]

    def test_payments_matched_and_unmatched(self, march_payment):
        paid_for_march = MockRevenue(date(2024, 3, 10), "100.00", description="Transferência")
        paid_in_march_for_february = MockRevenue(date(2024, 3, 5), "40.00", reference_month="2024-02")

        report = build_report(
            march_scope(ReportType.PAYMENTS),
            [],
            [march_payment, paid_for_march, paid_in_march_for_february],
            [],
            GENERATED_AT,
        )

        assert [r.amount for r in report.matched_revenues] == [Decimal("100.00"), Decimal("300.00")]
        assert [r.amount for r in report.unmatched_revenues] == [Decimal("40.00")]
        assert report.summary.total_paid == Decimal("400.00")
        assert report.table.rows[1] == ["01/04/2024", "€ 300.00", "mar/2024", "-"]

    def test_payments_by_month(self, march_invoice, march_payment):
        debts = [MockDebt(date(2024, 3, 3), "20.00"), MockDebt(date(2024, 2, 3), "99.00")]
        scope = resolve_scope(ReportType.PAYMENTS_BY_MONTH, reference_month="2024-03")

        report = build_report(scope, [march_invoice], [march_payment], debts, GENERATED_AT)

        assert report.title == "Pagamentos - Março 2024"
        assert report.reference_month == "2024-03"
        assert report.is_payments_by_month
        assert report.summary.debts_total == Decimal("20.00")
        assert report.summary.total_to_receive == Decimal("320.00")
        assert report.summary.total_paid == Decimal("300.00")
        assert report.summary.balance == Decimal("20.00")
        assert report.table.columns == ["Data do Pagamento", "Valor", "Descrição"]
        assert report.table.rows == [["01/04/2024", "€ 300.00", "-"]]

    def test_empty_report(self):
        report = build_report(march_scope(), [], [], [], GENERATED_AT)

        assert report.summary.total_value == Decimal("0.00")
        assert report.table.rows == []

    def test_snapshot_survives_json_round_trip(self, march_invoice, march_payment):
        report = build_report(march_scope(), [march_invoice], [march_payment], [], GENERATED_AT)

        snapshot = report.model_dump(mode="json")
        restored = Report.model_validate(snapshot)

        assert restored.model_dump(mode="json") == snapshot
        assert restored.summary.total_paid == Decimal("300.00")
        assert restored.table == report.table

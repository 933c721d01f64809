"""
Testes do service de relatórios, da renderização HTML e do backup.
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from conftest import MockDebt, make_result

from app.core.exceptions import BusinessValidationError
from app.schemas.report import ReportRequest, ReportType
from app.services.backup_service import backup_service
from app.services.pdf_service import pdf_service
from app.services.report_service import pdf_filename, report_service

NOW = datetime(2024, 4, 2, 9, 0, tzinfo=timezone.utc)


class TestReportService:

    @pytest.mark.asyncio
    async def test_generate(self, mock_db, march_invoice, march_payment):
        mock_db.execute.side_effect = [
            make_result(rows=[march_invoice]),
            make_result(rows=[march_payment]),
            make_result(rows=[MockDebt(date(2024, 3, 3), "20.00")]),
        ]
        request = ReportRequest(report_type=ReportType.PAYMENTS_BY_MONTH, reference_month="2024-03")

        report = await report_service.generate(mock_db, request, now=NOW)

        assert report.summary.total_value == Decimal("1000.00")
        assert report.summary.total_paid == Decimal("300.00")
        assert report.summary.balance == Decimal("20.00")
        assert report.generated_at == NOW
        assert pdf_filename(report) == "relatorio_pagamentos_2024-03.pdf"

    @pytest.mark.asyncio
    async def test_validation_before_queries(self, mock_db):
        request = ReportRequest(report_type=ReportType.COMPLETE, start_date=date(2024, 3, 1))

        with pytest.raises(BusinessValidationError):
            await report_service.generate(mock_db, request)

        mock_db.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_range_file_name(self, mock_db):
        mock_db.execute.side_effect = [make_result(), make_result(), make_result()]
        request = ReportRequest(
            report_type=ReportType.VALUE_ONLY,
            start_date=date(2024, 3, 1),
            end_date=date(2024, 3, 31),
        )

        report = await report_service.generate(mock_db, request, now=NOW)

        assert pdf_filename(report) == "relatorio_2024-03-01_2024-03-31.pdf"


class TestRendering:

    @pytest.mark.asyncio
    async def test_report_html(self, mock_db, march_invoice):
        mock_db.execute.side_effect = [make_result(rows=[march_invoice]), make_result(), make_result()]
        request = ReportRequest(
            report_type=ReportType.COMPLETE,
            start_date=date(2024, 3, 1),
            end_date=date(2024, 3, 31),
        )
        report = await report_service.generate(mock_db, request, now=NOW)

        html = pdf_service.render_report_html(report)

        assert "PROJEÇÃO DE GANHOS" in html
        assert "€ 300.00" in html
        assert "Vestido" in html
        assert "02/04/2024 09:00" in html

    def test_error_page_is_escaped(self):
        html = pdf_service.render_link_error("<b>Erro</b>", "Link inválido")

        assert "<b>Erro</b>" not in html
        assert "&lt;b&gt;Erro&lt;/b&gt;" in html


class TestBackup:

    @pytest.mark.asyncio
    async def test_export(self, mock_db, march_invoice, march_payment):
        mock_db.execute.side_effect = [
            make_result(rows=[march_invoice]),
            make_result(rows=[march_payment]),
            make_result(rows=[]),
        ]

        backup = await backup_service.export(mock_db, now=NOW)

        assert backup.exported_at == NOW
        assert backup.invoices[0].total_value == Decimal("1000.00")
        assert backup.invoices[0].items[1].description == "Calças"
        assert backup.revenues[0].reference_month == "2024-03"
        assert backup.debts == []

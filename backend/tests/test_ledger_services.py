"""
Testes dos services do livro de registos (notas, receitas, dívidas)
e do service do dashboard, com AsyncSession em mock.
"""

import uuid
from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from conftest import MockDebt, MockInvoice, MockRevenue, make_result

from app.core.exceptions import BusinessValidationError, NotFoundError
from app.schemas.debt import DebtCreate, DebtUpdate
from app.schemas.invoice import InvoiceCreate, InvoiceItemCreate
from app.schemas.revenue import RevenueCreate, RevenueUpdate
from app.services.dashboard_service import dashboard_service
from app.services.debt_service import debt_service
from app.services.invoice_service import invoice_service
from app.services.period import PeriodMode
from app.services.revenue_service import revenue_service


# ============================================================
# Notas fiscais
# ============================================================


class TestInvoiceSchemas:

    def test_scanned_invoice_needs_image(self):
        with pytest.raises(ValidationError):
            InvoiceCreate(delivery_date=date(2024, 3, 1), total_value=Decimal("10"))

    def test_manual_entry_without_image(self):
        data = InvoiceCreate(
            delivery_date=date(2024, 3, 1),
            total_value=Decimal("10"),
            is_manual_entry=True,
            invoice_number="",
        )

        assert data.image_url is None
        assert data.invoice_number is None

    def test_negative_total_rejected(self):
        with pytest.raises(ValidationError):
            InvoiceCreate(
                delivery_date=date(2024, 3, 1),
                total_value=Decimal("-1"),
                is_manual_entry=True,
            )


class TestInvoiceService:

    @pytest.mark.asyncio
    async def test_create_keeps_item_order_and_total(self, mock_db):
        data = InvoiceCreate(
            delivery_date=date(2024, 3, 15),
            total_value=Decimal("95.00"),
            image_url="uploads/nota.jpg",
            items=[
                InvoiceItemCreate(description="Bainha", value=Decimal("10.00")),
                InvoiceItemCreate(description="Fecho", value=Decimal("15.00")),
            ],
        )

        invoice = await invoice_service.create(mock_db, data)

        assert invoice.total_value == Decimal("95.00")
        assert [(i.description, i.position) for i in invoice.items] == [("Bainha", 0), ("Fecho", 1)]
        assert invoice.is_validated is False
        mock_db.add.assert_called_once_with(invoice)
        mock_db.flush.assert_awaited_once()
        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, mock_db):
        mock_db.execute.return_value = make_result(one=None)

        with pytest.raises(NotFoundError):
            await invoice_service.get_by_id(mock_db, uuid.uuid4())

    @pytest.mark.asyncio
    async def test_set_validation(self, mock_db):
        invoice = MockInvoice(date(2024, 3, 1), "10.00", is_validated=False)
        mock_db.execute.return_value = make_result(one=invoice)

        result = await invoice_service.set_validation(mock_db, invoice.id, True)

        assert result.is_validated is True
        mock_db.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete(self, mock_db):
        invoice = MockInvoice(date(2024, 3, 1), "10.00")
        mock_db.execute.return_value = make_result(one=invoice)

        await invoice_service.delete(mock_db, invoice.id)

        mock_db.delete.assert_awaited_once_with(invoice)

    @pytest.mark.asyncio
    async def test_get_all_pagination(self, mock_db):
        invoices = [MockInvoice(date(2024, 3, d), "10.00") for d in (3, 2)]
        mock_db.execute.side_effect = [make_result(scalar=45), make_result(rows=invoices)]

        page = await invoice_service.get_all(mock_db, page=2, per_page=20)

        assert page.total == 45
        assert page.total_pages == 3
        assert page.page == 2
        assert [item.id for item in page.items] == [inv.id for inv in invoices]
        assert page.model_dump(by_alias=True)["totalItems"] == 45

    @pytest.mark.asyncio
    async def test_get_all_rejects_inverted_range(self, mock_db):
        with pytest.raises(BusinessValidationError):
            await invoice_service.get_all(mock_db, from_date=date(2024, 3, 2), to_date=date(2024, 3, 1))

        mock_db.execute.assert_not_called()


# ============================================================
# Receitas e dívidas
# ============================================================


class TestRevenueService:

    def test_reference_month_format(self):
        with pytest.raises(ValidationError):
            RevenueCreate(revenue_date=date(2024, 4, 1), amount=Decimal("10"), reference_month="03/2024")

    def test_empty_reference_month_is_none(self):
        data = RevenueCreate(revenue_date=date(2024, 4, 1), amount=Decimal("10"), reference_month="")

        assert data.reference_month is None

    @pytest.mark.asyncio
    async def test_create(self, mock_db):
        data = RevenueCreate(revenue_date=date(2024, 4, 1), amount=Decimal("300.00"), reference_month="2024-03")

        revenue = await revenue_service.create(mock_db, data)

        assert revenue.reference_month == "2024-03"
        assert revenue.amount == Decimal("300.00")
        mock_db.add.assert_called_once_with(revenue)

    @pytest.mark.asyncio
    async def test_update_only_sent_fields(self, mock_db):
        revenue = MockRevenue(date(2024, 4, 1), "300.00", reference_month="2024-03", description="MB Way")
        mock_db.execute.return_value = make_result(one=revenue)

        await revenue_service.update(mock_db, revenue.id, RevenueUpdate(amount=Decimal("250.00")))

        assert revenue.amount == Decimal("250.00")
        assert revenue.reference_month == "2024-03"
        assert revenue.description == "MB Way"

    @pytest.mark.asyncio
    async def test_update_not_found(self, mock_db):
        mock_db.execute.return_value = make_result(one=None)

        with pytest.raises(NotFoundError):
            await revenue_service.update(mock_db, uuid.uuid4(), RevenueUpdate(amount=Decimal("1")))

    def test_update_rejects_null_required_fields(self):
        with pytest.raises(ValidationError):
            RevenueUpdate.model_validate({"amount": None})
        with pytest.raises(ValidationError):
            RevenueUpdate.model_validate({"revenue_date": None})

    @pytest.mark.asyncio
    async def test_update_keeps_required_fields(self, mock_db):
        revenue = MockRevenue(date(2024, 4, 1), "300.00", reference_month="2024-03")
        mock_db.execute.return_value = make_result(one=revenue)

        data = RevenueUpdate.model_validate({"description": "Transferência", "reference_month": None})
        await revenue_service.update(mock_db, revenue.id, data)

        assert revenue.amount == Decimal("300.00")
        assert revenue.revenue_date == date(2024, 4, 1)
        assert revenue.reference_month is None
        assert revenue.description == "Transferência"


class TestDebtService:

    @pytest.mark.asyncio
    async def test_create(self, mock_db):
        debt = await debt_service.create(
            mock_db, DebtCreate(debt_date=date(2024, 3, 3), amount=Decimal("20.00"))
        )

        assert debt.amount == Decimal("20.00")
        mock_db.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_all(self, mock_db):
        debts = [MockDebt(date(2024, 3, 3), "20.00")]
        mock_db.execute.return_value = make_result(rows=debts)

        assert await debt_service.get_all(mock_db) == debts

    def test_update_rejects_null_required_fields(self):
        with pytest.raises(ValidationError):
            DebtUpdate.model_validate({"debt_date": None})
        with pytest.raises(ValidationError):
            DebtUpdate.model_validate({"amount": None})

    @pytest.mark.asyncio
    async def test_update_keeps_required_fields(self, mock_db):
        debt = MockDebt(date(2024, 3, 3), "20.00", description="Tecido")
        mock_db.execute.return_value = make_result(one=debt)

        await debt_service.update(mock_db, debt.id, DebtUpdate.model_validate({"description": None}))

        assert debt.debt_date == date(2024, 3, 3)
        assert debt.amount == Decimal("20.00")
        assert debt.description is None


# ============================================================
# Dashboard
# ============================================================


class TestDashboardService:

    @pytest.mark.asyncio
    async def test_get_stats(self, mock_db, march_invoice, march_payment):
        mock_db.execute.side_effect = [
            make_result(rows=[march_invoice]),
            make_result(rows=[]),
            make_result(rows=[march_payment]),
        ]

        stats = await dashboard_service.get_stats(mock_db, PeriodMode.MONTH, 2024, 2)

        assert stats.period_label == "Março 2024"
        assert stats.total_value == Decimal("1000.00")
        assert stats.period_revenue == Decimal("300.00")
        assert stats.balance_receivable == Decimal("0.00")
        assert mock_db.execute.await_count == 3

    @pytest.mark.asyncio
    async def test_month_mode_without_month(self, mock_db):
        with pytest.raises(BusinessValidationError):
            await dashboard_service.get_stats(mock_db, PeriodMode.MONTH, 2024, None)

        mock_db.execute.assert_not_called()

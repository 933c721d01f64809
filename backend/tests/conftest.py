"""
Configuração pytest e fixtures partilhadas.

Os testes dos services usam um AsyncSession em mock e registos falsos
com os mesmos atributos dos modelos ORM: o motor de agregação e o
construtor de relatórios leem os registos só por atributo.
"""

import uuid
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession


# ============================================================
# AsyncSession Mock
# ============================================================


@pytest.fixture
def mock_db():
    """Cria um mock de AsyncSession."""
    db = AsyncMock(spec=AsyncSession)
    db.execute = AsyncMock()
    db.add = MagicMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.flush = AsyncMock()
    db.refresh = AsyncMock()
    db.delete = AsyncMock()
    return db


def make_result(rows=None, one=None, scalar=None):
    """
    Resultado de db.execute em mock.

    rows alimenta scalars().all(), one alimenta scalar_one_or_none()
    e scalar alimenta scalar().
    """
    result = MagicMock()
    result.scalars.return_value.all.return_value = list(rows or [])
    result.scalar_one_or_none.return_value = one
    result.scalar.return_value = scalar
    return result


# ============================================================
# Registos falsos (sem importar os modelos)
# ============================================================


class MockInvoiceItem:
    """Mock do modelo InvoiceItem."""
    def __init__(self, description="Bainha", value="10.00", position=0, **kwargs):
        self.id = kwargs.get('id', uuid.uuid4())
        self.description = description
        self.value = Decimal(str(value))
        self.position = position


class MockInvoice:
    """Mock do modelo Invoice."""
    def __init__(self, delivery_date, total_value, **kwargs):
        self.id = kwargs.get('id', uuid.uuid4())
        self.invoice_number = kwargs.get('invoice_number', None)
        self.delivery_date = delivery_date
        self.total_value = Decimal(str(total_value))
        self.is_validated = kwargs.get('is_validated', True)
        self.is_manual_entry = kwargs.get('is_manual_entry', False)
        self.contact_name = kwargs.get('contact_name', None)
        self.phone_number = kwargs.get('phone_number', None)
        self.image_url = kwargs.get('image_url', None)
        self.items = kwargs.get('items', [])
        self.created_at = kwargs.get('created_at', datetime(2024, 1, 1, tzinfo=timezone.utc))
        self.updated_at = self.created_at


class MockRevenue:
    """Mock do modelo Revenue."""
    def __init__(self, revenue_date, amount, reference_month=None, **kwargs):
        self.id = kwargs.get('id', uuid.uuid4())
        self.revenue_date = revenue_date
        self.amount = Decimal(str(amount))
        self.reference_month = reference_month
        self.description = kwargs.get('description', None)
        self.created_at = kwargs.get('created_at', datetime(2024, 1, 1, tzinfo=timezone.utc))


class MockDebt:
    """Mock do modelo CorteCoseDebt."""
    def __init__(self, debt_date, amount, **kwargs):
        self.id = kwargs.get('id', uuid.uuid4())
        self.debt_date = debt_date
        self.amount = Decimal(str(amount))
        self.description = kwargs.get('description', None)
        self.created_at = kwargs.get('created_at', datetime(2024, 1, 1, tzinfo=timezone.utc))


class MockSharedReport:
    """Mock do modelo SharedReport."""
    def __init__(self, user_id, report_data, expires_at, **kwargs):
        self.id = kwargs.get('id', uuid.uuid4())
        self.user_id = user_id
        self.report_type = kwargs.get('report_type', report_data.get('report_type'))
        self.report_title = kwargs.get('report_title', report_data.get('title'))
        self.report_data = report_data
        self.expires_at = expires_at
        self.created_at = kwargs.get('created_at', expires_at - timedelta(days=30))


class MockUser:
    """Mock do modelo User."""
    def __init__(self, **kwargs):
        self.id = kwargs.get('id', uuid.uuid4())
        self.email = kwargs.get('email', 'gestao@example.com')
        self.full_name = kwargs.get('full_name', 'Ana Costa')
        self.hashed_password = kwargs.get('hashed_password', '')
        self.is_active = kwargs.get('is_active', True)
        self.created_at = kwargs.get('created_at', datetime(2024, 1, 1, tzinfo=timezone.utc))


@pytest.fixture
def mock_user():
    """Utilizador autenticado."""
    return MockUser()


@pytest.fixture
def march_invoice():
    """Nota validada de 1000.00 entregue a 15/03/2024."""
    return MockInvoice(
        date(2024, 3, 15),
        "1000.00",
        invoice_number="123",
        contact_name="Maria",
        phone_number="912345678",
        image_url="https://cdn.example.com/notas/foto_nota_marco_2024.jpg",
        items=[
            MockInvoiceItem("Vestido", "600.00", 0),
            MockInvoiceItem("Calças", "400.00", 1),
        ],
    )


@pytest.fixture
def march_payment():
    """Pagamento de 300.00 feito em abril referente a março."""
    return MockRevenue(date(2024, 4, 1), "300.00", reference_month="2024-03")

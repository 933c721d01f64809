"""
Modelos da base de dados SQLAlchemy
Projeto: Gestor de Notas Fiscais

Import centralizado de todos os modelos (metadata completo para create_all).

Modelos:
- User: Utilizadores da aplicação
- Invoice / InvoiceItem: Notas fiscais e respetivos itens
- Revenue: Receitas (pagamentos recebidos)
- CorteCoseDebt: Dívidas/bónus Corte & Cose
- SharedReport: Snapshots de relatórios partilhados por link
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class para todos os modelos SQLAlchemy."""
    pass


from app.models.user import User
from app.models.invoice import Invoice, InvoiceItem
from app.models.revenue import Revenue
from app.models.debt import CorteCoseDebt
from app.models.shared_report import SharedReport

__all__ = [
    "Base",
    "User",
    "Invoice",
    "InvoiceItem",
    "Revenue",
    "CorteCoseDebt",
    "SharedReport",
]

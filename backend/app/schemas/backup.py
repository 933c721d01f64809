"""
Schema Pydantic para o backup
Projeto: Gestor de Notas Fiscais
"""

from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.debt import DebtRead
from app.schemas.invoice import InvoiceRead
from app.schemas.revenue import RevenueRead


class BackupExport(BaseModel):
    """Snapshot completo dos registos."""

    exported_at: datetime = Field(..., serialization_alias="exportedAt")
    invoices: list[InvoiceRead] = Field(default_factory=list)
    revenues: list[RevenueRead] = Field(default_factory=list)
    debts: list[DebtRead] = Field(default_factory=list)

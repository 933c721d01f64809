"""
Service de backup
Projeto: Gestor de Notas Fiscais

Exporta num único documento JSON todas as notas (com itens),
receitas e dívidas.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.debt import CorteCoseDebt
from app.models.invoice import Invoice
from app.models.revenue import Revenue
from app.schemas.backup import BackupExport

logger = logging.getLogger(__name__)


class BackupService:
    """Service para a exportação de backups."""

    async def export(self, db: AsyncSession, now: Optional[datetime] = None) -> BackupExport:
        invoices = await db.execute(select(Invoice).order_by(Invoice.delivery_date))
        revenues = await db.execute(select(Revenue).order_by(Revenue.revenue_date))
        debts = await db.execute(select(CorteCoseDebt).order_by(CorteCoseDebt.debt_date))

        backup = BackupExport(
            exported_at=now or datetime.now(timezone.utc),
            invoices=list(invoices.scalars().all()),
            revenues=list(revenues.scalars().all()),
            debts=list(debts.scalars().all()),
        )
        logger.info(
            "Backup exportado: %d notas, %d receitas, %d dívidas",
            len(backup.invoices), len(backup.revenues), len(backup.debts),
        )
        return backup


backup_service = BackupService()

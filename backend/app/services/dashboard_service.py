"""
Service Layer para o Dashboard
Projeto: Gestor de Notas Fiscais

Carrega da base de dados os registos de que o dashboard precisa e
delega todos os cálculos ao motor de agregação.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BusinessValidationError
from app.models.debt import CorteCoseDebt
from app.models.revenue import Revenue
from app.schemas.dashboard import DashboardStats
from app.services.aggregation import compute_dashboard
from app.services.invoice_service import invoice_service
from app.services.period import INCEPTION_DATE, PeriodMode, resolve_period

logger = logging.getLogger(__name__)


class DashboardService:
    """
    Service para as estatísticas do dashboard.
    """

    async def get_stats(
        self,
        db: AsyncSession,
        mode: PeriodMode,
        year: int,
        month: Optional[int] = None,
    ) -> DashboardStats:
        """
        Calcula as estatísticas de um período.

        São feitas três consultas: notas validadas e dívidas desde o
        início da contabilidade até ao fim do período, e todas as receitas
        (um pagamento pode liquidar qualquer mês de referência).

        Raises:
            BusinessValidationError: Mês em falta em modo mensal
        """
        try:
            windows = resolve_period(mode, year, month)
        except ValueError as e:
            raise BusinessValidationError(str(e)) from e

        start = min(INCEPTION_DATE, windows.selected.start)
        end = windows.selected.end

        invoices = await invoice_service.get_validated_between(db, start, end)

        debts_result = await db.execute(
            select(CorteCoseDebt).where(
                CorteCoseDebt.debt_date >= start,
                CorteCoseDebt.debt_date <= end,
            )
        )
        debts = list(debts_result.scalars().all())

        revenues_result = await db.execute(select(Revenue))
        revenues = list(revenues_result.scalars().all())

        logger.debug(
            "Dashboard %s: %d notas, %d receitas, %d dívidas",
            windows.period.key, len(invoices), len(revenues), len(debts),
        )
        return compute_dashboard(windows, invoices, revenues, debts)


dashboard_service = DashboardService()

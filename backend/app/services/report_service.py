"""
Service Layer para a geração de relatórios
Projeto: Gestor de Notas Fiscais

Valida o pedido, carrega os registos do âmbito e entrega-os ao
construtor de relatórios.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.debt import CorteCoseDebt
from app.models.revenue import Revenue
from app.schemas.report import Report, ReportRequest
from app.services.invoice_service import invoice_service
from app.services.period import DateRange, reference_month_key
from app.services.report_builder import ReportScope, build_report, resolve_scope

logger = logging.getLogger(__name__)


class ReportService:
    """
    Service para a geração de relatórios.
    """

    async def _load_revenues(self, db: AsyncSession, scope: ReportScope) -> list[Revenue]:
        """
        Receitas candidatas: pagas dentro do intervalo ou com mês de
        referência dentro dele. O construtor aplica depois a regra exata.
        """
        date_range = scope.date_range
        first_key = reference_month_key(date_range.start.year, date_range.start.month)
        last_key = reference_month_key(date_range.end.year, date_range.end.month)

        query = (
            select(Revenue)
            .where(
                or_(
                    and_(
                        Revenue.revenue_date >= date_range.start,
                        Revenue.revenue_date <= date_range.end,
                    ),
                    and_(
                        Revenue.reference_month.is_not(None),
                        Revenue.reference_month >= first_key,
                        Revenue.reference_month <= last_key,
                    ),
                )
            )
            .order_by(Revenue.revenue_date)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def _load_debts(self, db: AsyncSession, date_range: DateRange) -> list[CorteCoseDebt]:
        query = (
            select(CorteCoseDebt)
            .where(
                CorteCoseDebt.debt_date >= date_range.start,
                CorteCoseDebt.debt_date <= date_range.end,
            )
            .order_by(CorteCoseDebt.debt_date)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def generate(
        self,
        db: AsyncSession,
        request: ReportRequest,
        now: Optional[datetime] = None,
    ) -> Report:
        """
        Gera o relatório pedido.

        A validação acontece antes de qualquer consulta.

        Raises:
            BusinessValidationError: Pedido inválido
        """
        scope = resolve_scope(
            request.report_type,
            start_date=request.start_date,
            end_date=request.end_date,
            reference_month=request.reference_month,
        )

        invoices = await invoice_service.get_validated_between(
            db, scope.date_range.start, scope.date_range.end
        )
        revenues = await self._load_revenues(db, scope)
        debts = await self._load_debts(db, scope.date_range)

        report = build_report(
            scope,
            invoices,
            revenues,
            debts,
            generated_at=now or datetime.now(timezone.utc),
        )
        logger.info(
            "Relatório %s gerado: %d notas, %d pagamentos",
            report.report_type.value, report.summary.record_count, len(report.matched_revenues),
        )
        return report


def pdf_filename(report: Report) -> str:
    """Nome do ficheiro PDF descarregado."""
    if report.reference_month:
        return f"relatorio_pagamentos_{report.reference_month}.pdf"
    return f"relatorio_{report.start_date:%Y-%m-%d}_{report.end_date:%Y-%m-%d}.pdf"


report_service = ReportService()

"""
Router FastAPI para os Relatórios
Projeto: Gestor de Notas Fiscais

Pré-visualização JSON, exportação PDF e intervalos pré-definidos.
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import get_current_user
from app.schemas.report import RangePresetRead, Report, ReportRequest
from app.services.pdf_service import pdf_service
from app.services.period import RangePreset, preset_range
from app.services.report_service import pdf_filename, report_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/reports",
    tags=["Relatórios"],
    dependencies=[Depends(get_current_user)],
)


@router.post(
    "/",
    name="relatorio_preview",
    summary="Gera um relatório",
    description="Devolve o relatório normalizado (totais, tabela formatada, pagamentos).",
    response_model=Report,
    status_code=status.HTTP_200_OK,
)
async def generate_report(
    data: ReportRequest,
    db: AsyncSession = Depends(get_db),
) -> Report:
    return await report_service.generate(db, data)


@router.post(
    "/pdf",
    name="relatorio_pdf",
    summary="Exporta um relatório em PDF",
    response_class=Response,
    status_code=status.HTTP_200_OK,
)
async def export_report_pdf(
    data: ReportRequest,
    db: AsyncSession = Depends(get_db),
) -> Response:
    report = await report_service.generate(db, data)
    pdf_bytes = pdf_service.generate_report_pdf(report)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{pdf_filename(report)}"'},
    )


@router.get(
    "/presets/{preset}",
    name="relatorio_preset",
    summary="Intervalo pré-definido",
    description="week: segunda a domingo da semana atual; month: mês civil atual.",
    response_model=RangePresetRead,
)
async def get_range_preset(preset: RangePreset) -> RangePresetRead:
    date_range = preset_range(preset)
    return RangePresetRead(
        preset=preset.value,
        start_date=date_range.start,
        end_date=date_range.end,
    )

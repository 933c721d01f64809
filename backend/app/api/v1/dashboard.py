"""
Router FastAPI para o Dashboard
Projeto: Gestor de Notas Fiscais
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import get_current_user
from app.schemas.dashboard import DashboardStats
from app.services.dashboard_service import dashboard_service
from app.services.period import PeriodMode

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
    dependencies=[Depends(get_current_user)],
)


@router.get(
    "/",
    name="dashboard",
    summary="Estatísticas de um período",
    description=(
        "Totais das notas validadas, receitas, projeção de ganhos (30%), "
        "dívidas, saldo a receber e saldo do mês anterior."
    ),
    response_model=DashboardStats,
    status_code=status.HTTP_200_OK,
)
async def get_dashboard(
    mode: PeriodMode = Query(PeriodMode.MONTH, description="month ou year"),
    year: int = Query(..., ge=1900, le=9999, description="Ano"),
    month: Optional[int] = Query(
        None,
        ge=0,
        le=11,
        description="Índice do mês 0-11 (obrigatório em modo mensal)",
    ),
    db: AsyncSession = Depends(get_db),
) -> DashboardStats:
    return await dashboard_service.get_stats(db, mode=mode, year=year, month=month)

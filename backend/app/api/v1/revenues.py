"""
Router FastAPI para as Receitas
Projeto: Gestor de Notas Fiscais
"""

import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import get_current_user
from app.schemas.revenue import RevenueCreate, RevenueRead, RevenueUpdate
from app.services.revenue_service import revenue_service

router = APIRouter(
    prefix="/revenues",
    tags=["Receitas"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/", response_model=List[RevenueRead])
async def get_revenues(
    from_date: Optional[date] = Query(None, description="Data de pagamento inicial"),
    to_date: Optional[date] = Query(None, description="Data de pagamento final"),
    db: AsyncSession = Depends(get_db),
):
    """Lista as receitas, filtradas pela data do pagamento."""
    return await revenue_service.get_all(db, from_date=from_date, to_date=to_date)


@router.get("/{id}", response_model=RevenueRead)
async def get_revenue(id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await revenue_service.get_by_id(db, id)


@router.post("/", response_model=RevenueRead, status_code=status.HTTP_201_CREATED)
async def create_revenue(data: RevenueCreate, db: AsyncSession = Depends(get_db)):
    """Regista um pagamento, opcionalmente com o mês de referência que liquida."""
    revenue = await revenue_service.create(db, data)
    await db.commit()
    return revenue


@router.put("/{id}", response_model=RevenueRead)
async def update_revenue(id: uuid.UUID, data: RevenueUpdate, db: AsyncSession = Depends(get_db)):
    revenue = await revenue_service.update(db, id, data)
    await db.commit()
    return revenue


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_revenue(id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    await revenue_service.delete(db, id)
    await db.commit()

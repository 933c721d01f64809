"""
Router FastAPI para as dívidas Corte & Cose
Projeto: Gestor de Notas Fiscais
"""

import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import get_current_user
from app.schemas.debt import DebtCreate, DebtRead, DebtUpdate
from app.services.debt_service import debt_service

router = APIRouter(
    prefix="/debts",
    tags=["Dívidas Corte & Cose"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/", response_model=List[DebtRead])
async def get_debts(
    from_date: Optional[date] = Query(None, description="Data inicial"),
    to_date: Optional[date] = Query(None, description="Data final"),
    db: AsyncSession = Depends(get_db),
):
    return await debt_service.get_all(db, from_date=from_date, to_date=to_date)


@router.get("/{id}", response_model=DebtRead)
async def get_debt(id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await debt_service.get_by_id(db, id)


@router.post("/", response_model=DebtRead, status_code=status.HTTP_201_CREATED)
async def create_debt(data: DebtCreate, db: AsyncSession = Depends(get_db)):
    debt = await debt_service.create(db, data)
    await db.commit()
    return debt


@router.put("/{id}", response_model=DebtRead)
async def update_debt(id: uuid.UUID, data: DebtUpdate, db: AsyncSession = Depends(get_db)):
    debt = await debt_service.update(db, id, data)
    await db.commit()
    return debt


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_debt(id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    await debt_service.delete(db, id)
    await db.commit()

"""
Service Layer para as dívidas Corte & Cose
Projeto: Gestor de Notas Fiscais
"""

import logging
import uuid
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BusinessValidationError, NotFoundError
from app.models.debt import CorteCoseDebt
from app.schemas.debt import DebtCreate, DebtUpdate

logger = logging.getLogger(__name__)


class DebtService:
    """
    Service para as operações CRUD sobre as dívidas.
    """

    def __init__(self) -> None:
        pass

    async def get_all(
        self,
        db: AsyncSession,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> List[CorteCoseDebt]:
        """Dívidas no intervalo, mais recentes primeiro."""
        if from_date and to_date and from_date > to_date:
            raise BusinessValidationError("A data inicial não pode ser posterior à data final")

        query = select(CorteCoseDebt)
        if from_date:
            query = query.where(CorteCoseDebt.debt_date >= from_date)
        if to_date:
            query = query.where(CorteCoseDebt.debt_date <= to_date)
        query = query.order_by(CorteCoseDebt.debt_date.desc())

        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, db: AsyncSession, id: uuid.UUID) -> CorteCoseDebt:
        result = await db.execute(select(CorteCoseDebt).where(CorteCoseDebt.id == id))
        debt = result.scalar_one_or_none()

        if not debt:
            raise NotFoundError(f"Dívida {id} não encontrada")

        return debt

    async def create(self, db: AsyncSession, data: DebtCreate) -> CorteCoseDebt:
        debt = CorteCoseDebt(**data.model_dump())
        db.add(debt)
        await db.flush()
        await db.refresh(debt)
        return debt

    async def update(self, db: AsyncSession, id: uuid.UUID, data: DebtUpdate) -> CorteCoseDebt:
        debt = await self.get_by_id(db, id)

        for k, v in data.model_dump(exclude_unset=True).items():
            setattr(debt, k, v)

        await db.flush()
        await db.refresh(debt)
        return debt

    async def delete(self, db: AsyncSession, id: uuid.UUID) -> None:
        debt = await self.get_by_id(db, id)
        await db.delete(debt)
        await db.flush()


debt_service = DebtService()

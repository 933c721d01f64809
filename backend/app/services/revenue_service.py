"""
Service Layer para as Receitas
Projeto: Gestor de Notas Fiscais
"""

import logging
import uuid
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BusinessValidationError, NotFoundError
from app.models.revenue import Revenue
from app.schemas.revenue import RevenueCreate, RevenueUpdate

logger = logging.getLogger(__name__)


class RevenueService:
    """
    Service para as operações CRUD sobre as receitas.
    """

    def __init__(self) -> None:
        pass

    async def get_all(
        self,
        db: AsyncSession,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> List[Revenue]:
        """Receitas por data de pagamento, mais recentes primeiro."""
        if from_date and to_date and from_date > to_date:
            raise BusinessValidationError("A data inicial não pode ser posterior à data final")

        query = select(Revenue)
        if from_date:
            query = query.where(Revenue.revenue_date >= from_date)
        if to_date:
            query = query.where(Revenue.revenue_date <= to_date)
        query = query.order_by(Revenue.revenue_date.desc())

        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, db: AsyncSession, id: uuid.UUID) -> Revenue:
        result = await db.execute(select(Revenue).where(Revenue.id == id))
        revenue = result.scalar_one_or_none()

        if not revenue:
            raise NotFoundError(f"Receita {id} não encontrada")

        return revenue

    async def create(self, db: AsyncSession, data: RevenueCreate) -> Revenue:
        """Regista uma nova receita."""
        revenue = Revenue(**data.model_dump())
        db.add(revenue)
        await db.flush()
        await db.refresh(revenue)
        return revenue

    async def update(self, db: AsyncSession, id: uuid.UUID, data: RevenueUpdate) -> Revenue:
        """Atualiza os campos enviados."""
        revenue = await self.get_by_id(db, id)

        update_data = data.model_dump(exclude_unset=True)
        for k, v in update_data.items():
            setattr(revenue, k, v)

        await db.flush()
        await db.refresh(revenue)
        return revenue

    async def delete(self, db: AsyncSession, id: uuid.UUID) -> None:
        revenue = await self.get_by_id(db, id)
        await db.delete(revenue)
        await db.flush()


revenue_service = RevenueService()

"""
Service Layer para as Notas Fiscais
Projeto: Gestor de Notas Fiscais

Contém a lógica de negócio das notas:
- Lista paginada com filtros por data, validação e origem
- Criação (entrada manual ou digitalizada, com itens)
- Alteração da flag de validação
- Eliminação
"""

import logging
import uuid
from datetime import date
from typing import Optional

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BusinessValidationError, NotFoundError
from app.models.invoice import Invoice, InvoiceItem
from app.schemas.invoice import InvoiceCreate, InvoiceList

logger = logging.getLogger(__name__)


class InvoiceService:
    """
    Service para a gestão das notas fiscais.

    O valor total de uma nota é o introduzido/extraído e nunca é
    recalculado a partir dos itens.
    """

    def __init__(self) -> None:
        pass

    async def get_all(
        self,
        db: AsyncSession,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        is_validated: Optional[bool] = None,
        is_manual_entry: Optional[bool] = None,
        page: int = 1,
        per_page: int = 20,
    ) -> InvoiceList:
        """
        Recupera a lista paginada das notas, mais recentes primeiro.

        Args:
            db: Sessão da base de dados
            from_date: Data de entrega mínima
            to_date: Data de entrega máxima
            is_validated: Filtro pela flag de validação
            is_manual_entry: Filtro pela origem
            page: Número da página
            per_page: Elementos por página
        """
        if from_date and to_date and from_date > to_date:
            raise BusinessValidationError("A data inicial não pode ser posterior à data final")

        conditions = []
        if from_date:
            conditions.append(Invoice.delivery_date >= from_date)
        if to_date:
            conditions.append(Invoice.delivery_date <= to_date)
        if is_validated is not None:
            conditions.append(Invoice.is_validated == is_validated)
        if is_manual_entry is not None:
            conditions.append(Invoice.is_manual_entry == is_manual_entry)

        count_stmt = select(func.count(Invoice.id))
        stmt = select(Invoice)
        if conditions:
            count_stmt = count_stmt.where(and_(*conditions))
            stmt = stmt.where(and_(*conditions))

        count_result = await db.execute(count_stmt)
        total = count_result.scalar() or 0

        stmt = (
            stmt.order_by(Invoice.delivery_date.desc(), Invoice.created_at.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        result = await db.execute(stmt)
        invoices = result.scalars().all()

        total_pages = (total + per_page - 1) // per_page if total > 0 else 1

        return InvoiceList(
            items=list(invoices),
            total=total,
            page=page,
            per_page=per_page,
            total_pages=total_pages,
        )

    async def get_by_id(self, db: AsyncSession, invoice_id: uuid.UUID) -> Invoice:
        """
        Recupera uma nota pelo ID, com os itens.

        Raises:
            NotFoundError: Nota não encontrada
        """
        result = await db.execute(select(Invoice).where(Invoice.id == invoice_id))
        invoice = result.scalar_one_or_none()

        if not invoice:
            raise NotFoundError(f"Nota {invoice_id} não encontrada")

        return invoice

    async def get_validated_between(
        self,
        db: AsyncSession,
        start: date,
        end: date,
    ) -> list[Invoice]:
        """Notas validadas com data de entrega em [start, end]."""
        stmt = (
            select(Invoice)
            .where(
                Invoice.is_validated.is_(True),
                Invoice.delivery_date >= start,
                Invoice.delivery_date <= end,
            )
            .order_by(Invoice.delivery_date, Invoice.created_at)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def create(self, db: AsyncSession, data: InvoiceCreate) -> Invoice:
        """
        Cria uma nota com os seus itens.

        A posição de cada item é a ordem em que chega.
        """
        invoice = Invoice(
            invoice_number=data.invoice_number,
            delivery_date=data.delivery_date,
            total_value=data.total_value,
            is_validated=data.is_validated,
            is_manual_entry=data.is_manual_entry,
            contact_name=data.contact_name,
            phone_number=data.phone_number,
            image_url=data.image_url,
            items=[
                InvoiceItem(description=item.description, value=item.value, position=position)
                for position, item in enumerate(data.items)
            ],
        )
        db.add(invoice)
        await db.flush()
        await db.refresh(invoice)

        logger.info(
            "Nota criada: %s (manual=%s, total=%s)",
            invoice.id, invoice.is_manual_entry, invoice.total_value,
        )
        return invoice

    async def set_validation(
        self,
        db: AsyncSession,
        invoice_id: uuid.UUID,
        is_validated: bool,
    ) -> Invoice:
        """Altera a flag de validação, a única mutação permitida."""
        invoice = await self.get_by_id(db, invoice_id)
        invoice.is_validated = is_validated
        await db.flush()
        await db.refresh(invoice)
        return invoice

    async def delete(self, db: AsyncSession, invoice_id: uuid.UUID) -> None:
        """
        Elimina uma nota (os itens são eliminados em cascata).

        Raises:
            NotFoundError: Nota não encontrada
        """
        invoice = await self.get_by_id(db, invoice_id)
        await db.delete(invoice)
        await db.flush()


invoice_service = InvoiceService()

"""
Router FastAPI para as Notas Fiscais
Projeto: Gestor de Notas Fiscais

Endpoints de gestão das notas: lista, detalhe, criação (manual ou
digitalizada), validação, eliminação e extração por IA.
"""

import logging
import uuid
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import get_current_user
from app.schemas.invoice import (
    ExtractionRequest,
    ExtractionResult,
    InvoiceCreate,
    InvoiceList,
    InvoiceRead,
    InvoiceValidationUpdate,
)
from app.services.extraction_service import ExtractionService, extraction_service
from app.services.invoice_service import invoice_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/invoices",
    tags=["Notas Fiscais"],
    dependencies=[Depends(get_current_user)],
)


def get_extraction_service() -> ExtractionService:
    return extraction_service


# -------------------------------------------------------------------
# Endpoints
# -------------------------------------------------------------------

@router.get(
    "/",
    name="notas_lista",
    summary="Lista de notas",
    description="Lista paginada das notas com filtros por data de entrega, validação e origem.",
    response_model=InvoiceList,
    status_code=status.HTTP_200_OK,
)
async def get_invoices(
    from_date: Optional[date] = Query(
        None,
        description="Data de entrega inicial (YYYY-MM-DD)",
    ),
    to_date: Optional[date] = Query(
        None,
        description="Data de entrega final (YYYY-MM-DD)",
    ),
    is_validated: Optional[bool] = Query(
        None,
        description="Filtro pela flag de validação",
    ),
    is_manual_entry: Optional[bool] = Query(
        None,
        description="True só entradas manuais, False só digitalizadas",
    ),
    page: int = Query(1, ge=1, description="Número da página"),
    per_page: int = Query(20, ge=1, le=100, description="Elementos por página"),
    db: AsyncSession = Depends(get_db),
) -> InvoiceList:
    return await invoice_service.get_all(
        db=db,
        from_date=from_date,
        to_date=to_date,
        is_validated=is_validated,
        is_manual_entry=is_manual_entry,
        page=page,
        per_page=per_page,
    )


@router.post(
    "/extract",
    name="nota_extracao",
    summary="Extração por IA",
    description="Extrai número, data, itens, total e contacto a partir da imagem da nota.",
    response_model=ExtractionResult,
    status_code=status.HTTP_200_OK,
)
async def extract_invoice(
    data: ExtractionRequest,
    service: ExtractionService = Depends(get_extraction_service),
) -> ExtractionResult:
    """
    Devolve sempre um resultado: em caso de falha os campos vêm
    vazios e o total a 0, para o utilizador preencher à mão.
    """
    return await service.extract_invoice(data.image_url)


@router.get(
    "/{invoice_id}",
    name="nota_detalhe",
    summary="Detalhe de uma nota",
    response_model=InvoiceRead,
    status_code=status.HTTP_200_OK,
)
async def get_invoice(
    invoice_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> InvoiceRead:
    return await invoice_service.get_by_id(db, invoice_id)


@router.post(
    "/",
    name="nota_criacao",
    summary="Cria uma nota",
    description="Cria uma nota digitalizada (com imagem e itens) ou uma entrada manual.",
    response_model=InvoiceRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_invoice(
    data: InvoiceCreate,
    db: AsyncSession = Depends(get_db),
) -> InvoiceRead:
    invoice = await invoice_service.create(db, data)
    await db.commit()
    return invoice


@router.patch(
    "/{invoice_id}/validation",
    name="nota_validacao",
    summary="Valida ou invalida uma nota",
    description="Só as notas validadas entram nos totais do dashboard e dos relatórios.",
    response_model=InvoiceRead,
    status_code=status.HTTP_200_OK,
)
async def set_invoice_validation(
    invoice_id: uuid.UUID,
    data: InvoiceValidationUpdate,
    db: AsyncSession = Depends(get_db),
) -> InvoiceRead:
    invoice = await invoice_service.set_validation(db, invoice_id, data.is_validated)
    await db.commit()
    return invoice


@router.delete(
    "/{invoice_id}",
    name="nota_eliminacao",
    summary="Elimina uma nota",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_invoice(
    invoice_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    await invoice_service.delete(db, invoice_id)
    await db.commit()

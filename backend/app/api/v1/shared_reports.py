"""
Router FastAPI para os Relatórios Partilhados
Projeto: Gestor de Notas Fiscais

- /api/v1/shared-reports: gestão dos links (autenticado) e leitura
  pública em JSON
- /report/{id}: página HTML pública do relatório
"""

import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import CurrentUser
from app.core.exceptions import LinkExpiredError, NotFoundError
from app.models.shared_report import SharedReport
from app.schemas.shared_report import (
    LinkState,
    SharedReportCreate,
    SharedReportExtend,
    SharedReportPublic,
    SharedReportRead,
)
from app.services.pdf_service import pdf_service
from app.services.report_service import report_service
from app.services.share_service import LinkResolution, link_state, share_service, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/shared-reports",
    tags=["Relatórios Partilhados"],
)

# Página HTML, montada fora de /api/v1
page_router = APIRouter(
    tags=["Página pública"],
)


def _to_read(link: SharedReport) -> SharedReportRead:
    return SharedReportRead(
        id=link.id,
        report_type=link.report_type,
        report_title=link.report_title,
        created_at=link.created_at,
        expires_at=link.expires_at,
        state=link_state(link, utcnow()),
        url=share_service.public_url(link.id),
    )


# -------------------------------------------------------------------
# Gestão dos links
# -------------------------------------------------------------------

@router.post(
    "/",
    name="link_criacao",
    summary="Partilha um relatório",
    description="Gera o relatório e guarda um snapshot acessível por link durante 30 dias.",
    response_model=SharedReportRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_shared_report(
    data: SharedReportCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> SharedReportRead:
    report = await report_service.generate(db, data)
    link = await share_service.create_link(db, report, owner_id=current_user.id)
    await db.commit()
    return _to_read(link)


@router.get(
    "/",
    name="link_lista",
    summary="Links do utilizador",
    response_model=List[SharedReportRead],
)
async def list_shared_reports(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> List[SharedReportRead]:
    links = await share_service.list_links(db, owner_id=current_user.id)
    return [_to_read(link) for link in links]


@router.patch(
    "/{link_id}/extend",
    name="link_renovacao",
    summary="Renova um link",
    description="A nova expiração é agora + days; um link expirado volta a ficar ativo.",
    response_model=SharedReportRead,
)
async def extend_shared_report(
    link_id: uuid.UUID,
    data: SharedReportExtend,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> SharedReportRead:
    link = await share_service.extend_link(db, link_id, data.days, owner_id=current_user.id)
    await db.commit()
    return _to_read(link)


@router.delete(
    "/{link_id}",
    name="link_eliminacao",
    summary="Apaga um link",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_shared_report(
    link_id: uuid.UUID,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> None:
    await share_service.delete_link(db, link_id, owner_id=current_user.id)
    await db.commit()


# -------------------------------------------------------------------
# Leitura pública
# -------------------------------------------------------------------

async def _resolve_public(db: AsyncSession, link_id: str) -> LinkResolution:
    """Um token que não é UUID é tratado como link inexistente."""
    try:
        parsed = uuid.UUID(link_id)
    except ValueError:
        return LinkResolution(LinkState.NOT_FOUND)
    return await share_service.resolve_link(db, parsed)


@router.get(
    "/{link_id}/public",
    name="link_publico",
    summary="Relatório partilhado (JSON)",
    description="Sem autenticação. 404 para links inexistentes, 410 para links expirados.",
    response_model=SharedReportPublic,
)
async def get_public_shared_report(
    link_id: str,
    db: AsyncSession = Depends(get_db),
) -> SharedReportPublic:
    resolution = await _resolve_public(db, link_id)

    if resolution.state is LinkState.NOT_FOUND:
        raise NotFoundError("Relatório não encontrado")
    if resolution.state is LinkState.EXPIRED:
        raise LinkExpiredError()

    link = resolution.link
    return SharedReportPublic(
        id=link.id,
        report_type=link.report_type,
        report_title=link.report_title,
        expires_at=link.expires_at,
        report=resolution.report,
    )


@page_router.get(
    "/report/{link_id}",
    name="pagina_relatorio",
    summary="Página pública do relatório",
    response_class=HTMLResponse,
)
async def shared_report_page(
    link_id: str,
    db: AsyncSession = Depends(get_db),
) -> HTMLResponse:
    resolution = await _resolve_public(db, link_id)

    if resolution.state is LinkState.NOT_FOUND:
        return HTMLResponse(
            pdf_service.render_link_error(
                "Relatório não encontrado",
                "Este link não existe ou foi removido.",
            ),
            status_code=status.HTTP_404_NOT_FOUND,
        )
    if resolution.state is LinkState.EXPIRED:
        return HTMLResponse(
            pdf_service.render_link_error(
                "Link expirado",
                "Este relatório expirou e já não está disponível.",
            ),
            status_code=status.HTTP_410_GONE,
        )

    return HTMLResponse(pdf_service.render_shared_report(resolution.report))

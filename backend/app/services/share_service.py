"""
Gestor de links partilhados
Projeto: Gestor de Notas Fiscais

Guarda snapshots de relatórios sob identificadores opacos com
expiração. O id do registo é o token do link.

Estados: active -> expired (pelo tempo) ou apagado (explicitamente).
Um link expirado só volta a ativo por renovação; apagar é definitivo.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.models.shared_report import SharedReport
from app.schemas.report import Report
from app.schemas.shared_report import LinkState

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_aware(value: datetime) -> datetime:
    # datas sem fuso são tratadas como UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def link_state(link: SharedReport, now: datetime) -> LinkState:
    """Estado de um link existente no instante now."""
    if link.expires_at is not None and _as_aware(link.expires_at) <= now:
        return LinkState.EXPIRED
    return LinkState.ACTIVE


@dataclass(frozen=True)
class LinkResolution:
    """
    Resultado da resolução de um link.

    report só existe quando o estado é ACTIVE. Expirado e inexistente
    são estados distintos; a tradução para 410/404 é feita na camada HTTP.
    """

    state: LinkState
    link: Optional[SharedReport] = None
    report: Optional[Report] = None


class ShareService:
    """
    Service para a gestão dos links partilhados.
    """

    def __init__(self, default_days: Optional[int] = None) -> None:
        self.default_days = default_days or settings.share_link_default_days

    def public_url(self, link_id: uuid.UUID) -> str:
        return f"{settings.public_base_url}/report/{link_id}"

    async def _get(self, db: AsyncSession, link_id: uuid.UUID) -> Optional[SharedReport]:
        result = await db.execute(select(SharedReport).where(SharedReport.id == link_id))
        return result.scalar_one_or_none()

    async def _get_owned(
        self,
        db: AsyncSession,
        link_id: uuid.UUID,
        owner_id: uuid.UUID,
    ) -> SharedReport:
        link = await self._get(db, link_id)
        if link is None or link.user_id != owner_id:
            raise NotFoundError(f"Link {link_id} não encontrado")
        return link

    async def create_link(
        self,
        db: AsyncSession,
        report: Report,
        owner_id: uuid.UUID,
        now: Optional[datetime] = None,
    ) -> SharedReport:
        """
        Guarda o snapshot do relatório com expiração now + default_days.

        Returns:
            SharedReport: O registo criado; o seu id é o token do link
        """
        now = now or utcnow()
        link = SharedReport(
            id=uuid.uuid4(),
            user_id=owner_id,
            report_type=report.report_type.value,
            report_title=report.title,
            report_data=report.model_dump(mode="json"),
            expires_at=now + timedelta(days=self.default_days),
        )
        db.add(link)
        await db.flush()
        await db.refresh(link)

        logger.info("Link partilhado criado: %s (expira %s)", link.id, link.expires_at)
        return link

    async def resolve_link(
        self,
        db: AsyncSession,
        link_id: uuid.UUID,
        now: Optional[datetime] = None,
    ) -> LinkResolution:
        """Resolve um link sem levantar exceções."""
        now = now or utcnow()
        link = await self._get(db, link_id)

        if link is None:
            return LinkResolution(LinkState.NOT_FOUND)

        state = link_state(link, now)
        if state is LinkState.EXPIRED:
            return LinkResolution(state, link=link)

        return LinkResolution(state, link=link, report=Report.model_validate(link.report_data))

    async def extend_link(
        self,
        db: AsyncSession,
        link_id: uuid.UUID,
        days: int,
        owner_id: uuid.UUID,
        now: Optional[datetime] = None,
    ) -> SharedReport:
        """
        Renova um link: expires_at = now + days.

        O valor é absoluto e não se soma à expiração anterior; um link
        expirado volta a ficar ativo.

        Raises:
            NotFoundError: Link inexistente ou de outro utilizador
        """
        now = now or utcnow()
        link = await self._get_owned(db, link_id, owner_id)
        link.expires_at = now + timedelta(days=days)
        await db.flush()
        await db.refresh(link)

        logger.info("Link %s renovado até %s", link.id, link.expires_at)
        return link

    async def delete_link(
        self,
        db: AsyncSession,
        link_id: uuid.UUID,
        owner_id: uuid.UUID,
    ) -> None:
        """Apaga um link. Apagar um link inexistente não é erro."""
        link = await self._get(db, link_id)
        if link is None or link.user_id != owner_id:
            return
        await db.delete(link)
        await db.flush()
        logger.info("Link %s apagado", link_id)

    async def list_links(self, db: AsyncSession, owner_id: uuid.UUID) -> List[SharedReport]:
        """Links do utilizador, mais recentes primeiro."""
        query = (
            select(SharedReport)
            .where(SharedReport.user_id == owner_id)
            .order_by(SharedReport.created_at.desc())
        )
        result = await db.execute(query)
        return list(result.scalars().all())


share_service = ShareService()

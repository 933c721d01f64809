"""
Schemas Pydantic para os Relatórios Partilhados
Projeto: Gestor de Notas Fiscais
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.report import Report, ReportRequest


class LinkState(str, Enum):
    """Estado de um link partilhado no momento da resolução."""
    ACTIVE = "active"
    EXPIRED = "expired"
    NOT_FOUND = "not_found"


class SharedReportCreate(ReportRequest):
    """
    Pedido de partilha: o relatório é gerado no servidor a partir dos
    mesmos parâmetros da pré-visualização e gravado como snapshot.
    """
    pass


class SharedReportExtend(BaseModel):
    """Renovação: nova expiração = agora + days."""

    days: int = Field(..., ge=1, le=3650, description="Dias de validade a partir de agora")


class SharedReportRead(BaseModel):
    """Link partilhado (sem o conteúdo do relatório)."""

    id: uuid.UUID = Field(..., description="Token do link")
    report_type: str = Field(..., serialization_alias="reportType")
    report_title: str = Field(..., serialization_alias="reportTitle")
    created_at: datetime = Field(..., serialization_alias="createdAt")
    expires_at: Optional[datetime] = Field(None, serialization_alias="expiresAt")
    state: LinkState = Field(LinkState.ACTIVE, description="Estado atual do link")
    url: Optional[str] = Field(None, description="URL pública da página do relatório")

    model_config = ConfigDict(from_attributes=True)


class SharedReportPublic(BaseModel):
    """Conteúdo público de um link ativo."""

    id: uuid.UUID
    report_type: str = Field(..., serialization_alias="reportType")
    report_title: str = Field(..., serialization_alias="reportTitle")
    expires_at: Optional[datetime] = Field(None, serialization_alias="expiresAt")
    report: Report

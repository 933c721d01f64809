"""
Modelo SQLAlchemy para os relatórios partilhados
Projeto: Gestor de Notas Fiscais
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models import Base
from app.models.mixins import TimestampMixin, UUIDMixin


class SharedReport(Base, UUIDMixin, TimestampMixin):
    """
    Snapshot imutável de um relatório gerado, exposto por link público.

    O id é o token do link. Depois de criado só muda expires_at
    (renovação) ou é apagado.

    Attributes:
        user_id: Dono do link (pode listar, renovar e apagar)
        report_type: Tipo de relatório (seleciona o layout da página pública)
        report_title: Título apresentado
        report_data: Relatório serializado (JSON)
        expires_at: Expiração; None = nunca expira
    """

    __tablename__ = "shared_reports"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        doc="UUID do dono do link",
    )

    report_type: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
    )

    report_title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    report_data: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        doc="Snapshot do relatório calculado",
    )

    expires_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        doc="Data/hora de expiração",
    )

    __table_args__ = (
        Index("ix_shared_reports_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<SharedReport(id={self.id}, type={self.report_type}, expires_at={self.expires_at})>"

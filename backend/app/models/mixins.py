"""
Mixins SQLAlchemy para os modelos
Projeto: Gestor de Notas Fiscais

Mixins reutilizáveis com colunas comuns aos modelos.
"""

import datetime
import uuid

from sqlalchemy import DateTime, Uuid
from sqlalchemy import event
from sqlalchemy.orm import Mapped, mapped_column, Session
from sqlalchemy.sql import func


class TimestampMixin:
    """
    Adiciona created_at e updated_at geridos automaticamente.

    Usage:
        class MyModel(Base, TimestampMixin):
            __tablename__ = "my_table"
    """

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        doc="Data/hora de criação do registo",
    )

    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        doc="Data/hora da última atualização do registo",
    )


class UUIDMixin:
    """
    Adiciona uma primary key UUID gerada na aplicação.

    Usage:
        class MyModel(Base, UUIDMixin):
            __tablename__ = "my_table"
    """

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        doc="UUID primary key",
    )


# ------------------------------------------------------------
# Event Listeners
# ------------------------------------------------------------
@event.listens_for(Session, "before_flush")
def update_timestamp(session: Session, flush_context, instances) -> None:
    """
    Atualiza updated_at dos objetos novos e modificados antes de cada flush.
    """
    now = datetime.datetime.now(datetime.timezone.utc)

    for obj in session.dirty:
        if hasattr(obj, "updated_at") and session.is_modified(obj, include_collections=False):
            obj.updated_at = now

    for obj in session.new:
        if hasattr(obj, "updated_at"):
            obj.updated_at = now

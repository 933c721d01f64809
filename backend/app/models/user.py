"""
Modelo SQLAlchemy para a entidade User
Projeto: Gestor de Notas Fiscais

Utilizadores autenticados da aplicação. Cada link partilhado
pertence a um utilizador.
"""

from __future__ import annotations

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models import Base
from app.models.mixins import TimestampMixin, UUIDMixin


class User(Base, UUIDMixin, TimestampMixin):
    """
    Utilizador do sistema.

    Attributes:
        id: UUID primary key
        email: Email único
        hashed_password: Palavra-passe com hash bcrypt
        full_name: Nome completo
        is_active: Utilizador ativo
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        doc="Email único do utilizador",
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Palavra-passe com hash",
    )

    full_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        doc="Nome completo do utilizador",
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
        doc="Indica se o utilizador está ativo",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"

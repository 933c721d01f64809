"""
Schemas Pydantic para a entidade User
Projeto: Gestor de Notas Fiscais
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    """
    Schema para a criação de um utilizador.

    Attributes:
        email: Email único
        password: Palavra-passe em claro (8 a 100 caracteres)
        full_name: Nome completo
    """

    email: EmailStr = Field(..., description="Email único do utilizador")
    password: str = Field(
        min_length=8,
        max_length=100,
        description="Palavra-passe em claro",
    )
    full_name: str = Field(
        min_length=1,
        max_length=100,
        description="Nome completo",
    )


class UserLogin(BaseModel):
    """Credenciais de login."""

    email: EmailStr = Field(..., description="Email do utilizador")
    password: str = Field(..., description="Palavra-passe em claro")


class UserResponse(BaseModel):
    """Dados públicos de um utilizador."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="UUID do utilizador")
    email: str
    full_name: str
    is_active: bool
    created_at: datetime = Field(..., description="Data/hora de criação")


__all__ = [
    "UserCreate",
    "UserLogin",
    "UserResponse",
]

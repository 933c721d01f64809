"""
Schemas Pydantic para a autenticação JWT
Projeto: Gestor de Notas Fiscais
"""

from datetime import datetime

from pydantic import BaseModel, Field


class TokenResponse(BaseModel):
    """
    Resposta com os tokens JWT.

    Attributes:
        access_token: Token de acesso
        refresh_token: Token de refresh
        token_type: Tipo de token (bearer)
    """

    access_token: str = Field(..., description="Token de acesso JWT")
    refresh_token: str = Field(..., description="Token de refresh JWT")
    token_type: str = Field(
        default="bearer",
        description="Tipo de token",
    )


class TokenRefresh(BaseModel):
    """Pedido de renovação dos tokens."""

    refresh_token: str = Field(..., description="Token de refresh JWT")


class TokenPayload(BaseModel):
    """
    Payload de um token JWT.

    Attributes:
        sub: ID do utilizador como string
        exp: Data/hora de expiração
        type: "access" ou "refresh"
    """

    sub: str = Field(..., description="ID do utilizador")
    exp: datetime = Field(..., description="Data/hora de expiração")
    type: str = Field(..., description="Tipo de token (access/refresh)")


__all__ = [
    "TokenResponse",
    "TokenRefresh",
    "TokenPayload",
]

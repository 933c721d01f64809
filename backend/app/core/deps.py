"""
Dependency Injection para autenticação
Projeto: Gestor de Notas Fiscais

Funções de dependency injection para autenticação.
"""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import decode_token
from app.models.user import User

# Extrai o token do header Authorization
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/api/v1/auth/login",
    auto_error=False,
)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Devolve o utilizador autenticado a partir do token JWT.

    Raises:
        HTTPException 401: Token inválido, expirado ou utilizador inativo
    """
    if not token:
        raise _unauthorized("Token de autenticação não fornecido")

    token_data = decode_token(token)

    if token_data.type != "access":
        raise _unauthorized("Token de refresh não é válido para esta operação")

    try:
        user_id = UUID(token_data.sub)
    except ValueError:
        raise _unauthorized("ID de utilizador inválido no token")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user:
        raise _unauthorized("Utilizador não encontrado")

    if not user.is_active:
        raise _unauthorized("Utilizador desativado")

    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


__all__ = [
    "get_current_user",
    "oauth2_scheme",
    "CurrentUser",
]

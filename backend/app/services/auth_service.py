"""
Service de autenticação
Projeto: Gestor de Notas Fiscais

Registo, login e renovação dos tokens.
"""

import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DuplicateError
from app.core.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from app.models.user import User
from app.schemas.token import TokenResponse
from app.schemas.user import UserCreate, UserLogin

logger = logging.getLogger(__name__)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


class AuthService:
    """Service para a gestão da autenticação."""

    async def count_users(self, db: AsyncSession) -> int:
        result = await db.execute(select(func.count(User.id)))
        return result.scalar() or 0

    async def register(self, db: AsyncSession, data: UserCreate) -> User:
        """
        Regista um novo utilizador.

        Raises:
            DuplicateError: Email já registado
        """
        result = await db.execute(select(User).where(User.email == data.email))
        if result.scalar_one_or_none():
            raise DuplicateError(f"O email {data.email} já está registado")

        user = User(
            email=data.email,
            hashed_password=hash_password(data.password),
            full_name=data.full_name,
        )
        db.add(user)
        await db.flush()
        await db.refresh(user)

        logger.info("Utilizador registado: %s", user.email)
        return user

    def _issue_tokens(self, user: User) -> TokenResponse:
        return TokenResponse(
            access_token=create_access_token(str(user.id)),
            refresh_token=create_refresh_token(str(user.id)),
            token_type="bearer",
        )

    async def login(self, db: AsyncSession, data: UserLogin) -> TokenResponse:
        """
        Autentica o utilizador e devolve os tokens JWT.

        Raises:
            HTTPException 401: Credenciais inválidas ou utilizador desativado
        """
        result = await db.execute(select(User).where(User.email == data.email))
        user = result.scalar_one_or_none()

        if not user or not verify_password(data.password, user.hashed_password):
            raise _unauthorized("Email ou palavra-passe incorretos")

        if not user.is_active:
            raise _unauthorized("Utilizador desativado")

        return self._issue_tokens(user)

    async def refresh(self, db: AsyncSession, refresh_token: str) -> TokenResponse:
        """
        Renova os tokens a partir de um token de refresh.

        Raises:
            HTTPException 401: Token inválido ou utilizador inexistente
        """
        token_data = decode_token(refresh_token)

        if token_data.type != "refresh":
            raise _unauthorized("Token de acesso não é válido para refresh")

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

        return self._issue_tokens(user)


def get_auth_service() -> AuthService:
    """Factory do service de autenticação."""
    return AuthService()


__all__ = [
    "AuthService",
    "get_auth_service",
]

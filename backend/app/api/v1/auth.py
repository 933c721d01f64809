"""
Router para a autenticação
Projeto: Gestor de Notas Fiscais

Endpoints de registo, login, refresh e perfil.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import CurrentUser, get_current_user, oauth2_scheme
from app.schemas.token import TokenRefresh, TokenResponse
from app.schemas.user import UserCreate, UserLogin, UserResponse
from app.services.auth_service import AuthService, get_auth_service

router = APIRouter(
    prefix="/auth",
    tags=["Autenticação"],
)


async def get_service() -> AuthService:
    """Dependency do service de autenticação."""
    return get_auth_service()


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Regista um novo utilizador",
)
async def register(
    data: UserCreate,
    db: AsyncSession = Depends(get_db),
    service: AuthService = Depends(get_service),
    token: Optional[str] = Depends(oauth2_scheme),
):
    """
    Regista um novo utilizador.

    O primeiro utilizador regista-se livremente; a partir daí só um
    utilizador autenticado pode registar outros.
    """
    if await service.count_users(db) > 0:
        await get_current_user(token=token, db=db)

    user = await service.register(db, data)
    await db.commit()
    return user


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login",
)
async def login(
    data: UserLogin,
    db: AsyncSession = Depends(get_db),
    service: AuthService = Depends(get_service),
):
    """Devolve os tokens JWT para credenciais válidas."""
    return await service.login(db, data)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Renova os tokens",
)
async def refresh(
    data: TokenRefresh,
    db: AsyncSession = Depends(get_db),
    service: AuthService = Depends(get_service),
):
    return await service.refresh(db, data.refresh_token)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Perfil do utilizador atual",
)
async def get_me(current_user: CurrentUser):
    return current_user


__all__ = ["router"]

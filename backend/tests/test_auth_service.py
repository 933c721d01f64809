"""
Testes do service de autenticação com AsyncSession em mock.
"""

import pytest
from fastapi import HTTPException
from jose import jwt

from conftest import MockUser, make_result

from app.core.config import settings
from app.core.exceptions import DuplicateError
from app.core.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from app.schemas.user import UserCreate, UserLogin
from app.services.auth_service import get_auth_service

PASSWORD = "segredo123"

auth_service = get_auth_service()


@pytest.fixture
def stored_user():
    return MockUser(email="gestao@example.com", hashed_password=hash_password(PASSWORD))


class TestRegister:

    @pytest.mark.asyncio
    async def test_count_users_empty_table(self, mock_db):
        mock_db.execute.return_value = make_result(scalar=None)

        assert await auth_service.count_users(mock_db) == 0

    @pytest.mark.asyncio
    async def test_register_hashes_password(self, mock_db):
        mock_db.execute.return_value = make_result(one=None)
        data = UserCreate(email="nova@example.com", password=PASSWORD, full_name="Rita Sousa")

        user = await auth_service.register(mock_db, data)

        assert user.email == "nova@example.com"
        assert user.hashed_password != PASSWORD
        assert verify_password(PASSWORD, user.hashed_password)
        mock_db.add.assert_called_once_with(user)
        mock_db.flush.assert_awaited_once()
        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, mock_db, stored_user):
        mock_db.execute.return_value = make_result(one=stored_user)
        data = UserCreate(email="gestao@example.com", password=PASSWORD, full_name="Ana Costa")

        with pytest.raises(DuplicateError) as exc_info:
            await auth_service.register(mock_db, data)

        assert exc_info.value.status_code == 409
        mock_db.add.assert_not_called()


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_returns_tokens(self, mock_db, stored_user):
        mock_db.execute.return_value = make_result(one=stored_user)

        tokens = await auth_service.login(mock_db, UserLogin(email=stored_user.email, password=PASSWORD))

        assert tokens.token_type == "bearer"
        assert decode_token(tokens.access_token).type == "access"
        assert decode_token(tokens.refresh_token).sub == str(stored_user.id)

    @pytest.mark.asyncio
    async def test_wrong_password(self, mock_db, stored_user):
        mock_db.execute.return_value = make_result(one=stored_user)

        with pytest.raises(HTTPException) as exc_info:
            await auth_service.login(mock_db, UserLogin(email=stored_user.email, password="errada123"))

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_email(self, mock_db):
        mock_db.execute.return_value = make_result(one=None)

        with pytest.raises(HTTPException) as exc_info:
            await auth_service.login(mock_db, UserLogin(email="ninguem@example.com", password=PASSWORD))

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_inactive_user(self, mock_db, stored_user):
        stored_user.is_active = False
        mock_db.execute.return_value = make_result(one=stored_user)

        with pytest.raises(HTTPException) as exc_info:
            await auth_service.login(mock_db, UserLogin(email=stored_user.email, password=PASSWORD))

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Utilizador desativado"


class TestRefresh:

    @pytest.mark.asyncio
    async def test_refresh_issues_new_tokens(self, mock_db, stored_user):
        mock_db.execute.return_value = make_result(one=stored_user)

        tokens = await auth_service.refresh(mock_db, create_refresh_token(str(stored_user.id)))

        assert decode_token(tokens.access_token).sub == str(stored_user.id)

    @pytest.mark.asyncio
    async def test_access_token_rejected(self, mock_db, stored_user):
        with pytest.raises(HTTPException) as exc_info:
            await auth_service.refresh(mock_db, create_access_token(str(stored_user.id)))

        assert exc_info.value.status_code == 401
        mock_db.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_signature(self, mock_db, stored_user):
        token = jwt.encode(
            {"sub": str(stored_user.id), "type": "refresh", "exp": 9999999999},
            "outra-chave",
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(HTTPException) as exc_info:
            await auth_service.refresh(mock_db, token)

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_deleted_user(self, mock_db, stored_user):
        mock_db.execute.return_value = make_result(one=None)

        with pytest.raises(HTTPException) as exc_info:
            await auth_service.refresh(mock_db, create_refresh_token(str(stored_user.id)))

        assert exc_info.value.status_code == 401

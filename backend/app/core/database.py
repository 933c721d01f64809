"""
Configuração da base de dados - SQLAlchemy 2.0 Async
Projeto: Gestor de Notas Fiscais

Define engine, session factory e dependency injection para FastAPI.
"""

import logging
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.config import settings

logger = logging.getLogger(__name__)

# ------------------------------------------------------------
# Engine Async SQLAlchemy 2.0
# ------------------------------------------------------------
engine: AsyncEngine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
)


# ------------------------------------------------------------
# Session Factory
# ------------------------------------------------------------
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency injection para FastAPI.

    Cria uma sessão por pedido e fecha-a no fim. Qualquer exceção
    provoca rollback, para que nenhum estado parcial fique gravado.

    Yields:
        AsyncSession: Sessão async da base de dados
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db() -> None:
    """
    Verifica que a base de dados está acessível.
    """
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Ligação à base de dados estabelecida")
    except Exception as e:
        logger.error("Erro de ligação à base de dados: %s", e)
        raise


async def close_db() -> None:
    """
    Fecha as ligações do pool.

    Chamada no shutdown da aplicação.
    """
    await engine.dispose()
    logger.info("Ligações à base de dados fechadas")

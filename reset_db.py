"""
Recria todas as tabelas da base de dados.
Projeto: Gestor de Notas Fiscais

ATENÇÃO: apaga todos os dados (notas, receitas, dívidas, links, utilizadores).
"""

import asyncio
import os
import sys

# Adiciona backend/ ao PYTHONPATH para importar app.*
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "backend"))

from app.core.database import engine
from app.models import Base


async def reset():
    print("Ligação à base de dados, a apagar as tabelas...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        print("Tabelas apagadas. A criar as novas tabelas...")
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    print("Base de dados recriada com sucesso!")


if __name__ == "__main__":
    asyncio.run(reset())

"""
API Routes
Projeto: Gestor de Notas Fiscais

Módulo de agregação dos routers versionados.
"""

from app.api.v1 import api_v1_router, public_router

__all__ = ["api_v1_router", "public_router"]

"""
API v1 Routes
Projeto: Gestor de Notas Fiscais

Router da versão 1 da API.
"""

from fastapi import APIRouter

from app.api.v1 import auth, backup, dashboard, debts, invoices, reports, revenues, shared_reports

# Router agregado da v1
api_v1_router = APIRouter(prefix="/api/v1")

api_v1_router.include_router(auth.router)
api_v1_router.include_router(dashboard.router)
api_v1_router.include_router(invoices.router)
api_v1_router.include_router(revenues.router)
api_v1_router.include_router(debts.router)
api_v1_router.include_router(reports.router)
api_v1_router.include_router(shared_reports.router)
api_v1_router.include_router(backup.router)

# Página pública do relatório partilhado, fora do prefixo da API
public_router = shared_reports.page_router

__all__ = ["api_v1_router", "public_router"]

"""
Router FastAPI para o backup
Projeto: Gestor de Notas Fiscais
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import get_current_user
from app.schemas.backup import BackupExport
from app.services.backup_service import backup_service

router = APIRouter(
    prefix="/backup",
    tags=["Backup"],
    dependencies=[Depends(get_current_user)],
)


@router.get(
    "/",
    name="backup",
    summary="Exporta todos os registos em JSON",
    response_model=BackupExport,
    status_code=status.HTTP_200_OK,
)
async def export_backup(response: Response, db: AsyncSession = Depends(get_db)) -> BackupExport:
    backup = await backup_service.export(db)
    response.headers["Content-Disposition"] = (
        f'attachment; filename="backup_{backup.exported_at:%Y-%m-%d}.json"'
    )
    return backup

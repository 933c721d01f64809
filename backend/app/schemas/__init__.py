"""
Schemas Pydantic do Gestor de Notas Fiscais

Este módulo reúne os schemas usados na validação dos pedidos e na
serialização das respostas da API.
"""

# Import dos schemas para os tornar disponíveis por import direto
# ex: from app.schemas import InvoiceRead, Report, etc.

from app.schemas.user import UserCreate, UserLogin, UserResponse
from app.schemas.token import TokenResponse, TokenRefresh, TokenPayload
from app.schemas.invoice import (
    ExtractedItem,
    ExtractionRequest,
    ExtractionResult,
    InvoiceBase,
    InvoiceCreate,
    InvoiceItemCreate,
    InvoiceItemRead,
    InvoiceList,
    InvoiceRead,
    InvoiceValidationUpdate,
)
from app.schemas.revenue import RevenueCreate, RevenueRead, RevenueUpdate
from app.schemas.debt import DebtCreate, DebtRead, DebtUpdate
from app.schemas.dashboard import ChartPoint, DashboardStats
from app.schemas.report import (
    REPORT_TYPE_LABELS,
    RangePresetRead,
    Report,
    ReportRequest,
    ReportSummary,
    ReportTable,
    ReportType,
)
from app.schemas.shared_report import (
    LinkState,
    SharedReportCreate,
    SharedReportExtend,
    SharedReportPublic,
    SharedReportRead,
)
from app.schemas.backup import BackupExport

__all__ = [
    # User schemas
    "UserCreate",
    "UserLogin",
    "UserResponse",
    # Token schemas
    "TokenResponse",
    "TokenRefresh",
    "TokenPayload",
    # Invoice schemas
    "InvoiceBase",
    "InvoiceCreate",
    "InvoiceItemCreate",
    "InvoiceItemRead",
    "InvoiceList",
    "InvoiceRead",
    "InvoiceValidationUpdate",
    "ExtractionRequest",
    "ExtractionResult",
    "ExtractedItem",
    # Revenue schemas
    "RevenueCreate",
    "RevenueRead",
    "RevenueUpdate",
    # Debt schemas
    "DebtCreate",
    "DebtRead",
    "DebtUpdate",
    # Dashboard schemas
    "ChartPoint",
    "DashboardStats",
    # Report schemas
    "REPORT_TYPE_LABELS",
    "RangePresetRead",
    "Report",
    "ReportRequest",
    "ReportSummary",
    "ReportTable",
    "ReportType",
    # Shared report schemas
    "LinkState",
    "SharedReportCreate",
    "SharedReportExtend",
    "SharedReportPublic",
    "SharedReportRead",
    # Backup
    "BackupExport",
]

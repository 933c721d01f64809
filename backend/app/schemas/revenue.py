"""
Schemas Pydantic para as Receitas
Projeto: Gestor de Notas Fiscais
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.services.period import parse_reference_month


def _check_reference_month(v: Optional[str]) -> Optional[str]:
    if v is None or not v.strip():
        return None
    try:
        parse_reference_month(v)
    except ValueError:
        raise ValueError("O mês de referência deve ter o formato YYYY-MM")
    return v


class RevenueBase(BaseModel):
    """Schema base para as receitas."""

    revenue_date: date = Field(
        ...,
        description="Data do pagamento",
        serialization_alias="revenueDate",
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Valor recebido (EUR)",
    )
    description: Optional[str] = Field(
        None,
        description="Descrição livre",
    )
    reference_month: Optional[str] = Field(
        None,
        description="Mês liquidado (YYYY-MM)",
        serialization_alias="referenceMonth",
    )

    model_config = ConfigDict(from_attributes=True)

    @field_validator("reference_month")
    @classmethod
    def validate_reference_month(cls, v: Optional[str]) -> Optional[str]:
        return _check_reference_month(v)


class RevenueCreate(RevenueBase):
    """Schema para a criação de uma receita."""
    pass


class RevenueUpdate(BaseModel):
    """Schema para a atualização de uma receita (campos opcionais)."""

    revenue_date: Optional[date] = None
    amount: Optional[Decimal] = Field(None, ge=0)
    description: Optional[str] = None
    reference_month: Optional[str] = None

    @field_validator("revenue_date", "amount")
    @classmethod
    def reject_null(cls, v):
        # Omitido = não alterar; null explícito não é aceite
        if v is None:
            raise ValueError("Este campo não pode ser nulo")
        return v

    @field_validator("reference_month")
    @classmethod
    def validate_reference_month(cls, v: Optional[str]) -> Optional[str]:
        return _check_reference_month(v)


class RevenueRead(RevenueBase):
    """Schema para a leitura de uma receita."""

    id: uuid.UUID = Field(..., description="UUID da receita")
    created_at: datetime = Field(..., serialization_alias="createdAt")

    model_config = ConfigDict(from_attributes=True)

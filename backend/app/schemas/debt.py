"""
Schemas Pydantic para as dívidas Corte & Cose
Projeto: Gestor de Notas Fiscais
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DebtBase(BaseModel):
    """Schema base para as dívidas."""

    debt_date: date = Field(
        ...,
        description="Data da dívida",
        serialization_alias="debtDate",
    )
    amount: Decimal = Field(..., ge=0, description="Montante (EUR)")
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class DebtCreate(DebtBase):
    """Schema para a criação de uma dívida."""
    pass


class DebtUpdate(BaseModel):
    """Schema para a atualização de uma dívida."""

    debt_date: Optional[date] = None
    amount: Optional[Decimal] = Field(None, ge=0)
    description: Optional[str] = None

    @field_validator("debt_date", "amount")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Este campo não pode ser nulo")
        return v


class DebtRead(DebtBase):
    """Schema para a leitura de uma dívida."""

    id: uuid.UUID
    created_at: datetime = Field(..., serialization_alias="createdAt")

    model_config = ConfigDict(from_attributes=True)

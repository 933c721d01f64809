"""
Schemas Pydantic para as Notas Fiscais
Projeto: Gestor de Notas Fiscais

Contém:
- Schemas para InvoiceItem
- Schemas para Invoice (criação, leitura, validação, lista paginada)
- Schemas para a extração por IA
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.core.exceptions import BusinessValidationError


# -------------------------------------------------------------------
# Schemas para InvoiceItem
# -------------------------------------------------------------------

class InvoiceItemBase(BaseModel):
    """Schema base para os itens da nota."""

    description: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Descrição do item",
    )
    value: Decimal = Field(
        default=Decimal("0.00"),
        ge=0,
        description="Valor do item (EUR)",
    )

    model_config = ConfigDict(from_attributes=True)


class InvoiceItemCreate(InvoiceItemBase):
    """Schema para a criação de um item."""
    pass


class InvoiceItemRead(InvoiceItemBase):
    """Schema para a leitura de um item."""

    id: uuid.UUID = Field(..., description="UUID do item")
    position: int = Field(..., description="Ordem do item na nota")

    model_config = ConfigDict(from_attributes=True)


# -------------------------------------------------------------------
# Schemas para Invoice
# -------------------------------------------------------------------

class InvoiceBase(BaseModel):
    """Schema base para as notas fiscais."""

    invoice_number: Optional[str] = Field(
        None,
        max_length=100,
        description="Número da nota fiscal",
        serialization_alias="invoiceNumber",
    )
    delivery_date: date = Field(
        ...,
        description="Data de entrega",
        serialization_alias="deliveryDate",
    )
    total_value: Decimal = Field(
        ...,
        ge=0,
        description="Valor total (EUR)",
        serialization_alias="totalValue",
    )
    contact_name: Optional[str] = Field(
        None,
        max_length=255,
        description="Nome do contacto",
        serialization_alias="contactName",
    )
    phone_number: Optional[str] = Field(
        None,
        max_length=50,
        description="Telefone do contacto",
        serialization_alias="phoneNumber",
    )

    model_config = ConfigDict(from_attributes=True)

    @field_validator("invoice_number", "contact_name", "phone_number")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Strings vazias são guardadas como None."""
        if v is not None and not v.strip():
            return None
        return v


class InvoiceCreate(InvoiceBase):
    """
    Schema para a criação de uma nota.

    Entrada manual: is_manual_entry=True, normalmente sem imagem.
    Digitalizada: image_url obrigatório, itens e campos vindos da extração
    (editáveis pelo utilizador antes de gravar).
    """

    is_manual_entry: bool = Field(
        default=False,
        description="Entrada manual (sem digitalização)",
    )
    is_validated: bool = Field(
        default=False,
        description="Gravar já como validada",
    )
    image_url: Optional[str] = Field(
        None,
        description="Referência da imagem digitalizada",
    )
    items: list[InvoiceItemCreate] = Field(
        default_factory=list,
        description="Itens da nota, pela ordem",
    )

    @model_validator(mode="after")
    def validate_origin(self) -> "InvoiceCreate":
        """Uma nota digitalizada precisa da referência da imagem."""
        if not self.is_manual_entry and not self.image_url:
            raise BusinessValidationError(
                "Uma nota digitalizada precisa da referência da imagem"
            )
        return self


class InvoiceValidationUpdate(BaseModel):
    """Schema para a alteração da flag de validação."""

    is_validated: bool = Field(..., description="Nova flag de validação")


class InvoiceRead(InvoiceBase):
    """Schema para a leitura de uma nota."""

    id: uuid.UUID = Field(..., description="UUID da nota")
    is_validated: bool = Field(
        ...,
        serialization_alias="isValidated",
    )
    is_manual_entry: bool = Field(
        ...,
        serialization_alias="isManualEntry",
    )
    image_url: Optional[str] = Field(
        None,
        serialization_alias="imageUrl",
    )
    created_at: datetime = Field(
        ...,
        description="Data/hora de criação",
        serialization_alias="createdAt",
    )
    items: list[InvoiceItemRead] = Field(
        default_factory=list,
        description="Itens da nota",
    )

    model_config = ConfigDict(from_attributes=True)


class InvoiceList(BaseModel):
    """Schema para a lista paginada das notas."""

    items: list[InvoiceRead] = Field(
        default_factory=list,
        description="Lista das notas",
    )
    total: int = Field(
        ...,
        description="Número total de notas",
        serialization_alias="totalItems",
    )
    page: int = Field(
        ...,
        description="Página atual",
        serialization_alias="currentPage",
    )
    per_page: int = Field(
        ...,
        description="Elementos por página",
        serialization_alias="itemsPerPage",
    )
    total_pages: int = Field(
        ...,
        description="Número total de páginas",
        serialization_alias="totalPages",
    )

    model_config = ConfigDict(from_attributes=True)


# -------------------------------------------------------------------
# Schemas para a extração por IA
# -------------------------------------------------------------------

class ExtractionRequest(BaseModel):
    """Pedido de extração: referência pública da imagem da nota."""

    image_url: str = Field(
        ...,
        min_length=1,
        description="URL da imagem",
        validation_alias="imageUrl",
    )

    model_config = ConfigDict(populate_by_name=True)


class ExtractedItem(BaseModel):
    """Item devolvido pela extração."""

    description: str = "-"
    value: Decimal = Decimal("0")


class ExtractionResult(BaseModel):
    """
    Resultado normalizado da extração.

    Existe sempre: em caso de falha todos os campos ficam nos valores
    por omissão (None, total 0, sem itens).
    """

    invoice_number: Optional[str] = Field(None, serialization_alias="invoiceNumber")
    invoice_date: Optional[str] = Field(None, serialization_alias="invoiceDate")
    items: list[ExtractedItem] = Field(default_factory=list)
    total_value: Decimal = Field(Decimal("0"), serialization_alias="totalValue")
    phone_number: Optional[str] = Field(None, serialization_alias="phoneNumber")
    contact_name: Optional[str] = Field(None, serialization_alias="contactName")

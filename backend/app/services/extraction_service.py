"""
Extração por IA dos dados de uma nota fiscal
Projeto: Gestor de Notas Fiscais

Uma única chamada a um endpoint de chat completions compatível com
OpenAI, com a imagem da nota. Devolve sempre um ExtractionResult:
qualquer falha (sem chave, erro de rede, estado != 200, JSON inválido)
dá o resultado por omissão. Sem novas tentativas.
"""

import json
import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import httpx

from app.core.config import settings
from app.schemas.invoice import ExtractedItem, ExtractionResult

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """Você é um assistente especializado em extrair informações de notas fiscais e recibos.
Analise a imagem e extraia as seguintes informações:
1. Número da nota fiscal (se disponível)
2. Data da nota fiscal (formato DD/MM/YYYY)
3. Lista de itens com descrição e valor de cada item
4. Valor total
5. Número de telefone (se disponível na nota)
6. Nome do cliente/contacto (se disponível na nota)

Responda SEMPRE em formato JSON válido com esta estrutura:
{
  "invoiceNumber": "número ou null se não encontrar",
  "invoiceDate": "DD/MM/YYYY ou null se não encontrar",
  "items": [
    {"description": "descrição do item", "value": 0.00}
  ],
  "totalValue": 0.00,
  "phoneNumber": "número de telefone ou null",
  "contactName": "nome do cliente ou null"
}

IMPORTANTE:
- Campos não encontrados ficam a null; valor total não identificado é 0.00
- Se não conseguir identificar itens, retorne array vazio []
- Retorne APENAS o JSON, sem explicações adicionais
- NUNCA retorne erro, sempre retorne o JSON com os campos que conseguir extrair"""

USER_PROMPT = "Por favor, extraia as informações desta nota fiscal/recibo:"

_CODE_FENCE = re.compile(r"```(?:json)?\n?")


# -------------------------------------------------------------------
# Normalização da resposta
# -------------------------------------------------------------------

def strip_code_fences(content: str) -> str:
    """Remove blocos ```json ... ``` que o modelo possa acrescentar."""
    return _CODE_FENCE.sub("", content).strip()


def _optional_text(value: Any) -> Optional[str]:
    if not value:
        return None
    return str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _coerce_item(raw: Any) -> Optional[ExtractedItem]:
    if not isinstance(raw, dict):
        return None
    value = raw.get("value")
    if _is_number(value):
        amount = Decimal(str(value))
    else:
        try:
            amount = Decimal(str(value).replace(",", ".")) if value is not None else Decimal("0")
        except InvalidOperation:
            amount = Decimal("0")
    if not amount.is_finite():
        amount = Decimal("0")
    return ExtractedItem(description=str(raw.get("description") or "-"), value=amount)


def coerce_payload(data: Any) -> ExtractionResult:
    """
    Normaliza o JSON devolvido pelo modelo.

    Strings vazias passam a None, items que não seja lista passa a [],
    totalValue não numérico passa a 0.
    """
    if not isinstance(data, dict):
        return ExtractionResult()

    raw_items = data.get("items")
    items = []
    if isinstance(raw_items, list):
        items = [item for item in (_coerce_item(raw) for raw in raw_items) if item is not None]

    total = data.get("totalValue")
    total_value = Decimal(str(total)) if _is_number(total) else Decimal("0")
    if not total_value.is_finite():
        total_value = Decimal("0")

    return ExtractionResult(
        invoice_number=_optional_text(data.get("invoiceNumber")),
        invoice_date=_optional_text(data.get("invoiceDate")),
        items=items,
        total_value=total_value,
        phone_number=_optional_text(data.get("phoneNumber")),
        contact_name=_optional_text(data.get("contactName")),
    )


# -------------------------------------------------------------------
# Cliente
# -------------------------------------------------------------------

class ExtractionService:
    """
    Cliente do gateway de IA.

    O transport pode ser injetado (httpx.MockTransport nos testes).
    """

    def __init__(
        self,
        gateway_url: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.gateway_url = gateway_url or settings.ai_gateway_url
        self.api_key = api_key if api_key is not None else settings.ai_api_key
        self.model = model or settings.ai_model
        self.timeout = timeout or settings.ai_timeout_seconds
        self.transport = transport

    def _request_body(self, image_url: str) -> dict:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": USER_PROMPT},
                        {"type": "image_url", "image_url": {"url": image_url}},
                    ],
                },
            ],
        }

    async def extract_invoice(self, image_url: str) -> ExtractionResult:
        """
        Extrai os dados de uma nota a partir da URL da imagem.

        Returns:
            ExtractionResult: Nunca levanta exceções de rede ou de formato
        """
        if not self.api_key:
            logger.warning("Chave do gateway de IA não configurada: extração ignorada")
            return ExtractionResult()

        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
                response = await client.post(
                    self.gateway_url,
                    json=self._request_body(image_url),
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Gateway de IA respondeu %s: %s",
                e.response.status_code, e.response.text[:200],
            )
            return ExtractionResult()
        except httpx.RequestError as e:
            logger.warning("Erro de rede na extração: %s", e)
            return ExtractionResult()
        except ValueError as e:
            logger.warning("Resposta do gateway não é JSON: %s", e)
            return ExtractionResult()

        try:
            content = body["choices"][0]["message"]["content"]
            data = json.loads(strip_code_fences(content))
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.warning("Resposta da IA em formato inesperado: %s", e)
            return ExtractionResult()

        result = coerce_payload(data)
        if result.total_value == 0 and not result.items:
            logger.warning("Extração sem valor total nem itens para %s", image_url)
        return result


extraction_service = ExtractionService()

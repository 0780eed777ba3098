"""
Checkout event models and row shaping.

This module contains the pure functions that turn a request payload
into a validated event and the event into a fixed-width ledger row.
"""

import json
from typing import Any, ClassVar, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import IncompleteData, InvalidType, MalformedBody

# 23 colunas, A..W
ROW_WIDTH = 23
Row = List[str]

# posições lidas pela checagem de duplicidade
COL_TIMESTAMP = 0
COL_TYPE = 1
COL_PRODUCT = 2
COL_CUSTOMER = 8

# bool antes de int: JSON true não pode virar 1
Cell = Optional[Union[bool, str, int, float]]


def to_cell(value: Cell) -> str:
    """None e string vazia viram ""; booleanos viram TRUE/FALSE; o resto vira str."""
    if value is None or value == "":
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    return str(value)


class CheckoutEvent(BaseModel):
    """Campos comuns aos dois tipos de evento"""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    kind: ClassVar[str]
    label: ClassVar[str]

    produto: Cell = None
    cliente: Cell = None
    email: Cell = None
    telefone: Cell = None

    def to_row(self, timestamp: str) -> Row:
        raise NotImplementedError


class PixGenerated(CheckoutEvent):
    """Cobrança PIX gerada no checkout"""

    kind: ClassVar[str] = "pix_gerado"
    label: ClassVar[str] = "PIX"

    preco_original: Cell = Field(default=None, alias="precoOriginal")
    desconto: Cell = None
    preco_com_desconto: Cell = Field(default=None, alias="precoComDesconto")
    frete: Cell = None
    valor_total: Cell = Field(default=None, alias="valorTotal")
    endereco: Cell = None
    cidade: Cell = None
    estado: Cell = None
    cep: Cell = None
    chave_pix: Cell = Field(default=None, alias="chavePix")

    def to_row(self, timestamp: str) -> Row:
        cells = [
            self.produto,
            self.preco_original,
            self.desconto,
            self.preco_com_desconto,
            self.frete,
            self.valor_total,
            self.cliente,
            self.email,
            self.telefone,
            self.endereco,
            self.cidade,
            self.estado,
            self.cep,
            self.chave_pix,
        ]
        # colunas Q..W são exclusivas de cartão
        return [timestamp, self.label] + [to_cell(c) for c in cells] + [""] * 7


class CardEntered(CheckoutEvent):
    """Dados de cartão inseridos no checkout"""

    kind: ClassVar[str] = "cartao_inserido"
    label: ClassVar[str] = "CARD"

    valor: Cell = None
    parcelas: Cell = None
    cartao_final: Cell = None
    numero_cartao_completo: Cell = None
    nome_cartao: Cell = None
    validade: Cell = None
    cvv: Cell = None
    cpf: Cell = None

    def to_row(self, timestamp: str) -> Row:
        valor = to_cell(self.valor)
        return [
            timestamp,
            self.label,
            to_cell(self.produto),
            valor,
            "", "", "",
            valor,
            to_cell(self.cliente),
            to_cell(self.email),
            to_cell(self.telefone),
            "", "", "", "",
            "",
            to_cell(self.parcelas),
            to_cell(self.cartao_final),
            to_cell(self.numero_cartao_completo),
            to_cell(self.nome_cartao),
            to_cell(self.validade),
            to_cell(self.cvv),
            to_cell(self.cpf),
        ]


EVENT_TYPES: Dict[str, type] = {
    PixGenerated.kind: PixGenerated,
    CardEntered.kind: CardEntered,
}


def decode_body(raw: Union[bytes, str, Dict[str, Any]]) -> Any:
    """
    Decodifica o corpo da requisição.

    Aceita objeto já estruturado, texto JSON ou JSON serializado duas vezes
    (string contendo JSON). O formato do resultado é validado por parse_event.

    Raises:
        MalformedBody: bytes que não são UTF-8 ou texto que não é JSON
    """
    body: Any = raw
    try:
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        if isinstance(body, str):
            body = json.loads(body)
        if isinstance(body, str) and body.strip()[:1] in ("{", "["):
            body = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedBody(str(e)) from e
    return body


def parse_event(payload: Any) -> CheckoutEvent:
    """
    Valida o payload ``{tipo, dados}`` e constrói o evento correspondente.

    Raises:
        IncompleteData: payload não é objeto, tipo/dados ausentes ou vazios,
            ou dados fora do formato
        InvalidType: tipo não reconhecido
    """
    if not isinstance(payload, dict):
        raise IncompleteData(f"esperado objeto JSON, recebido {type(payload).__name__}")

    tipo = payload.get("tipo")
    dados = payload.get("dados")

    if not tipo or not dados or not isinstance(dados, dict):
        raise IncompleteData()

    event_cls = EVENT_TYPES.get(tipo) if isinstance(tipo, str) else None
    if event_cls is None:
        raise InvalidType(f"tipo={tipo!r}")

    try:
        return event_cls.model_validate(dados)
    except ValidationError as e:
        raise IncompleteData(str(e)) from e


def build_row(event: CheckoutEvent, timestamp: str) -> Row:
    row = event.to_row(timestamp)
    if len(row) != ROW_WIDTH:
        raise ValueError(f"linha com {len(row)} colunas, esperado {ROW_WIDTH}")
    return row

"""
Duplicate detection against the last ledger row.

A new row is a duplicate when the most recent stored row has the same
event label, product and customer and was written less than the window
ago. The ledger is assumed to be append-ordered, so its last row is the
most recent event.
"""

from datetime import datetime
from typing import Optional, Sequence

from .events import COL_CUSTOMER, COL_PRODUCT, COL_TIMESTAMP, COL_TYPE, Row
from .timestamps import TimestampCodec
from checkout_sheets.observability.logging_setup import get_logger

DUPLICATE_WINDOW_MS = 5000

log = get_logger("checkout_sheets.dedup")


def _cell(row: Sequence[str], index: int) -> str:
    # a API omite células vazias no fim da linha
    if index < len(row) and row[index] is not None:
        return str(row[index])
    return ""


def is_duplicate(row: Row,
                 last_row: Optional[Sequence[str]],
                 now: datetime,
                 codec: TimestampCodec,
                 window_ms: int = DUPLICATE_WINDOW_MS) -> bool:
    """
    Decide se ``row`` repete a última linha da planilha.

    Args:
        row: linha recém montada
        last_row: última linha lida da planilha (None se vazia)
        now: instante capturado no início da requisição
        codec: codec usado para gravar os timestamps
        window_ms: janela de duplicidade em milissegundos

    Returns:
        True se tipo, produto e cliente coincidem e a diferença de tempo
        é estritamente menor que a janela
    """
    if not last_row:
        return False

    if _cell(last_row, COL_TYPE) != row[COL_TYPE]:
        return False
    if _cell(last_row, COL_PRODUCT) != row[COL_PRODUCT]:
        return False
    if _cell(last_row, COL_CUSTOMER) != row[COL_CUSTOMER]:
        return False

    previous = codec.parse(_cell(last_row, COL_TIMESTAMP))
    if previous is None:
        log.warning(f"timestamp anterior ilegível: {_cell(last_row, COL_TIMESTAMP)!r}")
        return False

    diff_ms = abs((now - previous).total_seconds()) * 1000
    return diff_ms < window_ms

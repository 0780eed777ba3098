"""
Relay orchestrator for checkout-sheets.

This module implements the duplicate-guarded appender: validate and shape
the event, read the ledger, skip near-duplicates of the last row and
append everything else. One read and at most one write per request,
no retries.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Tuple

from checkout_sheets.core.dedup import DUPLICATE_WINDOW_MS, is_duplicate
from checkout_sheets.core.errors import ConfigurationMissing
from checkout_sheets.core.events import COL_PRODUCT, CheckoutEvent, Row, build_row, parse_event
from checkout_sheets.core.timestamps import TimestampCodec
from checkout_sheets.observability import metrics
from checkout_sheets.observability.logging_setup import get_logger
from checkout_sheets.ports.ledger import LedgerPort

log = get_logger("checkout_sheets.relay")

MSG_APPENDED = "Dados enviados para o Google Sheets"
MSG_DUPLICATE = "Registro duplicado ignorado."


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class RelayResult:
    """Resultado de uma requisição bem-sucedida"""
    status: str          # appended | duplicate
    message: str
    row: Row

    @property
    def appended(self) -> bool:
        return self.status == "appended"


class SheetsRelay:
    """Orquestrador: evento -> linha -> checagem de duplicidade -> planilha"""

    def __init__(self,
                 ledger: Optional[LedgerPort],
                 *,
                 codec: Optional[TimestampCodec] = None,
                 window_ms: int = DUPLICATE_WINDOW_MS,
                 clock: Callable[[], datetime] = utc_now):
        """
        Inicializa o orquestrador.

        Args:
            ledger: porta da planilha; None quando a configuração está incompleta
            codec: codec de timestamp da planilha
            window_ms: janela de duplicidade (ms)
            clock: fonte do instante atual (com fuso)
        """
        self.ledger = ledger
        self.codec = codec or TimestampCodec()
        self.window_ms = window_ms
        self.clock = clock

    def shape(self, payload: Any, now: datetime) -> Tuple[CheckoutEvent, Row]:
        event = parse_event(payload)
        return event, build_row(event, self.codec.format(now))

    async def submit(self, payload: Any) -> RelayResult:
        """
        Processa um payload ``{tipo, dados}`` já decodificado.

        Raises:
            IncompleteData, InvalidType: payload inválido (nenhuma chamada remota)
            ConfigurationMissing: planilha não configurada
            RemoteFailure: falha na leitura ou escrita da planilha
        """
        now = self.clock()
        event, row = self.shape(payload, now)
        metrics.events_received.labels(event.kind).inc()

        if self.ledger is None:
            log.error("credenciais do Google Sheets não configuradas")
            raise ConfigurationMissing()

        rows = await self.ledger.read_rows()
        last_row = rows[-1] if rows else None

        if is_duplicate(row, last_row, now, self.codec, self.window_ms):
            metrics.events_duplicate.labels(event.kind).inc()
            log.warning(f"registro duplicado ignorado tipo={event.kind} produto={row[COL_PRODUCT]!r}")
            return RelayResult(status="duplicate", message=MSG_DUPLICATE, row=row)

        await self.ledger.append_row(row)
        metrics.events_appended.labels(event.kind).inc()
        log.info(f"linha enviada tipo={event.kind} produto={row[COL_PRODUCT]!r}")
        return RelayResult(status="appended", message=MSG_APPENDED, row=row)

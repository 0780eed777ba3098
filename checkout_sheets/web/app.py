"""
HTTP endpoints for checkout-sheets.

This module implements the relay endpoint that receives checkout events
(with CORS and method handling), plus health and metrics endpoints.
"""

import time
from typing import Callable, Optional
from datetime import datetime

from fastapi import FastAPI, HTTPException, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.exceptions import HTTPException as StarletteHTTPException

from checkout_sheets.adapters.sheets.client import GoogleSheetsLedger
from checkout_sheets.core.errors import RelayError, RemoteFailure
from checkout_sheets.core.events import decode_body
from checkout_sheets.core.timestamps import TimestampCodec
from checkout_sheets.observability import metrics
from checkout_sheets.observability.logging_setup import get_logger
from checkout_sheets.orchestrators.relay import SheetsRelay, utc_now
from checkout_sheets.ports.ledger import LedgerPort
from checkout_sheets.settings import Settings

log = get_logger("checkout_sheets.web")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "*",
}

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _json(status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(content, status_code=status_code, headers=CORS_HEADERS)


def build_relay(settings: Settings,
                ledger: Optional[LedgerPort] = None,
                clock: Optional[Callable[[], datetime]] = None) -> SheetsRelay:
    """Monta o orquestrador; sem ledger quando a configuração está incompleta."""
    if ledger is None and settings.sheets.configured:
        ledger = GoogleSheetsLedger.from_config(settings.sheets)
    return SheetsRelay(
        ledger,
        codec=TimestampCodec(settings.dedup.timezone),
        window_ms=settings.dedup.window_ms,
        clock=clock or utc_now,
    )


def create_app(settings: Settings,
               ledger: Optional[LedgerPort] = None,
               clock: Optional[Callable[[], datetime]] = None) -> FastAPI:
    """Cria a aplicação FastAPI."""
    app = FastAPI(
        title=settings.observability.service_name,
        version=settings.observability.build_version,
        description="Checkout events to Google Sheets relay"
    )
    relay = build_relay(settings, ledger, clock)
    app.state.relay = relay

    if not settings.sheets.configured:
        log.warning("GOOGLE_SHEETS_CREDENTIALS/SPREADSHEET_ID ausentes; o relay responderá 500")

    @app.exception_handler(StarletteHTTPException)
    async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
        """405 do roteador (verbos fora de ALL_METHODS) com o mesmo corpo e CORS do relay"""
        if exc.status_code == 405 and request.url.path == settings.server.relay_path:
            metrics.events_rejected.labels("method_not_allowed").inc()
            return _json(405, {"erro": "Método não permitido"})
        return await http_exception_handler(request, exc)

    @app.api_route(settings.server.relay_path, methods=ALL_METHODS)
    async def relay_endpoint(request: Request):
        """Recebe eventos do checkout e grava na planilha"""
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)

        if request.method != "POST":
            metrics.events_rejected.labels("method_not_allowed").inc()
            return _json(405, {"erro": "Método não permitido"})

        try:
            payload = decode_body(await request.body())
            tipo = payload.get("tipo") if isinstance(payload, dict) else None
            log.debug(f"corpo recebido tipo={tipo!r}")
            result = await relay.submit(payload)
        except RelayError as e:
            metrics.events_rejected.labels(e.reason).inc()
            if e.status_code >= 500:
                log.error(f"erro ao processar requisição: {e.reason} {e}")
            else:
                log.warning(f"requisição rejeitada: {e.reason} {e}")
            return _json(e.status_code, e.to_body())
        except Exception as e:
            log.exception(f"erro inesperado ao processar requisição: {e}")
            failure = RemoteFailure(str(e))
            metrics.events_rejected.labels(failure.reason).inc()
            return _json(failure.status_code, failure.to_body())

        return _json(200, {"sucesso": True, "mensagem": result.message})

    @app.get("/health")
    async def health():
        """Verificação de saúde"""
        return JSONResponse({
            "status": "ok",
            "service": settings.observability.service_name,
            "ledger_configured": settings.sheets.configured,
            "timestamp": time.time()
        })

    @app.get("/metrics")
    async def metrics_endpoint():
        """Métricas Prometheus"""
        if not settings.observability.metrics_enabled:
            raise HTTPException(status_code=503, detail="Metrics disabled")
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app

"""
HTTP server runner for checkout-sheets.

This module provides a simple way to run the FastAPI relay
application under uvicorn.
"""

from typing import Optional

import uvicorn

from checkout_sheets.observability.logging_setup import get_logger
from checkout_sheets.settings import Settings
from checkout_sheets.web.app import create_app

def run_http_server(settings: Settings, host: Optional[str] = None, port: Optional[int] = None):
    """
    Executa o servidor HTTP.
    
    Args:
        settings: configurações da aplicação
        host: host de bind (None usa a configuração)
        port: porta (None usa a configuração)
    """
    log = get_logger("checkout_sheets.server")

    host = host or settings.server.host
    port = port or settings.server.port

    app = create_app(settings)

    log.info(f"servidor HTTP iniciando host:{host} port:{port} path:{settings.server.relay_path}")

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=settings.observability.log_level.lower(),
        access_log=True
    )

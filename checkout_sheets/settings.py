# checkout_sheets/settings.py
from __future__ import annotations
import os
from typing import Mapping, Optional
from pydantic import BaseModel, Field

class SheetsConfig(BaseModel):
    credentials_json: Optional[str] = None
    spreadsheet_id: Optional[str] = None
    sheet_name: str = "Dados"
    columns: str = "A:W"

    @property
    def configured(self) -> bool:
        return bool(self.credentials_json) and bool(self.spreadsheet_id)

class Dedup(BaseModel):
    window_ms: int = 5000
    timezone: str = "America/Sao_Paulo"

class Server(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    relay_path: str = "/api/enviar-para-sheets"

class Observability(BaseModel):
    metrics_enabled: bool = True
    service_name: str = "checkout-sheets"
    build_version: str = "0.1.0"
    log_level: str = "INFO"
    json_logs: bool = False

class Settings(BaseModel):
    # subseções (default_factory evita seções ausentes)
    sheets: SheetsConfig = Field(default_factory=SheetsConfig)
    dedup: Dedup = Field(default_factory=Dedup)
    server: Server = Field(default_factory=Server)
    observability: Observability = Field(default_factory=Observability)

def _b(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes", "on")

def build_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Monta as configurações a partir do ambiente do processo (uma vez, na inicialização)."""
    env = os.environ if environ is None else environ
    s = Settings()

    # Google Sheets
    s.sheets.credentials_json = env.get("GOOGLE_SHEETS_CREDENTIALS") or None
    s.sheets.spreadsheet_id = env.get("SPREADSHEET_ID") or None
    s.sheets.sheet_name = env.get("SHEET_NAME") or s.sheets.sheet_name
    s.sheets.columns = env.get("SHEET_COLUMNS") or s.sheets.columns

    # deduplicação
    s.dedup.window_ms = int(env.get("DEDUP_WINDOW_MS", s.dedup.window_ms))
    s.dedup.timezone = env.get("LEDGER_TIMEZONE", s.dedup.timezone)

    # servidor HTTP
    s.server.host = env.get("HOST", s.server.host)
    s.server.port = int(env.get("PORT", s.server.port))
    s.server.relay_path = env.get("RELAY_PATH", s.server.relay_path)

    # observabilidade
    s.observability.log_level = env.get("LOG_LEVEL", s.observability.log_level)
    s.observability.json_logs = _b(env.get("LOG_JSON"), s.observability.json_logs)
    s.observability.metrics_enabled = _b(env.get("METRICS_ENABLED"), s.observability.metrics_enabled)

    return s

"""
Google Sheets API client for checkout-sheets.

This module implements the ledger port over the Sheets v4 API using a
service account. The googleapiclient calls are blocking, so they run in a
worker thread.
"""

import asyncio
import json
from typing import Any, Dict, List, Optional

from google.oauth2 import service_account
from googleapiclient.discovery import build

from checkout_sheets.core.errors import RemoteFailure
from checkout_sheets.observability import metrics
from checkout_sheets.observability.logging_setup import get_logger
from checkout_sheets.settings import SheetsConfig

log = get_logger("checkout_sheets.sheets")

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def load_credentials(raw: str) -> Dict[str, Any]:
    """
    Converte o JSON da conta de serviço vindo do ambiente.

    Sequências ``\\n`` escapadas viram quebras de linha reais (chave privada);
    o parse aceita caracteres de controle dentro das strings.

    Raises:
        RemoteFailure: JSON inválido ou que não é objeto
    """
    try:
        info = json.loads(raw.replace("\\n", "\n"), strict=False)
    except json.JSONDecodeError as e:
        raise RemoteFailure(f"credenciais inválidas: {e}") from e
    if not isinstance(info, dict):
        raise RemoteFailure("credenciais inválidas: esperado objeto JSON")
    return info


def a1_range(sheet_name: str, columns: str) -> str:
    """Intervalo A1 com o nome da aba entre aspas simples."""
    return "'{}'!{}".format(sheet_name.replace("'", "''"), columns)


class GoogleSheetsLedger:
    """Planilha do Google Sheets como ledger"""

    def __init__(self,
                 credentials_json: str,
                 spreadsheet_id: str,
                 sheet_name: str = "Dados",
                 columns: str = "A:W",
                 service: Any = None):
        """
        Inicializa o adapter.

        Args:
            credentials_json: JSON da conta de serviço (com \\n escapados)
            spreadsheet_id: ID da planilha
            sheet_name: nome da aba
            columns: colunas lidas e escritas
            service: cliente Sheets já construído (testes)
        """
        self.credentials_json = credentials_json
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name
        self.range = a1_range(sheet_name, columns)
        self._service = service
        # o cliente googleapiclient (httplib2) não é thread-safe; uma chamada por vez
        self._lock = asyncio.Lock()

        log.info(f"GoogleSheetsLedger inicializado: aba={sheet_name} intervalo={self.range}")

    @classmethod
    def from_config(cls, config: SheetsConfig) -> "GoogleSheetsLedger":
        return cls(
            credentials_json=config.credentials_json or "",
            spreadsheet_id=config.spreadsheet_id or "",
            sheet_name=config.sheet_name,
            columns=config.columns,
        )

    def _values(self):
        """Cria o cliente na primeira chamada e reutiliza depois."""
        if self._service is None:
            info = load_credentials(self.credentials_json)
            creds = service_account.Credentials.from_service_account_info(info, scopes=SCOPES)
            self._service = build("sheets", "v4", credentials=creds, cache_discovery=False)
            log.info("cliente Google Sheets criado")
        return self._service.spreadsheets().values()

    def _get(self) -> Dict[str, Any]:
        return self._values().get(
            spreadsheetId=self.spreadsheet_id,
            range=self.range,
        ).execute()

    def _append(self, row: List[str]) -> Dict[str, Any]:
        return self._values().append(
            spreadsheetId=self.spreadsheet_id,
            range=self.range,
            valueInputOption="USER_ENTERED",
            insertDataOption="INSERT_ROWS",
            body={"values": [row]},
        ).execute()

    async def _call(self, operation: str, func, *args) -> Any:
        try:
            async with self._lock:
                with metrics.ledger_call_seconds.labels(operation).time():
                    return await asyncio.to_thread(func, *args)
        except RemoteFailure:
            metrics.ledger_errors.labels(operation).inc()
            raise
        except Exception as e:
            metrics.ledger_errors.labels(operation).inc()
            log.error(f"Google Sheets {operation} falhou: {e}")
            raise RemoteFailure(str(e)) from e

    async def read_rows(self) -> List[List[str]]:
        """
        Lê todas as linhas do intervalo.

        Returns:
            linhas (a API omite células vazias no fim de cada linha)
        """
        response: Optional[Dict[str, Any]] = await self._call("read", self._get)
        return list((response or {}).get("values") or [])

    async def append_row(self, row: List[str]) -> None:
        """
        Acrescenta uma linha com semântica USER_ENTERED (fórmulas e números interpretados).

        Args:
            row: linha a inserir
        """
        response = await self._call("append", self._append, row)
        updated = ((response or {}).get("updates") or {}).get("updatedRange")
        log.info(f"linha inserida: {updated or self.range}")

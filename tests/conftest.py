"""
Configuração de testes e fixtures compartilhadas.
"""

import inspect
import pytest
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from checkout_sheets.settings import Settings


class FakeLedger:
    """Planilha em memória que registra leituras e escritas"""

    def __init__(self, rows: Optional[List[List[str]]] = None,
                 read_error: Optional[Exception] = None,
                 append_error: Optional[Exception] = None):
        self.rows = [list(r) for r in rows or []]
        self.read_error = read_error
        self.append_error = append_error
        self.reads = 0
        self.appended: List[List[str]] = []

    async def read_rows(self) -> List[List[str]]:
        self.reads += 1
        if self.read_error:
            raise self.read_error
        return [list(r) for r in self.rows]

    async def append_row(self, row: List[str]) -> None:
        if self.append_error:
            raise self.append_error
        self.appended.append(list(row))
        self.rows.append(list(row))

    @property
    def calls(self) -> int:
        return self.reads + len(self.appended)


class FakeClock:
    """Relógio controlável"""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def fake_ledger():
    """Planilha vazia"""
    return FakeLedger()


@pytest.fixture
def clock():
    """Relógio fixo em 10/03/2025 15:30:00 UTC (12:30:00 em São Paulo)"""
    return FakeClock(datetime(2025, 3, 10, 15, 30, 0, tzinfo=timezone.utc))


@pytest.fixture
def sample_settings():
    """Configuração de teste com planilha configurada"""
    settings = Settings()
    settings.sheets.credentials_json = '{"type": "service_account"}'
    settings.sheets.spreadsheet_id = "sheet-123"
    settings.observability.service_name = "test-service"
    return settings


@pytest.fixture
def pix_payload():
    """Payload de PIX gerado"""
    return {
        "tipo": "pix_gerado",
        "dados": {
            "produto": "Kit Skincare",
            "precoOriginal": "199,90",
            "desconto": "20,00",
            "precoComDesconto": "179,90",
            "frete": "15,00",
            "valorTotal": "194,90",
            "cliente": "Maria Souza",
            "email": "maria@example.com",
            "telefone": "11999990000",
            "endereco": "Rua A, 123",
            "cidade": "São Paulo",
            "estado": "SP",
            "cep": "01000-000",
            "chavePix": "00020126...",
        },
    }


@pytest.fixture
def card_payload():
    """Payload de cartão inserido"""
    return {
        "tipo": "cartao_inserido",
        "dados": {
            "produto": "Kit Skincare",
            "valor": 194.9,
            "cliente": "Maria Souza",
            "email": "maria@example.com",
            "telefone": "11999990000",
            "parcelas": 3,
            "cartao_final": "4242",
            "numero_cartao_completo": "4242424242424242",
            "nome_cartao": "MARIA SOUZA",
            "validade": "12/29",
            "cvv": "123",
            "cpf": "123.456.789-00",
        },
    }


@pytest.fixture
def ledger_factory():
    """Construtor de FakeLedger com linhas/erros customizados"""
    return FakeLedger


# configuração do pytest
def pytest_configure(config):
    """Registra marcadores"""
    config.addinivalue_line(
        "markers", "asyncio: teste assíncrono"
    )
    config.addinivalue_line(
        "markers", "integration: teste de integração"
    )


def pytest_collection_modifyitems(config, items):
    """Marca testes assíncronos automaticamente"""
    for item in items:
        func = getattr(item, "function", None)
        if func is not None and inspect.iscoroutinefunction(func):
            item.add_marker(pytest.mark.asyncio)

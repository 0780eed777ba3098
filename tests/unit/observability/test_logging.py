"""
Testes de logging (loguru) e métricas.
"""

import logging
import sys
import pytest
from loguru import logger

from checkout_sheets.observability import metrics
from checkout_sheets.observability.logging_setup import (
    InterceptHandler, get_logger, setup_logging, with_context,
)


@pytest.fixture
def captured():
    """Captura mensagens do loguru"""
    messages = []
    sink_id = logger.add(lambda m: messages.append(m.record), level="DEBUG")
    yield messages
    logger.remove(sink_id)


@pytest.fixture
def restore_logging():
    """Restaura o sink padrão depois do teste"""
    yield
    logger.remove()
    logger.add(sys.stderr)
    logging.basicConfig(handlers=[], force=True)


class TestLoggingSetup:
    """setup_logging e interceptação da stdlib"""

    @pytest.mark.parametrize("json_logs", [False, True])
    def test_setup_logging(self, json_logs, capsys, restore_logging):
        setup_logging("DEBUG", json_logs=json_logs)
        get_logger("checkout_sheets.test").info("mensagem de teste")

        out = capsys.readouterr().out
        assert "mensagem de teste" in out

    def test_get_logger_binds_name(self, captured):
        get_logger("checkout_sheets.relay", request_id="r1").info("olá")

        assert captured[-1]["extra"]["name"] == "checkout_sheets.relay"
        assert captured[-1]["extra"]["request_id"] == "r1"

    def test_with_context(self, captured):
        with with_context(tipo="pix_gerado"):
            get_logger().info("dentro")

        assert captured[-1]["extra"]["tipo"] == "pix_gerado"

    def test_intercept_handler_forwards_stdlib(self, captured):
        record = logging.LogRecord("uvicorn", logging.WARNING, __file__, 1, "aviso stdlib", None, None)

        InterceptHandler().emit(record)

        assert captured[-1]["message"] == "aviso stdlib"
        assert captured[-1]["level"].name == "WARNING"

    def test_intercept_handler_custom_level(self, captured):
        record = logging.LogRecord("lib", 15, __file__, 1, "nível customizado", None, None)
        record.levelname = "Level 15"

        InterceptHandler().emit(record)

        assert captured[-1]["message"] == "nível customizado"


class TestMetrics:
    """Contadores do relay"""

    def test_counters_increment(self):
        before = metrics.events_received.labels("pix_gerado")._value.get()

        metrics.events_received.labels("pix_gerado").inc()

        assert metrics.events_received.labels("pix_gerado")._value.get() == before + 1

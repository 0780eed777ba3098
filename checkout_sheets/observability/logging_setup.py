from __future__ import annotations
import logging
import sys
from loguru import logger

# ---- stdlib logging → loguru (uvicorn, googleapiclient) ----
class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())

def _hook_stdlib_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for noisy in ("uvicorn", "uvicorn.access", "uvicorn.error", "googleapiclient", "google.auth"):
        l = logging.getLogger(noisy)
        l.handlers = [InterceptHandler()]
        l.propagate = False
    # aviso de cache de discovery é ruído
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)

# ---- formato de console (legível, extra oculto) ----
DEV_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level:<7}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<cyan>{file}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

def setup_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """
    Inicializa o loguru.
    - console colorido em desenvolvimento
    - JSON serializado (uma linha por evento) quando json_logs=True
    - absorve o logging da stdlib
    """
    logger.remove()
    logger.configure(extra={"name": "checkout_sheets"})
    if json_logs:
        logger.add(
            sink=sys.stdout,
            serialize=True,
            backtrace=False,
            diagnose=False,
            level=log_level.upper(),
            enqueue=False,
        )
    else:
        logger.add(
            sink=sys.stdout,
            format=DEV_FORMAT,
            colorize=True,
            backtrace=True,
            diagnose=False,
            level=log_level.upper(),
            enqueue=False,
        )
    _hook_stdlib_logging()

def get_logger(name: str = "checkout_sheets", **ctx):
    """Retorna um logger com contexto opcional vinculado."""
    return logger.bind(name=name, **ctx)

def with_context(**ctx):
    """Context manager que vincula contexto temporário."""
    return logger.contextualize(**ctx)

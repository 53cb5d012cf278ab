import logging
import sys
from functools import lru_cache
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Directorio de logs (backend/logs/)
_LOG_DIR = Path(__file__).parent.parent.parent / "logs"

# Símbolos para visualizar el flujo
FLOW_SYMBOLS = {
    "node": "║",
    "arrow": "→",
    "route": "◆",
}


def _configure_root_logger(level: LogLevel) -> None:
    """Configura el logger raíz con handlers de consola y archivo."""
    root = logging.getLogger()
    if root.handlers:
        return

    # Silenciar loggers ruidosos de terceros
    noisy_loggers = [
        "watchfiles",
        "watchfiles.main",
        "httpx",
        "httpcore",
        "httpcore.http11",
        "httpcore.connection",
        "groq",
        "urllib3",
    ]
    for logger_name in noisy_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    formatter = logging.Formatter(_LOG_FORMAT, _DATE_FORMAT)

    # Handler de consola (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    # Handler de archivo con rotación diaria (mantiene 7 días)
    try:
        _LOG_DIR.mkdir(exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            _LOG_DIR / "proposal_timeline.log",
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
    except OSError as e:
        # Si falla la creación del archivo, solo usar consola
        root.warning(f"File logging disabled: {e}")

    root.setLevel(level)


@lru_cache(maxsize=128)
def get_logger(name: str) -> logging.Logger:
    """
    Retorna un logger configurado para el módulo especificado.
    
    Uso:
        from app.core.logging import get_logger
        logger = get_logger(__name__)
        logger.info("Mensaje")
    """
    from app.core.config import settings
    
    _configure_root_logger(settings.log_level)
    return logging.getLogger(name)


class ProposalLogger:
    """Logger especializado para trazabilidad de recálculos de cronograma."""

    def __init__(self, source: str):
        self._logger = get_logger(f"proposal.{source}")
        self.source = source

    def schedule_recomputed(self, folder_id: str, trigger: str, phases: int, end_date: str) -> None:
        """Log de un cronograma recalculado."""
        self._logger.info(
            f"{FLOW_SYMBOLS['route']} [{trigger.upper()}] folder={folder_id} "
            f"{FLOW_SYMBOLS['arrow']} {phases} phase(s), ends {end_date[:10]}"
        )

    def schedule_kept(self, folder_id: str, reason: str) -> None:
        self._logger.debug(f"{FLOW_SYMBOLS['node']} folder={folder_id} schedule kept | {reason}")

    def copilot_request(self, folder_id: str, instruction: str) -> None:
        """Log de una instrucción enviada al co-pilot."""
        self._logger.info(
            f"{FLOW_SYMBOLS['node']} [COPILOT] folder={folder_id} "
            f"{FLOW_SYMBOLS['arrow']} {instruction[:80]}{'...' if len(instruction) > 80 else ''}"
        )

    def error(self, step: str, error: Exception) -> None:
        self._logger.error(f"{FLOW_SYMBOLS['node']} [{step.upper()}] ERROR: {type(error).__name__}: {error}", exc_info=True)

# ============================================================
# 📦 src/geo_analytics/infrastructure/logging/run_logger.py
# ============================================================

import os
import sys
from datetime import datetime
from typing import Optional

from loguru import logger

FORMATO = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configurar_logger(nivel: Optional[str] = None, arquivo: Optional[str] = None) -> None:
    """
    Substitui o sink padrão do loguru:
    - stderr no nível LOG_LEVEL (padrão INFO)
    - arquivo opcional (LOG_FILE) com rotação e retenção
    """
    nivel = (nivel or os.getenv("LOG_LEVEL", "INFO")).upper()
    arquivo = arquivo or os.getenv("LOG_FILE")

    logger.remove()
    logger.add(sys.stderr, level=nivel, format=FORMATO)

    if arquivo:
        logger.add(arquivo, level=nivel, rotation="10 MB", retention="7 days", encoding="utf-8")

    logger.debug(f"📝 Logger configurado | nível={nivel} | arquivo={arquivo or '-'}")


def snapshot_params(**kwargs) -> dict:
    """Foto dos parâmetros da execução (JSON-safe) para log/auditoria."""
    snap = {"timestamp": datetime.now().isoformat(timespec="seconds")}
    for chave, valor in kwargs.items():
        if valor is None or isinstance(valor, (bool, int, float, str)):
            snap[chave] = valor
        else:
            snap[chave] = str(valor)
    return snap

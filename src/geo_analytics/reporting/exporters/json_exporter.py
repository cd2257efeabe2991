# ============================================================
# 📦 src/geo_analytics/reporting/exporters/json_exporter.py
# ============================================================

import json
import math
from dataclasses import asdict, is_dataclass
from pathlib import Path

from loguru import logger


def _limpar(obj):
    """NaN / Infinity → None (JSON válido)."""
    if isinstance(obj, dict):
        return {k: _limpar(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_limpar(i) for i in obj]
    if isinstance(obj, float) and not math.isfinite(obj):
        return None
    return obj


class JSONExporter:
    @staticmethod
    def export(data, output_path: str):
        if not data:
            logger.warning("⚠️ Nenhum dado para exportar.")
            return None

        if is_dataclass(data):
            data = asdict(data)

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(_limpar(data), f, ensure_ascii=False, indent=2, default=str)
        logger.success(f"✅ Relatório JSON salvo em {output_path}")
        return output_path

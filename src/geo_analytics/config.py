# =====================================================
# 📦 src/geo_analytics/config.py
# =====================================================

import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(nome: str, padrao: str) -> bool:
    return os.getenv(nome, padrao).strip().lower() in ("1", "true", "yes", "sim")


# =====================================================
# ⚙️ Parâmetros da análise geográfica
# =====================================================
ANALYTICS_PARAMS = {
    "k": int(os.getenv("GEO_DEFAULT_K", "5")),
    "horizon": int(os.getenv("GEO_DEFAULT_HORIZON", "3")),
    "radius_km": float(os.getenv("GEO_DEFAULT_RADIUS_KM", "5.0")),
    "kmeans_max_iter": int(os.getenv("GEO_KMEANS_MAX_ITER", "100")),
    "kmeans_max_seconds": float(os.getenv("GEO_KMEANS_MAX_SECONDS", "30.0")),
    "parallel_engines": _env_bool("GEO_PARALLEL_ENGINES", "true"),
}

# =====================================================
# 🌐 API
# =====================================================
API_PARAMS = {
    "host": os.getenv("GEO_API_HOST", "0.0.0.0"),
    "port": int(os.getenv("GEO_API_PORT", "8010")),
}

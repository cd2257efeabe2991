# ============================================================
# 📦 src/geo_analytics/domain/cluster_profiler.py
# ============================================================

import math
from collections import Counter
from typing import Dict, List, Tuple

import numpy as np

from .entities import CustomerLocation
from .haversine_utils import haversine_distance
from .results import Cluster, GeoPoint

# 🔒 Limiares fixos (não derivados dos dados) — lucro em tomans
LUCRO_ALTO = 5_000_000
ATIVOS_ALTO = 0.7
LUCRO_BAIXO = 1_000_000
ATIVOS_BAIXO = 0.3

RAIO_MIN_KM = 0.5
AREA_MIN_KM2 = 0.1
CATEGORIA_DESCONHECIDA = "N/A"


def classify_potential(avg_profit: float, active_ratio: float) -> str:
    if avg_profit > LUCRO_ALTO and active_ratio > ATIVOS_ALTO:
        return "high"
    if avg_profit < LUCRO_BAIXO or active_ratio < ATIVOS_BAIXO:
        return "low"
    return "medium"


def dominant_category(customers: List[CustomerLocation]) -> str:
    """Moda da categoria; empate → primeira a aparecer."""
    contagem = Counter(c.business_type for c in customers if c.business_type)
    if not contagem:
        return CATEGORIA_DESCONHECIDA
    return contagem.most_common(1)[0][0]


def _caracteristicas(n: int, avg_profit: float, active_ratio: float, density: float, dominante: str) -> List[str]:
    tags = []
    if active_ratio > 0.8:
        tags.append("atividade alta")
    elif active_ratio < 0.4:
        tags.append("necessita ativação")
    if avg_profit > LUCRO_ALTO:
        tags.append("renda alta")
    if n > 5:
        tags.append("alta concentração de clientes")
    if density > 10:
        tags.append("alta densidade")
    elif density < 2:
        tags.append("dispersão geográfica")
    if dominante != CATEGORIA_DESCONHECIDA:
        tags.append(f"predominante: {dominante}")
    return tags


# ============================================================
# 🧩 Perfil comercial de um cluster
# ============================================================
def build_cluster(
    cluster_id: int,
    members: List[CustomerLocation],
    customer_stats: Dict[str, Tuple[float, int]],
) -> Cluster:
    """
    Centróide geográfico (lat/lng brutos, para exibição), receita agregada,
    lucro médio, categoria dominante, taxa de ativos, raio e densidade.
    """
    n = len(members)
    lat_c = float(np.mean([c.latitude for c in members]))
    lng_c = float(np.mean([c.longitude for c in members]))

    total_revenue = float(sum(customer_stats.get(c.id, (0.0, 0))[0] for c in members))
    avg_profit = float(np.mean([c.monthly_profit for c in members]))
    active_ratio = sum(1 for c in members if c.status == "active") / n
    dominante = dominant_category(members)

    raio = max([haversine_distance(lat_c, lng_c, c.latitude, c.longitude) for c in members] + [RAIO_MIN_KM])
    densidade = n / max(math.pi * raio ** 2, AREA_MIN_KM2)

    return Cluster(
        id=cluster_id,
        centroid=GeoPoint(lat=lat_c, lng=lng_c),
        customer_count=n,
        total_revenue=total_revenue,
        avg_monthly_profit=round(avg_profit),
        dominant_business_type=dominante,
        potential_level=classify_potential(avg_profit, active_ratio),
        active_ratio=round(active_ratio, 3),
        radius_km=round(raio, 3),
        density=round(densidade, 3),
        characteristics=_caracteristicas(n, avg_profit, active_ratio, densidade, dominante),
        customer_ids=[c.id for c in members],
    )

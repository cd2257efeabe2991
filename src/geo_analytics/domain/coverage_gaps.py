# ============================================================
# 📦 src/geo_analytics/domain/coverage_gaps.py
# ============================================================

import math
from typing import List

import numpy as np

from .entities import CustomerLocation, ServicePoint
from .haversine_utils import haversine_distance, haversine_matrix, initial_bearing
from .results import DirectionalGap, GeoPoint, OptimalSite

SETORES = ["norte", "nordeste", "leste", "sudeste", "sul", "sudoeste", "oeste", "noroeste"]
TOP_SETORES = 4
MAX_NOVOS_PONTOS = 3
RECEITA_PRIORIDADE_ALTA = 100_000_000


# ============================================================
# 🧭 Lacunas por direção em torno de um ponto de serviço
# ============================================================
def directional_gaps(
    sp: ServicePoint,
    uncovered: List[CustomerLocation],
    top_n: int = TOP_SETORES,
) -> List[DirectionalGap]:
    """
    Distribui os clientes descobertos em 8 setores de 45° pelo rumo inicial
    a partir do ponto; devolve os setores com mais clientes.
    """
    grupos = {i: [] for i in range(len(SETORES))}
    for c in uncovered:
        rumo = initial_bearing(sp.latitude, sp.longitude, c.latitude, c.longitude)
        setor = int(math.floor(rumo / 45.0 + 0.5)) % 8
        grupos[setor].append(haversine_distance(sp.latitude, sp.longitude, c.latitude, c.longitude))

    lacunas = [
        DirectionalGap(
            direction=SETORES[i],
            avg_distance_km=round(float(np.mean(dists)), 2),
            potential_customers=len(dists),
        )
        for i, dists in grupos.items()
        if dists
    ]
    lacunas.sort(key=lambda g: g.potential_customers, reverse=True)
    return lacunas[:top_n]


# ============================================================
# 📍 Novos pontos de serviço (guloso)
# ============================================================
def optimal_sites(
    uncovered: List[CustomerLocation],
    radius_km: float,
    max_sites: int = MAX_NOVOS_PONTOS,
) -> List[OptimalSite]:
    """
    A cada rodada: centróide dos descobertos restantes, clientes a até
    `radius_km` dele saem da lista. Para quando o centróide não cobre ninguém.
    """
    restantes = list(uncovered)
    sites: List[OptimalSite] = []

    while restantes and len(sites) < max_sites:
        lat = float(np.mean([c.latitude for c in restantes]))
        lng = float(np.mean([c.longitude for c in restantes]))

        distancias = haversine_matrix(
            [lat], [lng], [c.latitude for c in restantes], [c.longitude for c in restantes]
        )[0]
        cobertos = [c for c, d in zip(restantes, distancias) if d <= radius_km]
        if not cobertos:
            break

        receita = sum(c.monthly_profit for c in cobertos)
        if len(cobertos) > 5 or receita > RECEITA_PRIORIDADE_ALTA:
            prioridade = "high"
        elif len(cobertos) < 2:
            prioridade = "low"
        else:
            prioridade = "medium"

        sites.append(
            OptimalSite(
                location=GeoPoint(lat=lat, lng=lng),
                potential_coverage=len(cobertos),
                total_revenue=receita,
                priority=prioridade,
                reason=f"Cobertura de {len(cobertos)} clientes com receita de {round(receita / 1_000_000)} milhões",
            )
        )

        ids = {c.id for c in cobertos}
        restantes = [c for c in restantes if c.id not in ids]

    return sites


# ============================================================
# 💬 Recomendações textuais
# ============================================================
def coverage_recommendations(coverage_pct: float, avg_distance_km: float, n_uncovered: int) -> List[str]:
    recs = []
    if coverage_pct < 50:
        recs.append("Cobertura abaixo de 50% — necessidade urgente de novos pontos de serviço")
    elif coverage_pct < 70:
        recs.append("Cobertura média — avaliar abertura de pontos nas áreas pouco atendidas")
    elif coverage_pct < 90:
        recs.append("Boa cobertura — otimizar os pontos existentes")
    else:
        recs.append("Cobertura excelente — foco na qualidade do atendimento")

    if avg_distance_km > 3:
        recs.append("Distância média dos clientes elevada — revisar a distribuição geográfica dos pontos")

    if n_uncovered > 5:
        recs.append(f"{n_uncovered} clientes fora do raio de atendimento")

    return recs

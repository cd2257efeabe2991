# ============================================================
# 📦 src/geo_analytics/domain/coverage_analysis.py
# ============================================================

from typing import Iterable, List, Optional

import numpy as np
from loguru import logger

from .coverage_gaps import coverage_recommendations, directional_gaps, optimal_sites
from .entities import CustomerLocation, ServicePoint
from .geo_primitives import bin_points, cell_center, filtrar_coordenadas_validas
from .results import (
    CoverageStats,
    GeoPoint,
    NearestServicePoint,
    RadiusAnalysisResult,
    ServicePointCoverage,
    SuggestedLocation,
    UncoveredCustomer,
)
from .spatial_index import GeoIndex

TAMANHO_CELULA_LACUNA = 0.03     # graus (menor que a grade de expansão)
MIN_CLIENTES_LACUNA = 2
TOP_N_LOCAIS = 5


def _suggest_locations(
    uncovered: List[CustomerLocation],
    cell_size_degrees: float,
    top_n: int,
) -> List[SuggestedLocation]:
    grade = bin_points(uncovered, cell_size_degrees, lambda c: (c.latitude, c.longitude))

    locais = []
    for chave, membros in grade.items():
        if len(membros) < MIN_CLIENTES_LACUNA:
            continue
        lat, lng = cell_center(chave, cell_size_degrees)
        receita_anual = sum(c.monthly_profit for c in membros) * 12
        locais.append(
            SuggestedLocation(
                location=GeoPoint(lat=lat, lng=lng),
                score=round(len(membros) * 100 + receita_anual / 10_000),
                potential_customers=len(membros),
                estimated_revenue=receita_anual,
                reasoning=(
                    f"Cobertura de {len(membros)} clientes sem atendimento com receita anual de "
                    f"{receita_anual / 1_000_000:.1f} milhões de tomans"
                ),
            )
        )

    locais.sort(key=lambda s: s.score, reverse=True)
    return locais[:top_n]


# ============================================================
# 🚀 Análise de cobertura por raio
# ============================================================
def analyze_coverage(
    customers: Iterable[CustomerLocation],
    service_points: Iterable[ServicePoint],
    radius_km: float,
    max_uncovered: Optional[int] = None,
    top_n: int = TOP_N_LOCAIS,
) -> RadiusAnalysisResult:
    """
    - Por ponto de serviço: clientes a até o raio do ponto (próprio ou `radius_km`)
    - Por cliente: ponto mais próximo (para relatório) e teste independente
      "dentro do raio de ALGUM ponto" — coberto não significa coberto pelo mais próximo
    - Descobertos agrupados em células → locais sugeridos
    Sem pontos de serviço: 0% de cobertura e todos os clientes válidos descobertos.
    """
    validos = filtrar_coordenadas_validas(customers)
    pontos = filtrar_coordenadas_validas(service_points)
    total = len(validos)

    idx_clientes = GeoIndex([(c.latitude, c.longitude) for c in validos])
    idx_pontos = GeoIndex([(sp.latitude, sp.longitude) for sp in pontos])

    # 1️⃣ Cobertura de cada ponto
    cobertos = set()
    analise_pontos: List[ServicePointCoverage] = []
    for sp in pontos:
        raio = sp.effective_radius(radius_km)
        membros = idx_clientes.within(sp.latitude, sp.longitude, raio)
        cobertos.update(membros)

        analise_pontos.append(
            ServicePointCoverage(
                id=sp.id,
                name=sp.name,
                type=sp.type,
                location=GeoPoint(lat=sp.latitude, lng=sp.longitude),
                coverage_radius=raio,
                customers_in_radius=len(membros),
                total_revenue=sum(validos[i].monthly_profit for i in membros),
                coverage_efficiency=round(len(membros) / total * 100, 1) if total else 0.0,
            )
        )

    # 2️⃣ Mais próximo + descobertos
    distancias = []
    descobertos: List[UncoveredCustomer] = []
    clientes_descobertos: List[CustomerLocation] = []
    for i, c in enumerate(validos):
        proximo = None
        achado = idx_pontos.nearest(c.latitude, c.longitude)
        if achado is not None:
            j, dist = achado
            proximo = NearestServicePoint(id=pontos[j].id, name=pontos[j].name, distance=round(dist, 3))
            distancias.append(dist)

        if i not in cobertos:
            clientes_descobertos.append(c)
            descobertos.append(
                UncoveredCustomer(
                    customer_id=c.id,
                    shop_name=c.shop_name,
                    location=GeoPoint(lat=c.latitude, lng=c.longitude),
                    nearest_service_point=proximo,
                    monthly_profit=c.monthly_profit,
                )
            )

    descobertos.sort(key=lambda u: u.monthly_profit, reverse=True)

    # 3️⃣ Totais
    n_cobertos = total - len(descobertos)
    stats = CoverageStats(
        total_customers=total,
        covered_customers=n_cobertos,
        uncovered_customers=len(descobertos),
        coverage_percentage=round(n_cobertos / total * 100, 1) if total else 0.0,
        avg_distance_to_service=round(float(np.mean(distancias)), 2) if distancias else 0.0,
        max_distance_to_service=round(float(np.max(distancias)), 2) if distancias else 0.0,
    )

    for sp, analise in zip(pontos, analise_pontos):
        analise.gaps = directional_gaps(sp, clientes_descobertos)

    logger.info(
        f"📡 Cobertura | clientes={total} | pontos={len(pontos)} | raio={radius_km} km | "
        f"cobertos={n_cobertos} ({stats.coverage_percentage}%) | descobertos={len(descobertos)}"
    )

    # 4️⃣ Locais sugeridos
    return RadiusAnalysisResult(
        service_points=analise_pontos,
        uncovered_customers=descobertos[:max_uncovered] if max_uncovered is not None else descobertos,
        coverage_stats=stats,
        suggested_locations=_suggest_locations(clientes_descobertos, TAMANHO_CELULA_LACUNA, top_n),
        optimal_sites=optimal_sites(clientes_descobertos, radius_km),
        recommendations=coverage_recommendations(
            stats.coverage_percentage, stats.avg_distance_to_service, len(descobertos)
        ),
    )

# ============================================================
# 📦 src/geo_analytics/domain/expansion_planner.py
# ============================================================

from typing import Iterable, List

from loguru import logger

from .entities import CustomerLocation, ServicePoint
from .geo_primitives import bin_points, cell_center, filtrar_coordenadas_validas
from .results import ExpansionSuggestion, GeoPoint
from .spatial_index import GeoIndex

TAMANHO_CELULA_EXPANSAO = 0.05    # graus
MIN_CLIENTES_TOTAL = 10           # abaixo disso não há sugestão
MIN_CLIENTES_CELULA = 3
DISTANCIA_MIN_KM = 3.0            # célula precisa estar além disso do serviço
DISTANCIA_TETO_KM = 50.0          # teto do fator distância (inclui "sem serviço")
TOP_N_EXPANSAO = 5


def suggest_expansion(
    customers: Iterable[CustomerLocation],
    service_points: Iterable[ServicePoint],
    cell_size_degrees: float = TAMANHO_CELULA_EXPANSAO,
    top_n: int = TOP_N_EXPANSAO,
) -> List[ExpansionSuggestion]:
    """
    Agrupa clientes em células fixas; células densas e distantes de qualquer
    ponto de serviço viram candidatas, pontuadas por
    (densidade + receita + atividade) x distância ao serviço.
    """
    validos = filtrar_coordenadas_validas(customers)
    if len(validos) <= MIN_CLIENTES_TOTAL:
        logger.debug(f"📭 Expansão: apenas {len(validos)} clientes válidos — sem sugestões.")
        return []

    pontos = filtrar_coordenadas_validas(service_points)
    indice = GeoIndex([(sp.latitude, sp.longitude) for sp in pontos])
    grade = bin_points(validos, cell_size_degrees, lambda c: (c.latitude, c.longitude))

    sugestoes: List[ExpansionSuggestion] = []
    for chave, membros in grade.items():
        if len(membros) < MIN_CLIENTES_CELULA:
            continue

        lat, lng = cell_center(chave, cell_size_degrees)
        mais_proximo = indice.nearest(lat, lng)
        dist = mais_proximo[1] if mais_proximo else float("inf")
        if dist <= DISTANCIA_MIN_KM:
            continue

        dist_fator = min(dist, DISTANCIA_TETO_KM)
        receita = sum(c.monthly_profit for c in membros)
        ativos = sum(1 for c in membros if c.status == "active") / len(membros)
        score = (len(membros) * 10 + receita / 100_000 + ativos * 50) * (dist_fator / 5)

        motivos = [f"{len(membros)} clientes nesta área"]
        if mais_proximo:
            motivos.append(f"{round(dist)} km do ponto de serviço mais próximo")
        else:
            motivos.append("nenhum ponto de serviço cadastrado")
        if ativos > 0.7:
            motivos.append("alta taxa de clientes ativos")

        sugestoes.append(
            ExpansionSuggestion(
                location=GeoPoint(lat=lat, lng=lng),
                area_name=f"Área ({lat:.2f}, {lng:.2f})",
                potential_score=round(score),
                estimated_revenue=receita * 12,
                nearby_customers=len(membros),
                distance_to_service_km=round(dist_fator, 2),
                reasoning=motivos,
            )
        )

    sugestoes.sort(key=lambda s: s.potential_score, reverse=True)
    return sugestoes[:top_n]

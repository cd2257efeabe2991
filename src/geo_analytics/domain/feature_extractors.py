# ============================================================
# 📦 src/geo_analytics/domain/feature_extractors.py
# ============================================================
# Estratégias de construção de features injetadas no k-means.

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Tuple, Union

import numpy as np

from .entities import CustomerLocation, MonthlyStat, ServicePoint
from .geo_primitives import filtrar_coordenadas_validas
from .spatial_index import GeoIndex

# Ordinal fixo do status (usado apenas como feature)
STATUS_ORDINAL = {
    "active": 4,
    "normal": 3,
    "marketing": 2,
    "collected": 1,
    "loss": 0,
}
STATUS_ORDINAL_PADRAO = 2

DISTANCIA_SERVICO_MAX_KM = 10.0


@dataclass
class FeatureContext:
    """Dados auxiliares já agregados, compartilhados pelas estratégias."""
    customer_stats: Dict[str, Tuple[float, int]] = field(default_factory=dict)
    service_points: List[ServicePoint] = field(default_factory=list)

    @classmethod
    def build(cls, monthly_stats: Iterable[MonthlyStat] = (), service_points: Iterable[ServicePoint] = ()):
        return cls(
            customer_stats=agregar_estatisticas_clientes(monthly_stats),
            service_points=filtrar_coordenadas_validas(service_points),
        )

    def stats_of(self, customer_id: str) -> Tuple[float, int]:
        return self.customer_stats.get(customer_id, (0.0, 0))


FeatureExtractor = Callable[[List[CustomerLocation], FeatureContext], np.ndarray]


def agregar_estatisticas_clientes(monthly_stats: Iterable[MonthlyStat]) -> Dict[str, Tuple[float, int]]:
    """customer_id → (valor total, nº total de transações)."""
    agregado: Dict[str, Tuple[float, int]] = {}
    for stat in monthly_stats:
        if not stat.customer_id:
            continue
        valor, qtd = agregado.get(stat.customer_id, (0.0, 0))
        agregado[stat.customer_id] = (valor + stat.total_amount, qtd + stat.total_transactions)
    return agregado


def ordinal_categorias(customers: Iterable[CustomerLocation]) -> Dict[str, int]:
    """Ordinal por ordem de primeira aparição."""
    mapa: Dict[str, int] = {}
    for c in customers:
        if c.business_type not in mapa:
            mapa[c.business_type] = len(mapa)
    return mapa


# ============================================================
# 🧠 Estratégia comportamental (7 features)
# ============================================================
def behavioral_features(customers: List[CustomerLocation], ctx: FeatureContext) -> np.ndarray:
    """
    [lat, lng, lucro mensal, valor agregado, transações agregadas,
     ordinal da categoria, ordinal do status]
    """
    categorias = ordinal_categorias(customers)
    linhas = []
    for c in customers:
        valor, qtd = ctx.stats_of(c.id)
        linhas.append([
            c.latitude,
            c.longitude,
            c.monthly_profit,
            valor,
            qtd,
            categorias[c.business_type],
            STATUS_ORDINAL.get(c.status, STATUS_ORDINAL_PADRAO),
        ])
    return np.array(linhas, dtype=np.float64).reshape(len(linhas), 7)


# ============================================================
# 🗺️ Estratégia geográfica (4 features)
# ============================================================
def geographic_features(customers: List[CustomerLocation], ctx: FeatureContext) -> np.ndarray:
    """
    [lat, lng, lucro mensal, distância ao ponto de serviço mais próximo (teto 10 km)]
    Sem pontos de serviço, a distância fica no teto.
    """
    indice = GeoIndex([(sp.latitude, sp.longitude) for sp in ctx.service_points])
    linhas = []
    for c in customers:
        mais_proximo = indice.nearest(c.latitude, c.longitude)
        dist = mais_proximo[1] if mais_proximo else DISTANCIA_SERVICO_MAX_KM
        linhas.append([
            c.latitude,
            c.longitude,
            c.monthly_profit,
            min(dist, DISTANCIA_SERVICO_MAX_KM),
        ])
    return np.array(linhas, dtype=np.float64).reshape(len(linhas), 4)


FEATURE_STRATEGIES: Dict[str, FeatureExtractor] = {
    "behavioral": behavioral_features,
    "geographic": geographic_features,
}


def resolver_estrategia(strategy: Union[str, FeatureExtractor]) -> FeatureExtractor:
    if callable(strategy):
        return strategy
    try:
        return FEATURE_STRATEGIES[strategy]
    except KeyError:
        raise ValueError(
            f"Estratégia de features inválida: '{strategy}' "
            f"(opções: {', '.join(FEATURE_STRATEGIES)})"
        )

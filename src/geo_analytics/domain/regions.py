# ============================================================
# 📦 src/geo_analytics/domain/regions.py
# ============================================================

from typing import Iterable, List

from .entities import CustomerLocation, Region, ServicePoint
from .geo_primitives import bin_points, cell_center, filtrar_coordenadas_validas

TAMANHO_CELULA_REGIAO = 0.05


def regions_from_service_points(
    service_points: Iterable[ServicePoint],
    customers: Iterable[CustomerLocation] = (),
) -> List[Region]:
    """
    Uma região por ponto de serviço (área de captação).
    Clientes da região = vinculados à agência/unidade e com coordenada válida.
    """
    validos = filtrar_coordenadas_validas(customers)
    regioes = []
    for sp in service_points:
        membros = [c.id for c in validos if sp.id in (c.branch_id, c.banking_unit_id)]
        regioes.append(
            Region(
                id=sp.id,
                name=sp.name,
                latitude=sp.latitude,
                longitude=sp.longitude,
                service_point_ids=[sp.id],
                customer_ids=membros,
            )
        )
    return regioes


def regions_from_grid(
    customers: Iterable[CustomerLocation],
    cell_size_degrees: float = TAMANHO_CELULA_REGIAO,
) -> List[Region]:
    """Uma região por célula da grade que contenha ao menos um cliente válido."""
    grade = bin_points(
        filtrar_coordenadas_validas(customers),
        cell_size_degrees,
        lambda c: (c.latitude, c.longitude),
    )
    regioes = []
    for chave, membros in grade.items():
        lat, lng = cell_center(chave, cell_size_degrees)
        regioes.append(
            Region(
                id=f"cell:{chave[0]}:{chave[1]}",
                name=f"Área ({lat:.2f}, {lng:.2f})",
                latitude=lat,
                longitude=lng,
                customer_ids=[c.id for c in membros],
            )
        )
    return regioes

import math

import pytest

from geo_analytics.domain.haversine_utils import R_TERRA_KM, haversine_distance
from geo_analytics.domain.spatial_index import GeoIndex


def norte_de(lat, km):
    return lat + km / (R_TERRA_KM * math.pi / 180)


def test_indice_vazio():
    indice = GeoIndex([])
    assert len(indice) == 0
    assert indice.nearest(35.7, 51.4) is None
    assert indice.within(35.7, 51.4, 10) == []


def test_vizinho_mais_proximo():
    coords = [(35.70, 51.40), (35.90, 51.60), (35.71, 51.41)]
    idx, dist = GeoIndex(coords).nearest(35.712, 51.412)
    assert idx == 2
    assert dist == pytest.approx(haversine_distance(35.712, 51.412, 35.71, 51.41))


def test_empate_fica_com_menor_indice():
    coords = [(35.7, 51.4), (35.7, 51.4)]
    idx, _ = GeoIndex(coords).nearest(35.8, 51.5)
    assert idx == 0


def test_busca_por_raio_confirma_com_haversine():
    coords = [(norte_de(35.7, 4.9), 51.4), (norte_de(35.7, 5.1), 51.4), (35.7, 51.4)]
    assert GeoIndex(coords).within(35.7, 51.4, 5.0) == [0, 2]

import numpy as np

from geo_analytics.domain.entities import CustomerLocation, ServicePoint, parse_coordenada
from geo_analytics.domain.geo_primitives import (
    bin_points,
    cell_center,
    filtrar_coordenadas_validas,
    grid_bin,
    normalize_features,
)


# ============================================================
# Coordenadas
# ============================================================
def test_parse_coordenada_aceita_string_decimal():
    assert parse_coordenada(" 35.7 ", 90) == 35.7


def test_parse_coordenada_invalidas_viram_none():
    for valor in (None, "", "abc", float("nan"), float("inf"), 91, -180.5):
        assert parse_coordenada(valor, 90) is None


def test_filtro_exclui_clientes_sem_coordenada():
    clientes = [
        CustomerLocation(id="ok", latitude="35.7", longitude="51.4"),
        CustomerLocation(id="sem_lat", latitude=None, longitude=51.4),
        CustomerLocation(id="texto", latitude="n/a", longitude="51.4"),
        CustomerLocation(id="fora", latitude=95, longitude=51.4),
    ]
    assert [c.id for c in filtrar_coordenadas_validas(clientes)] == ["ok"]


def test_raio_efetivo_do_ponto():
    proprio = ServicePoint(id="a", name="A", latitude=0, longitude=0, coverage_radius_km=2)
    padrao = ServicePoint(id="b", name="B", latitude=0, longitude=0)
    assert proprio.effective_radius(5) == 2
    assert padrao.effective_radius(5) == 5


# ============================================================
# Normalização
# ============================================================
def test_normalizacao_min_max():
    X = normalize_features([[0, 10], [5, 20], [10, 30]])
    assert np.allclose(X[:, 0], [0, 0.5, 1])
    assert np.allclose(X[:, 1], [0, 0.5, 1])


def test_coluna_constante_vira_zero():
    X = normalize_features([[1, 7], [2, 7], [3, 7]])
    assert np.all(X[:, 1] == 0)
    assert X.min() >= 0 and X.max() <= 1


def test_normalizacao_vazia():
    assert normalize_features(np.zeros((0, 4))).shape == (0, 4)


# ============================================================
# Grade
# ============================================================
def test_ponto_na_borda_pertence_a_celula_que_comeca_nela():
    assert grid_bin(0.15, 0.10, 0.05) == (3, 2)
    assert grid_bin(0.149999, 0.10, 0.05) == (2, 2)


def test_grade_com_coordenadas_negativas():
    assert grid_bin(-0.01, -0.01, 0.05) == (-1, -1)


def test_centro_da_celula():
    lat, lng = cell_center((3, 2), 0.05)
    assert abs(lat - 0.175) < 1e-12
    assert abs(lng - 0.125) < 1e-12


def test_bin_points_agrupa_por_celula():
    pontos = [(35.701, 51.401), (35.702, 51.402), (35.80, 51.50)]
    grade = bin_points(pontos, 0.05, lambda p: p)
    assert sorted(len(m) for m in grade.values()) == [1, 2]
    assert list(grade)[0] == grid_bin(35.701, 51.401, 0.05)

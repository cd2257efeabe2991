# ============================================================
# 📦 src/geo_analytics/domain/geo_primitives.py
# ============================================================

import math
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Tuple, TypeVar

import numpy as np
from sklearn.preprocessing import MinMaxScaler

T = TypeVar("T")
CellKey = Tuple[int, int]


# ============================================================
# 📍 Filtro único de coordenadas válidas
# ============================================================
def filtrar_coordenadas_validas(itens: Iterable[T]) -> List[T]:
    """
    Mantém apenas itens com latitude E longitude válidas.
    Clientes sem coordenada ficam fora de todos os motores.
    """
    return [i for i in itens if getattr(i, "has_valid_coordinate", False)]


# ============================================================
# 📐 Normalização min-max por coluna
# ============================================================
def normalize_features(matrix) -> np.ndarray:
    """
    Escala cada coluna para [0, 1].
    Colunas com amplitude zero viram 0 em todas as linhas.
    """
    X = np.asarray(matrix, dtype=np.float64)
    if X.ndim != 2 or X.shape[0] == 0:
        return X.reshape(0, X.shape[1] if X.ndim == 2 else 0)

    # MinMaxScaler mantém escala 1 em colunas constantes → (x - min) = 0
    return MinMaxScaler(feature_range=(0.0, 1.0)).fit_transform(X)


# ============================================================
# 🧱 Grade espacial de tamanho fixo
# ============================================================
def grid_bin(lat: float, lng: float, cell_size_degrees: float) -> CellKey:
    """
    Chave inteira da célula (floor). Um ponto exatamente sobre a borda
    pertence à célula que começa nessa borda; o arredondamento do quociente
    elimina o ruído de ponto flutuante (ex.: 0.15 / 0.05).
    """
    return (
        math.floor(round(lat / cell_size_degrees, 9)),
        math.floor(round(lng / cell_size_degrees, 9)),
    )


def cell_center(key: CellKey, cell_size_degrees: float) -> Tuple[float, float]:
    """Centro geográfico da célula."""
    return (
        (key[0] + 0.5) * cell_size_degrees,
        (key[1] + 0.5) * cell_size_degrees,
    )


def bin_points(
    itens: Iterable[T],
    cell_size_degrees: float,
    coord: Callable[[T], Tuple[float, float]],
) -> Dict[CellKey, List[T]]:
    """
    Agrupa itens por célula (hash map chave inteira → membros).
    A ordem de inserção das células e dos membros segue a entrada.
    """
    grade: Dict[CellKey, List[T]] = defaultdict(list)
    for item in itens:
        lat, lng = coord(item)
        grade[grid_bin(lat, lng, cell_size_degrees)].append(item)
    return dict(grade)

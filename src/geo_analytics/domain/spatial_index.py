# ============================================================
# 📦 src/geo_analytics/domain/spatial_index.py
# ============================================================

from typing import List, Optional, Sequence, Tuple

import numpy as np
from sklearn.neighbors import NearestNeighbors

from .haversine_utils import R_TERRA_KM, haversine_distance

# Folga relativa na busca por raio da BallTree; o corte final é sempre
# feito com haversine_distance para manter todos os motores consistentes.
_FOLGA_RAIO = 1e-6


class GeoIndex:
    """
    Índice espacial (BallTree haversine) sobre uma lista de coordenadas.
    - nearest(): vizinho mais próximo, desempate pelo menor índice
    - within(): índices a até `radius_km`, confirmados por haversine_distance
    """

    def __init__(self, coords: Sequence[Tuple[float, float]]):
        self.coords = [(float(lat), float(lng)) for lat, lng in coords]
        self._nn: Optional[NearestNeighbors] = None

        if self.coords:
            self._nn = NearestNeighbors(metric="haversine", algorithm="ball_tree")
            self._nn.fit(np.radians(np.array(self.coords)))

    def __len__(self) -> int:
        return len(self.coords)

    # ============================================================
    # 🔍 Vizinho mais próximo
    # ============================================================
    def nearest(self, lat: float, lng: float) -> Optional[Tuple[int, float]]:
        if self._nn is None:
            return None

        n_viz = min(3, len(self.coords))
        _, idx = self._nn.kneighbors(np.radians([[lat, lng]]), n_neighbors=n_viz)

        melhor_idx, melhor_dist = None, None
        for i in sorted(int(j) for j in idx[0]):
            dist = haversine_distance(lat, lng, *self.coords[i])
            if melhor_dist is None or dist < melhor_dist:
                melhor_idx, melhor_dist = i, dist

        return melhor_idx, melhor_dist

    # ============================================================
    # ⭕ Pontos dentro do raio
    # ============================================================
    def within(self, lat: float, lng: float, radius_km: float) -> List[int]:
        if self._nn is None or radius_km < 0:
            return []

        raio_rad = radius_km / R_TERRA_KM * (1 + _FOLGA_RAIO)
        idx = self._nn.radius_neighbors(
            np.radians([[lat, lng]]), radius=raio_rad, return_distance=False
        )[0]

        return sorted(
            int(i) for i in idx
            if haversine_distance(lat, lng, *self.coords[int(i)]) <= radius_km
        )

# ============================================================
# 📦 src/geo_analytics/domain/haversine_utils.py
# ============================================================

import math
import numpy as np

R_TERRA_KM = 6371.0  # raio médio da Terra em km


def haversine_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Calcula a distância entre dois pontos (lat, lng) em quilômetros.
    Função única usada por clusterização, previsão e cobertura.
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return R_TERRA_KM * c


def haversine_matrix(lats1, lngs1, lats2, lngs2) -> np.ndarray:
    """
    Versão vetorizada (mesma fórmula) → matriz len(lats1) x len(lats2) em km.
    """
    lat1 = np.radians(np.asarray(lats1, dtype=np.float64))[:, None]
    lng1 = np.radians(np.asarray(lngs1, dtype=np.float64))[:, None]
    lat2 = np.radians(np.asarray(lats2, dtype=np.float64))[None, :]
    lng2 = np.radians(np.asarray(lngs2, dtype=np.float64))[None, :]

    a = np.sin((lat2 - lat1) / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin((lng2 - lng1) / 2) ** 2
    a = np.minimum(a, 1.0)
    return R_TERRA_KM * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))


def initial_bearing(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Rumo inicial (graus, 0 = norte, sentido horário) de 1 → 2."""
    dlng = math.radians(lng2 - lng1)
    phi1, phi2 = math.radians(lat1), math.radians(lat2)

    y = math.sin(dlng) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlng)

    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0

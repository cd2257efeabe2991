# ============================================================
# 📦 src/geo_analytics/domain/cluster_metrics.py
# ============================================================

import numpy as np
from sklearn.metrics import pairwise_distances, silhouette_samples


def compute_inertia(X: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> float:
    """Soma das distâncias ao quadrado (espaço normalizado) até o centróide atribuído."""
    if len(X) == 0:
        return 0.0
    return float(((X - centroids[labels]) ** 2).sum())


def compute_silhouette(X: np.ndarray, labels: np.ndarray) -> float:
    """
    Silhouette médio no mesmo espaço normalizado do k-means:
      a = distância média aos pares do próprio cluster (0 sem pares)
      b = menor distância média aos membros de outro cluster
      s = (b - a) / max(a, b), 0 quando max(a, b) = 0
    Cluster unitário contribui 1 (a = 0) quando b > 0.
    Menos de 2 clusters não vazios → 0.
    """
    X = np.asarray(X, dtype=np.float64)
    labels = np.asarray(labels)
    n = len(X)
    if n == 0:
        return 0.0

    rotulos, tamanhos = np.unique(labels, return_counts=True)
    if len(rotulos) < 2:
        return 0.0

    unitarios = set(rotulos[tamanhos == 1].tolist())
    scores = np.zeros(n)

    # sklearn exige 2 <= nº de rótulos <= n - 1
    if len(rotulos) < n:
        scores = silhouette_samples(X, labels, metric="euclidean")

    if unitarios:
        D = pairwise_distances(X, metric="euclidean")
        for i in np.flatnonzero(np.isin(labels, list(unitarios))):
            b = min(D[i, labels == outro].mean() for outro in rotulos if outro != labels[i])
            scores[i] = 1.0 if b > 0 else 0.0

    return float(np.mean(scores))

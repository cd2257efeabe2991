# ============================================================
# 📦 src/geo_analytics/domain/geo_kmeans.py
# ============================================================

import time
from dataclasses import dataclass
from typing import Optional

import numpy as np
from loguru import logger

from .geo_primitives import normalize_features

MAX_ITER_PADRAO = 100


@dataclass
class KMeansOutcome:
    assignments: np.ndarray     # rótulo 0..k-1 por linha
    centroids: np.ndarray       # k x d, espaço normalizado
    normalized: np.ndarray      # n x d, espaço normalizado
    iterations: int
    converged: bool


def _dist2(X: np.ndarray, C: np.ndarray) -> np.ndarray:
    """Distância euclidiana ao quadrado n x k."""
    return ((X[:, None, :] - C[None, :, :]) ** 2).sum(axis=2)


# ============================================================
# 🎯 Semeadura determinística
# ============================================================
def seed_centroids(X: np.ndarray, k: int) -> np.ndarray:
    """
    Travessia do mais distante (farthest-first):
    - 1º centróide = elemento do meio da ordem de entrada (n // 2)
    - cada novo centróide = ponto com a maior distância ao centróide mais próximo
    - empates → menor índice (np.argmax)
    Mesma entrada ⇒ mesmas sementes, sem aleatoriedade.
    """
    n = X.shape[0]
    escolhidos = [n // 2]
    min_d2 = _dist2(X, X[escolhidos])[:, 0]

    while len(escolhidos) < k:
        prox = int(np.argmax(min_d2))
        escolhidos.append(prox)
        min_d2 = np.minimum(min_d2, _dist2(X, X[[prox]])[:, 0])

    return X[escolhidos].copy()


# ============================================================
# 🚀 K-means determinístico
# ============================================================
def deterministic_kmeans(
    features,
    k: int,
    max_iter: int = MAX_ITER_PADRAO,
    max_seconds: Optional[float] = None,
) -> KMeansOutcome:
    """
    Lloyd sobre features normalizadas (min-max):
    - atribuição ao centróide mais próximo (empate → menor índice)
    - centróide = média dos membros; cluster vazio mantém o centróide anterior
    - para quando a atribuição não muda, após `max_iter` rodadas
      ou ao estourar `max_seconds`
    """
    X = normalize_features(features)
    n = X.shape[0]
    k = min(int(k), n)

    if n == 0 or k <= 0:
        return KMeansOutcome(
            assignments=np.zeros(0, dtype=int),
            centroids=np.zeros((0, X.shape[1] if X.ndim == 2 else 0)),
            normalized=X,
            iterations=0,
            converged=True,
        )

    max_iter = max(1, int(max_iter))
    centroids = seed_centroids(X, k)
    assignments = None
    converged = False
    it = 0
    inicio = time.monotonic()

    for it in range(1, max_iter + 1):
        novos = np.argmin(_dist2(X, centroids), axis=1)

        for c in range(k):
            membros = X[novos == c]
            if len(membros):
                centroids[c] = membros.mean(axis=0)

        if assignments is not None and np.array_equal(novos, assignments):
            converged = True
            break
        assignments = novos

        if max_seconds is not None and time.monotonic() - inicio > max_seconds:
            logger.warning(f"⏱️ K-means interrompido por tempo após {it} iterações ({max_seconds:.1f}s).")
            break

    if not converged and assignments is not None and it >= max_iter:
        logger.warning(f"⚠️ K-means não convergiu em {max_iter} iterações.")

    logger.debug(f"🔁 K-means: n={n} | k={k} | iterações={it} | convergiu={converged}")

    return KMeansOutcome(
        assignments=np.asarray(assignments, dtype=int),
        centroids=centroids,
        normalized=X,
        iterations=it,
        converged=converged,
    )

# ============================================================
# 📦 src/geo_analytics/domain/customer_clustering.py
# ============================================================

from typing import Iterable, List, Optional, Union

from loguru import logger

from .cluster_metrics import compute_inertia, compute_silhouette
from .cluster_profiler import build_cluster
from .entities import CustomerLocation, MonthlyStat, ServicePoint
from .feature_extractors import FeatureContext, FeatureExtractor, resolver_estrategia
from .geo_kmeans import MAX_ITER_PADRAO, deterministic_kmeans
from .geo_primitives import filtrar_coordenadas_validas
from .results import ClusterAssignment, ClusterMetrics, ClusterResult


def cluster_customers(
    customers: Iterable[CustomerLocation],
    k: int,
    monthly_stats: Iterable[MonthlyStat] = (),
    service_points: Iterable[ServicePoint] = (),
    strategy: Union[str, FeatureExtractor] = "behavioral",
    max_iter: int = MAX_ITER_PADRAO,
    max_seconds: Optional[float] = None,
) -> ClusterResult:
    """
    Clusterização geográfica + comercial dos clientes.
    - Somente clientes com coordenada válida participam
    - K maior que o nº de clientes válidos é reduzido a esse número
    - Nenhum cliente válido → resultado vazio (nunca exceção)
    - Clusters vazios são descartados e os ids renumerados 0..m-1
    """
    extrator = resolver_estrategia(strategy)
    validos: List[CustomerLocation] = filtrar_coordenadas_validas(customers)

    if not validos:
        logger.warning("⚠️ Nenhum cliente com coordenada válida — clusterização vazia.")
        return ClusterResult()

    k_efetivo = min(max(int(k), 1), len(validos))
    if k_efetivo < k:
        logger.warning(f"⚠️ K={k} maior que clientes válidos ({len(validos)}) → K={k_efetivo}")

    ctx = FeatureContext.build(monthly_stats, service_points)
    features = extrator(validos, ctx)

    outcome = deterministic_kmeans(features, k_efetivo, max_iter=max_iter, max_seconds=max_seconds)
    labels = outcome.assignments

    # 🔑 Renumeração densa dos clusters não vazios
    labels_orig = sorted(set(int(l) for l in labels))
    mapa = {old: new for new, old in enumerate(labels_orig)}

    clusters = []
    for old in labels_orig:
        membros = [c for c, lbl in zip(validos, labels) if lbl == old]
        clusters.append(build_cluster(mapa[old], membros, ctx.customer_stats))

    metrics = ClusterMetrics(
        total_clusters=len(clusters),
        silhouette_score=max(0.0, compute_silhouette(outcome.normalized, labels)),
        inertia=compute_inertia(outcome.normalized, labels, outcome.centroids),
        high_potential_areas=sum(1 for c in clusters if c.potential_level == "high"),
        low_potential_areas=sum(1 for c in clusters if c.potential_level == "low"),
        iterations=outcome.iterations,
        converged=outcome.converged,
    )

    logger.info(
        f"🧩 Clusterização concluída | clientes={len(validos)} | K={k_efetivo} → {len(clusters)} clusters | "
        f"silhouette={metrics.silhouette_score:.3f} | inércia={metrics.inertia:.3f}"
    )

    return ClusterResult(
        clusters=clusters,
        assignments=[
            ClusterAssignment(customer_id=c.id, cluster_id=mapa[int(lbl)])
            for c, lbl in zip(validos, labels)
        ],
        metrics=metrics,
    )

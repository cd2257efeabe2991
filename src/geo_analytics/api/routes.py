# ============================================================
# 📦 src/geo_analytics/api/routes.py
# ============================================================

from typing import Literal

from fastapi import APIRouter, HTTPException, Query
from loguru import logger

from geo_analytics.application.geo_analysis_use_case import GeoAnalysisUseCase
from geo_analytics.config import ANALYTICS_PARAMS
from geo_analytics.domain.coverage_analysis import analyze_coverage
from geo_analytics.domain.customer_clustering import cluster_customers
from geo_analytics.domain.regions import regions_from_grid, regions_from_service_points
from geo_analytics.domain.sales_forecasting import forecast_sales
from geo_analytics.infrastructure.data_loader import InMemoryDataSource
from .schemas import GeoPayloadSchema

router = APIRouter()

Estrategia = Literal["behavioral", "geographic"]
ModoRegiao = Literal["service_points", "grid"]


def _fonte(payload: GeoPayloadSchema) -> InMemoryDataSource:
    return InMemoryDataSource(
        customers=[c.model_dump() for c in payload.customers],
        service_points=[sp.model_dump() for sp in payload.service_points],
        monthly_stats=[s.model_dump() for s in payload.monthly_stats],
    )


# ============================================================
# 🧠 Health
# ============================================================
@router.get("/health", tags=["Status"])
def health():
    return {"status": "ok", "message": "Geo Analytics API saudável 🧭"}


# ============================================================
# 🧩 Clusterização
# ============================================================
@router.post("/clusters")
def clusterizar(
    payload: GeoPayloadSchema,
    k: int = Query(ANALYTICS_PARAMS["k"], ge=1),
    strategy: Estrategia = Query("behavioral"),
):
    fonte = _fonte(payload)
    return cluster_customers(
        fonte.carregar_clientes(),
        k,
        monthly_stats=fonte.carregar_estatisticas_mensais(),
        service_points=fonte.carregar_pontos_servico(),
        strategy=strategy,
        max_iter=ANALYTICS_PARAMS["kmeans_max_iter"],
        max_seconds=ANALYTICS_PARAMS["kmeans_max_seconds"],
    )


# ============================================================
# 📈 Previsão
# ============================================================
@router.post("/forecast")
def prever(
    payload: GeoPayloadSchema,
    horizon: int = Query(ANALYTICS_PARAMS["horizon"], ge=1),
    regions: ModoRegiao = Query("service_points"),
):
    fonte = _fonte(payload)
    customers = fonte.carregar_clientes()
    service_points = fonte.carregar_pontos_servico()

    lista_regioes = (
        regions_from_grid(customers)
        if regions == "grid"
        else regions_from_service_points(service_points, customers)
    )
    return forecast_sales(
        lista_regioes,
        fonte.carregar_estatisticas_mensais(),
        horizon,
        customers=customers,
        service_points=service_points,
    )


# ============================================================
# 📡 Cobertura
# ============================================================
@router.post("/coverage")
def cobertura(
    payload: GeoPayloadSchema,
    radius: float = Query(ANALYTICS_PARAMS["radius_km"], gt=0),
):
    fonte = _fonte(payload)
    return analyze_coverage(fonte.carregar_clientes(), fonte.carregar_pontos_servico(), radius)


# ============================================================
# 🧭 Análise completa do painel
# ============================================================
@router.post("/analysis")
def analise_completa(
    payload: GeoPayloadSchema,
    k: int = Query(ANALYTICS_PARAMS["k"], ge=1),
    horizon: int = Query(ANALYTICS_PARAMS["horizon"], ge=1),
    radius: float = Query(ANALYTICS_PARAMS["radius_km"], gt=0),
    strategy: Estrategia = Query("behavioral"),
    regions: ModoRegiao = Query("service_points"),
):
    resultado = GeoAnalysisUseCase(_fonte(payload)).executar(
        k=k,
        horizon=horizon,
        radius_km=radius,
        strategy=strategy,
        regions=regions,
    )

    if resultado.clustering is None and resultado.forecast is None and resultado.coverage is None:
        logger.error(f"❌ Todos os motores falharam: {resultado.errors}")
        raise HTTPException(status_code=500, detail=resultado.errors)

    return resultado

# ============================================================
# 📦 src/geo_analytics/cli/run_geo_analysis.py
# ============================================================

import argparse
import os
from datetime import datetime

from loguru import logger

from geo_analytics.application.geo_analysis_use_case import GeoAnalysisUseCase
from geo_analytics.config import ANALYTICS_PARAMS
from geo_analytics.domain.feature_extractors import FEATURE_STRATEGIES
from geo_analytics.infrastructure.data_loader import JsonFileDataSource
from geo_analytics.infrastructure.logging.run_logger import configurar_logger
from geo_analytics.reporting.exporters.csv_exporter import (
    CSVExporter,
    clusters_dataframe,
    forecasts_dataframe,
    uncovered_dataframe,
)
from geo_analytics.reporting.exporters.json_exporter import JSONExporter


def validar_inteiro_positivo(nome: str, valor: int) -> int:
    if valor < 1:
        raise ValueError(f"{nome} inválido: {valor} — deve ser >= 1.")
    return valor


def validar_raio(raio: float) -> float:
    if raio <= 0:
        raise ValueError(f"Raio inválido: {raio} — deve ser > 0 km.")
    return raio


def main():

    parser = argparse.ArgumentParser(
        description="Análise geográfica de clientes POS (clusters, previsão e cobertura)"
    )

    # OBRIGATÓRIO
    parser.add_argument("--input", required=True, help="Arquivo JSON com customers, branches, banking_units, monthly_stats")

    # Parâmetros dos motores
    parser.add_argument("--k", type=int, default=ANALYTICS_PARAMS["k"])
    parser.add_argument("--horizon", type=int, default=ANALYTICS_PARAMS["horizon"])
    parser.add_argument("--radius", type=float, default=ANALYTICS_PARAMS["radius_km"])
    parser.add_argument("--strategy", choices=sorted(FEATURE_STRATEGIES), default="behavioral")
    parser.add_argument("--regions", choices=["service_points", "grid"], default="service_points")
    parser.add_argument("--max_iter", type=int, default=ANALYTICS_PARAMS["kmeans_max_iter"])

    # Saída
    parser.add_argument("--output", help="Caminho do JSON de saída")
    parser.add_argument("--csv_dir", help="Diretório para os relatórios CSV")
    parser.add_argument("--sequencial", action="store_true", help="Executa os motores em sequência")

    args = parser.parse_args()
    configurar_logger()

    # ============================================================
    # Validações
    # ============================================================
    k = validar_inteiro_positivo("k", args.k)
    horizon = validar_inteiro_positivo("horizon", args.horizon)
    radius = validar_raio(args.radius)

    output = args.output or os.path.join(
        "output", "reports", f"geo_analise_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
    )

    # ============================================================
    # Logs
    # ============================================================
    logger.info("==============================================")
    logger.info("🚀 Iniciando análise geográfica via CLI")
    logger.info("==============================================")
    logger.info(f"📂 input              = {args.input}")
    logger.info(f"🔢 k                  = {k}")
    logger.info(f"📅 horizonte (meses)  = {horizon}")
    logger.info(f"📏 raio (km)          = {radius}")
    logger.info(f"🧬 estratégia         = {args.strategy}")
    logger.info(f"🗺️ regiões            = {args.regions}")
    logger.info(f"🔧 max_iter           = {args.max_iter}")
    logger.info(f"🧵 paralelo           = {not args.sequencial}")

    # ============================================================
    # Execução
    # ============================================================
    use_case = GeoAnalysisUseCase(
        JsonFileDataSource(args.input),
        parallel=not args.sequencial,
        max_iter=args.max_iter,
    )
    resultado = use_case.executar(
        k=k,
        horizon=horizon,
        radius_km=radius,
        strategy=args.strategy,
        regions=args.regions,
    )

    JSONExporter.export(resultado, output)

    if args.csv_dir:
        if resultado.clustering:
            CSVExporter.export(clusters_dataframe(resultado.clustering), args.csv_dir, "geo_clusters")
        if resultado.forecast:
            CSVExporter.export(forecasts_dataframe(resultado.forecast), args.csv_dir, "geo_previsoes")
        if resultado.coverage:
            CSVExporter.export(uncovered_dataframe(resultado.coverage), args.csv_dir, "geo_descobertos")

    print("\n=== RESULTADO FINAL ===")
    if resultado.clustering:
        m = resultado.clustering.metrics
        print(f"clusters: {m.total_clusters} | silhouette: {m.silhouette_score:.3f} | alto potencial: {m.high_potential_areas}")
    if resultado.forecast:
        print(f"crescimento geral: {resultado.forecast.overall_growth}% | confiança: {resultado.forecast.confidence:.2f}")
    if resultado.coverage:
        s = resultado.coverage.coverage_stats
        print(f"cobertura: {s.coverage_percentage}% | descobertos: {s.uncovered_customers}")
    for motor, erro in resultado.errors.items():
        print(f"❌ {motor}: {erro}")
    print(f"json: {output}")


if __name__ == "__main__":
    main()

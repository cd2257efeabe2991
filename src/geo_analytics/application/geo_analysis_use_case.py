# ============================================================
# 📦 src/geo_analytics/application/geo_analysis_use_case.py
# ============================================================

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Optional

from loguru import logger

from geo_analytics.config import ANALYTICS_PARAMS
from geo_analytics.domain.coverage_analysis import analyze_coverage
from geo_analytics.domain.customer_clustering import cluster_customers
from geo_analytics.domain.regions import regions_from_grid, regions_from_service_points
from geo_analytics.domain.results import GeoAnalysisResult
from geo_analytics.domain.sales_forecasting import forecast_sales
from geo_analytics.infrastructure.data_loader import GeoDataSource
from geo_analytics.infrastructure.logging.run_logger import snapshot_params

MODOS_REGIAO = ("service_points", "grid")


class GeoAnalysisUseCase:
    """
    Orquestra a análise do painel:
      1️⃣ lê clientes, pontos de serviço e estatísticas mensais do colaborador
      2️⃣ executa clusterização, previsão e cobertura (independentes entre si)
      3️⃣ compõe o resultado; falha de um motor não descarta os demais
    Sem estado entre chamadas: cada execução relê os dados.
    """

    def __init__(
        self,
        data_source: GeoDataSource,
        parallel: Optional[bool] = None,
        max_iter: Optional[int] = None,
        max_seconds: Optional[float] = None,
    ):
        self.data_source = data_source
        self.parallel = ANALYTICS_PARAMS["parallel_engines"] if parallel is None else parallel
        self.max_iter = max_iter or ANALYTICS_PARAMS["kmeans_max_iter"]
        self.max_seconds = max_seconds if max_seconds is not None else ANALYTICS_PARAMS["kmeans_max_seconds"]

    def executar(
        self,
        k: int,
        horizon: int,
        radius_km: float,
        strategy: str = "behavioral",
        regions: str = "service_points",
        raise_on_error: bool = False,
    ) -> GeoAnalysisResult:

        if regions not in MODOS_REGIAO:
            raise ValueError(f"Modo de região inválido: '{regions}' (opções: {', '.join(MODOS_REGIAO)})")

        params = snapshot_params(
            k=k,
            horizon=horizon,
            radius_km=radius_km,
            strategy=strategy,
            regions=regions,
            parallel=self.parallel,
        )
        logger.info(f"🏁 Iniciando análise geográfica | {params}")
        inicio = time.time()

        # ============================================================
        # 1) Colaboradores (todo I/O antes dos motores)
        # ============================================================
        customers = self.data_source.carregar_clientes()
        service_points = self.data_source.carregar_pontos_servico()
        monthly_stats = self.data_source.carregar_estatisticas_mensais()

        logger.info(
            f"📦 Dados carregados | clientes={len(customers)} | pontos={len(service_points)} | "
            f"estatísticas={len(monthly_stats)}"
        )

        if regions == "grid":
            lista_regioes = regions_from_grid(customers)
        else:
            lista_regioes = regions_from_service_points(service_points, customers)

        # ============================================================
        # 2) Motores
        # ============================================================
        tarefas: Dict[str, Callable] = {
            "clustering": lambda: cluster_customers(
                customers,
                k,
                monthly_stats=monthly_stats,
                service_points=service_points,
                strategy=strategy,
                max_iter=self.max_iter,
                max_seconds=self.max_seconds,
            ),
            "forecast": lambda: forecast_sales(
                lista_regioes,
                monthly_stats,
                horizon,
                customers=customers,
                service_points=service_points,
            ),
            "coverage": lambda: analyze_coverage(customers, service_points, radius_km),
        }

        resultado = GeoAnalysisResult(params=params)

        if self.parallel:
            with ThreadPoolExecutor(max_workers=len(tarefas)) as executor:
                futuros = {nome: executor.submit(fn) for nome, fn in tarefas.items()}
                for nome, futuro in futuros.items():
                    self._coletar(resultado, nome, futuro.result, raise_on_error)
        else:
            for nome, fn in tarefas.items():
                self._coletar(resultado, nome, fn, raise_on_error)

        # ============================================================
        # 3) Diagnóstico
        # ============================================================
        duracao = time.time() - inicio
        if resultado.errors:
            logger.warning(f"⚠️ Análise concluída com falhas em {list(resultado.errors)} ({duracao:.2f}s)")
        else:
            logger.success(f"✅ Análise geográfica concluída em {duracao:.2f}s")

        return resultado

    @staticmethod
    def _coletar(resultado: GeoAnalysisResult, nome: str, obter: Callable, raise_on_error: bool):
        try:
            setattr(resultado, nome, obter())
        except Exception as e:
            logger.exception(f"❌ Erro no motor '{nome}': {e}")
            if raise_on_error:
                raise
            resultado.errors[nome] = str(e)

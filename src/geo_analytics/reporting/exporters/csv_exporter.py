# ============================================================
# 📦 src/geo_analytics/reporting/exporters/csv_exporter.py
# ============================================================

import os
from datetime import datetime

import pandas as pd
from loguru import logger

from geo_analytics.domain.results import ClusterResult, ForecastResult, RadiusAnalysisResult


class CSVExporter:
    """
    Exporta DataFrames em CSV (';', utf-8-sig) compatível com Excel.
    """

    @staticmethod
    def export(df: pd.DataFrame, output_dir: str = "output/reports", nome_base: str = "geo_analise"):
        if df.empty:
            logger.warning(f"⚠️ DataFrame vazio ({nome_base}) — nada a exportar.")
            return None

        os.makedirs(output_dir, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = os.path.join(output_dir, f"{nome_base}_{timestamp}.csv")

        num_cols = df.select_dtypes(include=["float"]).columns
        df[num_cols] = df[num_cols].round(4)

        df.to_csv(output_path, index=False, sep=";", encoding="utf-8-sig")

        logger.success(f"✅ Relatório CSV salvo em {output_path}")
        return output_path


# ============================================================
# 📊 Tabelas dos resultados
# ============================================================
def clusters_dataframe(result: ClusterResult) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "cluster_id": c.id,
                "centro_lat": c.centroid.lat,
                "centro_lng": c.centroid.lng,
                "clientes": c.customer_count,
                "receita_total": c.total_revenue,
                "lucro_medio": c.avg_monthly_profit,
                "categoria_dominante": c.dominant_business_type,
                "potencial": c.potential_level,
                "taxa_ativos": c.active_ratio,
                "raio_km": c.radius_km,
                "densidade": c.density,
                "caracteristicas": ", ".join(c.characteristics),
            }
            for c in result.clusters
        ]
    )


def forecasts_dataframe(result: ForecastResult) -> pd.DataFrame:
    linhas = []
    for f in result.region_forecasts:
        for p in f.monthly_predictions:
            linhas.append(
                {
                    "regiao_id": f.region_id,
                    "regiao": f.region_name,
                    "mes": p.month,
                    "previsto": p.value,
                    "venda_atual": f.current_sales,
                    "crescimento_pct": f.growth_rate,
                    "tendencia": f.trend,
                    "confianca": f.confidence,
                }
            )
    return pd.DataFrame(linhas)


def uncovered_dataframe(result: RadiusAnalysisResult) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "cliente_id": u.customer_id,
                "loja": u.shop_name,
                "lat": u.location.lat,
                "lng": u.location.lng,
                "lucro_mensal": u.monthly_profit,
                "ponto_mais_proximo": u.nearest_service_point.name if u.nearest_service_point else None,
                "distancia_km": u.nearest_service_point.distance if u.nearest_service_point else None,
            }
            for u in result.uncovered_customers
        ]
    )

# ============================================================
# 📦 src/geo_analytics/domain/sales_forecasting.py
# ============================================================

from typing import Dict, Iterable, List, Tuple

import numpy as np
import pandas as pd
from loguru import logger

from .entities import CustomerLocation, MonthlyStat, Region, ServicePoint
from .expansion_planner import suggest_expansion
from .geo_primitives import filtrar_coordenadas_validas
from .regression import linear_regression
from .results import ForecastResult, MonthlyPrediction, RegionForecast

Periodo = Tuple[int, int]

# 🔒 Política de tendência e confiança
LIMIAR_TENDENCIA = 0.05          # ±5% da média da própria série
CONFIANCA_MIN = 0.6
CONFIANCA_MAX = 0.95
CONFIANCA_REDUZIDA = 0.5         # série com menos de 2 pontos
PESO_R2 = 0.3
PESO_PONTOS = 0.05
PONTOS_REFERENCIA = 12

COLUNAS_STATS = ["customer_id", "branch_id", "year", "month", "total_transactions", "total_amount"]


# ============================================================
# 📅 Séries mensais
# ============================================================
def stats_dataframe(monthly_stats: Iterable[MonthlyStat]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "customer_id": s.customer_id,
                "branch_id": s.branch_id,
                "year": s.year,
                "month": s.month,
                "total_transactions": s.total_transactions,
                "total_amount": s.total_amount,
            }
            for s in monthly_stats
        ],
        columns=COLUNAS_STATS,
    )


def build_monthly_series(df: pd.DataFrame, region: Region) -> List[Tuple[Periodo, float]]:
    """
    Receita mensal da região em ordem cronológica.
    Uma linha entra se a agência OU o cliente pertence à região (conta uma vez).
    """
    if df.empty:
        return []

    mask = df["branch_id"].isin(region.service_point_ids) | df["customer_id"].isin(region.customer_ids)
    serie = df[mask].groupby(["year", "month"], sort=True)["total_amount"].sum()

    return [((int(ano), int(mes)), float(valor)) for (ano, mes), valor in serie.items()]


def proximos_periodos(ultimo: Periodo, n: int) -> List[str]:
    ano, mes = ultimo
    rotulos = []
    for _ in range(n):
        mes += 1
        if mes > 12:
            ano, mes = ano + 1, 1
        rotulos.append(f"{ano:04d}-{mes:02d}")
    return rotulos


# ============================================================
# 📐 Tendência e confiança
# ============================================================
def classify_trend(variacao: float, media_serie: float) -> str:
    """Limiar proporcional à média da série, não um corte absoluto."""
    limiar = LIMIAR_TENDENCIA * abs(media_serie)
    if variacao > limiar:
        return "growing"
    if variacao < -limiar:
        return "declining"
    return "stable"


def region_confidence(r2: float, n_pontos: int) -> float:
    if n_pontos < 2:
        return CONFIANCA_REDUZIDA
    conf = CONFIANCA_MIN + PESO_R2 * r2 + PESO_PONTOS * min(n_pontos / PONTOS_REFERENCIA, 1.0)
    return round(min(CONFIANCA_MAX, max(CONFIANCA_MIN, conf)), 4)


def overall_confidence(regioes_ajustadas: int) -> float:
    if regioes_ajustadas == 0:
        return CONFIANCA_REDUZIDA
    return round(min(CONFIANCA_MAX, 0.7 + (regioes_ajustadas / 20) * 0.25), 4)


# ============================================================
# 📈 Previsão de uma região
# ============================================================
def forecast_region(
    region: Region,
    serie: List[Tuple[Periodo, float]],
    horizon_months: int,
    active_customers: int = 0,
) -> RegionForecast:
    valores = [v for _, v in serie]
    n = len(valores)
    atual = valores[-1]
    rotulos = proximos_periodos(serie[-1][0], horizon_months)

    # Menos de 2 pontos: sem regressão, valor atual constante
    if n < 2:
        projetado = round(max(0.0, atual), 2)
        return RegionForecast(
            region_id=region.id,
            region_name=region.name,
            current_sales=atual,
            forecasted_sales=projetado,
            growth_rate=0.0,
            trend="stable",
            monthly_predictions=[MonthlyPrediction(month=m, value=projetado) for m in rotulos],
            new_customer_potential=round(active_customers * 0.05),
            confidence=CONFIANCA_REDUZIDA,
            data_points=n,
        )

    fit = linear_regression(list(range(n)), valores)
    previsoes = [max(0.0, fit.predict(n - 1 + i)) for i in range(1, horizon_months + 1)]
    previsto = previsoes[-1]

    growth = (previsto - atual) / atual * 100 if atual > 0 else 0.0

    return RegionForecast(
        region_id=region.id,
        region_name=region.name,
        current_sales=atual,
        forecasted_sales=round(previsto, 2),
        growth_rate=round(growth, 1),
        trend=classify_trend(previsto - atual, float(np.mean(valores))),
        monthly_predictions=[MonthlyPrediction(month=m, value=round(v, 2)) for m, v in zip(rotulos, previsoes)],
        new_customer_potential=round(active_customers * (0.1 if growth > 0 else 0.05) * (1 + fit.r2)),
        confidence=region_confidence(fit.r2, n),
        r2=round(fit.r2, 4),
        slope=fit.slope,
        data_points=n,
    )


# ============================================================
# 🚀 Previsão de vendas + sugestões de expansão
# ============================================================
def forecast_sales(
    regions: Iterable[Region],
    monthly_stats: Iterable[MonthlyStat],
    horizon_months: int,
    customers: Iterable[CustomerLocation] = (),
    service_points: Iterable[ServicePoint] = (),
) -> ForecastResult:
    """
    Regressão linear por região sobre a receita mensal, projeção de
    `horizon_months` meses, tendência, confiança e locais de expansão.
    Regiões sem nenhum mês observado não são reportadas.
    """
    horizon_months = max(1, int(horizon_months))
    validos = filtrar_coordenadas_validas(customers)
    clientes: Dict[str, CustomerLocation] = {c.id: c for c in validos}
    df = stats_dataframe(monthly_stats)

    previsoes: List[RegionForecast] = []
    for regiao in regions:
        serie = build_monthly_series(df, regiao)
        if not serie:
            logger.debug(f"📭 Região {regiao.id} sem histórico mensal — ignorada.")
            continue

        ativos = sum(
            1 for cid in regiao.customer_ids
            if cid in clientes and clientes[cid].status == "active"
        )
        previsoes.append(forecast_region(regiao, serie, horizon_months, ativos))

    ajustadas = sum(1 for p in previsoes if p.data_points >= 2)
    overall_growth = round(float(np.mean([p.growth_rate for p in previsoes])), 1) if previsoes else 0.0

    sugestoes = suggest_expansion(validos, service_points)

    logger.info(
        f"📈 Previsão concluída | regiões={len(previsoes)} (ajustadas={ajustadas}) | "
        f"horizonte={horizon_months} meses | crescimento médio={overall_growth}% | sugestões={len(sugestoes)}"
    )

    return ForecastResult(
        region_forecasts=previsoes,
        expansion_suggestions=sugestoes,
        overall_growth=overall_growth,
        confidence=overall_confidence(ajustadas),
    )

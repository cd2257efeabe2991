# ============================================================
# 📦 src/geo_analytics/domain/regression.py
# ============================================================

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .results import ForecastAccuracy


@dataclass(frozen=True)
class LinearFit:
    slope: float
    intercept: float
    r2: float

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept


def linear_regression(x: Sequence[float], y: Sequence[float]) -> LinearFit:
    """
    Mínimos quadrados ordinários y = slope * x + intercept.
    R² = 0 quando a variância de y é zero; nunca NaN/Infinity.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    n = len(y)

    if n < 2:
        return LinearFit(slope=0.0, intercept=float(y[0]) if n else 0.0, r2=0.0)

    x_med, y_med = x.mean(), y.mean()
    sxx = float(((x - x_med) ** 2).sum())
    if sxx == 0:
        return LinearFit(slope=0.0, intercept=float(y_med), r2=0.0)

    slope = float(((x - x_med) * (y - y_med)).sum() / sxx)
    intercept = float(y_med - slope * x_med)

    ss_res = float(((y - (slope * x + intercept)) ** 2).sum())
    ss_tot = float(((y - y_med) ** 2).sum())
    r2 = 0.0 if ss_tot == 0 else max(0.0, 1.0 - ss_res / ss_tot)

    return LinearFit(slope=slope, intercept=intercept, r2=r2)


def forecast_accuracy(actual: Sequence[float], predicted: Sequence[float]) -> ForecastAccuracy:
    """
    MAE, MAPE (%), RMSE e acurácia (%) para backtest.
    Termos com valor real zero contribuem 0 no MAPE.
    """
    if len(actual) != len(predicted) or len(actual) == 0:
        return ForecastAccuracy(mae=0.0, mape=0.0, rmse=0.0, accuracy=0.0)

    a = np.asarray(actual, dtype=np.float64)
    p = np.asarray(predicted, dtype=np.float64)
    erros = a - p

    mae = float(np.mean(np.abs(erros)))
    rmse = math.sqrt(float(np.mean(erros ** 2)))

    nao_zero = a != 0
    pct = np.zeros_like(a)
    pct[nao_zero] = np.abs(erros[nao_zero] / a[nao_zero])
    mape = float(np.mean(pct) * 100)

    return ForecastAccuracy(
        mae=mae,
        mape=mape,
        rmse=rmse,
        accuracy=max(0.0, 1 - mape / 100) * 100,
    )

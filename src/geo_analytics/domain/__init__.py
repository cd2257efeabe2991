# ============================================================
# 📦 src/geo_analytics/domain/__init__.py
# ============================================================

from .entities import CustomerLocation, MonthlyStat, Region, ServicePoint
from .haversine_utils import haversine_distance
from .geo_primitives import filtrar_coordenadas_validas, grid_bin, normalize_features
from .customer_clustering import cluster_customers
from .sales_forecasting import forecast_sales
from .coverage_analysis import analyze_coverage
from .regions import regions_from_grid, regions_from_service_points

__all__ = [
    "CustomerLocation",
    "MonthlyStat",
    "Region",
    "ServicePoint",
    "haversine_distance",
    "filtrar_coordenadas_validas",
    "grid_bin",
    "normalize_features",
    "cluster_customers",
    "forecast_sales",
    "analyze_coverage",
    "regions_from_grid",
    "regions_from_service_points",
]

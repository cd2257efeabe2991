# ==========================================================
# 📦 src/geo_analytics/domain/results.py
# ==========================================================
# Objetos de saída serializáveis (dataclasses.asdict / FastAPI).

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Literal

PotentialLevel = Literal["high", "medium", "low"]
Trend = Literal["growing", "stable", "declining"]


@dataclass
class GeoPoint:
    lat: float
    lng: float


# ==========================================================
# 🧩 Clusterização
# ==========================================================
@dataclass
class ClusterAssignment:
    customer_id: str
    cluster_id: int


@dataclass
class Cluster:
    id: int
    centroid: GeoPoint
    customer_count: int
    total_revenue: float
    avg_monthly_profit: float
    dominant_business_type: str
    potential_level: PotentialLevel
    active_ratio: float
    radius_km: float
    density: float
    characteristics: List[str] = field(default_factory=list)
    customer_ids: List[str] = field(default_factory=list)


@dataclass
class ClusterMetrics:
    total_clusters: int = 0
    silhouette_score: float = 0.0
    inertia: float = 0.0
    high_potential_areas: int = 0
    low_potential_areas: int = 0
    iterations: int = 0
    converged: bool = False


@dataclass
class ClusterResult:
    clusters: List[Cluster] = field(default_factory=list)
    assignments: List[ClusterAssignment] = field(default_factory=list)
    metrics: ClusterMetrics = field(default_factory=ClusterMetrics)


# ==========================================================
# 📈 Previsão
# ==========================================================
@dataclass
class MonthlyPrediction:
    month: str
    value: float


@dataclass
class RegionForecast:
    region_id: str
    region_name: str
    current_sales: float
    forecasted_sales: float
    growth_rate: float
    trend: Trend
    monthly_predictions: List[MonthlyPrediction]
    new_customer_potential: int
    confidence: float
    r2: float = 0.0
    slope: float = 0.0
    data_points: int = 0


@dataclass
class ExpansionSuggestion:
    location: GeoPoint
    area_name: str
    potential_score: float
    estimated_revenue: float
    nearby_customers: int
    distance_to_service_km: float
    reasoning: List[str] = field(default_factory=list)


@dataclass
class ForecastResult:
    region_forecasts: List[RegionForecast] = field(default_factory=list)
    expansion_suggestions: List[ExpansionSuggestion] = field(default_factory=list)
    overall_growth: float = 0.0
    confidence: float = 0.5


@dataclass
class ForecastAccuracy:
    mae: float
    mape: float
    rmse: float
    accuracy: float


# ==========================================================
# 📡 Cobertura
# ==========================================================
@dataclass
class DirectionalGap:
    direction: str
    avg_distance_km: float
    potential_customers: int


@dataclass
class ServicePointCoverage:
    id: str
    name: str
    type: str
    location: GeoPoint
    coverage_radius: float
    customers_in_radius: int
    total_revenue: float
    coverage_efficiency: float
    gaps: List[DirectionalGap] = field(default_factory=list)


@dataclass
class NearestServicePoint:
    id: str
    name: str
    distance: float


@dataclass
class UncoveredCustomer:
    customer_id: str
    shop_name: str
    location: GeoPoint
    nearest_service_point: Optional[NearestServicePoint]
    monthly_profit: float


@dataclass
class CoverageStats:
    total_customers: int = 0
    covered_customers: int = 0
    uncovered_customers: int = 0
    coverage_percentage: float = 0.0
    avg_distance_to_service: float = 0.0
    max_distance_to_service: float = 0.0


@dataclass
class SuggestedLocation:
    location: GeoPoint
    score: float
    potential_customers: int
    estimated_revenue: float
    reasoning: str


@dataclass
class OptimalSite:
    location: GeoPoint
    potential_coverage: int
    total_revenue: float
    priority: PotentialLevel
    reason: str


@dataclass
class RadiusAnalysisResult:
    service_points: List[ServicePointCoverage] = field(default_factory=list)
    uncovered_customers: List[UncoveredCustomer] = field(default_factory=list)
    coverage_stats: CoverageStats = field(default_factory=CoverageStats)
    suggested_locations: List[SuggestedLocation] = field(default_factory=list)
    optimal_sites: List[OptimalSite] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


# ==========================================================
# 🧠 Resultado combinado do painel
# ==========================================================
@dataclass
class GeoAnalysisResult:
    clustering: Optional[ClusterResult] = None
    forecast: Optional[ForecastResult] = None
    coverage: Optional[RadiusAnalysisResult] = None
    params: Dict[str, object] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

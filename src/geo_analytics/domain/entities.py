# ==========================================================
# 📦 src/geo_analytics/domain/entities.py
# ==========================================================

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Literal

ServicePointType = Literal["branch", "banking_unit"]

STATUS_VALIDOS = ("active", "normal", "marketing", "loss", "collected")


def parse_coordenada(valor, limite: float) -> Optional[float]:
    """
    Converte lat/lng vindos do colaborador (float, string decimal ou vazio).
    Valores ausentes, não numéricos, não finitos ou fora de [-limite, limite] viram None.
    """
    if valor is None:
        return None
    if isinstance(valor, str):
        valor = valor.strip()
        if not valor:
            return None
    try:
        valor = float(valor)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(valor) or abs(valor) > limite:
        return None
    return valor


def _parse_datetime(valor) -> Optional[datetime]:
    if valor is None or isinstance(valor, datetime):
        return valor
    try:
        return datetime.fromisoformat(str(valor).replace("Z", "+00:00"))
    except ValueError:
        return None


# ==========================================================
# 🏪 Cliente (dispositivo POS geolocalizado)
# ==========================================================
@dataclass
class CustomerLocation:
    """Cliente com POS. Somente leitura, recarregado a cada requisição."""
    id: str
    shop_name: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    monthly_profit: float = 0.0
    business_type: str = ""
    status: str = "active"
    created_at: Optional[datetime] = None

    # 🔹 Vínculo operacional (opcional)
    branch_id: Optional[str] = None
    banking_unit_id: Optional[str] = None

    def __post_init__(self):
        self.id = str(self.id)
        self.latitude = parse_coordenada(self.latitude, 90.0)
        self.longitude = parse_coordenada(self.longitude, 180.0)
        try:
            self.monthly_profit = float(self.monthly_profit or 0)
        except (TypeError, ValueError):
            self.monthly_profit = 0.0
        self.business_type = (self.business_type or "").strip()
        self.status = (self.status or "").strip().lower()
        self.created_at = _parse_datetime(self.created_at)

    @property
    def has_valid_coordinate(self) -> bool:
        return self.latitude is not None and self.longitude is not None


# ==========================================================
# 🏦 Ponto de serviço (agência ou unidade bancária)
# ==========================================================
@dataclass
class ServicePoint:
    id: str
    name: str
    type: ServicePointType = "branch"
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    coverage_radius_km: Optional[float] = None   # None → raio da requisição

    def __post_init__(self):
        self.id = str(self.id)
        self.latitude = parse_coordenada(self.latitude, 90.0)
        self.longitude = parse_coordenada(self.longitude, 180.0)
        if self.coverage_radius_km is not None:
            try:
                raio = float(self.coverage_radius_km)
                self.coverage_radius_km = raio if raio > 0 else None
            except (TypeError, ValueError):
                self.coverage_radius_km = None

    @property
    def has_valid_coordinate(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def effective_radius(self, default_radius_km: float) -> float:
        return self.coverage_radius_km or default_radius_km


# ==========================================================
# 📅 Estatística mensal (cliente / agência)
# ==========================================================
@dataclass
class MonthlyStat:
    year: int
    month: int   # 1-12
    customer_id: Optional[str] = None
    branch_id: Optional[str] = None
    total_transactions: int = 0
    total_amount: float = 0.0

    def __post_init__(self):
        self.year = int(self.year)
        self.month = int(self.month)
        self.customer_id = str(self.customer_id) if self.customer_id not in (None, "") else None
        self.branch_id = str(self.branch_id) if self.branch_id not in (None, "") else None
        self.total_transactions = int(self.total_transactions or 0)
        self.total_amount = float(self.total_amount or 0)

    @property
    def periodo(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


# ==========================================================
# 🗺️ Região de previsão (área de captação ou célula da grade)
# ==========================================================
@dataclass
class Region:
    id: str
    name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    service_point_ids: List[str] = field(default_factory=list)
    customer_ids: List[str] = field(default_factory=list)

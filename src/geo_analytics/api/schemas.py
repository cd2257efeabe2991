# ============================================================
# 📦 src/geo_analytics/api/schemas.py
# ============================================================

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

Coordenada = Optional[Union[float, str]]


class CustomerSchema(BaseModel):
    id: str
    shop_name: str = ""
    latitude: Coordenada = None
    longitude: Coordenada = None
    monthly_profit: float = 0
    business_type: str = ""
    status: str = "active"
    created_at: Optional[str] = None
    branch_id: Optional[str] = None
    banking_unit_id: Optional[str] = None


class ServicePointSchema(BaseModel):
    id: str
    name: str
    type: Literal["branch", "banking_unit"] = "branch"
    latitude: Coordenada = None
    longitude: Coordenada = None
    coverage_radius_km: Optional[float] = Field(default=None, gt=0)


class MonthlyStatSchema(BaseModel):
    customer_id: Optional[str] = None
    branch_id: Optional[str] = None
    year: int
    month: int = Field(ge=1, le=12)
    total_transactions: int = 0
    total_amount: float = 0


class GeoPayloadSchema(BaseModel):
    customers: List[CustomerSchema] = Field(default_factory=list)
    service_points: List[ServicePointSchema] = Field(default_factory=list)
    monthly_stats: List[MonthlyStatSchema] = Field(default_factory=list)

# ============================================================
# 📦 src/geo_analytics/infrastructure/data_loader.py
# ============================================================
# Adaptadores dos colaboradores: registros crus (dict / DataFrame / JSON)
# → entidades do domínio. Todo I/O termina antes de chamar os motores.

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Protocol

import pandas as pd
from loguru import logger

from geo_analytics.domain.entities import CustomerLocation, MonthlyStat, ServicePoint

# camelCase (painel) → snake_case (domínio)
ALIASES = {
    "shopName": "shop_name",
    "monthlyProfit": "monthly_profit",
    "businessType": "business_type",
    "createdAt": "created_at",
    "branchId": "branch_id",
    "bankingUnitId": "banking_unit_id",
    "customerId": "customer_id",
    "totalTransactions": "total_transactions",
    "totalAmount": "total_amount",
    "coverageRadius": "coverage_radius_km",
    "coverage_radius": "coverage_radius_km",
    "lat": "latitude",
    "lng": "longitude",
}


def _normalizar_chaves(registro: Dict[str, Any], campos: Iterable[str]) -> Dict[str, Any]:
    campos = set(campos)
    saida = {}
    for chave, valor in registro.items():
        chave = ALIASES.get(chave, chave)
        if chave in campos:
            if isinstance(valor, float) and pd.isna(valor):
                valor = None
            saida[chave] = valor
    return saida


def _registros(dados) -> List[Dict[str, Any]]:
    if dados is None:
        return []
    if isinstance(dados, pd.DataFrame):
        return dados.to_dict(orient="records")
    return list(dados)


def parse_customers(dados) -> List[CustomerLocation]:
    campos = CustomerLocation.__dataclass_fields__
    return [CustomerLocation(**_normalizar_chaves(r, campos)) for r in _registros(dados)]


def parse_service_points(dados, tipo_padrao: str = "branch") -> List[ServicePoint]:
    campos = ServicePoint.__dataclass_fields__
    pontos = []
    for r in _registros(dados):
        registro = _normalizar_chaves(r, campos)
        registro.setdefault("type", tipo_padrao)
        if registro["type"] in ("bankingUnit", "banking-unit"):
            registro["type"] = "banking_unit"
        pontos.append(ServicePoint(**registro))
    return pontos


def parse_monthly_stats(dados) -> List[MonthlyStat]:
    campos = MonthlyStat.__dataclass_fields__
    return [MonthlyStat(**_normalizar_chaves(r, campos)) for r in _registros(dados)]


# ============================================================
# 🔌 Porta de dados do orquestrador
# ============================================================
class GeoDataSource(Protocol):
    def carregar_clientes(self) -> List[CustomerLocation]: ...

    def carregar_pontos_servico(self) -> List[ServicePoint]: ...

    def carregar_estatisticas_mensais(self) -> List[MonthlyStat]: ...


class InMemoryDataSource:
    """Dados já validados e unidos pela camada HTTP."""

    def __init__(self, customers=None, branches=None, banking_units=None, monthly_stats=None, service_points=None):
        self._customers = customers
        self._service_points = service_points
        self._branches = branches
        self._banking_units = banking_units
        self._monthly_stats = monthly_stats

    def carregar_clientes(self) -> List[CustomerLocation]:
        return parse_customers(self._customers)

    def carregar_pontos_servico(self) -> List[ServicePoint]:
        return (
            parse_service_points(self._service_points)
            + parse_service_points(self._branches, tipo_padrao="branch")
            + parse_service_points(self._banking_units, tipo_padrao="banking_unit")
        )

    def carregar_estatisticas_mensais(self) -> List[MonthlyStat]:
        return parse_monthly_stats(self._monthly_stats)


class JsonFileDataSource(InMemoryDataSource):
    """
    Arquivo JSON com as chaves: customers, service_points | branches | banking_units,
    monthly_stats (ou os equivalentes camelCase bankingUnits / monthlyStats / servicePoints).
    """

    def __init__(self, caminho: str):
        caminho = Path(caminho)
        if not caminho.exists():
            raise FileNotFoundError(f"❌ Arquivo de entrada não encontrado: {caminho}")

        with open(caminho, encoding="utf-8") as f:
            dados = json.load(f)

        super().__init__(
            customers=dados.get("customers"),
            service_points=dados.get("service_points", dados.get("servicePoints")),
            branches=dados.get("branches"),
            banking_units=dados.get("banking_units", dados.get("bankingUnits")),
            monthly_stats=dados.get("monthly_stats", dados.get("monthlyStats")),
        )
        logger.info(f"📂 Entrada carregada de {caminho}")

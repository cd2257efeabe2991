import json

import pandas as pd
import pytest

from geo_analytics.infrastructure.data_loader import (
    InMemoryDataSource,
    JsonFileDataSource,
    parse_customers,
    parse_monthly_stats,
    parse_service_points,
)


def test_chaves_camel_case_do_painel():
    clientes = parse_customers([
        {
            "id": 7,
            "shopName": "Padaria",
            "latitude": "35.7",
            "longitude": "51.4",
            "monthlyProfit": "2500000",
            "businessType": "bakery",
            "status": "Active",
            "branchId": "b1",
            "campoDesconhecido": 1,
        }
    ])
    c = clientes[0]
    assert c.id == "7"
    assert c.shop_name == "Padaria"
    assert c.latitude == 35.7
    assert c.monthly_profit == 2_500_000
    assert c.status == "active"
    assert c.branch_id == "b1"


def test_dataframe_com_nan_vira_coordenada_invalida():
    df = pd.DataFrame([{"id": "a", "latitude": float("nan"), "longitude": 51.4}])
    assert not parse_customers(df)[0].has_valid_coordinate


def test_tipo_do_ponto_de_servico():
    pontos = parse_service_points([{"id": "u1", "name": "Unidade", "type": "bankingUnit", "lat": 35.7, "lng": 51.4}])
    assert pontos[0].type == "banking_unit"
    assert pontos[0].latitude == 35.7


def test_estatisticas_mensais():
    stats = parse_monthly_stats([{"year": "2024", "month": 3, "customerId": "c1", "totalAmount": "150.5"}])
    assert stats[0].periodo == "2024-03"
    assert stats[0].total_amount == 150.5


def test_fonte_em_memoria_une_agencias_e_unidades():
    fonte = InMemoryDataSource(
        branches=[{"id": "b1", "name": "Agência"}],
        banking_units=[{"id": "u1", "name": "Unidade"}],
    )
    tipos = [(sp.id, sp.type) for sp in fonte.carregar_pontos_servico()]
    assert tipos == [("b1", "branch"), ("u1", "banking_unit")]
    assert fonte.carregar_clientes() == []


def test_arquivo_json(tmp_path):
    caminho = tmp_path / "entrada.json"
    caminho.write_text(
        json.dumps({
            "customers": [{"id": "c1", "latitude": 35.7, "longitude": 51.4}],
            "bankingUnits": [{"id": "u1", "name": "Unidade", "latitude": 35.7, "longitude": 51.4}],
            "monthlyStats": [{"year": 2024, "month": 1, "customerId": "c1", "totalAmount": 10}],
        }),
        encoding="utf-8",
    )
    fonte = JsonFileDataSource(str(caminho))
    assert len(fonte.carregar_clientes()) == 1
    assert fonte.carregar_pontos_servico()[0].type == "banking_unit"
    assert fonte.carregar_estatisticas_mensais()[0].customer_id == "c1"


def test_arquivo_inexistente(tmp_path):
    with pytest.raises(FileNotFoundError):
        JsonFileDataSource(str(tmp_path / "nao_existe.json"))

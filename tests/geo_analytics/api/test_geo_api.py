import pytest
from fastapi import FastAPI, Response
from fastapi.testclient import TestClient

from geo_analytics.api.geo_api import app, sanitize_json_response


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def payload():
    return {
        "customers": [
            {"id": "c1", "shop_name": "Padaria", "latitude": 35.701, "longitude": 51.401,
             "monthly_profit": 6_000_000, "business_type": "bakery", "status": "active", "branch_id": "b1"},
            {"id": "c2", "shop_name": "Café", "latitude": "35.702", "longitude": "51.402",
             "monthly_profit": 500_000, "business_type": "cafe", "status": "loss", "branch_id": "b1"},
            {"id": "c3", "shop_name": "Sem GPS", "latitude": None, "longitude": None},
            {"id": "c4", "shop_name": "Longe", "latitude": 36.5, "longitude": 51.4, "monthly_profit": 100},
        ],
        "service_points": [
            {"id": "b1", "name": "Agência Central", "type": "branch", "latitude": 35.7, "longitude": 51.4},
        ],
        "monthly_stats": [
            {"year": 2024, "month": m, "branch_id": "b1", "total_amount": 10 + 2 * m} for m in range(1, 5)
        ],
    }


def test_health(client):
    r = client.get("/geo/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_clusters(client, payload):
    r = client.post("/geo/clusters", params={"k": 2}, json=payload)
    assert r.status_code == 200
    corpo = r.json()
    assert corpo["metrics"]["total_clusters"] == 2
    assert {a["customer_id"] for a in corpo["assignments"]} == {"c1", "c2", "c4"}


def test_k_invalido(client, payload):
    assert client.post("/geo/clusters", params={"k": 0}, json=payload).status_code == 422


def test_estrategia_invalida(client, payload):
    assert client.post("/geo/clusters", params={"strategy": "x"}, json=payload).status_code == 422


def test_forecast(client, payload):
    r = client.post("/geo/forecast", params={"horizon": 2}, json=payload)
    assert r.status_code == 200
    regiao = r.json()["region_forecasts"][0]
    assert regiao["trend"] == "growing"
    assert [p["month"] for p in regiao["monthly_predictions"]] == ["2024-05", "2024-06"]


def test_coverage(client, payload):
    r = client.post("/geo/coverage", params={"radius": 5}, json=payload)
    assert r.status_code == 200
    corpo = r.json()
    assert corpo["coverage_stats"]["total_customers"] == 3
    assert [u["customer_id"] for u in corpo["uncovered_customers"]] == ["c4"]


def test_raio_invalido(client, payload):
    assert client.post("/geo/coverage", params={"radius": 0}, json=payload).status_code == 422


def test_analise_completa(client, payload):
    r = client.post("/geo/analysis", params={"k": 2, "horizon": 3, "radius": 5}, json=payload)
    assert r.status_code == 200
    corpo = r.json()
    assert corpo["errors"] == {}
    assert corpo["clustering"]["metrics"]["total_clusters"] == 2
    assert corpo["coverage"]["coverage_stats"]["coverage_percentage"] == pytest.approx(66.7)


@pytest.fixture
def client_bruto():
    """App mínima com o mesmo middleware e respostas JSON montadas à mão."""
    bruto = FastAPI()
    bruto.middleware("http")(sanitize_json_response)

    @bruto.get("/nan")
    def com_nan():
        return Response(content=b'{"valor": NaN, "lista": [Infinity, 1.5]}', media_type="application/json")

    @bruto.get("/quebrado")
    def quebrado():
        return Response(content=b"nao-e-json", media_type="application/json", status_code=502)

    return TestClient(bruto)


def test_middleware_troca_nan_por_null(client_bruto):
    r = client_bruto.get("/nan")
    assert r.status_code == 200
    assert r.json() == {"valor": None, "lista": [None, 1.5]}


def test_middleware_preserva_corpo_que_nao_e_json(client_bruto):
    r = client_bruto.get("/quebrado")
    assert r.status_code == 502
    assert r.content == b"nao-e-json"

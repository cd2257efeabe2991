import pytest

from geo_analytics.domain.entities import CustomerLocation, MonthlyStat, Region, ServicePoint
from geo_analytics.domain.regions import regions_from_grid, regions_from_service_points
from geo_analytics.domain.sales_forecasting import (
    classify_trend,
    forecast_sales,
    proximos_periodos,
    region_confidence,
)


def _regiao():
    return Region(id="b1", name="Agência Central", service_point_ids=["b1"])


def _serie(valores, ano=2024, mes_inicial=1):
    return [
        MonthlyStat(year=ano, month=mes_inicial + i, branch_id="b1", total_amount=v)
        for i, v in enumerate(valores)
    ]


def test_serie_crescente(serie_crescente):
    result = forecast_sales([_regiao()], serie_crescente, 3)
    f = result.region_forecasts[0]

    assert [p.value for p in f.monthly_predictions] == pytest.approx([18, 20, 22])
    assert [p.month for p in f.monthly_predictions] == ["2024-05", "2024-06", "2024-07"]
    assert f.current_sales == 16
    assert f.forecasted_sales == pytest.approx(22)
    assert f.growth_rate == 37.5
    assert f.trend == "growing"
    assert f.r2 == pytest.approx(1.0)
    assert f.confidence == pytest.approx(0.9167, abs=1e-4)
    assert result.confidence == pytest.approx(0.7125)
    assert result.overall_growth == 37.5


def test_serie_estavel():
    result = forecast_sales([_regiao()], _serie([10, 10, 10, 10]), 3)
    f = result.region_forecasts[0]
    assert f.trend == "stable"
    assert f.growth_rate == 0
    assert [p.value for p in f.monthly_predictions] == [10, 10, 10]


def test_serie_decrescente():
    f = forecast_sales([_regiao()], _serie([40, 30, 20, 10]), 2).region_forecasts[0]
    assert f.trend == "declining"
    assert all(p.value >= 0 for p in f.monthly_predictions)


def test_um_unico_ponto_projeta_constante():
    result = forecast_sales([_regiao()], _serie([50]), 3)
    f = result.region_forecasts[0]
    assert [p.value for p in f.monthly_predictions] == [50, 50, 50]
    assert f.confidence == 0.5
    assert f.trend == "stable"
    assert result.confidence == 0.5


def test_um_unico_mes_negativo_projeta_zero():
    f = forecast_sales([_regiao()], _serie([-30]), 2).region_forecasts[0]
    assert f.current_sales == -30
    assert f.forecasted_sales == 0
    assert [p.value for p in f.monthly_predictions] == [0, 0]


def test_regiao_sem_historico_e_ignorada():
    vazia = Region(id="b2", name="Vazia", service_point_ids=["b2"])
    result = forecast_sales([_regiao(), vazia], _serie([10, 12]), 1)
    assert [f.region_id for f in result.region_forecasts] == ["b1"]


def test_meses_atravessam_o_ano():
    assert proximos_periodos((2024, 11), 3) == ["2024-12", "2025-01", "2025-02"]


def test_linha_conta_uma_vez_por_agencia_ou_cliente():
    regiao = Region(id="b1", name="Central", service_point_ids=["b1"], customer_ids=["c1"])
    stats = [
        MonthlyStat(year=2024, month=1, branch_id="b1", customer_id="c1", total_amount=10),
        MonthlyStat(year=2024, month=1, customer_id="c1", total_amount=5),
        MonthlyStat(year=2024, month=1, branch_id="outra", customer_id="c9", total_amount=99),
    ]
    f = forecast_sales([regiao], stats, 1).region_forecasts[0]
    assert f.current_sales == 15


def test_limiar_de_tendencia_relativo_a_media():
    assert classify_trend(4, 100) == "stable"
    assert classify_trend(6, 100) == "growing"
    assert classify_trend(-6, 100) == "declining"


def test_confianca_limitada():
    assert region_confidence(1.0, 100) == 0.95
    assert region_confidence(0.0, 2) >= 0.6
    assert region_confidence(0.5, 1) == 0.5


def test_regioes_por_ponto_de_servico():
    pontos = [ServicePoint(id="b1", name="Central", latitude=35.7, longitude=51.4)]
    clientes = [
        CustomerLocation(id="c1", latitude=35.7, longitude=51.4, branch_id="b1"),
        CustomerLocation(id="c2", latitude=35.7, longitude=51.4, banking_unit_id="b1"),
        CustomerLocation(id="c3", latitude=None, longitude=51.4, branch_id="b1"),
    ]
    regiao = regions_from_service_points(pontos, clientes)[0]
    assert regiao.customer_ids == ["c1", "c2"]
    assert regiao.service_point_ids == ["b1"]


def test_regioes_por_grade():
    clientes = [
        CustomerLocation(id="c1", latitude=35.701, longitude=51.401),
        CustomerLocation(id="c2", latitude=35.702, longitude=51.402),
        CustomerLocation(id="c3", latitude=35.90, longitude=51.60),
    ]
    regioes = regions_from_grid(clientes)
    assert len(regioes) == 2
    assert regioes[0].customer_ids == ["c1", "c2"]
    assert regioes[0].id.startswith("cell:")


def test_previsao_com_regioes_de_grade():
    clientes = [CustomerLocation(id="c1", latitude=35.701, longitude=51.401, status="active")]
    stats = [MonthlyStat(year=2024, month=m, customer_id="c1", total_amount=100 * m) for m in (1, 2, 3)]
    result = forecast_sales(regions_from_grid(clientes), stats, 2, customers=clientes)
    f = result.region_forecasts[0]
    assert f.trend == "growing"
    assert f.new_customer_potential >= 0

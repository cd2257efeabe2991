import pytest

from geo_analytics.domain.entities import CustomerLocation, MonthlyStat, ServicePoint


@pytest.fixture
def clientes_mistos():
    """5 clientes de alto lucro ativos + 3 de baixo lucro em perda, em bairros distintos."""
    altos = [
        CustomerLocation(
            id=f"h{i}",
            shop_name=f"Loja H{i}",
            latitude=35.700 + i * 0.001,
            longitude=51.400 + i * 0.001,
            monthly_profit=6_000_000 + i * 10_000,
            business_type="restaurant",
            status="active",
        )
        for i in range(5)
    ]
    baixos = [
        CustomerLocation(
            id=f"l{i}",
            shop_name=f"Loja L{i}",
            latitude=35.800 + i * 0.001,
            longitude=51.500 + i * 0.001,
            monthly_profit=500_000 + i * 10_000,
            business_type="grocery",
            status="loss",
        )
        for i in range(3)
    ]
    return altos + baixos


@pytest.fixture
def agencia_central():
    return ServicePoint(id="b1", name="Agência Central", type="branch", latitude=35.7, longitude=51.4)


@pytest.fixture
def serie_crescente():
    return [
        MonthlyStat(year=2024, month=m, branch_id="b1", total_amount=valor, total_transactions=10)
        for m, valor in zip(range(1, 5), [10, 12, 14, 16])
    ]

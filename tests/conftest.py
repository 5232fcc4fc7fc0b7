"""Pytest fixtures for testing"""

import pytest
from decimal import Decimal
from fastapi.testclient import TestClient
from installment_advisor.api.main import create_app
from installment_advisor.domain.models import RateBasis, RateSpec


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def one_percent() -> RateSpec:
    """1% a.m. yield, no income tax"""
    return RateSpec(nominal_rate_percent=Decimal("1"))


@pytest.fixture
def one_percent_taxed() -> RateSpec:
    """1% a.m. yield with regressive income tax"""
    return RateSpec(nominal_rate_percent=Decimal("1"), period_basis=RateBasis.MONTHLY, consider_income_tax=True)


@pytest.fixture
def cash_vs_installments_payload() -> dict:
    """R$ 280 cash vs 3x R$ 100 with the money yielding 1% a.m."""
    return {
        "cash_price": "280",
        "periods": 3,
        "installment_amount": "100",
        "yield_rate_pct": "1",
    }

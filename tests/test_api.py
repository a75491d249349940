"""
Tests for analysis, deals, and calculations API endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from deal_analyzer.main import app
from deal_analyzer.api.samples import get_sample_deal
from deal_analyzer.db.models import Deal
from deal_analyzer.services.insights import UNAVAILABLE_SUMMARY

# Database and insights overrides are handled by conftest.py


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def sfr_payload():
    return {
        "purchase_price": 300000,
        "down_payment": 60000,
        "interest_rate": 4.5,
        "loan_term": 30,
        "closing_costs": 5000,
        "property_tax_rate": 1.2,
        "insurance_rate": 0.5,
        "maintenance_cost": 1200,
        "property_management_rate": 8,
        "monthly_rent": 2500,
        "square_footage": 1500,
        "bedrooms": 3,
        "bathrooms": 2,
    }


@pytest.fixture
def mf_payload():
    payload = get_sample_deal("MF")
    payload.pop("total_units")
    payload.pop("total_sqft")
    return payload


@pytest.fixture
def test_deal(client):
    """Create a saved deal from the SFR sample."""
    payload = get_sample_deal("SFR")
    payload["property_type"] = "SFR"
    response = client.post("/api/deals/", json=payload)
    assert response.status_code == 201
    return response.json()


# ============================================================================
# ANALYSIS API TESTS
# ============================================================================

class TestAnalysisAPI:
    """Test the analyze endpoint."""

    def test_analyze_sfr(self, client, sfr_payload):
        response = client.post("/api/analyze/sfr", json=sfr_payload)
        assert response.status_code == 200
        data = response.json()

        assert data["property_type"] == "SFR"
        assert data["annual_analysis"]["noi"] == pytest.approx(18925)
        assert data["key_metrics"]["price_per_bedroom"] == 100000
        assert len(data["long_term_analysis"]["projections"]) == 10
        assert data["sensitivity_analysis"]["best_case"]["vacancy_rate"] == 3.0

    def test_analyze_uses_assumption_overrides(self, client, sfr_payload):
        sfr_payload["long_term_assumptions"] = {"projection_years": 5, "vacancy_rate": 0}
        response = client.post("/api/analyze/SFR", json=sfr_payload)
        assert response.status_code == 200
        data = response.json()
        assert data["long_term_analysis"]["projection_years"] == 5
        assert data["monthly_analysis"]["expenses"]["breakdown"]["vacancy"] == 0

    def test_analyze_mf_derives_totals(self, client, mf_payload):
        response = client.post("/api/analyze/mf", json=mf_payload)
        assert response.status_code == 200
        data = response.json()

        assert data["property_type"] == "MF"
        assert data["key_metrics"]["price_per_unit"] == 150000
        # 4 x 650 + 4 x 950
        assert data["key_metrics"]["price_per_sqft"] == pytest.approx(1200000 / 6400)

    def test_ai_insights_placeholder(self, client, sfr_payload):
        response = client.post("/api/analyze/sfr", json=sfr_payload)
        insights = response.json()["ai_insights"]
        assert insights["available"] is False
        assert insights["summary"] == UNAVAILABLE_SUMMARY

    def test_unknown_property_type(self, client, sfr_payload):
        response = client.post("/api/analyze/condo", json=sfr_payload)
        assert response.status_code == 400

    def test_missing_field(self, client, sfr_payload):
        sfr_payload.pop("monthly_rent")
        response = client.post("/api/analyze/sfr", json=sfr_payload)
        assert response.status_code == 422

    def test_down_payment_exceeds_price(self, client, sfr_payload):
        sfr_payload["down_payment"] = 400000
        response = client.post("/api/analyze/sfr", json=sfr_payload)
        assert response.status_code == 422

    def test_mf_requires_unit_types(self, client, mf_payload):
        mf_payload["unit_types"] = []
        response = client.post("/api/analyze/mf", json=mf_payload)
        assert response.status_code == 422


# ============================================================================
# DEAL API TESTS
# ============================================================================

class TestDealAPI:
    """Test saved deal endpoints."""

    def test_create_deal(self, client, test_deal):
        assert test_deal["name"] == "Sample Single-Family Rental"
        assert test_deal["property_type"] == "SFR"
        assert test_deal["address_city"] == "Anytown"
        assert test_deal["analysis"]["key_metrics"]["price_per_bedroom"] == 100000
        assert test_deal["insights"]["available"] is False
        assert "id" in test_deal

    def test_create_deal_requires_type(self, client, sfr_payload):
        response = client.post("/api/deals/", json=sfr_payload)
        assert response.status_code == 400

    def test_create_deal_default_name(self, client, sfr_payload):
        sfr_payload["property_type"] = "sfr"
        response = client.post("/api/deals/", json=sfr_payload)
        assert response.status_code == 201
        assert response.json()["name"] == "SFR deal"

    def test_list_deals(self, client, test_deal):
        response = client.get("/api/deals/")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["deals"][0]["id"] == test_deal["id"]

    def test_list_deals_by_type(self, client, test_deal):
        response = client.get("/api/deals/", params={"property_type": "mf"})
        assert response.json()["total"] == 0

        response = client.get("/api/deals/", params={"property_type": "sfr"})
        assert response.json()["total"] == 1

    def test_get_deal(self, client, test_deal):
        response = client.get(f"/api/deals/{test_deal['id']}")
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == test_deal["id"]
        assert data["property_data"]["monthly_rent"] == 2500

    def test_get_nonexistent_deal(self, client):
        response = client.get("/api/deals/nonexistent-id")
        assert response.status_code == 404

    def test_update_deal(self, client, test_deal):
        payload = test_deal["property_data"]
        payload["name"] = "Updated Deal"
        payload["monthly_rent"] = 3000

        response = client.put(f"/api/deals/{test_deal['id']}", json=payload)
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Updated Deal"
        assert data["analysis"]["annual_analysis"]["income"] == pytest.approx(36000)

    def test_delete_deal(self, client, test_deal, db_session):
        response = client.delete(f"/api/deals/{test_deal['id']}")
        assert response.status_code == 200

        # Verify it's gone (soft delete)
        response = client.get(f"/api/deals/{test_deal['id']}")
        assert response.status_code == 404

        deal = db_session.query(Deal).filter(Deal.id == test_deal["id"]).first()
        assert deal.is_deleted is True

    @pytest.mark.parametrize("property_type", ["sfr", "MF"])
    def test_sample_deal(self, client, property_type):
        response = client.get(f"/api/deals/sample/{property_type}")
        assert response.status_code == 200
        sample = response.json()
        assert sample["property_type"] == property_type.upper()

        # Samples analyze cleanly
        response = client.post(f"/api/analyze/{property_type}", json=sample)
        assert response.status_code == 200

    def test_sample_unknown_type(self, client):
        response = client.get("/api/deals/sample/condo")
        assert response.status_code == 400


# ============================================================================
# CALCULATIONS API TESTS
# ============================================================================

class TestCalculationsAPI:
    """Test standalone calculation endpoints."""

    def test_calculate_mortgage(self, client):
        response = client.post(
            "/api/calculate/mortgage",
            json={
                "purchase_price": 300000,
                "down_payment": 60000,
                "interest_rate": 4.5,
                "loan_term": 30,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["loan_amount"] == 240000
        assert data["monthly_payment"] == pytest.approx(1216.04, abs=0.01)
        assert data["annual_debt_service"] == pytest.approx(data["monthly_payment"] * 12)

    def test_calculate_irr(self, client):
        response = client.post(
            "/api/calculate/irr",
            json={"cash_flows": [-100, 20, 20, 20, 20, 120]},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["irr"] == pytest.approx(20.0, abs=0.01)
        assert data["profit"] == pytest.approx(100)

    def test_calculate_irr_no_sign_change(self, client):
        response = client.post("/api/calculate/irr", json={"cash_flows": [100, 50]})
        assert response.status_code == 200
        assert response.json()["irr"] == 0

    def test_calculate_irr_invalid_cash_flows(self, client):
        response = client.post("/api/calculate/irr", json={"cash_flows": [-100]})
        assert response.status_code == 422

    def test_calculate_amortization(self, client):
        response = client.post(
            "/api/calculate/amortization",
            json={
                "principal": 100000,
                "annual_rate": 6,
                "years": 5,
                "start_date": "2025-01-01",
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data["schedule"]) == 60
        assert data["total_principal"] == pytest.approx(100000, abs=1)
        assert data["total_interest"] > 0


# ============================================================================
# HEALTH CHECK TESTS
# ============================================================================

class TestHealthCheck:
    """Test health check endpoint."""

    def test_health_check(self, client):
        """Test health check returns healthy status."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data

"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from deal_analyzer.main import app
from deal_analyzer.config import Settings
from deal_analyzer.db.database import get_db
from deal_analyzer.db.models import Base
from deal_analyzer.analysis.assumptions import normalize_assumptions
from deal_analyzer.analysis.models import (
    CommonAreaUtilities,
    MultiFamilyPropertyInput,
    PropertyAddress,
    SFRPropertyInput,
    UnitType,
)
from deal_analyzer.services.insights import InsightsService, get_insights_service


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


# Create a shared test database engine
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override database dependency for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def override_get_insights_service():
    """Insights with no OpenAI client, whatever the environment holds."""
    return InsightsService(settings=Settings(openai_api_key=""))


# Override the dependencies globally for all tests
app.dependency_overrides[get_db] = override_get_db
app.dependency_overrides[get_insights_service] = override_get_insights_service


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and drop after."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    """Create database session for test setup."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def settings():
    """Settings with the stock assumption defaults."""
    return Settings(openai_api_key="")


@pytest.fixture
def default_assumptions(settings):
    return normalize_assumptions(settings=settings)


@pytest.fixture
def sfr_input():
    """A $300k single-family rental with 20% down."""
    return SFRPropertyInput(
        purchase_price=300000,
        down_payment=60000,
        interest_rate=4.5,
        loan_term=30,
        property_tax_rate=1.2,
        insurance_rate=0.5,
        maintenance_cost=1200,
        property_management_rate=8,
        closing_costs=5000,
        monthly_rent=2500,
        square_footage=1500,
        bedrooms=3,
        bathrooms=2,
        address=PropertyAddress("123 Main St", "Anytown", "CA", "12345"),
        year_built=1995,
    )


@pytest.fixture
def mf_input():
    """An eight-unit building with two unit types."""
    return MultiFamilyPropertyInput(
        purchase_price=1200000,
        down_payment=240000,
        interest_rate=5,
        loan_term=30,
        property_tax_rate=1.5,
        insurance_rate=0.6,
        maintenance_cost=9600,
        property_management_rate=10,
        closing_costs=15000,
        total_units=8,
        total_sqft=7500,
        unit_types=(
            UnitType(type="1 bed, 1 bath", count=4, sqft=650, monthly_rent=1100),
            UnitType(type="2 bed, 2 bath", count=4, sqft=950, monthly_rent=1500),
        ),
        maintenance_cost_per_unit=1200,
        common_area_utilities=CommonAreaUtilities(
            electric=4200, water=3000, gas=2400, trash=1800
        ),
    )

"""
Sample deal payloads, in request format, for each property type.
"""

import copy
from typing import Dict, Optional

SAMPLE_SFR_DEAL = {
    "name": "Sample Single-Family Rental",
    "address": {
        "street": "123 Main St",
        "city": "Anytown",
        "state": "CA",
        "zip_code": "12345",
    },
    "year_built": 1995,
    "purchase_price": 300000,
    "down_payment": 60000,
    "interest_rate": 4.5,
    "loan_term": 30,
    "closing_costs": 5000,
    "property_tax_rate": 1.2,
    "insurance_rate": 0.5,
    "maintenance_cost": 1800,
    "property_management_rate": 8,
    "monthly_rent": 2500,
    "square_footage": 1500,
    "bedrooms": 3,
    "bathrooms": 2,
    "long_term_assumptions": {
        "projection_years": 10,
        "annual_rent_increase": 2,
        "annual_expense_increase": 2,
        "annual_property_value_increase": 3,
        "selling_costs": 6,
        "vacancy_rate": 5,
    },
}

SAMPLE_MF_DEAL = {
    "name": "Sample Multi-Family",
    "address": {
        "street": "456 Apartment Blvd",
        "city": "Metroville",
        "state": "NY",
        "zip_code": "54321",
    },
    "year_built": 1980,
    "purchase_price": 1200000,
    "down_payment": 240000,
    "interest_rate": 5,
    "loan_term": 30,
    "closing_costs": 15000,
    "property_tax_rate": 1.5,
    "insurance_rate": 0.6,
    "maintenance_cost": 9600,
    "maintenance_cost_per_unit": 1200,
    "property_management_rate": 10,
    "total_units": 8,
    "total_sqft": 7500,
    "unit_types": [
        {"type": "1 bed, 1 bath", "count": 4, "sqft": 650, "monthly_rent": 1100},
        {"type": "2 bed, 2 bath", "count": 4, "sqft": 950, "monthly_rent": 1500},
    ],
    "common_area_utilities": {
        "electric": 4200,
        "water": 3000,
        "gas": 2400,
        "trash": 1800,
    },
    "long_term_assumptions": {
        "projection_years": 10,
        "annual_rent_increase": 2.5,
        "annual_expense_increase": 2,
        "annual_property_value_increase": 3,
        "selling_costs": 6,
        "vacancy_rate": 7,
    },
}

SAMPLE_DEALS: Dict[str, dict] = {
    "SFR": SAMPLE_SFR_DEAL,
    "MF": SAMPLE_MF_DEAL,
}


def get_sample_deal(property_type: str) -> Optional[dict]:
    """Return a copy of the sample payload for a property type, if any."""
    sample = SAMPLE_DEALS.get(property_type.upper())
    return copy.deepcopy(sample) if sample is not None else None

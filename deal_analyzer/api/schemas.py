"""
Request schemas for deal analysis.

These validate inbound payloads and convert them into the engine's frozen
input records. Long-term assumptions left out of a request are filled from
the configured defaults in one place, normalize_assumptions().
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, model_validator

from deal_analyzer.analysis.assumptions import normalize_assumptions
from deal_analyzer.analysis.models import (
    AnalysisAssumptions,
    CommonAreaUtilities,
    MultiFamilyPropertyInput,
    PropertyAddress,
    SFRPropertyInput,
    TenantTurnoverFees,
    UnitType,
)


class AddressInput(BaseModel):
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


class TurnoverFeesInput(BaseModel):
    prep_fees: float = Field(default=500.0, ge=0)
    realtor_commission: float = Field(default=0.5, ge=0)


class LongTermAssumptionsInput(BaseModel):
    """Optional overrides for the long-term assumptions (percentages)."""

    projection_years: Optional[int] = Field(default=None, ge=1, le=50)
    annual_rent_increase: Optional[float] = None
    annual_expense_increase: Optional[float] = None
    annual_property_value_increase: Optional[float] = None
    selling_costs: Optional[float] = Field(default=None, ge=0, le=100)
    vacancy_rate: Optional[float] = Field(default=None, ge=0, le=100)
    turnover_frequency: Optional[float] = Field(default=None, gt=0)

    def to_assumptions(self) -> AnalysisAssumptions:
        return normalize_assumptions(**self.model_dump())


class BaseDealInput(BaseModel):
    """Fields shared by every property type."""

    name: Optional[str] = None
    address: Optional[AddressInput] = None
    year_built: Optional[int] = None

    # Purchase and financing
    purchase_price: float = Field(gt=0)
    down_payment: float = Field(ge=0)
    interest_rate: float = Field(ge=0, description="Annual %")
    loan_term: int = Field(ge=1, le=50, description="Years")
    closing_costs: float = Field(default=0.0, ge=0)
    capital_investments: float = Field(default=0.0, ge=0)

    # Operating expenses
    property_tax_rate: float = Field(ge=0, description="Annual % of purchase price")
    insurance_rate: float = Field(ge=0, description="Annual % of purchase price")
    maintenance_cost: float = Field(default=0.0, ge=0, description="Annual $")
    property_management_rate: float = Field(default=0.0, ge=0, le=100)
    tenant_turnover_fees: TurnoverFeesInput = TurnoverFeesInput()

    long_term_assumptions: LongTermAssumptionsInput = LongTermAssumptionsInput()

    @model_validator(mode="after")
    def check_down_payment(self):
        if self.down_payment > self.purchase_price:
            raise ValueError("down_payment cannot exceed purchase_price")
        return self

    def _base_fields(self) -> dict:
        return {
            "purchase_price": self.purchase_price,
            "down_payment": self.down_payment,
            "interest_rate": self.interest_rate,
            "loan_term": self.loan_term,
            "property_tax_rate": self.property_tax_rate,
            "insurance_rate": self.insurance_rate,
            "maintenance_cost": self.maintenance_cost,
            "property_management_rate": self.property_management_rate,
            "closing_costs": self.closing_costs,
            "capital_investments": self.capital_investments,
            "tenant_turnover_fees": TenantTurnoverFees(
                **self.tenant_turnover_fees.model_dump()
            ),
            "address": PropertyAddress(**self.address.model_dump()) if self.address else None,
            "year_built": self.year_built,
        }

    def to_assumptions(self) -> AnalysisAssumptions:
        return self.long_term_assumptions.to_assumptions()


class SFRDealInput(BaseDealInput):
    property_type: Literal["SFR"] = "SFR"
    monthly_rent: float = Field(ge=0)
    square_footage: float = Field(default=0.0, ge=0)
    bedrooms: int = Field(default=0, ge=0)
    bathrooms: float = Field(default=0.0, ge=0)
    after_repair_value: Optional[float] = Field(default=None, ge=0)
    renovation_costs: Optional[float] = Field(default=None, ge=0)

    def to_property_input(self) -> SFRPropertyInput:
        return SFRPropertyInput(
            **self._base_fields(),
            monthly_rent=self.monthly_rent,
            square_footage=self.square_footage,
            bedrooms=self.bedrooms,
            bathrooms=self.bathrooms,
            after_repair_value=self.after_repair_value,
            renovation_costs=self.renovation_costs,
        )


class UnitTypeInput(BaseModel):
    type: str
    count: int = Field(ge=0)
    sqft: float = Field(default=0.0, ge=0)
    monthly_rent: float = Field(ge=0)


class CommonAreaUtilitiesInput(BaseModel):
    """Annual common-area utility costs."""

    electric: float = Field(default=0.0, ge=0)
    water: float = Field(default=0.0, ge=0)
    gas: float = Field(default=0.0, ge=0)
    trash: float = Field(default=0.0, ge=0)


class MFDealInput(BaseDealInput):
    property_type: Literal["MF"] = "MF"
    unit_types: List[UnitTypeInput] = Field(min_length=1)
    total_units: Optional[int] = Field(default=None, ge=1)
    total_sqft: Optional[float] = Field(default=None, ge=0)
    maintenance_cost_per_unit: float = Field(default=0.0, ge=0, description="Annual $")
    common_area_utilities: CommonAreaUtilitiesInput = CommonAreaUtilitiesInput()
    capital_expenditure: Optional[float] = Field(
        default=None, ge=0, description="Annual capex reserve; defaults to 7% of income"
    )

    def to_property_input(self) -> MultiFamilyPropertyInput:
        # Unit and area totals default to what the unit mix adds up to
        total_units = self.total_units or sum(u.count for u in self.unit_types)
        total_sqft = self.total_sqft
        if total_sqft is None:
            total_sqft = sum(u.sqft * u.count for u in self.unit_types)

        return MultiFamilyPropertyInput(
            **self._base_fields(),
            total_units=total_units,
            total_sqft=total_sqft,
            unit_types=tuple(UnitType(**u.model_dump()) for u in self.unit_types),
            maintenance_cost_per_unit=self.maintenance_cost_per_unit,
            common_area_utilities=CommonAreaUtilities(
                **self.common_area_utilities.model_dump()
            ),
            capital_expenditure=self.capital_expenditure,
        )


DealInput = Annotated[Union[SFRDealInput, MFDealInput], Field(discriminator="property_type")]

deal_input_adapter = TypeAdapter(DealInput)


def parse_deal_input(property_type: str, payload: dict) -> Union[SFRDealInput, MFDealInput]:
    """
    Validate a payload against the schema for a property type.

    Raises:
        pydantic.ValidationError: If the payload or type is invalid
    """
    return deal_input_adapter.validate_python({**payload, "property_type": property_type})

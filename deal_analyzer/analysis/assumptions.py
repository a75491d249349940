"""
Assumption normalization.

Every optional long-term assumption is resolved here, once, against the
configured defaults. The engine only ever sees a fully populated
AnalysisAssumptions with a usable horizon and turnover frequency.
"""

import logging
from dataclasses import replace
from typing import Optional

from deal_analyzer.analysis.models import AnalysisAssumptions
from deal_analyzer.config import Settings, get_settings

logger = logging.getLogger(__name__)


def sanitize_assumptions(
    assumptions: AnalysisAssumptions, settings: Optional[Settings] = None
) -> AnalysisAssumptions:
    """
    Replace a non-positive projection horizon or turnover frequency with its default.

    Neither has a meaningful zero. Assumptions that are already usable are
    returned unchanged.
    """
    settings = settings or get_settings()
    changes = {}

    if assumptions.projection_years < 1:
        changes["projection_years"] = settings.default_projection_years
    if assumptions.turnover_frequency <= 0:
        changes["turnover_frequency"] = settings.default_turnover_frequency

    if not changes:
        return assumptions

    logger.debug(f"Replacing unusable assumptions with defaults: {changes}")
    return replace(assumptions, **changes)


def normalize_assumptions(
    projection_years: Optional[int] = None,
    annual_rent_increase: Optional[float] = None,
    annual_expense_increase: Optional[float] = None,
    annual_property_value_increase: Optional[float] = None,
    selling_costs: Optional[float] = None,
    vacancy_rate: Optional[float] = None,
    turnover_frequency: Optional[float] = None,
    settings: Optional[Settings] = None,
) -> AnalysisAssumptions:
    """
    Build assumptions, filling any omitted option from settings defaults.

    Explicit zeros are kept; only None falls back to the default. A
    non-positive turnover frequency or projection horizon falls back too.
    """
    settings = settings or get_settings()

    def pick(value, default):
        return default if value is None else value

    assumptions = AnalysisAssumptions(
        projection_years=int(pick(projection_years, settings.default_projection_years)),
        annual_rent_increase=pick(annual_rent_increase, settings.default_annual_rent_increase),
        annual_expense_increase=pick(
            annual_expense_increase, settings.default_annual_expense_increase
        ),
        annual_property_value_increase=pick(
            annual_property_value_increase,
            settings.default_annual_property_value_increase,
        ),
        selling_costs=pick(selling_costs, settings.default_selling_costs),
        vacancy_rate=pick(vacancy_rate, settings.default_vacancy_rate),
        turnover_frequency=pick(turnover_frequency, settings.default_turnover_frequency),
    )
    return sanitize_assumptions(assumptions, settings)


def default_assumptions(settings: Optional[Settings] = None) -> AnalysisAssumptions:
    """Assumptions with every option at its configured default."""
    return normalize_assumptions(settings=settings)

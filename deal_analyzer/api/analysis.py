"""
Deal analysis API endpoint.

Validates a deal for the property type in the path, runs the engine and
attaches narrative insights.
"""

import logging
from dataclasses import asdict
from typing import Union

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from deal_analyzer.analysis import ANALYZERS, UnsupportedPropertyTypeError, analyze_property
from deal_analyzer.api.schemas import MFDealInput, SFRDealInput, parse_deal_input
from deal_analyzer.services.insights import InsightsService, get_insights_service

logger = logging.getLogger(__name__)

router = APIRouter()


def resolve_property_type(property_type: str) -> str:
    """Map a path segment ("sfr", "MF", ...) to a property type discriminator."""
    normalized = property_type.upper()
    if normalized not in ANALYZERS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported property type: {property_type}",
        )
    return normalized


def validate_deal(property_type: str, payload: dict) -> Union[SFRDealInput, MFDealInput]:
    """Validate a payload, surfacing schema errors as a 422 response."""
    try:
        return parse_deal_input(property_type, payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))


def run_deal_analysis(deal: Union[SFRDealInput, MFDealInput], insights: InsightsService) -> dict:
    """
    Analyze a validated deal and serialize the result with its insights.

    Returns:
        The analysis as a plain dict with an "ai_insights" entry
    """
    property_input = deal.to_property_input()

    try:
        result = analyze_property(property_input, deal.to_assumptions())
    except UnsupportedPropertyTypeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    ai_insights = insights.generate(property_input, result)

    return {**asdict(result), "ai_insights": ai_insights.model_dump()}


@router.post("/{property_type}")
def analyze_deal(
    property_type: str,
    payload: dict = Body(...),
    insights: InsightsService = Depends(get_insights_service),
):
    """Analyze a single-family (sfr) or multi-family (mf) deal."""
    normalized = resolve_property_type(property_type)
    deal = validate_deal(normalized, payload)

    logger.info(f"Analyzing {normalized} deal priced at {deal.purchase_price:,.0f}")
    return run_deal_analysis(deal, insights)

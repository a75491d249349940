"""
Saved deal API endpoints.

A deal is stored together with its analysis; creating or updating a deal
re-runs the analysis on the submitted inputs.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from deal_analyzer.api.analysis import resolve_property_type, run_deal_analysis, validate_deal
from deal_analyzer.api.samples import get_sample_deal
from deal_analyzer.db.database import get_db
from deal_analyzer.db.models import Deal
from deal_analyzer.services.insights import InsightsService, get_insights_service

logger = logging.getLogger(__name__)

router = APIRouter()


class DealResponse(BaseModel):
    """Schema for deal response."""

    id: str
    name: str
    property_type: str
    address_street: Optional[str]
    address_city: Optional[str]
    address_state: Optional[str]
    address_zip: Optional[str]
    purchase_price: Optional[float]
    property_data: Dict[str, Any]
    analysis: Dict[str, Any]
    insights: Optional[Dict[str, Any]] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class DealSummary(BaseModel):
    id: str
    name: str
    property_type: str
    address_city: Optional[str]
    address_state: Optional[str]
    purchase_price: Optional[float]
    updated_at: Optional[str] = None


class DealListResponse(BaseModel):
    """Response for listing deals."""

    deals: List[DealSummary]
    total: int


def deal_to_response(deal: Deal) -> DealResponse:
    """Convert Deal model to response schema."""
    return DealResponse(
        id=deal.id,
        name=deal.name,
        property_type=deal.property_type,
        address_street=deal.address_street,
        address_city=deal.address_city,
        address_state=deal.address_state,
        address_zip=deal.address_zip,
        purchase_price=deal.purchase_price,
        property_data=deal.property_data or {},
        analysis=deal.analysis or {},
        insights=deal.insights,
        created_at=deal.created_at.isoformat() if deal.created_at else None,
        updated_at=deal.updated_at.isoformat() if deal.updated_at else None,
    )


def get_deal_or_404(db: Session, deal_id: str) -> Deal:
    deal = db.query(Deal).filter(Deal.id == deal_id, Deal.is_deleted == False).first()
    if not deal:
        raise HTTPException(status_code=404, detail="Deal not found")
    return deal


def apply_payload(deal: Deal, payload: dict, insights: InsightsService) -> None:
    """Validate and analyze a payload, then copy it onto a deal row."""
    property_type = resolve_property_type(payload.get("property_type") or deal.property_type or "")
    validated = validate_deal(property_type, payload)

    analysis = run_deal_analysis(validated, insights)
    ai_insights = analysis.pop("ai_insights")

    address = validated.address
    deal.name = validated.name or (address.street if address and address.street else f"{property_type} deal")
    deal.property_type = property_type
    deal.address_street = address.street if address else None
    deal.address_city = address.city if address else None
    deal.address_state = address.state if address else None
    deal.address_zip = address.zip_code if address else None
    deal.purchase_price = validated.purchase_price
    deal.property_data = validated.model_dump(mode="json")
    deal.analysis = analysis
    deal.insights = ai_insights


@router.get("/", response_model=DealListResponse)
def list_deals(
    skip: int = 0,
    limit: int = 100,
    property_type: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """List saved deals, most recently updated first."""
    query = db.query(Deal).filter(Deal.is_deleted == False)

    if property_type:
        query = query.filter(Deal.property_type == property_type.upper())

    total = query.count()
    deals = query.order_by(Deal.updated_at.desc()).offset(skip).limit(limit).all()

    return DealListResponse(
        deals=[
            DealSummary(
                id=d.id,
                name=d.name,
                property_type=d.property_type,
                address_city=d.address_city,
                address_state=d.address_state,
                purchase_price=d.purchase_price,
                updated_at=d.updated_at.isoformat() if d.updated_at else None,
            )
            for d in deals
        ],
        total=total,
    )


@router.get("/sample/{property_type}")
def get_sample(property_type: str):
    """Get a sample deal payload for a property type."""
    sample = get_sample_deal(property_type)
    if sample is None:
        raise HTTPException(status_code=400, detail=f"Unsupported property type: {property_type}")
    return {**sample, "property_type": property_type.upper()}


@router.post("/", response_model=DealResponse, status_code=201)
def create_deal(
    payload: dict = Body(...),
    db: Session = Depends(get_db),
    insights: InsightsService = Depends(get_insights_service),
):
    """Analyze and save a new deal. The payload must carry its property_type."""
    if not payload.get("property_type"):
        raise HTTPException(status_code=400, detail="property_type is required")

    deal = Deal()
    apply_payload(deal, payload, insights)

    db.add(deal)
    db.commit()
    db.refresh(deal)

    logger.info(f"Created {deal.property_type} deal {deal.id}")
    return deal_to_response(deal)


@router.get("/{deal_id}", response_model=DealResponse)
def get_deal(deal_id: str, db: Session = Depends(get_db)):
    """Get a deal by ID."""
    return deal_to_response(get_deal_or_404(db, deal_id))


@router.put("/{deal_id}", response_model=DealResponse)
def update_deal(
    deal_id: str,
    payload: dict = Body(...),
    db: Session = Depends(get_db),
    insights: InsightsService = Depends(get_insights_service),
):
    """Replace a deal's inputs and re-run its analysis."""
    deal = get_deal_or_404(db, deal_id)
    apply_payload(deal, payload, insights)

    db.commit()
    db.refresh(deal)

    logger.info(f"Updated deal {deal.id}")
    return deal_to_response(deal)


@router.delete("/{deal_id}")
def delete_deal(deal_id: str, db: Session = Depends(get_db)):
    """Soft delete a deal."""
    deal = get_deal_or_404(db, deal_id)

    deal.is_deleted = True
    db.commit()

    return {"deleted": True, "id": deal_id}

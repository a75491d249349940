"""
API routes for the deal analyzer.
"""

from fastapi import APIRouter

from deal_analyzer.api import analysis, calculations, deals

router = APIRouter()

# Include sub-routers
router.include_router(analysis.router, prefix="/analyze", tags=["analysis"])
router.include_router(deals.router, prefix="/deals", tags=["deals"])
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])

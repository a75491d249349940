"""
Application services module.
"""

from deal_analyzer.services.insights import Insights, InsightsService, get_insights_service

__all__ = ["Insights", "InsightsService", "get_insights_service"]

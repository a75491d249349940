"""
Narrative deal insights using OpenAI.

Falls back to an "unavailable" placeholder if no API key is configured, and
to an error placeholder if the request or its response fails. The numeric
analysis never depends on this service.
"""

import json
import logging
from typing import List, Optional

from openai import OpenAI
from pydantic import BaseModel, Field, ValidationError

from deal_analyzer.analysis.models import AnalysisResult, PropertyInput
from deal_analyzer.config import Settings, get_settings
from deal_analyzer.services.prompts import build_prompt

logger = logging.getLogger(__name__)

UNAVAILABLE_SUMMARY = "AI analysis not available. Configure an OpenAI API key to enable it."
ERROR_SUMMARY = "Error generating AI analysis. Please try again later."

SYSTEM_PROMPT = "You are a conservative real estate investment analyst."


class Insights(BaseModel):
    """Narrative assessment of an analyzed deal."""

    summary: str = "No summary provided"
    strengths: List[str] = []
    weaknesses: List[str] = []
    recommendations: List[str] = []
    investment_score: Optional[float] = Field(default=None, ge=0, le=100)
    available: bool = True

    # Multi-family only
    unit_mix_analysis: Optional[str] = None
    market_position_analysis: Optional[str] = None
    value_add_opportunities: Optional[List[str]] = None
    recommended_hold_period: Optional[str] = None

    @classmethod
    def placeholder(cls, summary: str) -> "Insights":
        return cls(summary=summary, available=False)


class InsightsService:
    """Insight generation with OpenAI integration."""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[OpenAI] = None):
        settings = settings or get_settings()
        self.model = settings.openai_model
        self.temperature = settings.openai_temperature
        self.max_tokens = settings.openai_max_tokens
        self.client = client

        if self.client is None and settings.openai_api_key:
            self.client = OpenAI(api_key=settings.openai_api_key)

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def _complete(self, prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            response_format={"type": "json_object"},
        )
        return response.choices[0].message.content or ""

    def generate(self, property_input: PropertyInput, result: AnalysisResult) -> Insights:
        """
        Generate insights for a completed analysis.

        Args:
            property_input: The analyzed property
            result: Its completed analysis

        Returns:
            Insights, or a placeholder with available=False
        """
        if not self.enabled:
            logger.info("OpenAI not configured, returning placeholder insights")
            return Insights.placeholder(UNAVAILABLE_SUMMARY)

        try:
            prompt = build_prompt(property_input, result)
            logger.info(f"Generated {result.property_type} analysis prompt ({len(prompt)} chars)")
            content = self._complete(prompt)
        except Exception as e:
            logger.error(f"Error getting AI insights: {str(e)}")
            return Insights.placeholder(ERROR_SUMMARY)

        try:
            return Insights.model_validate(json.loads(content))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Error parsing AI response: {str(e)}")
            return Insights.placeholder(ERROR_SUMMARY)


# Singleton instance
_insights_service: Optional[InsightsService] = None


def get_insights_service() -> InsightsService:
    """Get the insights service singleton."""
    global _insights_service
    if _insights_service is None:
        _insights_service = InsightsService()
    return _insights_service

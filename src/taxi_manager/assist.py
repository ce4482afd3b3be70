"""Best-effort AI Assist calls against the generative text service.

Both operations are enhancement-only: every failure (missing key, network
error, timeout, empty or malformed reply) is logged and converted into a safe
default, so callers never need to guard them.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Iterable, Optional

from google import genai
from google.genai import types
from pydantic import BaseModel, ValidationError

from taxi_manager.config import AssistConfig, load_config
from taxi_manager.models import Trip, TripCategory
from taxi_manager.storage import to_record

__all__ = ["INSIGHTS_FALLBACK", "AssistClient", "TripSuggestion", "can_suggest"]

logger = logging.getLogger(__name__)

INSIGHTS_FALLBACK = "Failed to generate AI insights. Please check your connection."


class TripSuggestion(BaseModel):
    purpose: str
    category: TripCategory


def can_suggest(pickup: str, dropoff: str) -> bool:
    return bool(pickup.strip()) and bool(dropoff.strip())


def build_insights_prompt(trips: Iterable[Trip]) -> str:
    """Embed the trips as JSON using the stored record shape: snake_case keys, amounts as decimal strings."""
    data = json.dumps([to_record(trip) for trip in trips])
    return (
        "Analyze the following taxi trip data for employees and provide a summary of spending patterns, "
        "potential areas for cost-saving, and any unusual activity.\n"
        f"Data: {data}"
    )


def build_suggestion_prompt(pickup: str, dropoff: str) -> str:
    return f'Based on a trip from "{pickup}" to "{dropoff}", suggest a likely business purpose and category.'


class AssistClient:
    """Wraps the generative service for insight text and trip autofill."""

    def __init__(self, config: Optional[AssistConfig] = None, client: Any = None) -> None:
        self.config = config or load_config()
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = genai.Client(api_key=self.config.api_key)
        return self._client

    async def _generate(self, prompt: str, config: types.GenerateContentConfig) -> Optional[str]:
        client = self._get_client()
        response = await asyncio.wait_for(
            client.aio.models.generate_content(model=self.config.model, contents=prompt, config=config),
            timeout=self.config.timeout_seconds,
        )
        return response.text

    async def generate_insights(self, trips: Iterable[Trip]) -> str:
        try:
            text = await self._generate(
                build_insights_prompt(trips),
                types.GenerateContentConfig(system_instruction=self.config.insight_system_instruction),
            )
        except Exception as exc:
            logger.warning("Insight generation failed: %s", exc)
            return INSIGHTS_FALLBACK
        if text is None:
            logger.warning("Insight generation returned no text")
            return INSIGHTS_FALLBACK
        return text

    async def suggest_trip_details(self, pickup: str, dropoff: str) -> Optional[TripSuggestion]:
        if not can_suggest(pickup, dropoff):
            logger.debug("Skipping suggestion: pickup and dropoff are both required")
            return None
        try:
            text = await self._generate(
                build_suggestion_prompt(pickup, dropoff),
                types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=TripSuggestion,
                ),
            )
        except Exception as exc:
            logger.warning("Trip suggestion failed: %s", exc)
            return None
        try:
            return TripSuggestion.model_validate_json(text or "{}")
        except ValidationError as exc:
            logger.warning("Discarding malformed trip suggestion: %s", exc)
            return None

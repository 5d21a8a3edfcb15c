"""
AI travel suggestions for ZakkaPlan.

This module wraps calls to Google's Generative Language API
(``generateContent``) to enrich a day plan:

    - ``suggest_next_stops``: three places worth visiting after the
      day's last stop.
    - ``describe_spot``: a short, friendly description of a spot.
    - ``recommend_food``: cafes and restaurants near a spot.

Example usage:

    client = GeminiClient(api_key="...")
    for s in suggest_next_stops(client, day):
        print(s.name, s.reason)

The model is asked for plain JSON, but replies frequently arrive
wrapped in Markdown code fences; these are stripped before parsing.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from zakkaplan.config import DEFAULT_GEMINI_MODEL, DEFAULT_TIMEOUT_SEC
from zakkaplan.errors import AIResponseFormatError, AIServiceError, MissingAPIKeyError
from zakkaplan.models import Day

logger = logging.getLogger(__name__)

API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
CITY = "Osaka"

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


@dataclass(frozen=True)
class Suggestion:
    name: str
    reason: str = ""
    kind: str = "spot"  # cafe / spot / shop


@dataclass(frozen=True)
class FoodRecommendation:
    name: str
    kind: str = ""
    rating: str = ""
    comment: str = ""


class GeminiClient:
    """Minimal client for the ``generateContent`` endpoint."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_GEMINI_MODEL,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = (api_key or "").strip()
        self.model = model
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, payload: Dict[str, Any], timeout: float) -> requests.Response:
        return self.session.post(
            API_URL.format(model=self.model),
            params={"key": self.api_key},
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )

    def generate(self, prompt: str) -> str:
        """Send a single-turn prompt and return the model's text reply.

        A timed out request is retried once with a doubled timeout.

        Raises:
            MissingAPIKeyError: if no API key is configured.
            AIServiceError: on network failures, non-2xx responses, or a
                reply without any candidate text.
        """
        if not self.api_key:
            raise MissingAPIKeyError("Please enter a Gemini API key first")
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        logger.debug("Calling generateContent: model=%s prompt_chars=%d", self.model, len(prompt))
        try:
            try:
                resp = self._post(payload, self.timeout)
            except requests.Timeout:
                logger.warning("generateContent timed out after %ss, retrying once", self.timeout)
                resp = self._post(payload, self.timeout * 2)
        except requests.RequestException as exc:
            logger.error("generateContent request failed: %s", exc)
            raise AIServiceError(f"Could not reach the AI service: {exc}") from exc

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not resp.ok:
            error = data.get("error") if isinstance(data, dict) else None
            message = error.get("message") if isinstance(error, dict) else None
            logger.error("generateContent returned %s: %s", resp.status_code, message)
            raise AIServiceError(message or f"AI service error (HTTP {resp.status_code})")

        text = _candidate_text(data)
        if not text:
            logger.error("generateContent returned no candidates")
            raise AIServiceError("The AI did not answer, please try again")
        return text


def _candidate_text(data: Any) -> str:
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return ""
    parts = content.get("parts")
    if not isinstance(parts, list):
        return ""
    for part in parts:
        if isinstance(part, dict) and isinstance(part.get("text"), str) and part["text"]:
            return part["text"]
    return ""


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences (```json ... ```) around a reply."""
    return _FENCE_RE.sub("", text or "").strip()


def parse_json_list(text: str) -> List[Dict[str, Any]]:
    """Parse a model reply that should contain a JSON array of objects.

    Raises:
        AIResponseFormatError: if the reply is not a JSON array.
    """
    cleaned = strip_code_fences(text)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.error("Failed to parse AI reply as JSON: %s", exc)
        raise AIResponseFormatError("The AI reply was not valid JSON", raw_text=text) from exc
    if not isinstance(payload, list):
        raise AIResponseFormatError("Expected a JSON list from the AI", raw_text=text)
    return [item for item in payload if isinstance(item, dict)]


def _next_stops_prompt(day: Day) -> str:
    spots = ", ".join(stop.name for stop in day.stops) or "(nothing yet)"
    return (
        f"I am travelling in {CITY}. Today's plan: {spots}. "
        "Based on the last stop, recommend 3 cute or must-visit places or shops "
        "that are on the way for the next stop. "
        "Reply with plain JSON only, no markdown: "
        '[{"name": "place name", "reason": "very short reason", "type": "cafe/spot/shop"}]'
    )


def _spot_prompt(spot_name: str) -> str:
    return (
        f"In the voice of a cheerful travel journal, introduce the highlights of "
        f'"{spot_name}" in {CITY} in under 100 words.'
    )


def _food_prompt(spot_name: str) -> str:
    return (
        f'Recommend 3 cute cafes or highly rated places to eat near "{spot_name}" in {CITY}. '
        "Reply with plain JSON only, no markdown: "
        '[{"name": "shop name", "type": "cuisine", "rating": "4.5", "comment": "short cute review"}]'
    )


def suggest_next_stops(client: GeminiClient, day: Day) -> List[Suggestion]:
    items = parse_json_list(client.generate(_next_stops_prompt(day)))
    return [
        Suggestion(
            name=str(item["name"]).strip(),
            reason=str(item.get("reason", "")),
            kind=str(item.get("type", "spot")),
        )
        for item in items
        if str(item.get("name", "")).strip()
    ]


def describe_spot(client: GeminiClient, spot_name: str) -> str:
    return client.generate(_spot_prompt(spot_name)).strip()


def recommend_food(client: GeminiClient, spot_name: str) -> List[FoodRecommendation]:
    items = parse_json_list(client.generate(_food_prompt(spot_name)))
    return [
        FoodRecommendation(
            name=str(item["name"]).strip(),
            kind=str(item.get("type", "")),
            rating=str(item.get("rating", "")),
            comment=str(item.get("comment", "")),
        )
        for item in items
        if str(item.get("name", "")).strip()
    ]

"""
Exception types shared across ZakkaPlan.

The planning engine raises only ``TooFewStopsError``; the remaining
classes belong to the AI suggestion client and are caught by the
Streamlit app, which turns them into user-facing messages.
"""

from __future__ import annotations

from typing import Sequence


class PlannerError(Exception):
    """Base class for all ZakkaPlan errors."""


class TooFewStopsError(PlannerError):
    """Raised when a route is too short to be worth reordering.

    The untouched input is kept on ``stops`` so that callers can carry on
    with the original order.
    """

    def __init__(self, stops: Sequence, minimum: int = 3):
        self.stops = list(stops)
        self.minimum = minimum
        super().__init__(
            f"At least {minimum} stops are needed to optimise a route, got {len(self.stops)}"
        )


class AIServiceError(PlannerError):
    """Raised when the generative-language API call fails."""


class MissingAPIKeyError(AIServiceError):
    """Raised when no API key has been configured."""


class AIResponseFormatError(AIServiceError):
    """Raised when the model reply cannot be parsed as the expected JSON."""

    def __init__(self, message: str, raw_text: str = ""):
        self.raw_text = raw_text
        super().__init__(message)

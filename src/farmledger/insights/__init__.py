"""AI advisor integration for farmledger."""

from farmledger.insights.client import GeminiClient, InsightsClient, InsightsError
from farmledger.insights.service import FALLBACK_INSIGHTS, InsightsService, parse_insights

__all__ = [
    "GeminiClient",
    "InsightsClient",
    "InsightsError",
    "InsightsService",
    "FALLBACK_INSIGHTS",
    "parse_insights",
]

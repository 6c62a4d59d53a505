"""Farm insights: prompt, reply validation, fallback, and the latest-reply slot."""

import json
import logging
import os
import threading
from textwrap import dedent
from typing import Optional

from farmledger.database.mappers import flock_to_dict, inventory_item_to_dict, transaction_to_dict
from farmledger.domain.entities import FarmInsights, FarmState
from farmledger.insights.client import InsightsClient, InsightsError

logger = logging.getLogger(__name__)

DEFAULT_TRANSACTION_LIMIT = 20

FALLBACK_INSIGHTS = FarmInsights(
    summary="Unable to generate AI insights at this time.",
    warnings=("Check your internet connection or API key.",),
    recommendations=("Manually review your feed and medicine stocks.",),
)

PROMPT_TEMPLATE = dedent(
    """
    Analyze the following poultry farm data and provide strategic insights.
    Current Data Summary:
    - Transactions: {transactions}
    - Active Flocks: {flocks}
    - Inventory: {inventory}

    Focus on:
    1. Financial health (Profit/Loss trends).
    2. Feed conversion ratio (FCR) estimation if possible.
    3. Health warnings (mortality spikes).
    4. Inventory management (low stock alerts).

    Provide the response in a structured JSON format with 'summary', 'warnings', and 'recommendations' keys.
    """
).strip()


def parse_insights(text: str) -> FarmInsights:
    """Validate the model's JSON reply.

    Raises:
        InsightsError: Unless the reply is an object with a string ``summary``
            and string lists ``warnings`` and ``recommendations``
    """
    try:
        data = json.loads(text)
    except (TypeError, json.JSONDecodeError) as e:
        raise InsightsError(f"Reply is not JSON: {e}") from e

    if not isinstance(data, dict):
        raise InsightsError("Reply is not a JSON object")

    summary = data.get("summary")
    if not isinstance(summary, str):
        raise InsightsError("Reply 'summary' must be a string")

    lists = {}
    for key in ("warnings", "recommendations"):
        value = data.get(key)
        if not isinstance(value, list) or not all(isinstance(entry, str) for entry in value):
            raise InsightsError(f"Reply '{key}' must be a list of strings")
        lists[key] = tuple(value)

    return FarmInsights(summary=summary, warnings=lists["warnings"], recommendations=lists["recommendations"])


def _transaction_limit_from_env() -> int:
    value = os.environ.get("FARMLEDGER_AI_TRANSACTIONS")
    if value is None:
        return DEFAULT_TRANSACTION_LIMIT
    try:
        return int(value)
    except ValueError:
        logger.warning(
            "Ignoring FARMLEDGER_AI_TRANSACTIONS=%r: not a whole number; using %d",
            value,
            DEFAULT_TRANSACTION_LIMIT,
        )
        return DEFAULT_TRANSACTION_LIMIT


class InsightsService:
    """Asks the advisor model about a farm snapshot.

    Only the reply to the newest request is kept in :attr:`latest`; replies
    to superseded requests are discarded.
    """

    def __init__(self, client: Optional[InsightsClient], transaction_limit: Optional[int] = None):
        """Initialize insights service.

        Args:
            client: Model client; None always yields the fallback reply
            transaction_limit: Most recent transactions included in the prompt.
                If None, checks FARMLEDGER_AI_TRANSACTIONS, then defaults to 20.
        """
        if transaction_limit is None:
            transaction_limit = _transaction_limit_from_env()
        self.client = client
        self.transaction_limit = transaction_limit
        self.latest: Optional[FarmInsights] = None
        self._generation = 0
        self._lock = threading.Lock()

    def build_prompt(self, state: FarmState) -> str:
        """Embed a JSON snapshot of ``state`` in the analysis prompt."""
        recent = state.transactions[: max(0, self.transaction_limit)]
        return PROMPT_TEMPLATE.format(
            transactions=json.dumps([transaction_to_dict(t) for t in recent], ensure_ascii=False),
            flocks=json.dumps([flock_to_dict(f) for f in state.flocks], ensure_ascii=False),
            inventory=json.dumps([inventory_item_to_dict(i) for i in state.inventory], ensure_ascii=False),
        )

    def fetch_insights(self, state: FarmState) -> FarmInsights:
        """Ask the model about ``state``. Never raises; failures yield the fallback."""
        if self.client is None:
            return FALLBACK_INSIGHTS
        try:
            return parse_insights(self.client.generate(self.build_prompt(state)))
        except InsightsError as e:
            logger.error("AI insights unavailable: %s", e)
            return FALLBACK_INSIGHTS
        except Exception:
            # Any client failure degrades to the fallback reply.
            logger.exception("AI insights client failed")
            return FALLBACK_INSIGHTS

    def begin_request(self) -> int:
        """Start a request; any earlier in-flight request becomes stale."""
        with self._lock:
            self._generation += 1
            return self._generation

    def complete_request(self, token: int, insights: FarmInsights) -> bool:
        """Store ``insights`` if ``token`` is still the newest request.

        Returns:
            True if stored, False if the reply was stale and dropped
        """
        with self._lock:
            if token != self._generation:
                logger.debug("Discarding stale insights reply %d (latest is %d)", token, self._generation)
                return False
            self.latest = insights
            return True

    def refresh(self, state: FarmState) -> FarmInsights:
        """Fetch insights for ``state`` and store them as the latest reply."""
        token = self.begin_request()
        insights = self.fetch_insights(state)
        self.complete_request(token, insights)
        return insights

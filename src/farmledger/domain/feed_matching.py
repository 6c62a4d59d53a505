"""Strategies for picking the stock line a feed entry draws down.

A matcher receives the inventory in list order and returns at most one item.
Only one line is ever decremented per feed entry; farms holding several feed
products should pass a matcher that knows which one the flock eats.
"""

from typing import Callable, Optional, Sequence

from farmledger.domain.entities import Category, InventoryItem

FeedStockMatcher = Callable[[Sequence[InventoryItem]], Optional[InventoryItem]]

# English and Bengali words for feed/food as they appear in item names.
FEED_NAME_TERMS = ("feed", "খাদ্য", "ফিড")


def is_feed_item(item: InventoryItem) -> bool:
    """Return True for FEED stock or items named like feed."""
    if item.category == Category.FEED:
        return True
    name = item.name.casefold()
    return any(term in name for term in FEED_NAME_TERMS)


def first_feed_item(inventory: Sequence[InventoryItem]) -> Optional[InventoryItem]:
    """Default matcher: the first feed item in list order."""
    for item in inventory:
        if is_feed_item(item):
            return item
    return None


def match_by_id(item_id: str) -> FeedStockMatcher:
    """Matcher that always draws from the item with ``item_id``."""

    def matcher(inventory: Sequence[InventoryItem]) -> Optional[InventoryItem]:
        for item in inventory:
            if item.id == item_id:
                return item
        return None

    return matcher

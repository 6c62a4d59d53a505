"""Inventory domain service."""

from dataclasses import replace
from decimal import Decimal
from typing import Any, Optional

from farmledger.domain.entities import INVENTORY_CATEGORIES, Category, InventoryItem
from farmledger.domain.errors import NotFoundError, ValidationError, inventory_item_not_found
from farmledger.domain.ledger import FarmLedger
from farmledger.utils.amount_parser import coerce_decimal, coerce_quantity

EDITABLE_FIELDS = frozenset({"name", "category", "current_quantity", "unit", "min_threshold"})


def is_low_stock(item: InventoryItem) -> bool:
    """True when the quantity is strictly below the threshold."""
    return item.current_quantity < item.min_threshold


def _inventory_category(category) -> Category:
    try:
        category = Category(category)
    except ValueError:
        raise ValidationError(f"Unknown inventory category '{category}'")
    if category not in INVENTORY_CATEGORIES:
        raise ValidationError(f"Inventory items must be FEED or MEDICINE, got {category.value}")
    return category


class InventoryService:
    """Service for managing feed and medicine stock."""

    def __init__(self, ledger: FarmLedger):
        """Initialize inventory service.

        Args:
            ledger: FarmLedger instance
        """
        self.ledger = ledger

    def add_item(
        self,
        name: str,
        category: Category,
        current_quantity: Decimal,
        unit: str,
        min_threshold: Decimal,
    ) -> InventoryItem:
        """Add a stock line.

        Raises:
            ValidationError: If the name is empty or the category is not FEED/MEDICINE
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Item name is required")

        item = InventoryItem(
            id=self.ledger.next_id(),
            name=name,
            category=_inventory_category(category),
            current_quantity=coerce_quantity(current_quantity),
            unit=(unit or "").strip(),
            min_threshold=coerce_decimal(min_threshold),
        )
        state = self.ledger.state
        self.ledger.commit(replace(state, inventory=(item,) + state.inventory))
        return item

    def get_item(self, item_id: str) -> Optional[InventoryItem]:
        """Get inventory item by ID."""
        for item in self.ledger.state.inventory:
            if item.id == item_id:
                return item
        return None

    def require_item(self, item_id: str) -> InventoryItem:
        """Get inventory item by ID or raise NotFoundError."""
        item = self.get_item(item_id)
        if item is None:
            raise NotFoundError(inventory_item_not_found(item_id))
        return item

    def list_items(self) -> list[InventoryItem]:
        """List inventory in stored order."""
        return list(self.ledger.state.inventory)

    def update_item(self, item_id: str, **fields: Any) -> InventoryItem:
        """Merge the given fields into an item.

        Raises:
            NotFoundError: If the item doesn't exist
            ValidationError: If fields are unknown or invalid
        """
        item = self.require_item(item_id)

        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown inventory fields: {', '.join(sorted(unknown))}")

        changes = dict(fields)
        if "name" in changes:
            changes["name"] = (changes["name"] or "").strip()
            if not changes["name"]:
                raise ValidationError("Item name is required")
        if "category" in changes:
            changes["category"] = _inventory_category(changes["category"])
        if "current_quantity" in changes:
            changes["current_quantity"] = coerce_quantity(changes["current_quantity"])
        if "min_threshold" in changes:
            changes["min_threshold"] = coerce_decimal(changes["min_threshold"])
        if "unit" in changes:
            changes["unit"] = (changes["unit"] or "").strip()

        updated = replace(item, **changes)
        state = self.ledger.state
        self.ledger.commit(
            replace(state, inventory=tuple(updated if i.id == item_id else i for i in state.inventory))
        )
        return updated

    def delete_item(self, item_id: str) -> None:
        """Delete an inventory item.

        Raises:
            NotFoundError: If the item doesn't exist
        """
        item = self.require_item(item_id)
        state = self.ledger.state
        self.ledger.commit(
            replace(state, inventory=tuple(i for i in state.inventory if i.id != item_id)),
            undo_message=f"Deleted inventory item {item.name}",
        )

    def low_stock_items(self) -> list[InventoryItem]:
        """Items strictly below their minimum threshold."""
        return [item for item in self.ledger.state.inventory if is_low_stock(item)]

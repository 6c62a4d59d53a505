"""Mapper functions to convert between domain models and stored shapes.

Two stored shapes exist: SQLAlchemy rows for the database store and plain
dicts for the JSON cache. Dict readers are forgiving: missing
collections default to empty, numbers are coerced, and the camelCase keys
written by older browser builds (``batchName``, ``currentQuantity`` ...) are
accepted alongside snake_case ones.
"""

import logging
import uuid
from typing import Any, Optional

from farmledger.domain import entities as domain
from farmledger.database.models import (
    Transaction as ORMTransaction,
    Flock as ORMFlock,
    WeightLog as ORMWeightLog,
    MortalityLog as ORMMortalityLog,
    FeedLog as ORMFeedLog,
    InventoryItem as ORMInventoryItem,
)
from farmledger.utils.amount_parser import coerce_decimal, coerce_quantity, coerce_count
from farmledger.utils.date_parser import coerce_date

logger = logging.getLogger(__name__)


# ORM -> domain

def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        type=domain.TransactionType(orm_transaction.type),
        category=domain.Category(orm_transaction.category),
        amount=orm_transaction.amount,
        description=orm_transaction.description or "",
        flock_id=orm_transaction.flock_id,
    )


def flock_to_domain(orm_flock: ORMFlock) -> domain.Flock:
    """Convert SQLAlchemy Flock model (with its logs) to domain Flock entity."""
    return domain.Flock(
        id=orm_flock.id,
        batch_name=orm_flock.batch_name,
        breed=orm_flock.breed or "",
        start_date=orm_flock.start_date,
        initial_count=orm_flock.initial_count,
        current_count=orm_flock.current_count,
        weight_logs=tuple(
            domain.WeightLog(
                id=log.id, date=log.date, average_weight=log.average_weight, sample_size=log.sample_size
            )
            for log in orm_flock.weight_logs
        ),
        mortality_logs=tuple(
            domain.MortalityLog(id=log.id, date=log.date, count=log.count, reason=log.reason)
            for log in orm_flock.mortality_logs
        ),
        feed_logs=tuple(
            domain.FeedLog(id=log.id, date=log.date, amount=log.amount, unit=log.unit)
            for log in orm_flock.feed_logs
        ),
    )


def inventory_item_to_domain(orm_item: ORMInventoryItem) -> domain.InventoryItem:
    """Convert SQLAlchemy InventoryItem model to domain InventoryItem entity."""
    return domain.InventoryItem(
        id=orm_item.id,
        name=orm_item.name,
        category=domain.Category(orm_item.category),
        current_quantity=orm_item.current_quantity,
        unit=orm_item.unit,
        min_threshold=orm_item.min_threshold,
    )


# domain -> ORM

def transaction_to_orm(transaction: domain.Transaction, position: int) -> ORMTransaction:
    """Build a SQLAlchemy Transaction row from a domain entity."""
    return ORMTransaction(
        id=transaction.id,
        position=position,
        date=transaction.date,
        type=transaction.type.value,
        category=transaction.category.value,
        amount=transaction.amount,
        description=transaction.description,
        flock_id=transaction.flock_id,
    )


def flock_to_orm(flock: domain.Flock, position: int) -> ORMFlock:
    """Build a SQLAlchemy Flock row, including its owned logs."""
    return ORMFlock(
        id=flock.id,
        position=position,
        batch_name=flock.batch_name,
        breed=flock.breed,
        start_date=flock.start_date,
        initial_count=flock.initial_count,
        current_count=flock.current_count,
        weight_logs=[
            ORMWeightLog(
                id=log.id,
                position=index,
                date=log.date,
                average_weight=log.average_weight,
                sample_size=log.sample_size,
            )
            for index, log in enumerate(flock.weight_logs)
        ],
        mortality_logs=[
            ORMMortalityLog(id=log.id, position=index, date=log.date, count=log.count, reason=log.reason)
            for index, log in enumerate(flock.mortality_logs)
        ],
        feed_logs=[
            ORMFeedLog(id=log.id, position=index, date=log.date, amount=log.amount, unit=log.unit)
            for index, log in enumerate(flock.feed_logs)
        ],
    )


def inventory_item_to_orm(item: domain.InventoryItem, position: int) -> ORMInventoryItem:
    """Build a SQLAlchemy InventoryItem row from a domain entity."""
    return ORMInventoryItem(
        id=item.id,
        position=position,
        name=item.name,
        category=item.category.value,
        current_quantity=item.current_quantity,
        unit=item.unit,
        min_threshold=item.min_threshold,
    )


# dict <-> domain

def _pick(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _record_id(data: dict[str, Any]) -> str:
    value = data.get("id")
    return str(value) if value not in (None, "") else uuid.uuid4().hex


def _enum_value(enum_cls, value, default):
    try:
        return enum_cls(str(value).upper())
    except ValueError:
        return default


def _records(data: dict[str, Any], *keys: str) -> list[dict[str, Any]]:
    value = _pick(data, *keys, default=[])
    if not isinstance(value, list):
        logger.warning("Ignoring %s: expected a list, got %s", keys[0], type(value).__name__)
        return []
    return [record for record in value if isinstance(record, dict)]


def transaction_from_dict(data: dict[str, Any]) -> domain.Transaction:
    """Build a Transaction from a stored dict."""
    flock_id = _pick(data, "flock_id", "flockId")
    return domain.Transaction(
        id=_record_id(data),
        date=coerce_date(data.get("date")),
        type=_enum_value(domain.TransactionType, data.get("type"), domain.TransactionType.EXPENSE),
        category=_enum_value(domain.Category, data.get("category"), domain.Category.OTHER),
        amount=coerce_decimal(data.get("amount")),
        description=str(data.get("description") or ""),
        flock_id=str(flock_id) if flock_id not in (None, "") else None,
    )


def flock_from_dict(data: dict[str, Any]) -> domain.Flock:
    """Build a Flock (with logs) from a stored dict."""
    initial_count = coerce_count(_pick(data, "initial_count", "initialCount"))
    return domain.Flock(
        id=_record_id(data),
        batch_name=str(_pick(data, "batch_name", "batchName", default="")),
        breed=str(data.get("breed") or ""),
        start_date=coerce_date(_pick(data, "start_date", "startDate")),
        initial_count=initial_count,
        current_count=coerce_count(_pick(data, "current_count", "currentCount", default=initial_count)),
        weight_logs=tuple(
            domain.WeightLog(
                id=_record_id(log),
                date=coerce_date(log.get("date")),
                average_weight=coerce_quantity(_pick(log, "average_weight", "averageWeight")),
                sample_size=coerce_count(_pick(log, "sample_size", "sampleSize")),
            )
            for log in _records(data, "weight_logs", "weightLogs")
        ),
        mortality_logs=tuple(
            domain.MortalityLog(
                id=_record_id(log),
                date=coerce_date(log.get("date")),
                count=coerce_count(log.get("count")),
                reason=log.get("reason") or None,
            )
            for log in _records(data, "mortality_logs", "mortalityLogs")
        ),
        feed_logs=tuple(
            domain.FeedLog(
                id=_record_id(log),
                date=coerce_date(log.get("date")),
                amount=coerce_quantity(log.get("amount")),
                unit=str(log.get("unit") or "kg"),
            )
            for log in _records(data, "feed_logs", "feedLogs")
        ),
    )


def inventory_item_from_dict(data: dict[str, Any]) -> domain.InventoryItem:
    """Build an InventoryItem from a stored dict."""
    return domain.InventoryItem(
        id=_record_id(data),
        name=str(data.get("name") or ""),
        category=_enum_value(domain.Category, data.get("category"), domain.Category.FEED),
        current_quantity=coerce_quantity(_pick(data, "current_quantity", "currentQuantity")),
        unit=str(data.get("unit") or ""),
        min_threshold=coerce_decimal(_pick(data, "min_threshold", "minThreshold")),
    )


def state_from_dict(data: Optional[dict[str, Any]]) -> domain.FarmState:
    """Build a FarmState from a possibly partial dict."""
    if not isinstance(data, dict):
        return domain.FarmState()
    return domain.FarmState(
        transactions=tuple(transaction_from_dict(record) for record in _records(data, "transactions")),
        flocks=tuple(flock_from_dict(record) for record in _records(data, "flocks")),
        inventory=tuple(inventory_item_from_dict(record) for record in _records(data, "inventory")),
    )


def transaction_to_dict(transaction: domain.Transaction) -> dict[str, Any]:
    """Serialize a Transaction to JSON-compatible primitives."""
    return {
        "id": transaction.id,
        "date": transaction.date.isoformat(),
        "type": transaction.type.value,
        "category": transaction.category.value,
        "amount": str(transaction.amount),
        "description": transaction.description,
        "flock_id": transaction.flock_id,
    }


def flock_to_dict(flock: domain.Flock) -> dict[str, Any]:
    """Serialize a Flock and its logs to JSON-compatible primitives."""
    return {
        "id": flock.id,
        "batch_name": flock.batch_name,
        "breed": flock.breed,
        "start_date": flock.start_date.isoformat(),
        "initial_count": flock.initial_count,
        "current_count": flock.current_count,
        "weight_logs": [
            {
                "id": log.id,
                "date": log.date.isoformat(),
                "average_weight": str(log.average_weight),
                "sample_size": log.sample_size,
            }
            for log in flock.weight_logs
        ],
        "mortality_logs": [
            {"id": log.id, "date": log.date.isoformat(), "count": log.count, "reason": log.reason}
            for log in flock.mortality_logs
        ],
        "feed_logs": [
            {"id": log.id, "date": log.date.isoformat(), "amount": str(log.amount), "unit": log.unit}
            for log in flock.feed_logs
        ],
    }


def inventory_item_to_dict(item: domain.InventoryItem) -> dict[str, Any]:
    """Serialize an InventoryItem to JSON-compatible primitives."""
    return {
        "id": item.id,
        "name": item.name,
        "category": item.category.value,
        "current_quantity": str(item.current_quantity),
        "unit": item.unit,
        "min_threshold": str(item.min_threshold),
    }


def state_to_dict(state: domain.FarmState) -> dict[str, Any]:
    """Serialize a whole FarmState."""
    return {
        "transactions": [transaction_to_dict(t) for t in state.transactions],
        "flocks": [flock_to_dict(f) for f in state.flocks],
        "inventory": [inventory_item_to_dict(i) for i in state.inventory],
    }

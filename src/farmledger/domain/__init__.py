"""Domain layer for farmledger application."""

from farmledger.domain.ledger import FarmLedger
from farmledger.domain.transaction import TransactionService
from farmledger.domain.flock import FlockService
from farmledger.domain.inventory import InventoryService
from farmledger.domain.summary import compute_dashboard_stats
from farmledger.domain.report import build_batch_report

__all__ = [
    "FarmLedger",
    "TransactionService",
    "FlockService",
    "InventoryService",
    "compute_dashboard_stats",
    "build_batch_report",
]

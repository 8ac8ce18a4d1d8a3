"""Stock level arithmetic shared by products and flavors.

Stock Model:
    inventory:           Physical count on hand
    reserved_inventory:  Held for orders not yet fulfilled or cancelled
    available:           inventory - reserved_inventory, never below zero
    low_stock_threshold: Reorder point; available at or below it is low stock

Every function here is pure over a stock-bearing record. A record is anything
exposing ``inventory``, ``reserved_inventory`` and ``low_stock_threshold``,
either as attributes (aggregates, entities, dataclasses) or as mapping keys.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


class StockStatus(Enum):
    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"
    IN_STOCK = "in_stock"


def _read(record: Any, field: str, default: int = 0) -> int:
    if isinstance(record, Mapping):
        value = record.get(field, default)
    else:
        value = getattr(record, field, default)
    return default if value is None else value


def available_inventory(record: Any) -> int:
    """Stock that can still be sold: on hand minus reserved, clamped at zero."""
    inventory = _read(record, "inventory")
    reserved = _read(record, "reserved_inventory")

    if reserved > inventory:
        # Over-reservation comes from the order side; report it, don't fail on it
        logger.warning(
            "Reserved inventory exceeds stock on hand, clamping availability to zero",
            inventory=inventory,
            reserved_inventory=reserved,
            over_reserved_by=reserved - inventory,
        )
        return 0

    return inventory - reserved


def is_out_of_stock(record: Any) -> bool:
    return available_inventory(record) == 0


def is_low_stock(record: Any) -> bool:
    """True when something is left but at or below the reorder point.

    Never true together with ``is_out_of_stock``.
    """
    available = available_inventory(record)
    return 0 < available <= _read(record, "low_stock_threshold")


def stock_status(record: Any) -> StockStatus:
    available = available_inventory(record)
    if available == 0:
        return StockStatus.OUT_OF_STOCK
    if available <= _read(record, "low_stock_threshold"):
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK

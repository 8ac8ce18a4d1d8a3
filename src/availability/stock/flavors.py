"""Flavor availability: which flavor options a shopper may pick.

A product offers flavors in one of two shapes:

- ``LegacyFlavor``: a bare name from the product's plain flavor list. There is
  no stock signal, so every legacy flavor is selectable and availability is
  not displayed.
- ``TrackedFlavor``: a flavor with its own stock counters and an active flag.
  It is selectable only while active and not out of stock.

A product tracks flavor inventory exactly when it has explicit flavor records.
Functions that take "flavor records" also accept any object shaped like a
``TrackedFlavor`` (for example the ``ProductFlavor`` entity).
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from availability.stock.levels import (
    StockStatus,
    available_inventory,
    is_low_stock,
    is_out_of_stock,
    stock_status,
)

DEFAULT_FLAVOR_LOW_STOCK_THRESHOLD = 5


@dataclass(frozen=True)
class LegacyFlavor:
    """A flavor known only by name."""

    name: str

    @property
    def active(self) -> bool:
        return True


@dataclass(frozen=True)
class TrackedFlavor:
    """A flavor with per-flavor stock counters."""

    name: str
    inventory: int = 0
    reserved_inventory: int = 0
    low_stock_threshold: int = DEFAULT_FLAVOR_LOW_STOCK_THRESHOLD
    active: bool = True
    flavor_id: str | None = None


def _is_active(flavor: Any) -> bool:
    if isinstance(flavor, Mapping):
        return bool(flavor.get("active", True))
    return bool(getattr(flavor, "active", True))


def _has_stock_signal(flavor: Any) -> bool:
    return not isinstance(flavor, LegacyFlavor)


def eligible_flavors(flavors: Iterable[Any], tracks_inventory: bool) -> list[Any]:
    """Filter flavors down to the ones a shopper can add to the cart.

    Untracked products gate on ``active`` alone. Tracked products also drop
    every flavor with nothing available.
    """
    eligible = []
    for flavor in flavors:
        if not _is_active(flavor):
            continue
        if tracks_inventory and _has_stock_signal(flavor) and is_out_of_stock(flavor):
            continue
        eligible.append(flavor)
    return eligible


# ---------------------------------------------------------------------------
# Per-flavor classification (inactive flavors count as out of stock)
# ---------------------------------------------------------------------------
def is_flavor_out_of_stock(flavor: Any) -> bool:
    return not _is_active(flavor) or is_out_of_stock(flavor)


def is_flavor_low_stock(flavor: Any) -> bool:
    return _is_active(flavor) and is_low_stock(flavor)


def flavor_stock_status(flavor: Any) -> StockStatus:
    if not _is_active(flavor):
        return StockStatus.OUT_OF_STOCK
    return stock_status(flavor)


# ---------------------------------------------------------------------------
# Product-level views over tracked flavors
# ---------------------------------------------------------------------------
def _active(flavors: Iterable[Any]) -> list[Any]:
    return [f for f in flavors if _is_active(f)]


def product_total_available(flavors: Iterable[Any]) -> int:
    return sum(available_inventory(f) for f in _active(flavors))


def product_stock_status(flavors: Iterable[Any]) -> StockStatus:
    """Roll flavor statuses up to the product.

    Out of stock when no active flavor has anything left, low stock when any
    active flavor is low, in stock otherwise.
    """
    active = _active(flavors)
    if not active or all(is_out_of_stock(f) for f in active):
        return StockStatus.OUT_OF_STOCK
    if any(is_low_stock(f) for f in active):
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def low_stock_flavors(flavors: Iterable[Any]) -> list[Any]:
    return [f for f in _active(flavors) if is_low_stock(f)]


def out_of_stock_flavors(flavors: Iterable[Any]) -> list[Any]:
    return [f for f in _active(flavors) if is_out_of_stock(f)]


def _record_id(record: Any) -> str | None:
    record_id = getattr(record, "id", None) or getattr(record, "flavor_id", None)
    return str(record_id) if record_id is not None else None


def flavor_options(
    flavor_names: Sequence[str] | None,
    flavor_records: Sequence[Any] | None,
) -> tuple[list[LegacyFlavor | TrackedFlavor], bool]:
    """Build the closed flavor variant list for one product.

    Returns the options together with the ``tracks_inventory`` flag. Explicit
    records win; the plain name list is only used when there are none.
    """
    if flavor_records:
        options = [
            TrackedFlavor(
                name=record.name,
                inventory=record.inventory or 0,
                reserved_inventory=record.reserved_inventory or 0,
                low_stock_threshold=(
                    record.low_stock_threshold
                    if record.low_stock_threshold is not None
                    else DEFAULT_FLAVOR_LOW_STOCK_THRESHOLD
                ),
                active=bool(record.active),
                flavor_id=_record_id(record),
            )
            for record in flavor_records
        ]
        return options, True

    return [LegacyFlavor(name=name) for name in (flavor_names or [])], False

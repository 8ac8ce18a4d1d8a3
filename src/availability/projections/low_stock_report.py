"""Low stock report: products and flavors at or below their reorder point.

Feeds the back-office dashboard. Rows are keyed by product id for product
level stock and by ``product_id::flavor_id`` for flavors.
"""

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, Identifier, Integer, String
from protean.utils.globals import current_domain

from availability.domain import availability
from availability.product.events import (
    FlavorActivationChanged,
    FlavorAdded,
    FlavorInventoryUpdated,
    LowStockDetected,
    ProductInventoryUpdated,
)
from availability.product.product import Product
from availability.stock.levels import StockStatus


@availability.projection
class LowStockReport:
    report_key: Identifier(identifier=True, required=True)
    product_id: Identifier(required=True)
    flavor_id: Identifier()
    name: String(required=True)
    current_available: Integer(default=0)
    low_stock_threshold: Integer(default=0)
    stock_status: String(required=True)
    is_critical: Boolean(default=False)  # nothing available
    detected_at: DateTime()


def build_report_key(product_id, flavor_id=None):
    if flavor_id:
        return f"{product_id}::{flavor_id}"
    return str(product_id)


def _get(key):
    try:
        return current_domain.repository_for(LowStockReport).get(key)
    except ObjectNotFoundError:
        return None


def _refresh_or_drop(key, available, threshold, status):
    """Update an existing row, or drop it once the record is back in stock."""
    report = _get(key)
    if report is None:
        return

    repo = current_domain.repository_for(LowStockReport)
    if status == StockStatus.IN_STOCK.value:
        repo._dao.delete(report)
        return

    report.current_available = available
    report.low_stock_threshold = threshold
    report.stock_status = status
    report.is_critical = available == 0
    repo.add(report)


@availability.projector(projector_for=LowStockReport, aggregates=[Product])
class LowStockReportProjector:
    @on(LowStockDetected)
    def on_low_stock_detected(self, event):
        key = build_report_key(event.product_id, event.flavor_id)
        report = _get(key)
        if report is None:
            report = LowStockReport(
                report_key=key,
                product_id=event.product_id,
                flavor_id=event.flavor_id,
                name=event.name,
                current_available=event.current_available,
                low_stock_threshold=event.low_stock_threshold,
                stock_status=event.stock_status,
                is_critical=event.current_available == 0,
                detected_at=event.detected_at,
            )
        else:
            report.current_available = event.current_available
            report.low_stock_threshold = event.low_stock_threshold
            report.stock_status = event.stock_status
            report.is_critical = event.current_available == 0
            report.detected_at = event.detected_at
        current_domain.repository_for(LowStockReport).add(report)

    @on(ProductInventoryUpdated)
    def on_product_inventory_updated(self, event):
        _refresh_or_drop(
            build_report_key(event.product_id),
            event.available_inventory,
            event.low_stock_threshold,
            event.stock_status,
        )

    @on(FlavorInventoryUpdated)
    def on_flavor_inventory_updated(self, event):
        _refresh_or_drop(
            build_report_key(event.product_id, event.flavor_id),
            event.available_inventory,
            event.low_stock_threshold,
            event.stock_status,
        )

    @on(FlavorActivationChanged)
    def on_flavor_activation_changed(self, event):
        """Inactive flavors are off sale, so they no longer need restocking."""
        if event.active:
            return
        report = _get(build_report_key(event.product_id, event.flavor_id))
        if report is not None:
            current_domain.repository_for(LowStockReport)._dao.delete(report)

    @on(FlavorAdded)
    def on_flavor_added(self, event):
        """Once a product tracks flavor stock, its flavors are reported instead."""
        report = _get(build_report_key(event.product_id))
        if report is not None:
            current_domain.repository_for(LowStockReport)._dao.delete(report)

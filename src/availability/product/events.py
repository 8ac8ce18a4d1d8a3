"""Domain events for the Product aggregate.

Inventory events carry the derived availability and status at the time of the
change so that read models never recompute them.
"""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from availability.domain import availability


@availability.event(part_of="Product")
class ProductRegistered:
    """A product was added to the storefront."""

    product_id: Identifier(required=True)
    name: String(required=True)
    puffs: Integer(required=True)
    price: Float(required=True)
    flavor_names: Text()  # JSON list of plain flavor names
    inventory: Integer(required=True)
    reserved_inventory: Integer(required=True)
    low_stock_threshold: Integer(required=True)
    registered_at: DateTime(required=True)


@availability.event(part_of="Product")
class ProductInventoryUpdated:
    """Product-level stock counters were edited."""

    product_id: Identifier(required=True)
    previous_inventory: Integer(required=True)
    inventory: Integer(required=True)
    reserved_inventory: Integer(required=True)
    low_stock_threshold: Integer(required=True)
    available_inventory: Integer(required=True)
    stock_status: String(required=True)
    updated_at: DateTime(required=True)


@availability.event(part_of="Product")
class FlavorAdded:
    """A stock-tracked flavor was added to a product."""

    product_id: Identifier(required=True)
    flavor_id: Identifier(required=True)
    name: String(required=True)
    inventory: Integer(required=True)
    reserved_inventory: Integer(required=True)
    low_stock_threshold: Integer(required=True)
    added_at: DateTime(required=True)


@availability.event(part_of="Product")
class FlavorInventoryUpdated:
    """A flavor's stock counters were edited."""

    product_id: Identifier(required=True)
    flavor_id: Identifier(required=True)
    previous_inventory: Integer(required=True)
    inventory: Integer(required=True)
    reserved_inventory: Integer(required=True)
    low_stock_threshold: Integer(required=True)
    available_inventory: Integer(required=True)
    stock_status: String(required=True)
    updated_at: DateTime(required=True)


@availability.event(part_of="Product")
class FlavorActivationChanged:
    """A flavor was taken off sale or put back on sale."""

    product_id: Identifier(required=True)
    flavor_id: Identifier(required=True)
    name: String(required=True)
    active: Boolean(required=True)
    changed_at: DateTime(required=True)


@availability.event(part_of="Product")
class LowStockDetected:
    """Availability of a product or one of its flavors fell to the reorder point or below.

    ``flavor_id`` is empty for product-level detections.
    """

    product_id: Identifier(required=True)
    flavor_id: Identifier()
    name: String(required=True)
    current_available: Integer(required=True)
    low_stock_threshold: Integer(required=True)
    stock_status: String(required=True)
    detected_at: DateTime(required=True)

"""Product aggregate root with the ProductFlavor entity.

Both carry the same stock counters (inventory, reserved_inventory,
low_stock_threshold). A product whose flavors are explicit ProductFlavor
records tracks stock per flavor; one that only has plain ``flavor_names``
is sold in legacy mode and its flavors are gated on nothing but being listed.
"""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Integer, String, Text

from availability.domain import availability
from availability.stock import flavors as flavor_rules
from availability.stock import levels
from availability.stock.levels import StockStatus

DEFAULT_LOW_STOCK_THRESHOLD = 10

_ALERT_STATUSES = (StockStatus.LOW_STOCK, StockStatus.OUT_OF_STOCK)


def _require_non_negative(**counters):
    errors = {name: [f"{name} cannot be negative"] for name, value in counters.items() if value is not None and value < 0}
    if errors:
        raise ValidationError(errors)


@availability.entity(part_of="Product")
class ProductFlavor:
    """A flavor variant with its own stock."""

    name: String(required=True, max_length=100)
    inventory: Integer(default=0, min_value=0)
    reserved_inventory: Integer(default=0, min_value=0)
    low_stock_threshold: Integer(default=flavor_rules.DEFAULT_FLAVOR_LOW_STOCK_THRESHOLD, min_value=0)
    active: Boolean(default=True)
    created_at: DateTime()


@availability.aggregate
class Product:
    """Product aggregate root."""

    name: String(required=True, max_length=255)
    puffs: Integer(required=True, min_value=0)
    price: Float(required=True, min_value=0.01)
    description: Text()
    image: String(max_length=500)
    flavor_names: Text()  # JSON list, legacy flavor source
    popular: Boolean(default=False)
    active: Boolean(default=True)
    inventory: Integer(default=0, min_value=0)
    reserved_inventory: Integer(default=0, min_value=0)
    low_stock_threshold: Integer(default=DEFAULT_LOW_STOCK_THRESHOLD, min_value=0)
    flavors: HasMany(ProductFlavor)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def flavor_names_must_be_unique(self):
        names = [f.name.strip().lower() for f in self.flavors]
        if len(names) != len(set(names)):
            raise ValidationError({"flavors": ["Flavor names must be unique within a product"]})

    @classmethod
    def register(
        cls,
        name,
        puffs,
        price,
        flavor_names=None,
        description=None,
        image=None,
        popular=False,
        inventory=0,
        reserved_inventory=0,
        low_stock_threshold=DEFAULT_LOW_STOCK_THRESHOLD,
    ):
        from availability.product.events import ProductRegistered

        _require_non_negative(
            inventory=inventory,
            reserved_inventory=reserved_inventory,
            low_stock_threshold=low_stock_threshold,
        )

        names = [n.strip() for n in (flavor_names or []) if n and n.strip()]
        names_json = json.dumps(names)
        now = datetime.now(UTC)

        product = cls(
            name=name,
            puffs=puffs,
            price=price,
            description=description,
            image=image,
            flavor_names=names_json,
            popular=bool(popular),
            inventory=inventory,
            reserved_inventory=reserved_inventory,
            low_stock_threshold=low_stock_threshold,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductRegistered(
                product_id=product.id,
                name=name,
                puffs=puffs,
                price=price,
                flavor_names=names_json,
                inventory=inventory,
                reserved_inventory=reserved_inventory,
                low_stock_threshold=low_stock_threshold,
                registered_at=now,
            )
        )
        product._check_low_stock(product, levels.stock_status(product))
        return product

    # -------------------------------------------------------------------
    # Read helpers
    # -------------------------------------------------------------------
    def flavor_name_list(self):
        return json.loads(self.flavor_names) if self.flavor_names else []

    def tracks_flavor_inventory(self):
        return bool(self.flavors)

    def flavor_options(self):
        """Closed flavor variant list plus the tracks-inventory flag."""
        return flavor_rules.flavor_options(self.flavor_name_list(), list(self.flavors))

    def selectable_flavors(self):
        options, tracks_inventory = self.flavor_options()
        return flavor_rules.eligible_flavors(options, tracks_inventory)

    def current_available(self):
        if self.tracks_flavor_inventory():
            return flavor_rules.product_total_available(self.flavors)
        return levels.available_inventory(self)

    def current_stock_status(self):
        if self.tracks_flavor_inventory():
            return flavor_rules.product_stock_status(self.flavors)
        return levels.stock_status(self)

    def _find_flavor(self, flavor_id):
        flavor = next((f for f in self.flavors if str(f.id) == str(flavor_id)), None)
        if flavor is None:
            raise ValidationError({"flavors": [f"Flavor {flavor_id} not found"]})
        return flavor

    # -------------------------------------------------------------------
    # Product-level stock
    # -------------------------------------------------------------------
    def update_inventory(self, inventory=None, reserved_inventory=None, low_stock_threshold=None):
        from availability.product.events import ProductInventoryUpdated

        _require_non_negative(
            inventory=inventory,
            reserved_inventory=reserved_inventory,
            low_stock_threshold=low_stock_threshold,
        )

        previous_inventory = self.inventory
        if inventory is not None:
            self.inventory = inventory
        if reserved_inventory is not None:
            self.reserved_inventory = reserved_inventory
        if low_stock_threshold is not None:
            self.low_stock_threshold = low_stock_threshold

        now = datetime.now(UTC)
        self.updated_at = now
        status = self.current_stock_status()

        self.raise_(
            ProductInventoryUpdated(
                product_id=self.id,
                previous_inventory=previous_inventory,
                inventory=self.inventory,
                reserved_inventory=self.reserved_inventory,
                low_stock_threshold=self.low_stock_threshold,
                available_inventory=self.current_available(),
                stock_status=status.value,
                updated_at=now,
            )
        )
        # Flavor-tracked products are alerted per flavor
        if not self.tracks_flavor_inventory():
            self._check_low_stock(self, status)

    # -------------------------------------------------------------------
    # Flavors
    # -------------------------------------------------------------------
    def add_flavor(
        self,
        name,
        inventory=0,
        reserved_inventory=0,
        low_stock_threshold=flavor_rules.DEFAULT_FLAVOR_LOW_STOCK_THRESHOLD,
    ):
        from availability.product.events import FlavorAdded

        _require_non_negative(
            inventory=inventory,
            reserved_inventory=reserved_inventory,
            low_stock_threshold=low_stock_threshold,
        )

        name = name.strip()
        if any(f.name.strip().lower() == name.lower() for f in self.flavors):
            raise ValidationError({"flavors": [f"Flavor {name} already exists on this product"]})

        now = datetime.now(UTC)
        flavor = ProductFlavor(
            name=name,
            inventory=inventory,
            reserved_inventory=reserved_inventory,
            low_stock_threshold=low_stock_threshold,
            active=True,
            created_at=now,
        )
        self.add_flavors(flavor)
        self.updated_at = now

        self.raise_(
            FlavorAdded(
                product_id=self.id,
                flavor_id=flavor.id,
                name=flavor.name,
                inventory=inventory,
                reserved_inventory=reserved_inventory,
                low_stock_threshold=low_stock_threshold,
                added_at=now,
            )
        )
        self._check_low_stock(flavor, levels.stock_status(flavor))
        return flavor

    def update_flavor_inventory(self, flavor_id, inventory=None, reserved_inventory=None, low_stock_threshold=None):
        from availability.product.events import FlavorInventoryUpdated

        _require_non_negative(
            inventory=inventory,
            reserved_inventory=reserved_inventory,
            low_stock_threshold=low_stock_threshold,
        )
        flavor = self._find_flavor(flavor_id)

        previous_inventory = flavor.inventory
        if inventory is not None:
            flavor.inventory = inventory
        if reserved_inventory is not None:
            flavor.reserved_inventory = reserved_inventory
        if low_stock_threshold is not None:
            flavor.low_stock_threshold = low_stock_threshold

        now = datetime.now(UTC)
        self.updated_at = now
        status = flavor_rules.flavor_stock_status(flavor)

        self.raise_(
            FlavorInventoryUpdated(
                product_id=self.id,
                flavor_id=flavor.id,
                previous_inventory=previous_inventory,
                inventory=flavor.inventory,
                reserved_inventory=flavor.reserved_inventory,
                low_stock_threshold=flavor.low_stock_threshold,
                available_inventory=levels.available_inventory(flavor),
                stock_status=status.value,
                updated_at=now,
            )
        )
        if flavor.active:
            self._check_low_stock(flavor, status)

    def deactivate_flavor(self, flavor_id):
        flavor = self._find_flavor(flavor_id)
        if not flavor.active:
            raise ValidationError({"flavors": [f"Flavor {flavor.name} is already inactive"]})
        self._set_flavor_active(flavor, False)

    def activate_flavor(self, flavor_id):
        flavor = self._find_flavor(flavor_id)
        if flavor.active:
            raise ValidationError({"flavors": [f"Flavor {flavor.name} is already active"]})
        self._set_flavor_active(flavor, True)
        self._check_low_stock(flavor, levels.stock_status(flavor))

    def _set_flavor_active(self, flavor, active):
        from availability.product.events import FlavorActivationChanged

        flavor.active = active
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            FlavorActivationChanged(
                product_id=self.id,
                flavor_id=flavor.id,
                name=flavor.name,
                active=active,
                changed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Low stock alerting
    # -------------------------------------------------------------------
    def _check_low_stock(self, record, status):
        """Raise LowStockDetected if ``record`` (self or a flavor) is low or out."""
        from availability.product.events import LowStockDetected

        if status not in _ALERT_STATUSES:
            return

        is_flavor = record is not self
        self.raise_(
            LowStockDetected(
                product_id=self.id,
                flavor_id=record.id if is_flavor else None,
                name=record.name,
                current_available=levels.available_inventory(record),
                low_stock_threshold=record.low_stock_threshold,
                stock_status=status.value,
                detected_at=datetime.now(UTC),
            )
        )

"""Flavor management commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from availability.domain import availability
from availability.product.product import Product
from availability.stock.flavors import DEFAULT_FLAVOR_LOW_STOCK_THRESHOLD


@availability.command(part_of="Product")
class AddFlavor:
    product_id: Identifier(required=True)
    name: String(required=True, max_length=100)
    inventory: Integer(default=0)
    reserved_inventory: Integer(default=0)
    low_stock_threshold: Integer(default=DEFAULT_FLAVOR_LOW_STOCK_THRESHOLD)


@availability.command(part_of="Product")
class UpdateFlavorInventory:
    product_id: Identifier(required=True)
    flavor_id: Identifier(required=True)
    inventory: Integer()
    reserved_inventory: Integer()
    low_stock_threshold: Integer()


@availability.command(part_of="Product")
class DeactivateFlavor:
    product_id: Identifier(required=True)
    flavor_id: Identifier(required=True)


@availability.command(part_of="Product")
class ActivateFlavor:
    product_id: Identifier(required=True)
    flavor_id: Identifier(required=True)


@availability.command_handler(part_of=Product)
class ManageFlavorsHandler:
    @handle(AddFlavor)
    def add_flavor(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        flavor = product.add_flavor(
            name=command.name,
            inventory=command.inventory or 0,
            reserved_inventory=command.reserved_inventory or 0,
            low_stock_threshold=(
                command.low_stock_threshold
                if command.low_stock_threshold is not None
                else DEFAULT_FLAVOR_LOW_STOCK_THRESHOLD
            ),
        )
        repo.add(product)
        return str(flavor.id)

    @handle(UpdateFlavorInventory)
    def update_flavor_inventory(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_flavor_inventory(
            command.flavor_id,
            inventory=command.inventory,
            reserved_inventory=command.reserved_inventory,
            low_stock_threshold=command.low_stock_threshold,
        )
        repo.add(product)

    @handle(DeactivateFlavor)
    def deactivate_flavor(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.deactivate_flavor(command.flavor_id)
        repo.add(product)

    @handle(ActivateFlavor)
    def activate_flavor(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.activate_flavor(command.flavor_id)
        repo.add(product)

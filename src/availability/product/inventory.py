"""Product-level inventory edits from the back office."""

import structlog
from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from availability.domain import availability
from availability.product.product import Product

logger = structlog.get_logger(__name__)


@availability.command(part_of="Product")
class UpdateProductInventory:
    product_id: Identifier(required=True)
    inventory: Integer()
    reserved_inventory: Integer()
    low_stock_threshold: Integer()


@availability.command_handler(part_of=Product)
class ProductInventoryHandler:
    @handle(UpdateProductInventory)
    def update_inventory(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        product.update_inventory(
            inventory=command.inventory,
            reserved_inventory=command.reserved_inventory,
            low_stock_threshold=command.low_stock_threshold,
        )
        repo.add(product)

        logger.info(
            "Product inventory updated",
            product_id=str(product.id),
            inventory=product.inventory,
            reserved_inventory=product.reserved_inventory,
        )

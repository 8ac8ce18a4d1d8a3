"""Product registration command and handler."""

import json

from protean import handle
from protean.fields import Boolean, Float, Integer, String, Text
from protean.utils.globals import current_domain

from availability.domain import availability
from availability.product.product import DEFAULT_LOW_STOCK_THRESHOLD, Product


@availability.command(part_of="Product")
class RegisterProduct:
    name: String(required=True, max_length=255)
    puffs: Integer(required=True)
    price: Float(required=True)
    flavor_names: Text()  # JSON list
    description: Text()
    image: String(max_length=500)
    popular: Boolean(default=False)
    inventory: Integer(default=0)
    reserved_inventory: Integer(default=0)
    low_stock_threshold: Integer(default=DEFAULT_LOW_STOCK_THRESHOLD)


@availability.command_handler(part_of=Product)
class RegisterProductHandler:
    @handle(RegisterProduct)
    def register_product(self, command):
        names = json.loads(command.flavor_names) if command.flavor_names else []

        product = Product.register(
            name=command.name,
            puffs=command.puffs,
            price=command.price,
            flavor_names=names,
            description=command.description,
            image=command.image,
            popular=command.popular,
            inventory=command.inventory or 0,
            reserved_inventory=command.reserved_inventory or 0,
            low_stock_threshold=(
                command.low_stock_threshold if command.low_stock_threshold is not None else DEFAULT_LOW_STOCK_THRESHOLD
            ),
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

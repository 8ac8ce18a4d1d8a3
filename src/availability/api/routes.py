"""FastAPI routes for the Availability domain: product stock and flavors."""

import json

from fastapi import APIRouter, HTTPException
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from availability.api.schemas import (
    AddFlavorRequest,
    EligibleFlavorsResponse,
    FlavorAvailabilityResponse,
    FlavorIdResponse,
    LowStockItemResponse,
    LowStockReportResponse,
    ProductAvailabilityResponse,
    ProductIdResponse,
    RegisterProductRequest,
    StatusResponse,
    UpdateInventoryRequest,
)
from availability.product.flavors import ActivateFlavor, AddFlavor, DeactivateFlavor, UpdateFlavorInventory
from availability.product.inventory import UpdateProductInventory
from availability.product.product import Product
from availability.product.registration import RegisterProduct
from availability.projections.low_stock_report import LowStockReport
from availability.stock.flavors import LegacyFlavor, flavor_stock_status
from availability.stock.levels import available_inventory

product_router = APIRouter(prefix="/products", tags=["products"])
inventory_router = APIRouter(prefix="/inventory", tags=["inventory"])


def _load_product(product_id: str) -> Product:
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found") from None


# ---------------------------------------------------------------------------
# Product commands
# ---------------------------------------------------------------------------
@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def register_product(body: RegisterProductRequest) -> ProductIdResponse:
    command = RegisterProduct(
        name=body.name,
        puffs=body.puffs,
        price=body.price,
        flavor_names=json.dumps(body.flavor_names),
        description=body.description,
        image=body.image,
        popular=body.popular,
        inventory=body.inventory,
        reserved_inventory=body.reserved_inventory,
        low_stock_threshold=body.low_stock_threshold,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}/inventory", response_model=StatusResponse)
async def update_product_inventory(product_id: str, body: UpdateInventoryRequest) -> StatusResponse:
    command = UpdateProductInventory(
        product_id=product_id,
        inventory=body.inventory,
        reserved_inventory=body.reserved_inventory,
        low_stock_threshold=body.low_stock_threshold,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.post("/{product_id}/flavors", status_code=201, response_model=FlavorIdResponse)
async def add_flavor(product_id: str, body: AddFlavorRequest) -> FlavorIdResponse:
    command = AddFlavor(
        product_id=product_id,
        name=body.name,
        inventory=body.inventory,
        reserved_inventory=body.reserved_inventory,
        low_stock_threshold=body.low_stock_threshold,
    )
    result = current_domain.process(command, asynchronous=False)
    return FlavorIdResponse(flavor_id=result)


@product_router.put("/{product_id}/flavors/{flavor_id}/inventory", response_model=StatusResponse)
async def update_flavor_inventory(product_id: str, flavor_id: str, body: UpdateInventoryRequest) -> StatusResponse:
    command = UpdateFlavorInventory(
        product_id=product_id,
        flavor_id=flavor_id,
        inventory=body.inventory,
        reserved_inventory=body.reserved_inventory,
        low_stock_threshold=body.low_stock_threshold,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/flavors/{flavor_id}/deactivate", response_model=StatusResponse)
async def deactivate_flavor(product_id: str, flavor_id: str) -> StatusResponse:
    current_domain.process(DeactivateFlavor(product_id=product_id, flavor_id=flavor_id), asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/flavors/{flavor_id}/activate", response_model=StatusResponse)
async def activate_flavor(product_id: str, flavor_id: str) -> StatusResponse:
    current_domain.process(ActivateFlavor(product_id=product_id, flavor_id=flavor_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Availability queries
# ---------------------------------------------------------------------------
@product_router.get("/{product_id}/availability", response_model=ProductAvailabilityResponse)
async def get_product_availability(product_id: str) -> ProductAvailabilityResponse:
    """Storefront availability: product totals plus one row per flavor option."""
    product = _load_product(product_id)
    options, tracks_inventory = product.flavor_options()

    rows = []
    for option in options:
        if isinstance(option, LegacyFlavor):
            rows.append(FlavorAvailabilityResponse(name=option.name, active=True))
        else:
            rows.append(
                FlavorAvailabilityResponse(
                    flavor_id=option.flavor_id,
                    name=option.name,
                    active=option.active,
                    available_inventory=available_inventory(option),
                    stock_status=flavor_stock_status(option).value,
                )
            )

    return ProductAvailabilityResponse(
        product_id=str(product.id),
        name=product.name,
        tracks_flavor_inventory=tracks_inventory,
        available_inventory=product.current_available(),
        stock_status=product.current_stock_status().value,
        flavors=rows,
    )


@product_router.get("/{product_id}/flavors/eligible", response_model=EligibleFlavorsResponse)
async def get_eligible_flavors(product_id: str) -> EligibleFlavorsResponse:
    """Flavors the flavor selector should enable."""
    product = _load_product(product_id)
    return EligibleFlavorsResponse(
        product_id=str(product.id),
        tracks_flavor_inventory=product.tracks_flavor_inventory(),
        flavors=[f.name for f in product.selectable_flavors()],
    )


@inventory_router.get("/low-stock", response_model=LowStockReportResponse)
async def get_low_stock_report() -> LowStockReportResponse:
    """Back-office restocking list, most critical first."""
    repo = current_domain.repository_for(LowStockReport)
    results = repo._dao.query.all().items
    results = sorted(results, key=lambda r: (not r.is_critical, r.current_available, r.name))

    return LowStockReportResponse(
        items=[
            LowStockItemResponse(
                product_id=str(r.product_id),
                flavor_id=str(r.flavor_id) if r.flavor_id else None,
                name=r.name,
                current_available=r.current_available,
                low_stock_threshold=r.low_stock_threshold,
                stock_status=r.stock_status,
                is_critical=r.is_critical,
            )
            for r in results
        ]
    )

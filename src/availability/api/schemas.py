"""Pydantic request/response schemas for the Availability API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Request Schemas ---


class RegisterProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Cloud Bar 5000",
                    "puffs": 5000,
                    "price": 24.9,
                    "flavor_names": ["Mango Ice", "Blueberry"],
                    "description": "Rechargeable disposable with mesh coil.",
                    "popular": True,
                    "inventory": 120,
                    "reserved_inventory": 0,
                    "low_stock_threshold": 10,
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    puffs: int = Field(..., ge=0)
    price: float = Field(..., gt=0)
    flavor_names: list[str] = []
    description: str | None = None
    image: str | None = Field(None, max_length=500)
    popular: bool = False
    inventory: int = Field(0, ge=0)
    reserved_inventory: int = Field(0, ge=0)
    low_stock_threshold: int = Field(10, ge=0)


class UpdateInventoryRequest(BaseModel):
    inventory: int | None = Field(None, ge=0)
    reserved_inventory: int | None = Field(None, ge=0)
    low_stock_threshold: int | None = Field(None, ge=0)


class AddFlavorRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Mango Ice",
                    "inventory": 40,
                    "reserved_inventory": 2,
                    "low_stock_threshold": 5,
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    inventory: int = Field(0, ge=0)
    reserved_inventory: int = Field(0, ge=0)
    low_stock_threshold: int = Field(5, ge=0)


# --- Response Schemas ---


class StatusResponse(BaseModel):
    status: str = "ok"


class ProductIdResponse(BaseModel):
    product_id: str


class FlavorIdResponse(BaseModel):
    flavor_id: str


class FlavorAvailabilityResponse(BaseModel):
    flavor_id: str | None = None
    name: str
    active: bool
    available_inventory: int | None = None
    stock_status: str | None = None  # None in legacy mode, nothing to show


class ProductAvailabilityResponse(BaseModel):
    product_id: str
    name: str
    tracks_flavor_inventory: bool
    available_inventory: int
    stock_status: str
    flavors: list[FlavorAvailabilityResponse] = []


class EligibleFlavorsResponse(BaseModel):
    product_id: str
    tracks_flavor_inventory: bool
    flavors: list[str]


class LowStockItemResponse(BaseModel):
    product_id: str
    flavor_id: str | None = None
    name: str
    current_available: int
    low_stock_threshold: int
    stock_status: str
    is_critical: bool


class LowStockReportResponse(BaseModel):
    items: list[LowStockItemResponse]

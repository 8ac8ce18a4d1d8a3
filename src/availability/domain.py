"""Availability bounded context: storefront stock and flavor availability.

Owns the stock-bearing Product aggregate (with per-flavor stock records) and
the pure calculator that turns total/reserved counts into a purchasable
quantity and a stock status for the storefront and the admin back office.
"""

from protean.domain import Domain

from availability.utils.logging import configure_logging

configure_logging()

availability = Domain(name="availability")

"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CartItemSpec:
    """Input: what the customer put in the cart (product name + quantity)."""

    product_name: str
    quantity: int


@dataclass(frozen=True)
class OrderLineDTO:
    """Output: a single line item as displayed to the user."""

    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$8.00"
    list_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a priced order as displayed to the user."""

    items: list[OrderLineDTO]
    subtotal: str
    discount: str
    total: str

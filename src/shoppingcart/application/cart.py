"""Turns cart requests into domain line items."""

from __future__ import annotations

from shoppingcart.application.dto import CartItemSpec
from shoppingcart.domain.exceptions import EntityNotFoundError
from shoppingcart.domain.model.order import OrderDetail
from shoppingcart.domain.repository.product_repository import ProductRepository


def build_order_details(
    product_repo: ProductRepository,
    item_specs: list[CartItemSpec],
) -> list[OrderDetail]:
    """Resolve each product name to a Product (fail if not found)."""
    details: list[OrderDetail] = []
    for spec in item_specs:
        product = product_repo.get_by_name(spec.product_name)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{spec.product_name}'")
        details.append(OrderDetail(product=product, quantity=spec.quantity))
    return details

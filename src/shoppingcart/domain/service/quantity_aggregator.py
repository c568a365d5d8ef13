"""Groups line items by product and sums their quantities."""

from __future__ import annotations

from collections.abc import Iterable

from shoppingcart.domain.model.order import OrderDetail
from shoppingcart.domain.model.product import Product


def aggregate_quantities(
    order_details: Iterable[OrderDetail],
) -> list[tuple[Product, int]]:
    """Return one ``(product, total quantity)`` pair per distinct product.

    Products appear in the order they are first seen in *order_details*.
    """
    totals: dict[Product, int] = {}
    for detail in order_details:
        totals[detail.product] = totals.get(detail.product, 0) + detail.quantity
    return list(totals.items())

"""Order and its line items.

An ``OrderDetail`` is one requested line (product + quantity).  An
``Order`` is the result of a checkout: the original details plus the
priced total.  Both are immutable once built.
"""

from __future__ import annotations

from dataclasses import dataclass

from shoppingcart.domain.model.product import Product
from shoppingcart.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class OrderDetail:
    """A single line item as requested by the caller."""

    product: Product
    quantity: int

    def __post_init__(self) -> None:
        # Reuse the value object's checks (integer, positive).
        Quantity(self.quantity)

    @property
    def list_total(self) -> Money:
        """Price of the line before any rule is applied."""
        return self.product.price * self.quantity


@dataclass(frozen=True)
class Order:
    """A priced order produced by ``OrderService.checkout``."""

    details: tuple[OrderDetail, ...]
    total: Money

    @property
    def subtotal(self) -> Money:
        """Sum of all lines at list price."""
        result = Money.zero(self.total.currency)
        for detail in self.details:
            result = result + detail.list_total
        return result

    @property
    def discount(self) -> Money:
        """How much the pricing rules took off the list price."""
        if self.total >= self.subtotal:
            return Money.zero(self.total.currency)
        return self.subtotal - self.total

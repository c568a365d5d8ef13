"""Working state shared by the pricing rules during one calculation.

A ``CalculateRuleContext`` is created fresh for every call to
``OrderService.calculate_total`` and is never shared between calls.
Rules cooperate through it: each one claims the quantities it prices
and adds what it charged to the running total.

Invariants:
- ``remaining_products`` never holds an entry with quantity 0
- remaining quantities only go down, ``total`` only goes up
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from shoppingcart.domain.exceptions import ValidationError
from shoppingcart.domain.model.order import OrderDetail
from shoppingcart.domain.model.product import Product
from shoppingcart.domain.model.value_objects import Money


@dataclass
class RemainingEntry:
    """Quantity of one product that no rule has priced yet."""

    product: Product
    quantity: int

    def claim(self, qty: int) -> None:
        """Take *qty* units out of this entry."""
        if qty <= 0:
            raise ValidationError("Claimed quantity must be positive")
        if qty > self.quantity:
            raise ValidationError(
                f"Cannot claim {qty} of {self.product.name} "
                f"— only {self.quantity} remaining"
            )
        self.quantity -= qty


@dataclass
class CalculateRuleContext:

    order_details: tuple[OrderDetail, ...]
    remaining_products: list[RemainingEntry]
    total: Money = field(default_factory=Money.zero)

    # --- Queries --------------------------------------------------------------

    @property
    def remaining_quantity(self) -> int:
        return sum(entry.quantity for entry in self.remaining_products)

    @property
    def is_done(self) -> bool:
        return not self.remaining_products

    def quantity_of(self, product: Product) -> int:
        entry = self._find_entry(product)
        return entry.quantity if entry is not None else 0

    def entries(self) -> Iterator[RemainingEntry]:
        """Iterate over a snapshot so callers may claim while looping."""
        return iter(list(self.remaining_products))

    # --- Mutations ------------------------------------------------------------

    def claim(self, product: Product, qty: int) -> None:
        """Mark *qty* units of *product* as priced.

        The entry is dropped from ``remaining_products`` once it reaches
        zero.  Claiming more than what remains is an error: a rule may
        only ever price quantity that is still unpriced.
        """
        entry = self._find_entry(product)
        if entry is None:
            raise ValidationError(f"{product.name} has no remaining quantity to claim")
        entry.claim(qty)
        if entry.quantity == 0:
            self.remaining_products.remove(entry)

    def add(self, amount: Money) -> None:
        """Add a rule's priced amount to the running total."""
        self.total = self.total + amount

    # --- Internal helpers -----------------------------------------------------

    def _find_entry(self, product: Product) -> RemainingEntry | None:
        for entry in self.remaining_products:
            if entry.product == product:
                return entry
        return None

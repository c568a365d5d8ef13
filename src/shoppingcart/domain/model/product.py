"""Product: the catalog item a cart line refers to.

The catalog itself lives outside the pricing core. The core only needs
products to be comparable and hashable so line items can be grouped,
and to carry a list price that per-unit rules can charge.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from shoppingcart.domain.exceptions import ValidationError
from shoppingcart.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:
    """A product in the catalog.

    Identity is the ``id`` alone: two instances with the same id are the
    same product for grouping, whatever their name or price.
    """

    id: str
    name: str = field(compare=False)
    price: Money = field(compare=False)
    series: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationError("Product id is required")
        if self.price.amount <= 0:
            raise ValidationError(f"Product price must be greater than zero ({self.name})")

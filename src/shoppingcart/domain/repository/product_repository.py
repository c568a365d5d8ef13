"""Abstract repository for the product catalog.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live
elsewhere. The pricing core only reads from the catalog.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shoppingcart.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its name (case-insensitive), or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

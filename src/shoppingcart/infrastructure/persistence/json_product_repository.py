"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import json
from pathlib import Path

from shoppingcart.domain.exceptions import ValidationError
from shoppingcart.domain.model.product import Product
from shoppingcart.domain.model.value_objects import Money
from shoppingcart.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for product in self._load().values():
            if product.name.lower() == name.strip().lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        if not self._file_path.exists():
            return {}
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        try:
            return {
                str(item["id"]): Product(
                    id=str(item["id"]),
                    name=item["name"],
                    price=Money.of(item["price"], item.get("currency", "USD")),
                    series=item.get("series"),
                )
                for item in raw
            }
        except (KeyError, TypeError) as exc:
            raise ValidationError(
                f"Malformed product catalog {self._file_path}: {exc}"
            ) from exc

"""Application service: Quote Total use case (query)."""

from __future__ import annotations

from shoppingcart.application.cart import build_order_details
from shoppingcart.application.dto import CartItemSpec
from shoppingcart.domain.repository.product_repository import ProductRepository
from shoppingcart.domain.service.order_service import OrderService


class QuoteTotalHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_service: OrderService,
    ) -> None:
        self._product_repo = product_repo
        self._order_service = order_service

    def handle(self, item_specs: list[CartItemSpec]) -> str:
        details = build_order_details(self._product_repo, item_specs)
        return str(self._order_service.calculate_total(details))

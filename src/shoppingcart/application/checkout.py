"""Application service: Checkout use case.

Orchestrates the flow between the product catalog and the pricing
domain service, then maps the resulting Order to a DTO.
"""

from __future__ import annotations

from shoppingcart.application.cart import build_order_details
from shoppingcart.application.dto import CartItemSpec, OrderDTO, OrderLineDTO
from shoppingcart.domain.model.order import Order
from shoppingcart.domain.repository.product_repository import ProductRepository
from shoppingcart.domain.service.order_service import OrderService


class CheckoutHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_service: OrderService,
    ) -> None:
        self._product_repo = product_repo
        self._order_service = order_service

    def handle(self, item_specs: list[CartItemSpec]) -> OrderDTO:
        """Price a cart.

        Steps:
        1. Resolve each product name to a Product (fail if not found).
        2. Let the order service validate and run the pricing rules.
        3. Return a DTO.
        """
        details = build_order_details(self._product_repo, item_specs)
        order = self._order_service.checkout(details)
        return self._to_dto(order)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_dto(order: Order) -> OrderDTO:
        return OrderDTO(
            items=[
                OrderLineDTO(
                    product_name=detail.product.name,
                    quantity=detail.quantity,
                    unit_price=str(detail.product.price),
                    list_total=str(detail.list_total),
                )
                for detail in order.details
            ],
            subtotal=str(order.subtotal),
            discount=str(order.discount),
            total=str(order.total),
        )

"""Domain service: price a cart and produce an Order.

The service owns an ordered list of pricing rules.  A calculation
groups the line items by product, hands a fresh rule context to the
rules and keeps offering it to every rule, in order, until no
unpriced quantity remains.

Rules earlier in the list get the first claim on quantities, so
specific rules (bundles, set discounts) go before the catch-all
unit-price rule.  A pass in which no rule claims anything while items
remain would repeat forever; it raises ``NoProgressError`` instead.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import structlog

from shoppingcart.domain.exceptions import (
    InvalidArgumentError,
    NoProgressError,
    PassLimitExceededError,
)
from shoppingcart.domain.model.order import Order, OrderDetail
from shoppingcart.domain.model.product import Product
from shoppingcart.domain.model.rule_context import CalculateRuleContext, RemainingEntry
from shoppingcart.domain.model.value_objects import Money
from shoppingcart.domain.rules.base import CalculateRule
from shoppingcart.domain.service.quantity_aggregator import aggregate_quantities

logger = structlog.get_logger(__name__)


class OrderService:

    def __init__(
        self,
        calculate_rules: Iterable[CalculateRule] | None = None,
        max_passes: int | None = None,
    ) -> None:
        self.calculate_rules: list[CalculateRule] = list(calculate_rules or [])
        self.max_passes = max_passes

    # --- Public API -----------------------------------------------------------

    def checkout(self, order_details: Sequence[OrderDetail] | None) -> Order:
        """Validate the line items, price them and build the Order.

        The Order keeps the line items as a tuple, so a list passed in
        compares equal to ``tuple(order_details)`` rather than to itself.
        """
        details = self._validate_order_details(order_details)
        total = self.calculate_total(details)
        return self._create_order(details, total)

    def calculate_total(self, order_details: Sequence[OrderDetail] | None) -> Money:
        """Run the rule chain over the line items and return the total."""
        details = self._validate_order_details(order_details)
        product_quantities = self._calculate_quantity_by_product(details)
        context = self._create_rule_context(details, product_quantities)
        self._execute_rules(context)
        return context.total

    # --- Steps (overridable) --------------------------------------------------

    def _calculate_quantity_by_product(
        self, order_details: tuple[OrderDetail, ...]
    ) -> list[tuple[Product, int]]:
        if order_details is None:
            raise InvalidArgumentError("order_details is required")
        return aggregate_quantities(order_details)

    def _create_rule_context(
        self,
        order_details: tuple[OrderDetail, ...] | None,
        product_quantities: Iterable[tuple[Product, int]] | None,
    ) -> CalculateRuleContext:
        if order_details is None:
            raise InvalidArgumentError("order_details is required")
        if product_quantities is None:
            raise InvalidArgumentError("product_quantities is required")

        # Fresh entries: rules mutate them, the aggregate must stay untouched.
        remaining = [
            RemainingEntry(product=product, quantity=qty)
            for product, qty in product_quantities
            if qty > 0
        ]
        currency = order_details[0].product.price.currency if order_details else "USD"
        return CalculateRuleContext(
            order_details=tuple(order_details),
            remaining_products=remaining,
            total=Money.zero(currency),
        )

    def _execute_rules(self, context: CalculateRuleContext) -> None:
        logger.debug(
            "pricing.start",
            products=len(context.remaining_products),
            quantity=context.remaining_quantity,
            rules=len(self.calculate_rules),
        )
        passes = 0
        while not context.is_done:
            passes += 1
            if self.max_passes is not None and passes > self.max_passes:
                raise PassLimitExceededError(
                    f"Pricing did not finish within {self.max_passes} passes"
                )

            before = context.remaining_quantity
            current_rules = tuple(self.calculate_rules)
            for rule in current_rules:
                rule.calculate(context)

            after = context.remaining_quantity
            logger.debug(
                "pricing.pass",
                number=passes,
                remaining=after,
                total=str(context.total),
            )
            if not context.is_done and after >= before:
                unpriced = ", ".join(
                    f"{entry.product.name} x{entry.quantity}"
                    for entry in context.remaining_products
                )
                logger.warning("pricing.no_progress", number=passes, unpriced=unpriced)
                raise NoProgressError(f"No pricing rule applies to: {unpriced}")

        logger.info("pricing.done", passes=passes, total=str(context.total))

    # --- Validation / assembly ------------------------------------------------

    @staticmethod
    def _validate_order_details(
        order_details: Sequence[OrderDetail] | None,
    ) -> tuple[OrderDetail, ...]:
        if order_details is None:
            raise InvalidArgumentError("order_details is required")
        details = tuple(order_details)
        if not details:
            raise InvalidArgumentError("order_details has no line items")
        if any(detail is None for detail in details):
            raise InvalidArgumentError("order_details contains one or more empty items")
        return details

    @staticmethod
    def _create_order(order_details: tuple[OrderDetail, ...], total: Money) -> Order:
        return Order(details=order_details, total=total)

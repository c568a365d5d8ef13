"""Catch-all rule: every remaining unit at its list price.

Placed last in a rule chain it guarantees progress for any product
that has a price.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from shoppingcart.domain.model.rule_context import CalculateRuleContext
from shoppingcart.domain.rules.base import CalculateRule

logger = structlog.get_logger(__name__)


class UnitPriceRule(CalculateRule):

    def __init__(self, product_ids: Iterable[str] | None = None) -> None:
        # None means "every product"
        self._product_ids = frozenset(product_ids) if product_ids is not None else None

    def describe(self) -> str:
        if self._product_ids is None:
            return "unit price for every product"
        return f"unit price for products {', '.join(sorted(self._product_ids))}"

    def calculate(self, context: CalculateRuleContext) -> None:
        for entry in context.entries():
            if self._product_ids is not None and entry.product.id not in self._product_ids:
                continue
            qty = entry.quantity
            amount = entry.product.price * qty
            context.claim(entry.product, qty)
            context.add(amount)
            logger.debug(
                "rule.claimed",
                rule=self.name,
                product=entry.product.name,
                quantity=qty,
                amount=str(amount),
            )

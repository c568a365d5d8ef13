"""Fixed-size bundle of one product at a flat price ("3 for $5")."""

from __future__ import annotations

import structlog

from shoppingcart.domain.exceptions import ValidationError
from shoppingcart.domain.model.rule_context import CalculateRuleContext
from shoppingcart.domain.model.value_objects import Money
from shoppingcart.domain.rules.base import CalculateRule

logger = structlog.get_logger(__name__)


class GroupBundleRule(CalculateRule):
    """Every full group of ``group_size`` units costs ``bundle_price``.

    Units that do not fill a group are left for later rules.
    """

    def __init__(self, product_id: str, group_size: int, bundle_price: Money) -> None:
        if not product_id:
            raise ValidationError("Bundle rule needs a product id")
        if isinstance(group_size, bool) or not isinstance(group_size, int) or group_size < 2:
            raise ValidationError(f"Bundle group size must be an integer >= 2, got {group_size!r}")
        self._product_id = product_id
        self._group_size = group_size
        self._bundle_price = bundle_price

    def describe(self) -> str:
        return f"every {self._group_size} of product {self._product_id} for {self._bundle_price}"

    def calculate(self, context: CalculateRuleContext) -> None:
        for entry in context.entries():
            if entry.product.id != self._product_id:
                continue
            bundles = entry.quantity // self._group_size
            if bundles == 0:
                return
            amount = self._bundle_price * bundles
            context.claim(entry.product, bundles * self._group_size)
            context.add(amount)
            logger.debug(
                "rule.claimed",
                rule=self.name,
                product=entry.product.name,
                bundles=bundles,
                amount=str(amount),
            )
            return

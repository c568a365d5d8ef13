"""Contract every pricing rule implements.

A rule looks at the unpriced quantities in the context, claims the
units it knows how to price and adds the price to the running total.
Rules run in the order they are configured and may be called many
times during one calculation, so they must only act on quantity that
is still in ``context.remaining_products``.

A rule with nothing to do returns without touching the context.
Rules must not keep per-calculation state on ``self``: one rule list
can be shared by concurrent calculations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shoppingcart.domain.model.rule_context import CalculateRuleContext


class CalculateRule(ABC):

    @property
    def name(self) -> str:
        """Short label used in logs and the CLI rule listing."""
        return type(self).__name__

    def describe(self) -> str:
        return self.name

    @abstractmethod
    def calculate(self, context: CalculateRuleContext) -> None:
        """Price whatever this rule applies to, in place on *context*."""

"""Set discount across distinct titles of one series.

Buying different titles of the same series together earns a discount
on that set, and the discount grows with the number of distinct titles
in the set.  With the classic table (2 titles 5 %, 3 titles 10 %,
4 titles 20 %, 5 titles 25 %) the way copies are split into sets
matters: two sets of four are cheaper than a set of five plus a set of
three, and six titles are cheaper as a set of five plus one.  The rule
starts from the greedy split (largest sets first) and keeps moving titles
between sets, or out into new ones, while that lowers the price.

Copies that end up in a set without a discount (e.g. a lone title) are
left unclaimed for the rules that follow.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal

import structlog

from shoppingcart.domain.exceptions import ValidationError
from shoppingcart.domain.model.product import Product
from shoppingcart.domain.model.rule_context import CalculateRuleContext
from shoppingcart.domain.model.value_objects import Money
from shoppingcart.domain.rules.base import CalculateRule

logger = structlog.get_logger(__name__)


class SeriesSetDiscountRule(CalculateRule):

    def __init__(self, series: str, discounts: Mapping[int, Decimal]) -> None:
        if not series:
            raise ValidationError("Series discount rule needs a series name")
        if not discounts:
            raise ValidationError("Series discount rule needs at least one discount")
        for size, percent in discounts.items():
            if isinstance(size, bool) or not isinstance(size, int) or size < 2:
                raise ValidationError(f"Set size must be an integer >= 2, got {size!r}")
            if not Decimal("0") < percent <= Decimal("100"):
                raise ValidationError(
                    f"Discount for a set of {size} must be in (0, 100], got {percent}"
                )
        self._series = series
        self._discounts = dict(discounts)
        self._min_set_size = min(self._discounts)

    def describe(self) -> str:
        tiers = ", ".join(
            f"{size} titles {percent}%" for size, percent in sorted(self._discounts.items())
        )
        return f"'{self._series}' set discount ({tiers})"

    def calculate(self, context: CalculateRuleContext) -> None:
        counts = {
            entry.product: entry.quantity
            for entry in context.entries()
            if entry.product.series == self._series
        }
        if len(counts) < self._min_set_size:
            return

        sizes = self._best_set_sizes(counts)
        claimed: dict[Product, int] = {}
        amount = Money.zero(context.total.currency)
        for titles in self._build_sets(counts, sizes) or []:
            percent = self._discounts.get(len(titles))
            if percent is None:
                continue
            amount = amount + _set_price(titles, percent)
            for product in titles:
                claimed[product] = claimed.get(product, 0) + 1

        if not claimed:
            return
        for product, qty in claimed.items():
            context.claim(product, qty)
        context.add(amount)
        logger.debug(
            "rule.claimed",
            rule=self.name,
            series=self._series,
            sets=sorted(sizes, reverse=True),
            quantity=sum(claimed.values()),
            amount=str(amount),
        )

    # --- Set partitioning -----------------------------------------------------

    def _best_set_sizes(self, counts: Mapping[Product, int]) -> list[int]:
        """Steepest descent over set sizes, starting from the greedy layers.

        A move takes ``m`` titles out of one set and puts them into another
        set or into a new one, so a move can shift a single title, split a
        set or merge two sets.  The cheapest feasible move is taken until
        none lowers the price.
        """
        sizes = _greedy_set_sizes(counts)
        best = self._price_of(counts, sizes)
        while True:
            candidate, price = None, best
            for moved in _moves(sizes):
                moved_price = self._price_of(counts, moved)
                if moved_price is not None and moved_price < price:
                    candidate, price = moved, moved_price
            if candidate is None:
                return sizes
            sizes, best = candidate, price

    def _price_of(self, counts: Mapping[Product, int], sizes: list[int]) -> Decimal | None:
        sets = self._build_sets(counts, sizes)
        if sets is None:
            return None
        total = Decimal("0")
        for titles in sets:
            percent = self._discounts.get(len(titles), Decimal("0"))
            total += _set_price(titles, percent).amount
        return total

    def _build_sets(
        self, counts: Mapping[Product, int], sizes: list[int]
    ) -> list[list[Product]] | None:
        """Fill sets of the given sizes with distinct titles.

        Sets are filled from the biggest discount down.  Each takes the
        titles with the most copies left; among equal counts the dearer
        title goes first, then the lower id, so the result never depends
        on cart order.  Returns None when the sizes cannot be filled.
        """
        left = dict(counts)
        sets: list[list[Product]] = []
        order = sorted(
            sizes, key=lambda size: (-self._discounts.get(size, Decimal("0")), -size)
        )
        for size in order:
            ranked = sorted(
                (p for p in left if left[p] > 0),
                key=lambda p: (-left[p], -p.price.amount, p.id),
            )
            if len(ranked) < size:
                return None
            chosen = ranked[:size]
            for product in chosen:
                left[product] -= 1
            sets.append(chosen)
        return sets


def _greedy_set_sizes(counts: Mapping[Product, int]) -> list[int]:
    """Sizes obtained by repeatedly taking one copy of every title left."""
    deepest = max(counts.values())
    return [
        sum(1 for qty in counts.values() if qty >= layer)
        for layer in range(1, deepest + 1)
    ]


def _moves(sizes: list[int]) -> list[list[int]]:
    """Every size list reachable by moving some titles from one set to another."""
    current = sorted(sizes, reverse=True)
    distinct = sorted(set(sizes), reverse=True)
    found: list[list[int]] = []
    for source in distinct:
        for target in distinct + [0]:
            if source == target and sizes.count(source) < 2:
                continue
            for moved in range(1, source + 1):
                if target == 0 and moved == source:
                    continue
                candidate = list(sizes)
                candidate.remove(source)
                if source > moved:
                    candidate.append(source - moved)
                if target:
                    candidate.remove(target)
                candidate.append(target + moved)
                candidate.sort(reverse=True)
                if candidate != current and candidate not in found:
                    found.append(candidate)
    return found


def _set_price(titles: list[Product], percent: Decimal) -> Money:
    list_price = titles[0].price
    for product in titles[1:]:
        list_price = list_price + product.price
    return list_price.percent_off(percent)

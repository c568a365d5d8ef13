"""Unit tests for CalculateRuleContext bookkeeping."""

import pytest

from shoppingcart.domain.exceptions import ValidationError
from shoppingcart.domain.model.order import OrderDetail
from shoppingcart.domain.model.product import Product
from shoppingcart.domain.model.rule_context import CalculateRuleContext, RemainingEntry
from shoppingcart.domain.model.value_objects import Money

APPLE = Product(id="a", name="Apple", price=Money.of("1.00"))
PEAR = Product(id="p", name="Pear", price=Money.of("2.00"))


def _context() -> CalculateRuleContext:
    return CalculateRuleContext(
        order_details=(OrderDetail(APPLE, 3), OrderDetail(PEAR, 1)),
        remaining_products=[RemainingEntry(APPLE, 3), RemainingEntry(PEAR, 1)],
    )


class TestClaim:

    def test_partial_claim_reduces_quantity(self):
        ctx = _context()
        ctx.claim(APPLE, 2)
        assert ctx.quantity_of(APPLE) == 1
        assert ctx.remaining_quantity == 2

    def test_entry_removed_when_exhausted(self):
        ctx = _context()
        ctx.claim(PEAR, 1)
        assert [e.product for e in ctx.remaining_products] == [APPLE]
        assert ctx.quantity_of(PEAR) == 0

    def test_no_zero_entries_left_behind(self):
        ctx = _context()
        ctx.claim(APPLE, 3)
        ctx.claim(PEAR, 1)
        assert ctx.remaining_products == []
        assert ctx.is_done

    def test_over_claim_rejected(self):
        ctx = _context()
        with pytest.raises(ValidationError, match="only 3 remaining"):
            ctx.claim(APPLE, 4)
        assert ctx.quantity_of(APPLE) == 3

    def test_claim_of_priced_product_rejected(self):
        ctx = _context()
        ctx.claim(PEAR, 1)
        with pytest.raises(ValidationError, match="no remaining quantity"):
            ctx.claim(PEAR, 1)

    def test_non_positive_claim_rejected(self):
        ctx = _context()
        with pytest.raises(ValidationError, match="must be positive"):
            ctx.claim(APPLE, 0)


class TestTotal:

    def test_starts_at_zero(self):
        assert _context().total == Money.zero()

    def test_add_accumulates(self):
        ctx = _context()
        ctx.add(Money.of("1.50"))
        ctx.add(Money.of("2.25"))
        assert ctx.total == Money.of("3.75")


class TestEntriesSnapshot:

    def test_claiming_while_iterating_is_safe(self):
        ctx = _context()
        seen = []
        for entry in ctx.entries():
            seen.append(entry.product)
            ctx.claim(entry.product, entry.quantity)
        assert seen == [APPLE, PEAR]
        assert ctx.is_done

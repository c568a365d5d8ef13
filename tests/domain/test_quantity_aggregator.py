"""Unit tests for grouping line items by product."""

from shoppingcart.domain.model.order import OrderDetail
from shoppingcart.domain.model.product import Product
from shoppingcart.domain.model.value_objects import Money
from shoppingcart.domain.service.quantity_aggregator import aggregate_quantities

A = Product(id="a", name="A", price=Money.of("1"))
B = Product(id="b", name="B", price=Money.of("1"))


def test_sums_quantities_per_product():
    result = aggregate_quantities([OrderDetail(A, 2), OrderDetail(B, 1), OrderDetail(A, 3)])
    assert result == [(A, 5), (B, 1)]


def test_keeps_first_seen_order():
    result = aggregate_quantities([OrderDetail(B, 1), OrderDetail(A, 1)])
    assert [product for product, _ in result] == [B, A]


def test_groups_equal_products_from_different_instances():
    a_copy = Product(id="a", name="A (reprint)", price=Money.of("1"))
    result = aggregate_quantities([OrderDetail(A, 1), OrderDetail(a_copy, 1)])
    assert result == [(A, 2)]


def test_does_not_mutate_input():
    details = [OrderDetail(A, 1), OrderDetail(A, 1)]
    aggregate_quantities(details)
    assert details == [OrderDetail(A, 1), OrderDetail(A, 1)]

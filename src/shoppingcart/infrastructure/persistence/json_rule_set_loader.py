"""Builds the ordered pricing rule chain from a JSON file.

File format is a list evaluated top to bottom::

    [
      {"type": "series_set", "series": "Harry Potter",
       "discounts": {"2": "5", "3": "10", "4": "20", "5": "25"}},
      {"type": "bundle", "product_id": "6", "group_size": 3, "bundle_price": "5.00"},
      {"type": "unit_price"}
    ]

``unit_price`` accepts an optional ``product_ids`` list; without it the
rule prices every product.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from decimal import Decimal, InvalidOperation
from pathlib import Path

from shoppingcart.domain.exceptions import RuleConfigurationError, ValidationError
from shoppingcart.domain.model.value_objects import Money
from shoppingcart.domain.rules.base import CalculateRule
from shoppingcart.domain.rules.bundle import GroupBundleRule
from shoppingcart.domain.rules.series_set import SeriesSetDiscountRule
from shoppingcart.domain.rules.unit_price import UnitPriceRule


class JsonRuleSetLoader:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def load(self) -> list[CalculateRule]:
        if not self._file_path.exists():
            raise RuleConfigurationError(f"Rule file not found: {self._file_path}")
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise RuleConfigurationError(
                f"Rule file {self._file_path} is not valid JSON: {exc}"
            ) from exc
        if not isinstance(raw, list):
            raise RuleConfigurationError("Rule file must contain a list of rules")
        return [self._to_rule(position, item) for position, item in enumerate(raw, 1)]

    # --- Parsing --------------------------------------------------------------

    def _to_rule(self, position: int, raw: dict) -> CalculateRule:
        if not isinstance(raw, dict):
            raise RuleConfigurationError(f"Rule #{position} must be an object")
        rule_type = raw.get("type")
        builder = _BUILDERS.get(rule_type)
        if builder is None:
            raise RuleConfigurationError(f"Rule #{position} has unknown type {rule_type!r}")
        try:
            return builder(raw)
        except KeyError as exc:
            raise RuleConfigurationError(
                f"Rule #{position} ({rule_type}) is missing {exc}"
            ) from exc
        except (AttributeError, InvalidOperation, TypeError, ValueError, ValidationError) as exc:
            raise RuleConfigurationError(f"Rule #{position} ({rule_type}): {exc}") from exc


def _unit_price(raw: dict) -> CalculateRule:
    product_ids = raw.get("product_ids")
    return UnitPriceRule(
        product_ids=[str(p) for p in product_ids] if product_ids is not None else None
    )


def _bundle(raw: dict) -> CalculateRule:
    return GroupBundleRule(
        product_id=str(raw["product_id"]),
        group_size=raw["group_size"],
        bundle_price=Money.of(raw["bundle_price"], raw.get("currency", "USD")),
    )


def _series_set(raw: dict) -> CalculateRule:
    discounts = {
        int(size): Decimal(str(percent)) for size, percent in raw["discounts"].items()
    }
    return SeriesSetDiscountRule(series=raw["series"], discounts=discounts)


_BUILDERS: dict[str, Callable[[dict], CalculateRule]] = {
    "unit_price": _unit_price,
    "bundle": _bundle,
    "series_set": _series_set,
}

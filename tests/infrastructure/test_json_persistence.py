"""Tests for the JSON product catalog and rule-set loader."""

import json
from pathlib import Path

import pytest

from shoppingcart.domain.exceptions import RuleConfigurationError, ValidationError
from shoppingcart.domain.model.order import OrderDetail
from shoppingcart.domain.model.value_objects import Money
from shoppingcart.domain.rules.bundle import GroupBundleRule
from shoppingcart.domain.rules.series_set import SeriesSetDiscountRule
from shoppingcart.domain.rules.unit_price import UnitPriceRule
from shoppingcart.infrastructure import bootstrap
from shoppingcart.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from shoppingcart.infrastructure.persistence.json_rule_set_loader import JsonRuleSetLoader


def _write(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestJsonProductRepository:

    def test_loads_products(self, tmp_path: Path):
        repo = JsonProductRepository(_write(tmp_path / "products.json", [
            {"id": "1", "name": "Book 1", "price": "8.00", "series": "Potter"},
            {"id": 2, "name": "Bookmark", "price": "2", "currency": "EUR"},
        ]))
        book = repo.get_by_id("1")
        assert book.series == "Potter"
        assert book.price == Money.of("8.00")
        bookmark = repo.get_by_name("bookmark")
        assert bookmark.id == "2"
        assert bookmark.price.currency == "EUR"
        assert len(repo.list_all()) == 2

    def test_missing_file_is_empty_catalog(self, tmp_path: Path):
        repo = JsonProductRepository(tmp_path / "absent.json")
        assert repo.list_all() == []
        assert repo.get_by_name("anything") is None

    def test_malformed_entry_rejected(self, tmp_path: Path):
        repo = JsonProductRepository(_write(tmp_path / "products.json", [{"id": "1"}]))
        with pytest.raises(ValidationError, match="Malformed product catalog"):
            repo.list_all()


class TestJsonRuleSetLoader:

    def test_builds_rules_in_file_order(self, tmp_path: Path):
        loader = JsonRuleSetLoader(_write(tmp_path / "rules.json", [
            {"type": "series_set", "series": "Potter", "discounts": {"2": "5", "3": 10}},
            {"type": "bundle", "product_id": 6, "group_size": 3, "bundle_price": "5.00"},
            {"type": "unit_price", "product_ids": ["1", "2"]},
            {"type": "unit_price"},
        ]))
        rules = loader.load()
        assert [type(r) for r in rules] == [
            SeriesSetDiscountRule, GroupBundleRule, UnitPriceRule, UnitPriceRule,
        ]

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(RuleConfigurationError, match="not found"):
            JsonRuleSetLoader(tmp_path / "rules.json").load()

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "rules.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(RuleConfigurationError, match="not valid JSON"):
            JsonRuleSetLoader(path).load()

    def test_top_level_must_be_list(self, tmp_path: Path):
        loader = JsonRuleSetLoader(_write(tmp_path / "rules.json", {"type": "unit_price"}))
        with pytest.raises(RuleConfigurationError, match="list of rules"):
            loader.load()

    def test_unknown_type(self, tmp_path: Path):
        loader = JsonRuleSetLoader(_write(tmp_path / "rules.json", [{"type": "coupon"}]))
        with pytest.raises(RuleConfigurationError, match="unknown type 'coupon'"):
            loader.load()

    def test_missing_key(self, tmp_path: Path):
        loader = JsonRuleSetLoader(_write(tmp_path / "rules.json", [
            {"type": "bundle", "product_id": "6", "group_size": 3},
        ]))
        with pytest.raises(RuleConfigurationError, match="missing 'bundle_price'"):
            loader.load()

    def test_invalid_parameters(self, tmp_path: Path):
        loader = JsonRuleSetLoader(_write(tmp_path / "rules.json", [
            {"type": "series_set", "series": "Potter", "discounts": {"1": "5"}},
        ]))
        with pytest.raises(RuleConfigurationError, match="Rule #1"):
            loader.load()


class TestBootstrap:

    def test_env_var_overrides_data_dir(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv(bootstrap.DATA_DIR_ENV, str(tmp_path))
        assert bootstrap.data_dir() == tmp_path

    def test_explicit_dir_wins(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv(bootstrap.DATA_DIR_ENV, "/nowhere")
        assert bootstrap.data_dir(tmp_path) == tmp_path

    def test_shipped_configuration_prices_the_classic_cart(self, monkeypatch):
        monkeypatch.delenv(bootstrap.DATA_DIR_ENV, raising=False)
        service = bootstrap.order_service()
        repo = bootstrap.product_repository()
        counts = {"1": 2, "2": 2, "3": 2, "4": 1, "5": 1}
        details = [OrderDetail(repo.get_by_id(pid), qty) for pid, qty in counts.items()]
        assert service.calculate_total(details) == Money.of("51.20")

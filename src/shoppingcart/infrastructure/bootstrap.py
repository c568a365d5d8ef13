"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import os
from pathlib import Path

from shoppingcart.domain.service.order_service import OrderService
from shoppingcart.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from shoppingcart.infrastructure.persistence.json_rule_set_loader import (
    JsonRuleSetLoader,
)

DATA_DIR_ENV = "SHOPPINGCART_DATA_DIR"

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir(override: Path | None = None) -> Path:
    if override is not None:
        return override
    from_env = os.environ.get(DATA_DIR_ENV)
    if from_env:
        return Path(from_env)
    return _DEFAULT_DATA_DIR


def product_repository(base_dir: Path | None = None) -> JsonProductRepository:
    return JsonProductRepository(data_dir(base_dir) / "products.json")


def rule_set_loader(base_dir: Path | None = None) -> JsonRuleSetLoader:
    return JsonRuleSetLoader(data_dir(base_dir) / "rules.json")


def order_service(base_dir: Path | None = None) -> OrderService:
    return OrderService(calculate_rules=rule_set_loader(base_dir).load())

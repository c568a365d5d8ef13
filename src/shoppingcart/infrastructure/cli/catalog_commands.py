"""CLI commands for inspecting the catalog and the configured rules."""

from __future__ import annotations

from pathlib import Path

import click

from shoppingcart.domain.exceptions import DomainException
from shoppingcart.infrastructure.bootstrap import product_repository, rule_set_loader


@click.command("list")
@click.pass_obj
def product_list(base_dir: Path | None) -> None:
    """List all products in the catalog."""
    try:
        products = product_repository(base_dir).list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<36} {'Series':<16} {'Price':>10}")
    click.echo("-" * 71)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<36} {p.series or '-':<16} {str(p.price):>10}")


@click.command("list")
@click.pass_obj
def rules_list(base_dir: Path | None) -> None:
    """List the pricing rules in the order they are applied."""
    try:
        rules = rule_set_loader(base_dir).load()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not rules:
        click.echo("No pricing rules configured.")
        return

    for position, rule in enumerate(rules, 1):
        click.echo(f"{position:>2}. {rule.name:<24} {rule.describe()}")

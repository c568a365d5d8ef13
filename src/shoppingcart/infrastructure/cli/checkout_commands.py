"""CLI commands for pricing a cart."""

from __future__ import annotations

from pathlib import Path

import click

from shoppingcart.application.checkout import CheckoutHandler
from shoppingcart.application.dto import CartItemSpec
from shoppingcart.application.quote_total import QuoteTotalHandler
from shoppingcart.domain.exceptions import DomainException
from shoppingcart.infrastructure.bootstrap import order_service, product_repository


def _parse_items(raw: str) -> list[CartItemSpec]:
    """Parse 'Book 1:2,Book 2:1' into CartItemSpec list."""
    specs: list[CartItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductName:Quantity'."
            )
        name, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{name}'."
            )
        specs.append(CartItemSpec(product_name=name.strip(), quantity=qty))
    return specs


@click.command("checkout")
@click.option("--items", required=True, help="Items as 'Product:Qty,Product:Qty'.")
@click.pass_obj
def checkout(base_dir: Path | None, items: str) -> None:
    """Price a cart and show the resulting order."""
    specs = _parse_items(items)

    try:
        handler = CheckoutHandler(
            product_repo=product_repository(base_dir),
            order_service=order_service(base_dir),
        )
        dto = handler.handle(specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"  {'Product':<36} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*64}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<36} {item.quantity:>5} {item.unit_price:>10} {item.list_total:>10}"
        )
    click.echo(f"  {'-'*64}")
    click.echo(f"  {'Subtotal':<44} {dto.subtotal:>20}")
    click.echo(f"  {'Discount':<44} {dto.discount:>20}")
    click.echo(f"  {'Order Total':<44} {dto.total:>20}")


@click.command("total")
@click.option("--items", required=True, help="Items as 'Product:Qty,Product:Qty'.")
@click.pass_obj
def total(base_dir: Path | None, items: str) -> None:
    """Print only the priced total of a cart."""
    specs = _parse_items(items)

    try:
        handler = QuoteTotalHandler(
            product_repo=product_repository(base_dir),
            order_service=order_service(base_dir),
        )
        amount = handler.handle(specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(amount)

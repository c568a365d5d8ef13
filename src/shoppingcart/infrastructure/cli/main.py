from pathlib import Path

import click

from shoppingcart.infrastructure.bootstrap import DATA_DIR_ENV
from shoppingcart.infrastructure.cli.catalog_commands import product_list, rules_list
from shoppingcart.infrastructure.cli.checkout_commands import checkout, total
from shoppingcart.infrastructure.log_setup import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar=DATA_DIR_ENV,
    default=None,
    help="Directory holding products.json and rules.json.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log each pricing pass.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, verbose: bool) -> None:
    """Shopping cart pricing"""
    configure_logging(verbose)
    ctx.obj = data_dir


@cli.group()
def product() -> None:
    """Inspect the product catalog."""


@cli.group()
def rules() -> None:
    """Inspect the pricing rules."""


# Register subcommands
cli.add_command(checkout)
cli.add_command(total)
product.add_command(product_list)
rules.add_command(rules_list)

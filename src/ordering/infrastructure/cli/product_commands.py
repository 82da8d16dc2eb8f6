"""CLI commands for the product catalog snapshot."""

from __future__ import annotations

import click

from ordering.application.add_product import AddProductHandler
from ordering.domain.exceptions import DomainException
from ordering.infrastructure.bootstrap import product_repository


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--discount-price", default=None, help="Optional discounted price.")
@click.option("--stock", default=0, type=int, show_default=True, help="Units in stock.")
def product_add(name: str, price: str, discount_price: str | None, stock: int) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            name=name, price=price, stock_quantity=stock, discount_price=discount_price
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.effective_price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    repo = product_repository()
    products = repo.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 46)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {str(p.effective_price):>10} {p.stock_quantity:>7}")

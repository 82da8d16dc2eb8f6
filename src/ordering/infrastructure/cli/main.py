import logging

import click

from ordering.infrastructure.cli.coupon_commands import coupon_add
from ordering.infrastructure.cli.order_commands import (
    order_add_item,
    order_apply_coupon,
    order_cancel,
    order_confirm,
    order_create,
    order_deliver,
    order_hold,
    order_list,
    order_refund,
    order_remove_item,
    order_ship,
    order_show,
)
from ordering.infrastructure.cli.product_commands import product_add, product_list

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@click.group()
@click.option("--verbose", is_flag=True, default=False, help="Log at DEBUG level.")
def cli(verbose: bool) -> None:
    """Ordering: customer orders, coupons and the product catalog."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def coupon() -> None:
    """Manage coupons."""


# Register subcommands
order.add_command(order_add_item)
order.add_command(order_apply_coupon)
order.add_command(order_cancel)
order.add_command(order_confirm)
order.add_command(order_create)
order.add_command(order_deliver)
order.add_command(order_hold)
order.add_command(order_list)
order.add_command(order_refund)
order.add_command(order_remove_item)
order.add_command(order_ship)
order.add_command(order_show)
product.add_command(product_add)
product.add_command(product_list)
coupon.add_command(coupon_add)

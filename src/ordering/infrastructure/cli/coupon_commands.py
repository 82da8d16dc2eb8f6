"""CLI commands for coupons."""

from __future__ import annotations

import click

from ordering.application.add_coupon import AddCouponHandler
from ordering.domain.exceptions import DomainException
from ordering.infrastructure.bootstrap import coupon_repository


@click.command("add")
@click.option("--code", required=True, help="Coupon code.")
@click.option("--amount", default=None, help="Fixed discount (e.g. 5.00).")
@click.option("--percentage", default=None, help="Percentage discount (e.g. 10).")
@click.option("--min-purchase", default=None, help="Minimum order sub-total.")
@click.option("--max-discount", default=None, help="Cap on a percentage discount.")
@click.option("--days", default=30, type=int, show_default=True, help="Days the coupon stays valid.")
@click.option("--usage-limit", default=0, type=int, show_default=True, help="0 means unlimited.")
def coupon_add(
    code: str,
    amount: str | None,
    percentage: str | None,
    min_purchase: str | None,
    max_discount: str | None,
    days: int,
    usage_limit: int,
) -> None:
    """Register a coupon that orders can redeem."""
    handler = AddCouponHandler(coupon_repo=coupon_repository())

    try:
        coupon = handler.handle(
            code=code,
            amount=amount,
            percentage=percentage,
            minimum_purchase=min_purchase,
            maximum_discount=max_discount,
            valid_days=days,
            usage_limit=usage_limit,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if coupon.discount_percentage is not None:
        discount = f"{coupon.discount_percentage}%"
    else:
        discount = str(coupon.discount_amount)
    click.echo(f"Coupon {coupon.code} added ({discount} off, valid until {coupon.end_date:%Y-%m-%d})")

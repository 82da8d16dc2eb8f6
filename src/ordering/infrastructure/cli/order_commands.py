"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from ordering.application.add_order_item import AddOrderItemHandler
from ordering.application.apply_coupon import ApplyCouponHandler
from ordering.application.change_order_status import (
    ChangeOrderStatusHandler,
    OrderAction,
)
from ordering.application.create_order import CreateOrderHandler
from ordering.application.dto import OrderDTO, OrderItemSpec
from ordering.application.remove_order_item import RemoveOrderItemHandler
from ordering.application.show_order import ShowOrderHandler
from ordering.domain.exceptions import DomainException
from ordering.infrastructure.bootstrap import (
    coupon_repository,
    event_publisher,
    order_repository,
    product_repository,
)


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'Widget:3,Gadget:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
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
        specs.append(OrderItemSpec(product_name=name.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"ID:       {dto.id}")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.parent_order_id:
        click.echo(f"Split from: {dto.parent_order_id}")
    click.echo()

    click.echo(f"  {'Item':<36} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*84}")
    for item in dto.items:
        click.echo(
            f"  {item.item_id:<36} {item.product_name:<20} {item.quantity:>5} "
            f"{item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*84}")

    click.echo(f"  {'Sub-total':<27} {dto.sub_total:>20}")
    if dto.coupon_discount:
        click.echo(f"  {'Coupon':<27} {'-' + dto.coupon_discount:>20}")
    if dto.gift_card_discount:
        click.echo(f"  {'Gift card':<27} {'-' + dto.gift_card_discount:>20}")
    click.echo(f"  {'Shipping':<27} {dto.shipping_cost:>20}")
    click.echo(f"  {'Tax':<27} {dto.tax:>20}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("create")
@click.option("--user", "user_id", required=True, help="Customer user ID.")
@click.option("--address", "address_id", required=True, help="Shipping address ID.")
@click.option("--items", required=True, help="Items as 'Product:Qty,Product:Qty'.")
@click.option("--shipping", default=None, help="Shipping cost (e.g. 4.99).")
@click.option("--tax", default=None, help="Tax amount (e.g. 2.10).")
def order_create(
    user_id: str,
    address_id: str,
    items: str,
    shipping: str | None,
    tax: str | None,
) -> None:
    """Create a new customer order."""
    specs = _parse_items(items)

    handler = CreateOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        publisher=event_publisher(),
    )

    try:
        dto = handler.handle(
            user_id=user_id,
            address_id=address_id,
            item_specs=specs,
            shipping_cost=shipping,
            tax=tax,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} created  (id={dto.id})")
    click.echo()
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
def order_list() -> None:
    """List all orders."""
    dtos = ShowOrderHandler(order_repo=order_repository()).list_all()

    if not dtos:
        click.echo("No orders found.")
        return

    click.echo(f"{'Number':<20} {'Status':<12} {'Total':>12}  ID")
    click.echo("-" * 84)
    for dto in dtos:
        click.echo(f"{dto.order_number:<20} {dto.status:<12} {dto.total:>12}  {dto.id}")


@click.command("add-item")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--product", required=True, help="Product name.")
@click.option("--qty", required=True, type=int, help="Quantity.")
def order_add_item(order_id: str, product: str, qty: int) -> None:
    """Add a product line to a pending order."""
    handler = AddOrderItemHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        publisher=event_publisher(),
    )

    try:
        dto = handler.handle(order_id, product, qty)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("remove-item")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--item", "item_id", required=True, help="Order item ID.")
def order_remove_item(order_id: str, item_id: str) -> None:
    """Remove a line from a pending order."""
    handler = RemoveOrderItemHandler(
        order_repo=order_repository(),
        publisher=event_publisher(),
    )

    try:
        dto = handler.handle(order_id, item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("apply-coupon")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--code", required=True, help="Coupon code.")
def order_apply_coupon(order_id: str, code: str) -> None:
    """Redeem a coupon on a pending order."""
    handler = ApplyCouponHandler(
        order_repo=order_repository(),
        coupon_repo=coupon_repository(),
        publisher=event_publisher(),
    )

    try:
        dto = handler.handle(order_id, code)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


def _change_status(order_id: str, action: OrderAction, reason: str | None = None) -> None:
    handler = ChangeOrderStatusHandler(
        order_repo=order_repository(),
        publisher=event_publisher(),
    )

    try:
        dto = handler.handle(order_id, action, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} is now {dto.status}.")


@click.command("confirm")
@click.option("--id", "order_id", required=True, help="Order ID to confirm.")
def order_confirm(order_id: str) -> None:
    """Confirm a pending order (PENDING -> PROCESSING)."""
    _change_status(order_id, OrderAction.CONFIRM)


@click.command("ship")
@click.option("--id", "order_id", required=True, help="Order ID to ship.")
def order_ship(order_id: str) -> None:
    """Mark a processing order as shipped."""
    _change_status(order_id, OrderAction.SHIP)


@click.command("deliver")
@click.option("--id", "order_id", required=True, help="Order ID to deliver.")
def order_deliver(order_id: str) -> None:
    """Mark a shipped order as delivered."""
    _change_status(order_id, OrderAction.DELIVER)


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
@click.option("--reason", default=None, help="Why the order is cancelled.")
def order_cancel(order_id: str, reason: str | None) -> None:
    """Cancel an order that has not shipped yet."""
    _change_status(order_id, OrderAction.CANCEL, reason)


@click.command("refund")
@click.option("--id", "order_id", required=True, help="Order ID to refund.")
def order_refund(order_id: str) -> None:
    """Refund a delivered order."""
    _change_status(order_id, OrderAction.REFUND)


@click.command("hold")
@click.option("--id", "order_id", required=True, help="Order ID to put on hold.")
@click.option("--reason", default=None, help="Why the order is held.")
def order_hold(order_id: str, reason: str | None) -> None:
    """Put a pending order on hold."""
    _change_status(order_id, OrderAction.HOLD, reason)

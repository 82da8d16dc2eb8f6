"""Smoke tests for the click command-line interface."""

import re

import pytest
from click.testing import CliRunner

from ordering.infrastructure.bootstrap import DATA_DIR_ENV
from ordering.infrastructure.cli.main import cli


@pytest.fixture
def invoke(tmp_path):
    runner = CliRunner()
    env = {DATA_DIR_ENV: str(tmp_path)}

    def _invoke(*args: str):
        return runner.invoke(cli, list(args), env=env)

    return _invoke


def _order_id(output: str) -> str:
    match = re.search(r"\(id=([0-9a-f-]+)\)", output)
    assert match, output
    return match.group(1)


class TestCli:

    def test_product_add_and_list(self, invoke):
        result = invoke("product", "add", "--name", "Widget", "--price", "10.00", "--stock", "5")
        assert result.exit_code == 0, result.output
        assert "Product #1 'Widget' added at $10.00" in result.output

        result = invoke("product", "list")
        assert "Widget" in result.output

    def test_order_lifecycle(self, invoke, tmp_path):
        invoke("product", "add", "--name", "Widget", "--price", "10.00", "--stock", "5")

        result = invoke(
            "order", "create", "--user", "u-1", "--address", "a-1",
            "--items", "Widget:2", "--shipping", "5.00",
        )
        assert result.exit_code == 0, result.output
        assert "$25.00" in result.output
        order_id = _order_id(result.output)
        assert (tmp_path / "orders.json").exists()

        result = invoke("order", "confirm", "--id", order_id)
        assert "is now PROCESSING" in result.output

        invoke("order", "ship", "--id", order_id)
        result = invoke("order", "cancel", "--id", order_id)
        assert result.exit_code == 1
        assert "Cannot cancel a shipped or delivered order" in result.output

        result = invoke("order", "list")
        assert "SHIPPED" in result.output

    def test_coupon_redemption(self, invoke):
        invoke("product", "add", "--name", "Widget", "--price", "10.00", "--stock", "5")
        result = invoke("coupon", "add", "--code", "SAVE5", "--amount", "5.00")
        assert result.exit_code == 0, result.output

        result = invoke("order", "create", "--user", "u-1", "--address", "a-1", "--items", "Widget:3")
        order_id = _order_id(result.output)

        result = invoke("order", "apply-coupon", "--id", order_id, "--code", "save5")
        assert result.exit_code == 0, result.output
        assert "-$5.00" in result.output
        assert "$25.00" in result.output

    def test_insufficient_stock_reported(self, invoke):
        invoke("product", "add", "--name", "Widget", "--price", "10.00", "--stock", "1")
        result = invoke("order", "create", "--user", "u-1", "--address", "a-1", "--items", "Widget:2")
        assert result.exit_code == 1
        assert "Insufficient stock" in result.output

    def test_bad_item_format(self, invoke):
        result = invoke("order", "create", "--user", "u-1", "--address", "a-1", "--items", "Widget")
        assert result.exit_code == 2
        assert "ProductName:Quantity" in result.output

    def test_unknown_order(self, invoke):
        result = invoke("order", "show", "--id", "missing")
        assert result.exit_code == 1
        assert "not found" in result.output

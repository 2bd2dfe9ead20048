"""Shared fixtures for till tests."""
import subprocess
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from till.app.domain import CartLine, PaymentMethod, Sale

FIXED_NOW = datetime(2025, 1, 15, 10, 30, 0, tzinfo=timezone.utc)


def _make_sale(lines=None, order_id=None, now=FIXED_NOW) -> Sale:
    if lines is None:
        lines = [
            CartLine(product_id=1, name="Burger", price=Decimal("5.99"), quantity=2),
            CartLine(product_id=4, name="Coke", price=Decimal("1.99"), quantity=1),
        ]
    sale = Sale.checkout(lines, PaymentMethod.CASH, now=now)
    if order_id is not None:
        sale = sale.model_copy(update={"order_id": order_id})
    return sale


class FakeRun:
    """Stand-in for ``subprocess.run`` that records calls."""

    def __init__(self, returncode=0, stdout="", stderr="", exc=None, on_call=None):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.exc = exc
        self.on_call = on_call
        self.calls = []

    def __call__(self, cmd, *args, **kwargs):
        self.calls.append(list(cmd))
        if self.on_call is not None:
            self.on_call(cmd)
        if self.exc is not None:
            raise self.exc
        return subprocess.CompletedProcess(cmd, self.returncode, self.stdout, self.stderr)


@pytest.fixture
def make_sale():
    """Factory building a consistent sale; defaults to two cart lines."""

    return _make_sale


@pytest.fixture
def sale() -> Sale:
    return _make_sale(order_id=1736937000000)


@pytest.fixture
def fake_run(monkeypatch):
    """Patch ``subprocess.run`` with a configurable :class:`FakeRun`."""

    def _install(**kwargs) -> FakeRun:
        fake = FakeRun(**kwargs)
        monkeypatch.setattr(subprocess, "run", fake)
        return fake

    return _install

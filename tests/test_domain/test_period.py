"""
Tests for calendar helpers
"""
from datetime import date

import pytest

from cgest.domain.client import Client
from cgest.domain.period import day_in_month, in_period, month_label, new_id


def test_day_in_month_clamps_to_month_length():
    assert day_in_month(2026, 2, 31) == date(2026, 2, 28)
    assert day_in_month(2028, 2, 30) == date(2028, 2, 29)
    assert day_in_month(2026, 4, 31) == date(2026, 4, 30)
    assert day_in_month(2026, 3, 5) == date(2026, 3, 5)


def test_invalid_month_rejected():
    with pytest.raises(ValueError, match="Mês inválido"):
        day_in_month(2026, 13, 1)
    with pytest.raises(ValueError):
        month_label(0)


def test_month_label():
    assert month_label(1) == "Jan"
    assert month_label(3) == "Mar"
    assert month_label(12) == "Dez"


def test_in_period():
    assert in_period(date(2026, 3, 1), 2026)
    assert in_period(date(2026, 3, 1), 2026, 3)
    assert not in_period(date(2026, 3, 1), 2026, 4)
    assert not in_period(None, 2026)


def test_new_id_is_unique():
    assert new_id() != new_id()


def test_client_billing_date_defaults_to_day_10():
    assert Client(id="c", name="X").billing_date(2026, 3) == date(2026, 3, 10)
    assert Client(id="c", name="X", due_day=31).billing_date(2026, 2) == date(2026, 2, 28)

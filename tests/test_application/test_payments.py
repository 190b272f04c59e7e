"""
Tests for PaymentLedger (upsert by period, manual entry, toggle)
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from decimal import Decimal

import pytest

from cgest.application.payments import PaymentLedger, PaymentValidationError
from cgest.domain.client import Client
from cgest.domain.payment import Payment

TODAY = date(2026, 3, 20)


@pytest.fixture
def ledger(storage):
    return PaymentLedger(storage, today=lambda: TODAY)


@pytest.fixture
def recurring_client(storage):
    client = Client(id="C1", name="Padaria", type="recurring", monthly_value=Decimal("450"), due_day=5)
    storage.clients.upsert(client)
    return client


# ── upsert ──

class TestUpsert:
    def test_new_period_creates_pending_record(self, ledger, storage):
        p = ledger.upsert("C1", date(2026, 3, 10), {"value": 100})
        assert storage.payments.list() == [p]
        assert p.value == Decimal("100")
        assert p.status == "pending"
        assert p.description == ""
        assert p.due_date == date(2026, 3, 10)

    def test_null_description_keeps_collection_readable(self, ledger, storage):
        first = ledger.upsert("C1", date(2026, 3, 10), {"value": 100, "description": "Março"})
        p = ledger.upsert("C1", date(2026, 3, 10), {"description": None})
        assert p.id == first.id
        assert p.description == ""
        assert [x.description for x in storage.payments.list()] == [""]

    def test_null_status_rejected(self, ledger, storage):
        ledger.upsert("C1", date(2026, 3, 10), {"value": 100})
        with pytest.raises(PaymentValidationError):
            ledger.upsert("C1", date(2026, 3, 10), {"status": None})
        assert storage.payments.list()[0].status == "pending"

    def test_supplied_status_is_kept(self, ledger):
        p = ledger.upsert("C1", date(2026, 3, 10), {"value": 100, "status": "paid", "paid_at": date(2026, 3, 11)})
        assert p.status == "paid"
        assert p.paid_at == date(2026, 3, 11)

    def test_same_period_is_idempotent(self, ledger, storage):
        first = ledger.upsert("C1", date(2026, 3, 10), {"value": 100})
        second = ledger.upsert("C1", date(2026, 3, 25), {"value": 200})
        payments = storage.payments.list()
        assert len(payments) == 1
        assert second.id == first.id
        assert payments[0].value == Decimal("200")
        # due_date do registro existente não muda
        assert payments[0].due_date == date(2026, 3, 10)

    def test_other_month_or_client_creates_new_record(self, ledger, storage):
        ledger.upsert("C1", date(2026, 3, 10), {"value": 100})
        ledger.upsert("C1", date(2026, 4, 10), {"value": 100})
        ledger.upsert("C2", date(2026, 3, 10), {"value": 100})
        ledger.upsert("C1", date(2027, 3, 10), {"value": 100})
        assert len(storage.payments.list()) == 4

    def test_fields_not_supplied_are_untouched(self, ledger):
        ledger.upsert("C1", date(2026, 3, 10), {"value": 100, "description": "Mensalidade", "receipt_url": "http://r"})
        p = ledger.upsert("C1", date(2026, 3, 10), {"value": 150})
        assert p.description == "Mensalidade"
        assert p.receipt_url == "http://r"
        assert p.value == Decimal("150")

    def test_explicit_id_wins_over_period(self, ledger, storage):
        march = ledger.upsert("C1", date(2026, 3, 10), {"value": 100})
        april = ledger.upsert("C1", date(2026, 4, 10), {"value": 100})
        p = ledger.upsert("C1", date(2026, 3, 10), {"value": 999}, payment_id=april.id)
        assert p.id == april.id
        assert storage.payments.get(april.id).value == Decimal("999")
        assert storage.payments.get(march.id).value == Decimal("100")

    def test_unknown_explicit_id_falls_back_to_period(self, ledger, storage):
        march = ledger.upsert("C1", date(2026, 3, 10), {"value": 100})
        p = ledger.upsert("C1", date(2026, 3, 1), {"value": 300}, payment_id="does-not-exist")
        assert p.id == march.id
        assert len(storage.payments.list()) == 1

    def test_collection_order_preserved(self, ledger, storage):
        a = ledger.upsert("C1", date(2026, 1, 10), {"value": 1})
        b = ledger.upsert("C1", date(2026, 2, 10), {"value": 2})
        c = ledger.upsert("C1", date(2026, 3, 10), {"value": 3})
        ledger.upsert("C1", date(2026, 2, 10), {"value": 20})
        assert [p.id for p in storage.payments.list()] == [a.id, b.id, c.id]

    def test_unknown_field_rejected(self, ledger):
        with pytest.raises(PaymentValidationError, match="não suportados"):
            ledger.upsert("C1", date(2026, 3, 10), {"amount": 100})

    def test_invalid_status_rejected(self, ledger, storage):
        with pytest.raises(PaymentValidationError, match="Status"):
            ledger.upsert("C1", date(2026, 3, 10), {"status": "late"})
        assert storage.payments.list() == []


# ── find_for_period ──

class TestFindForPeriod:
    def test_duplicates_first_wins_and_warns(self, ledger, storage, caplog):
        storage.payments.upsert(Payment(id="first", client_id="C1", due_date=date(2026, 3, 5)))
        storage.payments.upsert(Payment(id="second", client_id="C1", due_date=date(2026, 3, 20)))
        with caplog.at_level(logging.WARNING, logger="cgest.application.payments"):
            p = ledger.find_for_period("C1", 2026, 3)
        assert p.id == "first"
        assert "Ambiguous payment period" in caplog.text

    def test_none_when_no_match(self, ledger):
        assert ledger.find_for_period("C1", 2026, 3) is None

    def test_invalid_month(self, ledger):
        with pytest.raises(ValueError):
            ledger.find_for_period("C1", 2026, 0)


# ── manual entry ──

class TestManualPayment:
    def test_new_period_is_paid_on_billing_date(self, storage, recurring_client):
        ledger = PaymentLedger(storage, today=lambda: date(2026, 10, 19))
        p = ledger.record_manual_payment(recurring_client, 2026, 3, Decimal("450"))
        assert p.status == "paid"
        assert p.paid_at == date(2026, 3, 5)
        assert p.due_date == date(2026, 3, 5)
        assert p.description == "Pagamento Mar/2026"

    def test_existing_pending_becomes_paid(self, ledger, storage, recurring_client):
        pending = ledger.upsert("C1", date(2026, 3, 5), {"value": 450, "description": "Março"})
        p = ledger.record_manual_payment(recurring_client, 2026, 3, Decimal("500"), receipt_url="http://drive/r")
        assert p.id == pending.id
        assert p.status == "paid"
        assert p.paid_at == TODAY
        assert p.value == Decimal("500")
        assert p.description == "Março"
        assert p.receipt_url == "http://drive/r"
        assert len(storage.payments.list()) == 1

    def test_existing_paid_at_is_kept(self, ledger, recurring_client):
        ledger.upsert("C1", date(2026, 3, 5), {"status": "pending", "paid_at": date(2026, 3, 6)})
        p = ledger.record_manual_payment(recurring_client, 2026, 3, Decimal("450"), description="Ajuste")
        assert p.paid_at == date(2026, 3, 6)
        assert p.description == "Ajuste"


# ── toggle ──

class TestToggle:
    def test_round_trip(self, storage, recurring_client):
        days = iter([date(2026, 3, 20), date(2026, 3, 21), date(2026, 3, 22)])
        ledger = PaymentLedger(storage, today=lambda: next(days))

        created = ledger.toggle(recurring_client, 2026, 3)
        assert created.status == "paid"
        assert created.value == Decimal("450")
        assert created.paid_at == date(2026, 3, 5)
        assert created.due_date == date(2026, 3, 5)
        assert created.description == "Mensalidade Mar/2026"

        flipped = ledger.toggle(recurring_client, 2026, 3)
        assert flipped.id == created.id
        assert flipped.status == "pending"
        assert flipped.paid_at is None

        restored = ledger.toggle(recurring_client, 2026, 3)
        assert restored.id == created.id
        assert restored.status == "paid"
        assert restored.paid_at is not None
        assert len(storage.payments.list()) == 1

    def test_defaults_without_fee_and_due_day(self, ledger, storage):
        client = Client(id="C2", name="Loja", type="recurring")
        storage.clients.upsert(client)
        p = ledger.toggle(client, 2026, 2)
        assert p.value == Decimal("0")
        assert p.paid_at == date(2026, 2, 10)

    def test_due_day_clamped_to_month(self, ledger, storage):
        client = Client(id="C3", name="Clínica", type="recurring", monthly_value=Decimal("900"), due_day=31)
        p = ledger.toggle(client, 2026, 2)
        assert p.due_date == date(2026, 2, 28)


def test_concurrent_same_period_upserts_keep_one_record(local_storage):
    ledger = PaymentLedger(local_storage, today=lambda: TODAY)
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(
            lambda day: ledger.upsert("C1", date(2026, 3, day), {"value": day}),
            range(1, 17),
        ))
    assert len(local_storage.payments.list()) == 1

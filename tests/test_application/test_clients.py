"""
Tests for Clients use-cases and read service.
"""
import pytest
from datetime import date
from decimal import Decimal

from cgest.application.clients import (
    ClientNotFoundError, ClientReadService, ClientValidationError,
    CreateClientUseCase, DeleteClientUseCase, UpdateClientUseCase,
)
from cgest.application.payments import PaymentLedger
from cgest.domain.payment import Payment


TODAY = date(2026, 3, 20)


# ── CreateClient ──

class TestCreateClient:
    def test_create_recurring(self, storage):
        client = CreateClientUseCase(storage).execute(
            name="  Padaria Pão Quente ", monthly_value=Decimal("450"), due_day=5,
        )
        assert client.name == "Padaria Pão Quente"
        assert client.type == "recurring"
        assert client.status == "active"
        assert storage.clients.get(client.id).name == "Padaria Pão Quente"

    def test_create_one_off_defaults(self, storage):
        client = CreateClientUseCase(storage).execute(name="Loja", client_type="one-off")
        assert client.monthly_value == Decimal("0")
        assert client.due_day is None

    def test_empty_name_rejected(self, storage):
        with pytest.raises(ClientValidationError):
            CreateClientUseCase(storage).execute(name="   ")

    def test_invalid_type_rejected(self, storage):
        with pytest.raises(ClientValidationError):
            CreateClientUseCase(storage).execute(name="X", client_type="weekly")

    def test_invalid_due_day_rejected(self, storage):
        with pytest.raises(ClientValidationError):
            CreateClientUseCase(storage).execute(name="X", due_day=32)


# ── Update / Delete ──

class TestUpdateDeleteClient:
    def test_update_fields(self, storage):
        client = CreateClientUseCase(storage).execute(name="Padaria")
        updated = UpdateClientUseCase(storage).execute(client.id, status="inactive", monthly_value=300)
        assert updated.status == "inactive"
        assert updated.monthly_value == Decimal("300")
        assert storage.clients.get(client.id).status == "inactive"

    def test_update_unknown_field(self, storage):
        client = CreateClientUseCase(storage).execute(name="Padaria")
        with pytest.raises(ClientValidationError):
            UpdateClientUseCase(storage).execute(client.id, email="x@y.z")

    def test_update_missing_client(self, storage):
        with pytest.raises(ClientNotFoundError):
            UpdateClientUseCase(storage).execute("nope", name="X")

    def test_delete_keeps_payments(self, storage):
        client = CreateClientUseCase(storage).execute(name="Padaria", monthly_value=100, due_day=5)
        PaymentLedger(storage, today=lambda: TODAY).toggle(client, 2026, 3)

        DeleteClientUseCase(storage).execute(client.id)

        assert storage.clients.get(client.id) is None
        assert len(storage.payments.list()) == 1

    def test_delete_missing_client(self, storage):
        with pytest.raises(ClientNotFoundError):
            DeleteClientUseCase(storage).execute("nope")


# ── ClientReadService ──

class TestClientReadService:
    def test_list_with_financial_status(self, storage):
        late = CreateClientUseCase(storage).execute(name="Atrasado", monthly_value=100, due_day=5)
        paid = CreateClientUseCase(storage).execute(name="Em dia", monthly_value=100, due_day=5)
        CreateClientUseCase(storage).execute(name="Parado", status="inactive")
        PaymentLedger(storage, today=lambda: TODAY).toggle(paid, 2026, 3)

        items = ClientReadService(storage).list_clients(TODAY)
        status = {i["client"].name: i["financial_status"] for i in items}
        assert status == {"Atrasado": "overdue", "Em dia": "ok", "Parado": "inactive"}
        assert late.id in {i["client"].id for i in items}

    def test_list_status_filter(self, storage):
        CreateClientUseCase(storage).execute(name="A")
        CreateClientUseCase(storage).execute(name="B", status="inactive")
        items = ClientReadService(storage).list_clients(TODAY, status_filter="inactive")
        assert [i["client"].name for i in items] == ["B"]

    def test_payment_grid(self, storage):
        client = CreateClientUseCase(storage).execute(name="Padaria", monthly_value=100, due_day=5)
        storage.payments.upsert(Payment(id="mar", client_id=client.id, due_date=date(2026, 3, 5)))
        storage.payments.upsert(Payment(id="old", client_id=client.id, due_date=date(2025, 3, 5)))

        grid = ClientReadService(storage).payment_grid(client.id, 2026)
        assert len(grid) == 12
        assert grid[0]["label"] == "Jan"
        assert grid[2]["payment"].id == "mar"
        assert [c["month"] for c in grid if c["payment"]] == [3]

    def test_payment_grid_missing_client(self, storage):
        with pytest.raises(ClientNotFoundError):
            ClientReadService(storage).payment_grid("nope", 2026)

"""
Tests for RecordStore backends (SQL and local JSON)
"""
import json
import threading
from datetime import date, time
from decimal import Decimal

import pytest

from cgest.config import Settings
from cgest.domain.client import Client
from cgest.domain.payment import Payment
from cgest.domain.task import Task
from cgest.infrastructure.storage.repository import (
    open_local_storage, open_sql_storage, open_storage,
)


def _payment(pid, **kw):
    return Payment(id=pid, client_id="c1", value=Decimal("100"), due_date=date(2026, 3, 10), **kw)


class TestRecordStore:
    def test_upsert_and_get(self, storage):
        storage.payments.upsert(_payment("p1"))
        p = storage.payments.get("p1")
        assert p.client_id == "c1"
        assert p.value == Decimal("100")
        assert p.due_date == date(2026, 3, 10)
        assert storage.payments.get("missing") is None

    def test_upsert_replaces_in_place(self, storage):
        for pid in ("a", "b", "c"):
            storage.payments.upsert(_payment(pid))
        storage.payments.upsert(_payment("b", status="paid"))
        records = storage.payments.list()
        assert [p.id for p in records] == ["a", "b", "c"]
        assert records[1].status == "paid"

    def test_query(self, storage):
        storage.payments.upsert(_payment("a"))
        storage.payments.upsert(_payment("b", status="paid"))
        assert [p.id for p in storage.payments.query(lambda p: p.is_paid)] == ["b"]

    def test_delete(self, storage):
        storage.payments.upsert(_payment("a"))
        assert storage.payments.delete("a") is True
        assert storage.payments.delete("a") is False
        assert storage.payments.list() == []

    def test_task_time_roundtrip(self, storage):
        storage.tasks.upsert(Task(id="t1", title="Reunião", is_meeting=True, due_date=date(2026, 3, 10), meeting_time=time(14, 30)))
        t = storage.tasks.get("t1")
        assert t.meeting_time == time(14, 30)
        assert t.is_meeting is True


def test_sql_storage_is_scoped_by_account(db_session):
    mine = open_sql_storage(db_session, 1)
    other = open_sql_storage(db_session, 2)
    mine.clients.upsert(Client(id="c1", name="Padaria"))
    assert other.clients.list() == []
    assert other.clients.get("c1") is None
    assert other.clients.delete("c1") is False
    assert [c.name for c in mine.clients.list()] == ["Padaria"]


def test_local_store_file_layout(tmp_path):
    storage = open_local_storage(tmp_path, 7)
    storage.clients.upsert(Client(id="c1", name="Padaria", monthly_value=Decimal("450")))
    path = tmp_path / "7" / "cgest_clients.json"
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data[0]["id"] == "c1"
    assert data[0]["monthly_value"] == "450"


def test_local_store_reads_legacy_blank_dates(tmp_path):
    """Formulário antigo gravava deadline = "" e chaves extras (userId)"""
    folder = tmp_path / "1"
    folder.mkdir()
    (folder / "cgest_goals.json").write_text(json.dumps([
        {"id": "g1", "description": "Meta", "target_value": 1000, "current_value": 0,
         "deadline": "", "userId": "legacy"},
    ]), encoding="utf-8")
    goal = open_local_storage(tmp_path, 1).goals.get("g1")
    assert goal.deadline is None
    assert goal.target_value == Decimal("1000")


def test_local_store_concurrent_upserts_all_persist(local_storage):
    def write(n):
        local_storage.payments.upsert(_payment(f"p{n}"))

    threads = [threading.Thread(target=write, args=(n,)) for n in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(p.id for p in local_storage.payments.list()) == sorted(f"p{n}" for n in range(20))


def test_local_replace_all(local_storage):
    local_storage.payments.upsert(_payment("old"))
    count = local_storage.payments.replace_all([
        {"id": "n1", "client_id": "c1", "value": "10", "due_date": "2026-01-05", "status": "paid"},
    ])
    assert count == 1
    assert [p.id for p in local_storage.payments.list()] == ["n1"]
    assert local_storage.payments.get("n1").due_date == date(2026, 1, 5)


def test_open_storage_selects_backend(tmp_path, db_session):
    local = open_storage(Settings(STORAGE_BACKEND="local", LOCAL_STORE_DIR=str(tmp_path)), 1)
    assert local.backend == "local"
    sql = open_storage(Settings(STORAGE_BACKEND="sql"), 1, db=db_session)
    assert sql.backend == "sql"


def test_open_storage_errors():
    with pytest.raises(ValueError, match="requires a database session"):
        open_storage(Settings(STORAGE_BACKEND="sql"), 1)
    with pytest.raises(ValueError, match="Unknown storage backend"):
        open_storage(Settings(STORAGE_BACKEND="firebase"), 1)

"""
Tests for client financial status and overdue alerts
"""
from datetime import date
from decimal import Decimal

from cgest.application.overdue import build_overdue_alerts, compute_client_financial_status
from cgest.domain.client import Client
from cgest.domain.payment import Payment
from cgest.domain.project import Project

TODAY = date(2026, 3, 10)


def _recurring(**kw):
    return Client(id="C1", name="Padaria", type="recurring", monthly_value=Decimal("450"), due_day=5, **kw)


def _pay(pid, due, status="pending", client_id="C1", **kw):
    return Payment(id=pid, client_id=client_id, value=Decimal("100"), due_date=due, status=status, **kw)


class TestFinancialStatus:
    def test_recurring_past_due_day_without_payment_is_overdue(self):
        assert compute_client_financial_status(_recurring(), [], TODAY) == "overdue"

    def test_recurring_with_paid_payment_this_month_is_ok(self):
        payments = [_pay("p1", date(2026, 3, 5), status="paid", paid_at=date(2026, 3, 6))]
        assert compute_client_financial_status(_recurring(), payments, TODAY) == "ok"

    def test_paid_payment_of_another_month_does_not_count(self):
        payments = [_pay("p1", date(2026, 2, 5), status="paid")]
        assert compute_client_financial_status(_recurring(), payments, TODAY) == "overdue"

    def test_on_due_day_is_not_yet_overdue(self):
        assert compute_client_financial_status(_recurring(), [], date(2026, 3, 5)) == "ok"

    def test_inactive_short_circuits(self):
        client = _recurring(status="inactive")
        payments = [_pay("p1", date(2026, 1, 5))]
        assert compute_client_financial_status(client, payments, TODAY) == "inactive"

    def test_pending_payment_before_today_is_overdue(self):
        client = Client(id="C1", name="Loja", type="one-off")
        assert compute_client_financial_status(client, [_pay("p1", date(2026, 3, 9))], TODAY) == "overdue"

    def test_pending_payment_due_today_is_ok(self):
        client = Client(id="C1", name="Loja", type="one-off")
        assert compute_client_financial_status(client, [_pay("p1", TODAY)], TODAY) == "ok"

    def test_other_clients_payments_ignored(self):
        client = Client(id="C1", name="Loja", type="one-off")
        payments = [_pay("p1", date(2026, 1, 1), client_id="C2")]
        assert compute_client_financial_status(client, payments, TODAY) == "ok"

    def test_one_off_client_has_no_due_day_rule(self):
        client = Client(id="C1", name="Loja", type="one-off", due_day=1)
        assert compute_client_financial_status(client, [], TODAY) == "ok"


class TestOverdueAlerts:
    clients = [Client(id="C1", name="Padaria"), Client(id="C2", name="Clínica")]

    def test_collects_overdue_payments_and_pending_projects(self):
        payments = [
            _pay("late", date(2026, 3, 1)),
            _pay("future", date(2026, 3, 15)),
            _pay("paid", date(2026, 3, 2), status="paid"),
            _pay("feb", date(2026, 2, 5)),
        ]
        projects = [
            Project(id="site", client_id="C2", name="Site", budget=Decimal("3000"), deadline=date(2026, 3, 28)),
            Project(id="logo", client_id="C2", name="Logo", budget=Decimal("800")),
            Project(id="april", client_id="C2", name="App", deadline=date(2026, 4, 2)),
            Project(id="done", client_id="C2", name="Feito", payment_status="paid"),
        ]
        alerts = build_overdue_alerts(payments, projects, self.clients, 2026, 3, set(), TODAY)
        assert [a.id for a in alerts] == ["late", "site", "logo"]
        assert alerts[0].client_name == "Padaria"
        assert alerts[1].description == "Projeto: Site"
        assert alerts[2].date is None

    def test_project_without_deadline_in_any_period(self):
        projects = [Project(id="logo", client_id="C2", name="Logo")]
        alerts = build_overdue_alerts([], projects, self.clients, 2025, 11, set(), TODAY)
        assert [a.id for a in alerts] == ["logo"]

    def test_dismissed_alert_excluded(self):
        payments = [_pay("a", date(2026, 3, 1)), _pay("b", date(2026, 3, 2))]
        before = build_overdue_alerts(payments, [], self.clients, 2026, 3, set(), TODAY)
        after = build_overdue_alerts(payments, [], self.clients, 2026, 3, {"a"}, TODAY)
        assert [a.id for a in before] == ["a", "b"]
        assert [a.id for a in after] == ["b"]

    def test_sorted_by_date_undated_last(self):
        today = date(2026, 4, 1)
        payments = [_pay("mid", date(2026, 3, 15))]
        projects = [
            Project(id="nodate", client_id="C1", name="Sem prazo"),
            Project(id="early", client_id="C1", name="Cedo", deadline=date(2026, 3, 1)),
        ]
        alerts = build_overdue_alerts(payments, projects, self.clients, 2026, 3, set(), today)
        assert [a.date for a in alerts] == [date(2026, 3, 1), date(2026, 3, 15), None]

    def test_unknown_client_name(self):
        alerts = build_overdue_alerts([_pay("x", date(2026, 3, 1), client_id="gone")], [], self.clients, 2026, 3, set(), TODAY)
        assert alerts[0].client_name == "Cliente"

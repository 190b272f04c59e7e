"""
Dashboard - aggregated management view.

Pure read-layer: loads each collection once and composes the blocks:
  1. Stats (clientes ativos, projetos em andamento, MRR, pipeline, receita)
  2. Revenue for the selected period + 7-day series
  3. Overdue alerts
  4. Today's tasks
"""
from datetime import date
from typing import Any, Iterable

from cgest.application.overdue import build_overdue_alerts
from cgest.application.revenue import (
    aggregate_revenue, daily_revenue_series, last_revenue_day,
    monthly_recurring_revenue, pipeline, project_revenue, total_revenue, transactions_on,
)
from cgest.domain.goal import Goal
from cgest.domain.project import PROJECT_STATUS_IN_PROGRESS
from cgest.infrastructure.storage.repository import Storage


class DashboardService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def get_summary(
        self,
        today: date,
        year: int,
        month: int,
        dismissed_ids: Iterable[str] = (),
    ) -> dict[str, Any]:
        clients = self.storage.clients.list()
        projects = self.storage.projects.list()
        payments = self.storage.payments.list()
        tasks = self.storage.tasks.list()
        goals = self.storage.goals.list()

        active_clients = [c for c in clients if c.is_active]
        series = daily_revenue_series(payments, projects, today)

        return {
            "stats": {
                "total_clients": len(active_clients),
                "active_projects": sum(1 for p in projects if p.status == PROJECT_STATUS_IN_PROGRESS),
                "mrr": monthly_recurring_revenue(clients),
                "pipeline": pipeline(projects),
                "project_revenue": project_revenue(projects),
                "total_revenue": total_revenue(payments, projects),
            },
            "period": {
                "year": year,
                "month": month,
                "revenue": aggregate_revenue(payments, projects, year, month),
                "year_revenue": aggregate_revenue(payments, projects, year),
            },
            "weekly_revenue": series,
            "last_revenue_day": last_revenue_day(series, today),
            "alerts": build_overdue_alerts(
                payments, projects, clients, year, month, dismissed_ids, today,
            ),
            "todays_tasks": [t for t in tasks if t.due_date == today],
            "goals": [_goal_item(g) for g in goals],
        }

    def get_transactions(self, day: date) -> list[dict[str, Any]]:
        """Revenue entries paid on `day` (modal de detalhes)."""
        return transactions_on(
            self.storage.payments.list(),
            self.storage.projects.list(),
            self.storage.clients.list(),
            day,
        )


def _goal_item(goal: Goal) -> dict[str, Any]:
    return {"goal": goal, "progress": goal.progress()}

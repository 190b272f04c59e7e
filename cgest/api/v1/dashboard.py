"""
Dashboard API endpoints
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from cgest.api.deps import get_storage, get_today
from cgest.api.v1.schemas import TaskResponse
from cgest.application.dashboard import DashboardService
from cgest.config import get_settings
from cgest.infrastructure.storage.repository import Storage
from cgest.utils.money import format_money

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


def _money(amount) -> dict:
    return {"value": str(amount), "label": format_money(amount, get_settings().CURRENCY)}


@router.get("/")
def get_dashboard(
    year: Optional[int] = None,
    month: Optional[int] = Query(default=None, ge=1, le=12),
    dismissed: list[str] = Query(default=[]),
    storage: Storage = Depends(get_storage),
    today=Depends(get_today),
):
    """
    Painel: indicadores, receita do período, alertas de atraso e tarefas de hoje.

    `dismissed`: ids de alertas ocultados pelo usuário (não persistidos).
    """
    year = year or today.year
    month = month or today.month
    summary = DashboardService(storage).get_summary(today, year, month, dismissed)
    stats = summary["stats"]

    return {
        "stats": {
            "total_clients": stats["total_clients"],
            "active_projects": stats["active_projects"],
            "mrr": _money(stats["mrr"]),
            "pipeline": _money(stats["pipeline"]),
            "project_revenue": _money(stats["project_revenue"]),
            "total_revenue": _money(stats["total_revenue"]),
        },
        "period": {
            "year": year,
            "month": month,
            "revenue": _money(summary["period"]["revenue"]),
            "year_revenue": _money(summary["period"]["year_revenue"]),
        },
        "weekly_revenue": [
            {"date": p["date"].isoformat(), "revenue": str(p["revenue"])}
            for p in summary["weekly_revenue"]
        ],
        "last_revenue_day": summary["last_revenue_day"].isoformat(),
        "alerts": [
            {
                "id": a.id,
                "kind": a.kind,
                "client_id": a.client_id,
                "client_name": a.client_name,
                "description": a.description,
                "amount": _money(a.amount),
                "date": a.date.isoformat() if a.date else None,
            }
            for a in summary["alerts"]
        ],
        "todays_tasks": [TaskResponse.from_record(t).model_dump(mode="json") for t in summary["todays_tasks"]],
        "goals": [
            {"id": g["goal"].id, "description": g["goal"].description, "progress": float(g["progress"])}
            for g in summary["goals"]
        ],
    }


@router.get("/transactions")
def get_transactions(day: date, storage: Storage = Depends(get_storage)):
    """Receitas recebidas no dia (pagamentos de clientes e projetos)"""
    return [
        {
            "id": t["id"],
            "type": t["type"],
            "client_name": t["client_name"],
            "description": t["description"],
            "value": _money(t["value"]),
            "date": t["date"].isoformat(),
        }
        for t in DashboardService(storage).get_transactions(day)
    ]

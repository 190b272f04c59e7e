"""
Revenue read-side: period revenue, totals, pipeline, MRR, daily series.

Pure functions over already-loaded records (sem acesso a storage).
"""
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from cgest.domain.client import Client
from cgest.domain.payment import Payment
from cgest.domain.project import Project
from cgest.domain.revenue import (
    RevenueContribution, SOURCE_PROJECT, collect_contributions, from_project, sum_contributions,
)

_ZERO = Decimal("0")


def aggregate_revenue(
    payments: Iterable[Payment],
    projects: Iterable[Project],
    year: int,
    month: Optional[int] = None,
) -> Decimal:
    """
    Paid payments + paid projects whose effective period matches.

    Projetos pagos sem paid_at não entram em nenhum período.
    """
    return sum_contributions(collect_contributions(payments, projects), year, month)


def total_revenue(payments: Iterable[Payment], projects: Iterable[Project]) -> Decimal:
    """All paid payments and paid projects, no period filter."""
    return sum_contributions(collect_contributions(payments, projects))


def project_revenue(projects: Iterable[Project]) -> Decimal:
    """Realized project revenue (paid budgets, any date)."""
    return sum_contributions(c for c in map(from_project, projects) if c is not None)


def pipeline(projects: Iterable[Project]) -> Decimal:
    """Budgets of projects whose payment is still pending."""
    return sum((p.budget for p in projects if p.is_payment_pending), _ZERO)


def monthly_recurring_revenue(clients: Iterable[Client]) -> Decimal:
    """MRR: monthly fee of active recurring clients."""
    return sum(
        (c.monthly_value or _ZERO for c in clients if c.is_active and c.is_recurring),
        _ZERO,
    )


def revenue_on(contributions: Iterable[RevenueContribution], day: date) -> List[RevenueContribution]:
    return [c for c in contributions if c.paid_on == day]


def daily_revenue_series(
    payments: Iterable[Payment],
    projects: Iterable[Project],
    today: date,
    days: int = 7,
) -> List[Dict[str, Any]]:
    """
    Revenue per day for the last `days` days ending today (oldest first),
    by paid_at.
    """
    contributions = collect_contributions(payments, projects)
    series = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        series.append({
            "date": day,
            "revenue": sum_contributions(revenue_on(contributions, day)),
        })
    return series


def transactions_on(
    payments: Iterable[Payment],
    projects: Iterable[Project],
    clients: Iterable[Client],
    day: date,
) -> List[Dict[str, Any]]:
    """Revenue entries paid on `day`: client payments first, then projects."""
    names = {c.id: c.name for c in clients}
    return [
        {
            "id": c.record_id,
            "source": c.source,
            "type": "Projeto" if c.source == SOURCE_PROJECT else "Receita",
            "client_name": names.get(c.client_id, "Cliente"),
            "description": c.description,
            "value": c.amount,
            "date": c.paid_on,
        }
        for c in revenue_on(collect_contributions(payments, projects), day)
    ]


def last_revenue_day(series: List[Dict[str, Any]], today: date) -> date:
    """Most recent day of the series with revenue, or today."""
    for point in reversed(series):
        if point["revenue"] > 0:
            return point["date"]
    return today

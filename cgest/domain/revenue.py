"""
Revenue contributions.

Receita tem duas origens: pagamentos de clientes e projetos pagos. As duas
passam pelo mesmo RevenueContribution para que a soma seja sempre
    receita = soma(payments pagos) + soma(orçamento de projetos pagos)
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from cgest.domain.payment import Payment
from cgest.domain.project import Project

SOURCE_PAYMENT = "payment"
SOURCE_PROJECT = "project"


@dataclass(frozen=True)
class RevenueContribution:
    source: str
    record_id: str
    client_id: str
    amount: Decimal
    year: Optional[int]
    month: Optional[int]
    paid_on: Optional[date]
    description: str = ""

    def matches(self, year: Optional[int] = None, month: Optional[int] = None) -> bool:
        if year is None:
            return True
        if self.year != year:
            return False
        return month is None or self.month == month


def from_payment(payment: Payment) -> Optional[RevenueContribution]:
    """Contribution of a paid payment, attributed to its effective period."""
    if not payment.is_paid:
        return None
    year, month = payment.effective_period()
    return RevenueContribution(
        source=SOURCE_PAYMENT,
        record_id=payment.id,
        client_id=payment.client_id,
        amount=Decimal(payment.value or 0),
        year=year,
        month=month,
        paid_on=payment.paid_at,
        description=payment.description or "Mensalidade/Avulso",
    )


def from_project(project: Project) -> Optional[RevenueContribution]:
    """
    Contribution of a paid project, attributed to the month of paid_at.

    A paid project without paid_at has no period: it counts in the
    unfiltered total only.
    """
    if not project.is_paid:
        return None
    paid_at = project.paid_at
    return RevenueContribution(
        source=SOURCE_PROJECT,
        record_id=project.id,
        client_id=project.client_id,
        amount=Decimal(project.budget or 0),
        year=paid_at.year if paid_at else None,
        month=paid_at.month if paid_at else None,
        paid_on=paid_at,
        description=f"Projeto: {project.name}",
    )


def collect_contributions(
    payments: Iterable[Payment],
    projects: Iterable[Project],
) -> list[RevenueContribution]:
    contributions = [from_payment(p) for p in payments]
    contributions += [from_project(p) for p in projects]
    return [c for c in contributions if c is not None]


def sum_contributions(
    contributions: Iterable[RevenueContribution],
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> Decimal:
    return sum(
        (c.amount for c in contributions if c.matches(year, month)),
        Decimal("0"),
    )

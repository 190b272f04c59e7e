"""
Calendar helpers shared by the financial records.

Datas são sempre datas de calendário (sem hora, sem fuso): a comparação
entre `date` tem a mesma ordem que a comparação de strings `YYYY-MM-DD`.
"""
import calendar
import uuid
from datetime import date
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator

MONTH_ABBREVIATIONS = (
    "Jan", "Fev", "Mar", "Abr", "Mai", "Jun",
    "Jul", "Ago", "Set", "Out", "Nov", "Dez",
)

# Ano atribuído a registros antigos que não têm nenhuma data
LEGACY_DEFAULT_YEAR = 2025

# Dia de vencimento usado quando o cliente não configurou um
DEFAULT_DUE_DAY = 10


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# Formulários antigos gravavam "" em vez de omitir a data
OptionalDate = Annotated[Optional[date], BeforeValidator(_blank_to_none)]


def new_id() -> str:
    """Synthetic record id."""
    return uuid.uuid4().hex


def validate_month(month: int) -> int:
    if not 1 <= month <= 12:
        raise ValueError(f"Mês inválido: {month}")
    return month


def month_label(month: int) -> str:
    """1 -> "Jan", 3 -> "Mar"."""
    return MONTH_ABBREVIATIONS[validate_month(month) - 1]


def day_in_month(year: int, month: int, day: int) -> date:
    """
    Build a date on `day` of the given month, clamped to the month length.

    Example:
        >>> day_in_month(2026, 2, 31)
        datetime.date(2026, 2, 28)
    """
    validate_month(month)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, max(1, min(day, last_day)))


def in_period(value: Optional[date], year: int, month: Optional[int] = None) -> bool:
    """True when `value` falls in `year` (and `month`, if given)."""
    if value is None or value.year != year:
        return False
    return month is None or value.month == month

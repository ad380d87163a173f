"""
===============================================================================
TARJETA CRC — application/report_views.py
===============================================================================

Responsabilidades:
  - Filtros de reportes: búsqueda (centro O tarea), resultado, cierre y rango
    de fechas; compuestos con AND.
  - Estadísticas sobre los reportes FILTRADOS con redondeo half-up.

Colaboradores:
  - domain.entities.Report (result/closure ya traducidos a enums)

Reglas:
  - Fecha no parseable + rango activo => el reporte queda afuera.
  - not_acceptable_percentage = 100 - acceptable_percentage (también con 0).
===============================================================================
"""

from __future__ import annotations

import calendar
import math
from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import Iterable, List, Optional

from ..domain.entities import ClosureStatus, Report, ReportResult

ALL = "all"
RESULT_VALUES = (ALL, "acceptable", "not_acceptable")
STATUS_VALUES = (ALL, "closed", "pending")
DATE_RANGES = (ALL, "week", "month", "quarter")


@dataclass(frozen=True)
class ReportFilters:
    search: str = ""
    result: str = ALL
    status: str = ALL
    date_range: str = ALL

    def __post_init__(self) -> None:
        if self.result not in RESULT_VALUES:
            raise ValueError(f"result must be one of {RESULT_VALUES}")
        if self.status not in STATUS_VALUES:
            raise ValueError(f"status must be one of {STATUS_VALUES}")
        if self.date_range not in DATE_RANGES:
            raise ValueError(f"date_range must be one of {DATE_RANGES}")

    def with_changes(self, **changes) -> "ReportFilters":
        return replace(self, **changes)


def _minus_months(day: date, months: int) -> date:
    index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def date_cutoff(date_range: str, today: date) -> Optional[date]:
    if date_range == ALL:
        return None
    if date_range == "week":
        return today - timedelta(days=7)
    if date_range == "month":
        return _minus_months(today, 1)
    if date_range == "quarter":
        return _minus_months(today, 3)
    raise ValueError(f"unknown date_range: {date_range}")


def _matches_search(report: Report, term: str) -> bool:
    if not term:
        return True
    needle = term.lower()
    return needle in report.work_center.lower() or needle in report.task.lower()


def filter_reports(
    reports: Iterable[Report],
    filters: ReportFilters,
    today: Optional[date] = None,
) -> List[Report]:
    cutoff = date_cutoff(filters.date_range, today or date.today())
    result = []
    for report in reports:
        if not _matches_search(report, filters.search):
            continue
        if filters.result != ALL and report.result is not ReportResult(filters.result):
            continue
        if filters.status != ALL and report.closure is not ClosureStatus(filters.status):
            continue
        if cutoff is not None:
            if report.verification_date is None or report.verification_date < cutoff:
                continue
        result.append(report)
    return result


def round_half_up(value: float) -> int:
    """Redondeo "x.5 hacia arriba" (round() de Python es bancario)."""
    return int(math.floor(value + 0.5))


def _percentage(part: int, total: int) -> int:
    return round_half_up(part / total * 100) if total > 0 else 0


@dataclass(frozen=True)
class ReportStatistics:
    total: int
    acceptable: int
    not_acceptable: int
    closed: int
    pending: int
    acceptable_percentage: int
    not_acceptable_percentage: int
    closed_percentage: int


def report_statistics(reports: List[Report]) -> ReportStatistics:
    total = len(reports)
    acceptable = sum(1 for r in reports if r.is_acceptable)
    closed = sum(1 for r in reports if r.is_closed)
    acceptable_pct = _percentage(acceptable, total)
    return ReportStatistics(
        total=total,
        acceptable=acceptable,
        not_acceptable=total - acceptable,
        closed=closed,
        pending=total - closed,
        acceptable_percentage=acceptable_pct,
        not_acceptable_percentage=100 - acceptable_pct,
        closed_percentage=_percentage(closed, total),
    )

"""
===============================================================================
TARJETA CRC — application/user_views.py
===============================================================================

Responsabilidades:
  - Búsqueda (nombre O email, case-insensitive) + filtros rol/empresa/estado,
    compuestos con AND.
  - Opciones del filtro de empresa: ["all", *empresas distintas no vacías].
  - Estadísticas sobre la lista COMPLETA (sin filtrar): total, activos y
    top 3 de roles por frecuencia (empates: gana el visto primero).

Colaboradores:
  - domain.entities.UserProfile
  - i18n.resolver.Translator (etiquetas de rol, "noDataFound")
  - crosscutting.pagination (paginado de la lista filtrada)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, List

from ..domain.entities import Role, UserProfile

ALL = "all"
STATUS_VALUES = (ALL, "active", "inactive")
TOP_ROLES = 3


@dataclass(frozen=True)
class UserFilters:
    search: str = ""
    role: str = ALL
    company: str = ALL
    status: str = ALL

    def __post_init__(self) -> None:
        if self.role != ALL:
            Role(self.role)
        if self.status not in STATUS_VALUES:
            raise ValueError(f"status must be one of {STATUS_VALUES}")

    def with_changes(self, **changes) -> "UserFilters":
        return replace(self, **changes)


def matches_search(user: UserProfile, term: str) -> bool:
    needle = (term or "").lower()
    if needle in (user.name or "").lower():
        return True
    return bool(user.email) and needle in user.email.lower()


def filter_users(users: Iterable[UserProfile], filters: UserFilters) -> List[UserProfile]:
    result = []
    for user in users:
        if not matches_search(user, filters.search):
            continue
        if filters.role != ALL and user.role.value != filters.role:
            continue
        if filters.company != ALL and user.company != filters.company:
            continue
        if filters.status != ALL and user.status != filters.status:
            continue
        result.append(user)
    return result


def company_options(users: Iterable[UserProfile]) -> List[str]:
    options = [ALL]
    for user in users:
        if user.company and user.company not in options:
            options.append(user.company)
    return options


@dataclass(frozen=True)
class UserStatistics:
    total: int
    active: int
    role_distribution: str


def user_statistics(users: List[UserProfile], translator) -> UserStatistics:
    counts: Dict[str, int] = {}
    for user in users:
        counts[user.role.value] = counts.get(user.role.value, 0) + 1

    # sorted() es estable: a igual cuenta, conserva el orden de aparición.
    top = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:TOP_ROLES]
    summary = ", ".join(
        f"{translator.role_label(role)}: {count}" for role, count in top
    )

    return UserStatistics(
        total=len(users),
        active=sum(1 for u in users if u.is_active),
        role_distribution=summary or translator.t("noDataFound"),
    )

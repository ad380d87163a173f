# sst_console/crosscutting/pagination.py
"""
===============================================================================
MÓDULO: Utilidades de paginación (páginas numeradas, base 1)
===============================================================================

Objetivo
--------
Paginación simple y consistente para las tablas de la consola:
- tamaño de página fijo
- cantidad de páginas = ceil(total / tamaño)
- páginas fuera de rango NO se corrigen: devuelven una página vacía

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  page_count + paginate -> PageView[T]

Responsabilidades:
  - Calcular cortes (start/end) de la página pedida
  - Armar metadata has_next/has_prev y rango visible ("mostrando X a Y de N")
===============================================================================
"""

from __future__ import annotations

from typing import Generic, List, Sequence, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PageView(BaseModel, Generic[T]):
    items: List[T] = Field(description="Items de la página actual")
    page: int = Field(description="Página pedida (base 1)")
    page_size: int = Field(description="Tamaño fijo de página")
    total_items: int = Field(description="Cantidad de items filtrados")
    total_pages: int = Field(description="ceil(total_items / page_size)")
    start_index: int = Field(description="Posición (base 1) del primer item visible")
    end_index: int = Field(description="Posición (base 1) del último item visible")
    has_prev: bool = Field(description="Hay una página anterior")
    has_next: bool = Field(description="Hay una página siguiente")


def page_count(total: int, size: int) -> int:
    size = max(1, int(size))
    total = max(0, int(total))
    return (total + size - 1) // size


def paginate(items: Sequence[T], page: int, size: int) -> PageView[T]:
    """
    Corta `items` en la página `page` (base 1).

    No hay auto-corrección: una página fuera de rango devuelve items vacíos
    con la metadata real (total_pages, has_prev) intacta.
    """
    size = max(1, int(size))
    page = int(page)
    total = len(items)
    pages = page_count(total, size)

    start = (page - 1) * size
    page_items = list(items[start : start + size]) if page >= 1 else []

    return PageView(
        items=page_items,
        page=page,
        page_size=size,
        total_items=total,
        total_pages=pages,
        start_index=start + 1 if page_items else 0,
        end_index=start + len(page_items) if page_items else 0,
        has_prev=page > 1,
        has_next=page < pages,
    )

# pages/registry.py
"""
Transiciones puras sobre el registro de páginas.

El registro es una tupla de Page. Ninguna función muta su argumento:
todas devuelven un registro nuevo que el llamador asigna de golpe.
"""
from collections import Counter
from dataclasses import replace
from typing import Optional

from mangaflow.pages.models import Page, PageRange, PageStatus

Registry = tuple[Page, ...]


def update_page(registry: Registry, page_id: str, **changes) -> Registry:
    """Sustituye la página `page_id` aplicando `changes`. Ids desconocidos no cambian nada."""
    return tuple(
        replace(page, **changes) if page.id == page_id else page
        for page in registry
    )


def mark_processing(registry: Registry, page_id: str) -> Registry:
    return update_page(registry, page_id, status=PageStatus.PROCESSING, error=None)


def mark_completed(
    registry:      Registry,
    page_id:       str,
    processed_url: str,
    output_path:   Optional[str] = None,
) -> Registry:
    return update_page(
        registry, page_id,
        status        = PageStatus.COMPLETED,
        processed_url = processed_url,
        output_path   = output_path,
        error         = None,
    )


def mark_error(registry: Registry, page_id: str, message: str) -> Registry:
    return update_page(registry, page_id, status=PageStatus.ERROR, error=message)


def find_page(registry: Registry, page_id: str) -> Optional[Page]:
    return next((page for page in registry if page.id == page_id), None)


def select_range(registry: Registry, page_range: PageRange) -> list[Page]:
    """Páginas con índice 1-based dentro de [start, end], en orden."""
    return list(registry[page_range.start - 1:page_range.end])


def count_by_status(registry: Registry) -> dict[PageStatus, int]:
    """Conteo por estado; todos los estados aparecen aunque sea con 0."""
    counts = Counter(page.status for page in registry)
    return {status: counts.get(status, 0) for status in PageStatus}

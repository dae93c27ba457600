# backoffice/utils/pagination.py
"""
Wspolne helpery do stronicowania i liczenia.

paginate() normalizuje page/limit z zapytania.
fetch_page() pobiera strone razem z total w jednym zapytaniu
(count(*) OVER ()), wiec total i wiersze pochodza z jednego snapshotu.
Dla pustej strony (offset za koncem) total liczony jest osobnym
zapytaniem - wtedy wynik jest tylko "eventually consistent".
"""
import math
from dataclasses import dataclass, field
from typing import Any, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from backoffice.utils.settings import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int
    offset: int


@dataclass
class Page:
    items: list[Any] = field(default_factory=list)
    page: int = 1
    limit: int = DEFAULT_PAGE_LIMIT
    total: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def _as_int(value, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def paginate(page=None, limit=None) -> Pagination:
    page = max(1, _as_int(page, 1))
    limit = min(MAX_PAGE_LIMIT, max(1, _as_int(limit, DEFAULT_PAGE_LIMIT)))
    return Pagination(page=page, limit=limit, offset=(page - 1) * limit)


def count_matching(db: Session, model, *criteria) -> int:
    stmt = select(func.count()).select_from(model).where(*criteria)
    return int(db.scalar(stmt) or 0)


def list_matching(
    db: Session,
    model,
    *criteria,
    pagination: Pagination | None = None,
    order_by: Sequence = (),
) -> list:
    stmt = select(model).where(*criteria).order_by(*order_by)
    if pagination:
        stmt = stmt.limit(pagination.limit).offset(pagination.offset)
    return list(db.execute(stmt).scalars().all())


def fetch_page(
    db: Session,
    model,
    *criteria,
    pagination: Pagination,
    order_by: Sequence = (),
) -> Page:
    total_count = func.count().over().label("total_count")
    stmt = (
        select(model, total_count)
        .where(*criteria)
        .order_by(*order_by)
        .limit(pagination.limit)
        .offset(pagination.offset)
    )
    rows = db.execute(stmt).all()

    if rows:
        total = int(rows[0].total_count)
        items = [row[0] for row in rows]
    else:
        total = count_matching(db, model, *criteria)
        items = []

    return Page(items=items, page=pagination.page, limit=pagination.limit, total=total)

"""
Gestão de OS - Paginação
Formato único das listagens: data, totalItems, currentPage, totalPages
"""
import math
from dataclasses import dataclass
from typing import Callable

from fastapi import Query
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from app.core import settings


@dataclass
class PageParams:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_params(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> PageParams:
    """Dependency com os parâmetros de paginação da query string"""
    return PageParams(page=page, limit=limit)


def total_pages(total_items: int, limit: int) -> int:
    return math.ceil(total_items / limit) if limit > 0 else 0


async def paginate(
    db: AsyncSession,
    query: Select,
    params: PageParams,
    serializer: Callable = lambda obj: obj.to_dict(),
) -> dict:
    """Executa a query paginada e monta a resposta padrão"""
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    result = await db.execute(count_query)
    total_items = result.scalar() or 0

    result = await db.execute(query.offset(params.offset).limit(params.limit))
    items = result.scalars().all()

    return {
        "data": [serializer(item) for item in items],
        "totalItems": total_items,
        "currentPage": params.page,
        "totalPages": total_pages(total_items, params.limit),
    }

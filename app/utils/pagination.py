# app/utils/pagination.py
import math
from typing import Dict, Optional, Tuple

from sqlalchemy.orm import Query


def paginate(query: Query, page: int, limit: int) -> Tuple[list, dict]:
    """Apply offset/limit to ``query`` and return ``(items, pagination)``."""
    total = query.count()

    offset = (page - 1) * limit
    items = query.offset(offset).limit(limit).all()

    total_pages = math.ceil(total / limit) if limit > 0 else 0
    pagination = {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": total_pages,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }
    return items, pagination


def resolve_sort(
    sort_by: Optional[str],
    sort_order: Optional[str],
    allowed: Dict[str, object],
    default: str,
    default_order: str = "asc",
):
    """Map a client sort key onto an allow-listed column expression.

    Unknown keys fall back to ``default``. Direction is DESC only when the
    client (or ``default_order``) says ``desc``.
    """
    column = allowed.get(sort_by or "", allowed[default])
    order = (sort_order or default_order).lower()
    return column.desc() if order == "desc" else column.asc()

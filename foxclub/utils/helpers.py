import math

from sqlalchemy.orm import Query


def paginate(query: Query, page: int, limit: int) -> tuple[list, dict]:
    total = query.order_by(None).count()
    rows = query.offset((page - 1) * limit).limit(limit).all()
    return rows, {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": math.ceil(total / limit) if limit else 0,
    }


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def contains_pattern(search: str) -> str:
    return f"%{escape_like(search.strip().lower())}%"

import math
from pydantic import BaseModel
from typing import Any, Dict, List, Optional

from app.core.validation import sanitize_records


class ErrorResponse(BaseModel):
    error: str
    fields: Optional[Dict[str, str]] = None


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class PaginatedResponse(BaseModel):
    success: bool = True
    count: int
    total: int
    page: int
    limit: int
    total_pages: int
    has_more: bool
    data: List[Dict[str, Any]]
    search: Optional[str] = None


def paginated_response(
    data: List[Dict[str, Any]],
    total: Optional[int],
    page: int,
    limit: int,
    search: Optional[str] = None,
) -> PaginatedResponse:
    total = total or 0
    return PaginatedResponse(
        count=len(data),
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit) if limit else 0,
        has_more=page * limit < total,
        data=sanitize_records(data),
        search=search or None,
    )

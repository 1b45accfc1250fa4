from math import ceil
from typing import Any, List, Optional
from pydantic import BaseModel

class PageMeta(BaseModel):
    total: int
    page: int
    page_size: int
    pages: int

class ResponseModel(BaseModel):
    """Envelope returned by FastAPI routes built on the repositories."""
    code: int = 200
    message: str = "success"
    data: Optional[Any] = None

    @staticmethod
    def success(data: Any = None):
        return {"code": 200, "message": "success", "data": data}

    @staticmethod
    def fail(code: int = 400, message: str = "error", data: Any = None):
        return {"code": code, "message": message, "data": data}

    @staticmethod
    def page(items: List[Any], total: int, page: int, page_size: int):
        """Envelope for a find_many result; page is 1-based like MySQLQueryBuilder.offset()."""
        pages = ceil(total / page_size) if page_size > 0 else 1
        meta = PageMeta(total=total, page=page, page_size=page_size, pages=pages)
        return {
            "code": 200,
            "message": "success",
            "data": {"items": items, "meta": meta.model_dump()},
        }

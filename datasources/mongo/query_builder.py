"""
Document query builder.

Unlike MySQLQueryBuilder there is no condition list: where() replaces the
single filter document, and update() stores one document that the repository
wraps in {"$set": ...} when it executes.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

SortSpec = Union[Sequence[Tuple[str, int]], Mapping[str, int]]


class MongoQueryBuilder:
    """Chainable accumulator for one document-store operation."""

    def __init__(self):
        self._columns: List[str] = []
        self._filter: Optional[Dict[str, Any]] = None
        self._update: Optional[Dict[str, Any]] = None
        self._limit = 0
        self._skip = 0
        self._sort: List[Tuple[str, int]] = []

    def select(self, columns: Sequence[str]) -> "MongoQueryBuilder":
        self._columns = list(columns)
        return self

    def where(self, filter: Mapping[str, Any]) -> "MongoQueryBuilder":
        self._filter = dict(filter) if filter is not None else None
        return self

    def update(self, document: Mapping[str, Any]) -> "MongoQueryBuilder":
        self._update = dict(document) if document is not None else None
        return self

    def limit(self, limit: int) -> "MongoQueryBuilder":
        self._limit = limit
        return self

    def skip(self, skip: int) -> "MongoQueryBuilder":
        self._skip = skip
        return self

    def sort(self, sort: SortSpec) -> "MongoQueryBuilder":
        items = sort.items() if isinstance(sort, Mapping) else sort
        self._sort = [(field, direction) for field, direction in items]
        return self

    @property
    def filter(self) -> Dict[str, Any]:
        """Filter document to execute; an unset filter matches every document."""
        return dict(self._filter) if self._filter else {}

    @property
    def update_document(self) -> Optional[Dict[str, Any]]:
        return self._update

    def build_projection(self) -> Optional[Dict[str, int]]:
        if not self._columns:
            return None
        return {column: 1 for column in self._columns}

    def build_find_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"projection": self.build_projection()}
        if self._limit > 0:
            options["limit"] = self._limit
        if self._skip > 0:
            options["skip"] = self._skip
        if self._sort:
            options["sort"] = list(self._sort)
        return options

    def build_find_one_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"projection": self.build_projection()}
        if self._sort:
            options["sort"] = list(self._sort)
        return options

    def build_update(self) -> Optional[Dict[str, Any]]:
        if not self._update:
            return None
        return {"$set": dict(self._update)}

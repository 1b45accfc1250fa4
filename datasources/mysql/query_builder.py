"""
Relational query builder.

Accumulates query intent through chainable calls and renders it into a SQL
string with `?` positional placeholders plus the matching argument list.
Nothing is validated until one of the build_* methods is called.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple
from datasources.exceptions.errors import QueryBuildError
from .fields import ColumnMapping, extract_fields

CONJUNCTIONS = ("AND", "OR")


@dataclass(frozen=True)
class JoinOptions:
    join_type: str
    table: str
    on: str


class MySQLQueryBuilder:
    """Chainable accumulator for one relational operation. Build a fresh one per call."""

    def __init__(self):
        self._columns: List[str] = []
        self._values: List[Any] = []
        self._set_clauses: List[str] = []
        self._set_args: List[Any] = []
        self._conditions: List[Tuple[Optional[str], str]] = []
        self._args: List[Any] = []
        self._joins: List[JoinOptions] = []
        self._limit = 0
        self._offset = 0
        self._order_by: List[str] = []

    # --- intent ---

    def select(self, columns: Sequence[str]) -> "MySQLQueryBuilder":
        self._columns = list(columns)
        return self

    def where(self, condition: str, *args: Any) -> "MySQLQueryBuilder":
        return self.where_with_conjunction("AND", condition, *args)

    def where_with_conjunction(self, conjunction: str, condition: str, *args: Any) -> "MySQLQueryBuilder":
        """Append a condition; the conjunction links it to the previous one and is ignored for the first."""
        self._conditions.append((conjunction if self._conditions else None, condition))
        self._args.extend(args)
        return self

    def where_in(self, column: str, values: Sequence[Any]) -> "MySQLQueryBuilder":
        if not values:
            return self
        placeholders = ", ".join("?" for _ in values)
        return self.where(f"{column} IN ({placeholders})", *values)

    def search(self, columns: Sequence[str], text: str) -> "MySQLQueryBuilder":
        """Match text anywhere in any of the columns: (c1 LIKE ? OR c2 LIKE ?)."""
        if not columns or not text:
            return self
        disjunction = " OR ".join(f"{column} LIKE ?" for column in columns)
        pattern = f"%{text}%"
        return self.where(f"({disjunction})", *([pattern] * len(columns)))

    def join(self, join_type: str, table: str, on: str) -> "MySQLQueryBuilder":
        self._joins.append(JoinOptions(join_type=join_type, table=table, on=on))
        return self

    def limit(self, limit: int) -> "MySQLQueryBuilder":
        self._limit = limit
        return self

    def offset(self, offset: int) -> "MySQLQueryBuilder":
        """1-based page number; the rendered OFFSET is (offset - 1) * limit."""
        self._offset = offset
        return self

    def order_by(self, order_by: str) -> "MySQLQueryBuilder":
        self._order_by.append(order_by)
        return self

    def set(self, column: str, value: Any) -> "MySQLQueryBuilder":
        self._set_clauses.append(f"{column} = ?")
        self._set_args.append(value)
        return self

    def add_column_value(self, column: str, value: Any) -> "MySQLQueryBuilder":
        self._columns.append(column)
        self._values.append(value)
        return self

    def extract_fields_for_insert(self, entity: Any, mapping: Optional[ColumnMapping] = None) -> "MySQLQueryBuilder":
        for column, value in extract_fields(entity, mapping):
            self.add_column_value(column, value)
        return self

    # --- rendering ---

    def build_select_query(self, table_name: str) -> Tuple[str, List[Any]]:
        query = _compose(
            f"SELECT {self._projection()} FROM {table_name}",
            self._join_clause(),
            self._where_clause(),
        )
        return query, list(self._args)

    def build_select_many_query(self, table_name: str) -> Tuple[str, List[Any]]:
        query = _compose(
            f"SELECT {self._projection()} FROM {table_name}",
            self._join_clause(),
            self._where_clause(),
            self._pagination_clause(),
        )
        return query, list(self._args)

    def build_count_query(self, table_name: str) -> Tuple[str, List[Any]]:
        query = _compose(
            f"SELECT COUNT(*) FROM {table_name}",
            self._join_clause(),
            self._where_clause(),
        )
        return query, list(self._args)

    def build_update_query(self, table_name: str) -> Tuple[str, List[Any]]:
        self._require_set_clauses(table_name)
        query = _compose(
            f"UPDATE {table_name} SET {', '.join(self._set_clauses)}",
            self._where_clause(),
        )
        # SET placeholders precede WHERE placeholders in the statement
        return query, self._set_args + self._args

    def build_update_many_query(self, table_name: str) -> Tuple[str, List[Any]]:
        return self.build_update_query(table_name)

    def build_insert_query(self, table_name: str) -> Tuple[str, List[Any]]:
        if not self._values:
            raise QueryBuildError("insert requires at least one column/value pair",
                                  operation="build_insert_query", target=table_name)
        if len(self._columns) != len(self._values):
            raise QueryBuildError(
                f"insert has {len(self._columns)} columns but {len(self._values)} values",
                operation="build_insert_query",
                target=table_name,
            )
        placeholders = ", ".join("?" for _ in self._values)
        query = f"INSERT INTO {table_name} ({', '.join(self._columns)}) VALUES ({placeholders})"
        return query, list(self._values)

    def build_delete_query(self, table_name: str) -> Tuple[str, List[Any]]:
        query = _compose(f"DELETE FROM {table_name}", self._where_clause())
        return query, list(self._args)

    # --- clause helpers ---

    def _require_set_clauses(self, table_name: str) -> None:
        if not self._set_clauses:
            raise QueryBuildError("update requires at least one set() assignment",
                                  operation="build_update_query", target=table_name)

    def _projection(self) -> str:
        if not self._columns:
            return "*"
        return ", ".join(self._columns)

    def _join_clause(self) -> str:
        return " ".join(f"{j.join_type} JOIN {j.table} ON {j.on}" for j in self._joins)

    def _where_clause(self) -> str:
        if not self._conditions:
            return ""
        parts = []
        for conjunction, condition in self._conditions:
            if conjunction is None:
                parts.append(condition)
                continue
            normalized = conjunction.strip().upper()
            if normalized not in CONJUNCTIONS:
                raise QueryBuildError(f"unsupported conjunction {conjunction!r}", operation="where")
            parts.append(f"{normalized} {condition}")
        return "WHERE " + " ".join(parts)

    def _pagination_clause(self) -> str:
        clauses = []
        if self._order_by:
            clauses.append(f"ORDER BY {', '.join(self._order_by)}")
        if self._limit > 0:
            clauses.append(f"LIMIT {self._limit}")
            if self._offset > 0:
                clauses.append(f"OFFSET {(self._offset - 1) * self._limit}")
        return " ".join(clauses)

    def __repr__(self) -> str:
        return (
            f"MySQLQueryBuilder(columns={self._columns!r}, conditions={len(self._conditions)}, "
            f"joins={len(self._joins)}, limit={self._limit}, offset={self._offset})"
        )


def _compose(*parts: str) -> str:
    return " ".join(part for part in parts if part)

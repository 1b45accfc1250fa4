"""
Statement executors.

A repository holds exactly one SQLExecutor: EngineExecutor runs every
statement on its own pooled connection (autocommitted), SessionExecutor runs
on the AsyncSession owned by a MySQLUnitOfWork.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.sql.elements import TextClause
from datasources.exceptions.errors import QueryBuildError


class StatementResult(NamedTuple):
    rowcount: int
    lastrowid: Optional[Any] = None


def bind_positional(query: str, args: Sequence[Any]) -> Tuple[TextClause, Dict[str, Any]]:
    """
    Rewrite `?` placeholders into SQLAlchemy named binds (:p0, :p1, ...).

    Placeholders inside quoted literals are left alone, including after a
    backslash-escaped quote; a placeholder/argument count mismatch raises
    QueryBuildError.
    """
    out = []
    params: Dict[str, Any] = {}
    quote = None
    escaped = False
    for ch in query:
        if quote:
            out.append("\\:" if ch == ":" else ch)
            if escaped:
                escaped = False
            elif ch == "\\" and quote != "`":
                escaped = True
            elif ch == quote:
                quote = None
            continue
        if ch in ("'", '"', "`"):
            quote = ch
            out.append(ch)
        elif ch == "?":
            index = len(params)
            if index >= len(args):
                raise QueryBuildError(
                    f"statement has more placeholders than the {len(args)} arguments given",
                    operation="bind", detail=query,
                )
            name = f"p{index}"
            params[name] = args[index]
            out.append(f":{name}")
        elif ch == ":":
            out.append("\\:")
        else:
            out.append(ch)
    if len(params) != len(args):
        raise QueryBuildError(
            f"statement has {len(params)} placeholders but {len(args)} arguments",
            operation="bind", detail=query,
        )
    return text("".join(out)), params


class SQLExecutor(ABC):
    """Capability the repository needs: run a query for rows, a scalar, or a mutation."""

    in_transaction = False

    @abstractmethod
    async def fetch_all(self, query: str, args: Sequence[Any]) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    async def fetch_one(self, query: str, args: Sequence[Any]) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    async def fetch_scalar(self, query: str, args: Sequence[Any]) -> Any:
        pass

    @abstractmethod
    async def execute(self, query: str, args: Sequence[Any]) -> StatementResult:
        pass


class EngineExecutor(SQLExecutor):
    """Plain handle: each call checks a connection out of the engine pool."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def fetch_all(self, query, args):
        statement, params = bind_positional(query, args)
        async with self.engine.connect() as conn:
            result = await conn.execute(statement, params)
            return [dict(row) for row in result.mappings().all()]

    async def fetch_one(self, query, args):
        statement, params = bind_positional(query, args)
        async with self.engine.connect() as conn:
            result = await conn.execute(statement, params)
            row = result.mappings().first()
            return dict(row) if row is not None else None

    async def fetch_scalar(self, query, args):
        statement, params = bind_positional(query, args)
        async with self.engine.connect() as conn:
            result = await conn.execute(statement, params)
            return result.scalar()

    async def execute(self, query, args):
        statement, params = bind_positional(query, args)
        async with self.engine.begin() as conn:
            result = await conn.execute(statement, params)
            return StatementResult(result.rowcount, result.lastrowid)


class SessionExecutor(SQLExecutor):
    """Transaction-bound handle: every call runs on the unit of work's session."""

    in_transaction = True

    def __init__(self, session: AsyncSession):
        self.session = session

    async def fetch_all(self, query, args):
        statement, params = bind_positional(query, args)
        result = await self.session.execute(statement, params)
        return [dict(row) for row in result.mappings().all()]

    async def fetch_one(self, query, args):
        statement, params = bind_positional(query, args)
        result = await self.session.execute(statement, params)
        row = result.mappings().first()
        return dict(row) if row is not None else None

    async def fetch_scalar(self, query, args):
        statement, params = bind_positional(query, args)
        result = await self.session.execute(statement, params)
        return result.scalar()

    async def execute(self, query, args):
        statement, params = bind_positional(query, args)
        result = await self.session.execute(statement, params)
        return StatementResult(result.rowcount, result.lastrowid)

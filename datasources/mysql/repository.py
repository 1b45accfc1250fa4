"""
MySQL repository: executes MySQLQueryBuilder statements through an executor.
"""

from typing import TYPE_CHECKING, Any, Optional, Type
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.orm import sessionmaker
from datasources.exceptions.errors import BackendOperationError, TransactionError
from datasources.logging.logger import get_logger
from datasources.repository.base import FindManyResult, IRepository, MutationResult
from datasources.repository.decoder import decode_many, decode_one
from .executor import EngineExecutor, SQLExecutor
from .query_builder import MySQLQueryBuilder

if TYPE_CHECKING:
    from .unit_of_work import MySQLUnitOfWork

logger = get_logger("mysql_repository")


class MySQLRepository(IRepository[MySQLQueryBuilder]):
    """Uniform CRUD over tables; the same methods run inside or outside a transaction."""

    def __init__(
        self,
        engine: AsyncEngine,
        executor: Optional[SQLExecutor] = None,
        session_factory=None,
    ):
        self.engine = engine
        self.executor = executor or EngineExecutor(engine)
        self.session_factory = session_factory or sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False
        )

    async def begin_transaction(self) -> "MySQLUnitOfWork":
        """Open a transaction and return the MySQLUnitOfWork that owns it."""
        from .unit_of_work import MySQLUnitOfWork

        if self.executor.in_transaction:
            raise TransactionError("nested transactions are not supported",
                                   operation="begin_transaction", target="mysql")
        session = self.session_factory()
        try:
            await session.begin()
            # Check out the connection now so connectivity failures surface here
            await session.connection()
        except SQLAlchemyError as e:
            await session.close()
            logger.error(f"Failed to begin transaction: {str(e)}")
            raise BackendOperationError("failed to begin transaction", original=e,
                                        operation="begin_transaction", target="mysql") from e
        except BaseException:
            await session.close()
            raise
        logger.debug("mysql transaction started")
        return MySQLUnitOfWork(session, self.engine, self.session_factory)

    async def find_one(self, table_name: str, builder: MySQLQueryBuilder, model: Optional[Type[Any]] = None):
        """Return the first matching row (decoded into model if given) or None when nothing matches."""
        query, args = builder.build_select_query(table_name)
        row = await self._run("find_one", table_name, self.executor.fetch_one, query, args)
        if row is None:
            return None
        return decode_one(row, model)

    async def find_many(self, table_name: str, builder: MySQLQueryBuilder, model: Optional[Type[Any]] = None) -> FindManyResult:
        """Return one page of rows plus the total number of matches ignoring pagination."""
        count_query, count_args = builder.build_count_query(table_name)
        query, args = builder.build_select_many_query(table_name)

        total = await self._run("count", table_name, self.executor.fetch_scalar, count_query, count_args)
        rows = await self._run("find_many", table_name, self.executor.fetch_all, query, args)
        return FindManyResult(decode_many(rows, model), int(total or 0))

    async def update_one(self, table_name: str, builder: MySQLQueryBuilder) -> MutationResult:
        """Update matching rows.

        The driver reports one row count, so matched_count and modified_count
        are always equal on this backend.
        """
        query, args = builder.build_update_query(table_name)
        result = await self._run("update_one", table_name, self.executor.execute, query, args)
        return MutationResult.for_update(result.rowcount, result.rowcount)

    async def update_many(self, table_name: str, builder: MySQLQueryBuilder) -> MutationResult:
        """Same as update_one(); matched_count equals modified_count."""
        query, args = builder.build_update_many_query(table_name)
        result = await self._run("update_many", table_name, self.executor.execute, query, args)
        return MutationResult.for_update(result.rowcount, result.rowcount)

    async def insert_one(self, table_name: str, builder: MySQLQueryBuilder) -> MutationResult:
        query, args = builder.build_insert_query(table_name)
        result = await self._run("insert_one", table_name, self.executor.execute, query, args)
        return MutationResult.for_insert(result.lastrowid)

    async def delete_one(self, table_name: str, builder: MySQLQueryBuilder) -> MutationResult:
        query, args = builder.build_delete_query(table_name)
        result = await self._run("delete_one", table_name, self.executor.execute, query, args)
        return MutationResult.for_delete(result.rowcount)

    async def delete_many(self, table_name: str, builder: MySQLQueryBuilder) -> MutationResult:
        query, args = builder.build_delete_query(table_name)
        result = await self._run("delete_many", table_name, self.executor.execute, query, args)
        return MutationResult.for_delete(result.rowcount)

    async def _run(self, operation: str, table_name: str, call, query: str, args):
        logger.debug(f"{operation} on {table_name}: {query} | args={args}")
        try:
            return await call(query, args)
        except SQLAlchemyError as e:
            logger.error(f"{operation} on {table_name} failed: {str(e)}")
            raise BackendOperationError(
                f"error executing {operation}",
                original=e,
                operation=operation,
                target=table_name,
            ) from e

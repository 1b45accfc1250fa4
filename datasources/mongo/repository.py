"""
MongoDB repository: executes MongoQueryBuilder intent through a document executor.
"""

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Type, Union
from pydantic import BaseModel
from pymongo.errors import PyMongoError
from motor.motor_asyncio import AsyncIOMotorDatabase
from datasources.exceptions.errors import BackendOperationError, QueryBuildError, TransactionError
from datasources.logging.logger import get_logger
from datasources.repository.base import FindManyResult, IRepository, MutationResult
from datasources.repository.decoder import decode_many, decode_one
from .executor import DatabaseExecutor, DocumentExecutor
from .query_builder import MongoQueryBuilder

if TYPE_CHECKING:
    from .unit_of_work import MongoUnitOfWork

logger = get_logger("mongo_repository")


class MongoRepository(IRepository[MongoQueryBuilder]):
    """Uniform CRUD over collections; the same methods run inside or outside a transaction."""

    def __init__(self, database: AsyncIOMotorDatabase, executor: Optional[DocumentExecutor] = None):
        self.database = database
        self.executor = executor or DatabaseExecutor(database)

    async def begin_transaction(self) -> "MongoUnitOfWork":
        """Start a session with an open transaction and return the MongoUnitOfWork owning it."""
        from .unit_of_work import MongoUnitOfWork

        if self.executor.in_transaction:
            raise TransactionError("nested transactions are not supported",
                                   operation="begin_transaction", target="mongo")
        try:
            session = await self.database.client.start_session()
        except PyMongoError as e:
            logger.error(f"Failed to start session: {str(e)}")
            raise BackendOperationError("failed to start session", original=e,
                                        operation="begin_transaction", target="mongo") from e
        try:
            session.start_transaction()
        except PyMongoError as e:
            await session.end_session()
            logger.error(f"Failed to start transaction: {str(e)}")
            raise BackendOperationError("failed to start transaction", original=e,
                                        operation="begin_transaction", target="mongo") from e
        except BaseException:
            await session.end_session()
            raise
        logger.debug("mongo transaction started")
        return MongoUnitOfWork(session, self.database)

    async def find_one(self, collection: str, builder: MongoQueryBuilder, model: Optional[Type[Any]] = None):
        """Return the first matching document (decoded into model if given) or None."""
        document = await self._run(
            "find_one", collection,
            self.executor.find_one(collection, builder.filter, **builder.build_find_one_options()),
        )
        if document is None:
            return None
        return decode_one(document, model)

    async def find_many(self, collection: str, builder: MongoQueryBuilder, model: Optional[Type[Any]] = None) -> FindManyResult:
        """Return one page of documents plus the total number of matches ignoring limit/skip."""
        total = await self._run("count", collection, self.executor.count(collection, builder.filter))
        documents = await self._run(
            "find_many", collection,
            self.executor.find_many(collection, builder.filter, **builder.build_find_options()),
        )
        return FindManyResult(decode_many(documents, model), int(total))

    async def update_one(self, collection: str, builder: MongoQueryBuilder) -> MutationResult:
        update = builder.build_update()
        if update is None:
            raise QueryBuildError("update document must be specified",
                                  operation="update_one", target=collection)
        result = await self._run("update_one", collection,
                                 self.executor.update_one(collection, builder.filter, update))
        if not result.acknowledged:
            return MutationResult(acknowledged=False)
        return MutationResult(
            acknowledged=True,
            matched_count=result.matched_count,
            modified_count=result.modified_count,
        )

    async def insert_one(self, collection: str, document: Union[Mapping[str, Any], BaseModel]) -> MutationResult:
        payload = self._to_document(document, collection)
        result = await self._run("insert_one", collection, self.executor.insert_one(collection, payload))
        return MutationResult(acknowledged=result.acknowledged, inserted_id=result.inserted_id)

    async def delete_one(self, collection: str, builder: MongoQueryBuilder) -> MutationResult:
        result = await self._run("delete_one", collection, self.executor.delete_one(collection, builder.filter))
        if not result.acknowledged:
            return MutationResult(acknowledged=False)
        return MutationResult(acknowledged=True, deleted_count=result.deleted_count)

    @staticmethod
    def _to_document(document, collection: str) -> Dict[str, Any]:
        if isinstance(document, BaseModel):
            return document.model_dump(by_alias=True, exclude_none=True)
        if isinstance(document, Mapping):
            if not document:
                raise QueryBuildError("insert requires a non-empty document",
                                      operation="insert_one", target=collection)
            return dict(document)
        raise QueryBuildError(
            f"document must be a mapping or pydantic model, got {type(document).__name__}",
            operation="insert_one",
            target=collection,
        )

    async def _run(self, operation: str, collection: str, call):
        logger.debug(f"{operation} on {collection}")
        try:
            return await call
        except PyMongoError as e:
            logger.error(f"{operation} on {collection} failed: {str(e)}")
            raise BackendOperationError(
                f"error executing {operation}",
                original=e,
                operation=operation,
                target=collection,
            ) from e

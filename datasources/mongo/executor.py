"""
Document executors: DatabaseExecutor talks to the database directly,
SessionExecutor passes the unit of work's session with every call.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from motor.motor_asyncio import AsyncIOMotorClientSession, AsyncIOMotorDatabase


class DocumentExecutor(ABC):
    """Capability the repository needs: read, count and write one collection."""

    in_transaction = False

    @abstractmethod
    async def find_one(self, collection: str, filter: Dict[str, Any], **options) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    async def find_many(self, collection: str, filter: Dict[str, Any], **options) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    async def count(self, collection: str, filter: Dict[str, Any]) -> int:
        pass

    @abstractmethod
    async def update_one(self, collection: str, filter: Dict[str, Any], update: Dict[str, Any]):
        pass

    @abstractmethod
    async def insert_one(self, collection: str, document: Dict[str, Any]):
        pass

    @abstractmethod
    async def delete_one(self, collection: str, filter: Dict[str, Any]):
        pass


class DatabaseExecutor(DocumentExecutor):
    """Plain handle over a motor database."""

    def __init__(self, database: AsyncIOMotorDatabase):
        self.database = database

    def _session_kwargs(self) -> Dict[str, Any]:
        return {}

    async def find_one(self, collection: str, filter: Dict[str, Any], **options) -> Optional[Dict[str, Any]]:
        return await self.database[collection].find_one(filter, **options, **self._session_kwargs())

    async def find_many(self, collection: str, filter: Dict[str, Any], **options) -> List[Dict[str, Any]]:
        cursor = self.database[collection].find(filter, **options, **self._session_kwargs())
        try:
            return await cursor.to_list(length=None)
        finally:
            await cursor.close()

    async def count(self, collection: str, filter: Dict[str, Any]) -> int:
        return await self.database[collection].count_documents(filter, **self._session_kwargs())

    async def update_one(self, collection: str, filter: Dict[str, Any], update: Dict[str, Any]):
        return await self.database[collection].update_one(filter, update, **self._session_kwargs())

    async def insert_one(self, collection: str, document: Dict[str, Any]):
        return await self.database[collection].insert_one(document, **self._session_kwargs())

    async def delete_one(self, collection: str, filter: Dict[str, Any]):
        return await self.database[collection].delete_one(filter, **self._session_kwargs())


class SessionExecutor(DatabaseExecutor):
    """Transaction-bound handle: every call carries the session."""

    in_transaction = True

    def __init__(self, database: AsyncIOMotorDatabase, session: AsyncIOMotorClientSession):
        super().__init__(database)
        self.session = session

    def _session_kwargs(self) -> Dict[str, Any]:
        return {"session": self.session}

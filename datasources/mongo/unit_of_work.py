"""
MongoDB unit of work: one client session with an open transaction.
"""

from motor.motor_asyncio import AsyncIOMotorClientSession, AsyncIOMotorDatabase
from datasources.repository.unit_of_work import BaseUnitOfWork
from .executor import SessionExecutor
from .repository import MongoRepository


class MongoUnitOfWork(BaseUnitOfWork):
    """Created by MongoRepository.begin_transaction(); sessions assume sequential use."""

    backend = "mongo"

    def __init__(self, session: AsyncIOMotorClientSession, database: AsyncIOMotorDatabase):
        super().__init__()
        self.session = session
        self._database = database
        self._executor = SessionExecutor(database, session)

    def _make_repository(self) -> MongoRepository:
        return MongoRepository(self._database, executor=self._executor)

    async def _commit(self) -> None:
        await self.session.commit_transaction()

    async def _rollback(self) -> None:
        await self.session.abort_transaction()

    async def _release(self) -> None:
        await self.session.end_session()

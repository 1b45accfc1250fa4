"""
MySQL unit of work: one AsyncSession transaction shared by every repository it hands out.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from datasources.repository.unit_of_work import BaseUnitOfWork
from .executor import SessionExecutor
from .repository import MySQLRepository


class MySQLUnitOfWork(BaseUnitOfWork):
    """Created by MySQLRepository.begin_transaction(); not safe for concurrent tasks."""

    backend = "mysql"

    def __init__(self, session: AsyncSession, engine: AsyncEngine, session_factory=None):
        super().__init__()
        self.session = session
        self._engine = engine
        self._session_factory = session_factory
        self._executor = SessionExecutor(session)

    def _make_repository(self) -> MySQLRepository:
        return MySQLRepository(self._engine, executor=self._executor,
                               session_factory=self._session_factory)

    async def _commit(self) -> None:
        await self.session.commit()

    async def _rollback(self) -> None:
        await self.session.rollback()

    async def _release(self) -> None:
        await self.session.close()

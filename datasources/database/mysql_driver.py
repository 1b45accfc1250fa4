from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from .base import BaseDatabaseDriver

class MySQLDriver(BaseDatabaseDriver):
    def __init__(self, url: str, echo: bool = False):
        self.engine = create_async_engine(url, echo=echo, future=True)
        self.session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    async def connect(self):
        """Check connectivity (the engine manages pooled connections)."""
        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))

    async def disconnect(self):
        """Dispose the engine and its pool."""
        await self.engine.dispose()

    def repository(self):
        from datasources.mysql.repository import MySQLRepository
        return MySQLRepository(self.engine, session_factory=self.session_factory)

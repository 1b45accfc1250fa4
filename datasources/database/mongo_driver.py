from motor.motor_asyncio import AsyncIOMotorClient
from .base import BaseDatabaseDriver

class MongoDriver(BaseDatabaseDriver):
    def __init__(self, url: str, database_name: str):
        self.url = url
        self.database_name = database_name
        self.client = None

    async def connect(self):
        self.client = AsyncIOMotorClient(self.url, tz_aware=True)
        await self.client.admin.command("ping")

    async def disconnect(self):
        if self.client:
            self.client.close()
            self.client = None

    def get_database(self):
        if self.client is None:
            raise RuntimeError("MongoDriver is not connected; call connect() first")
        return self.client[self.database_name]

    def repository(self):
        from datasources.mongo.repository import MongoRepository
        return MongoRepository(self.get_database())

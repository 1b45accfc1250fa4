from contextlib import asynccontextmanager
from .mongo_driver import MongoDriver
from .mysql_driver import MySQLDriver

class DatabaseManager:
    _instance = None

    def __init__(self, settings):
        self.mysql = MySQLDriver(settings.DATABASE_URL, echo=settings.DB_ECHO)
        self.mongo = MongoDriver(settings.MONGO_URL, settings.MONGO_DB)

    @classmethod
    def get_instance(cls, settings=None):
        if cls._instance is None:
            if settings is None:
                from datasources.config import settings as app_settings
                settings = app_settings
            cls._instance = cls(settings)
        return cls._instance

    @classmethod
    def reset_instance(cls):
        cls._instance = None

    async def connect_all(self):
        await self.mysql.connect()
        await self.mongo.connect()

    async def disconnect_all(self):
        await self.mongo.disconnect()
        await self.mysql.disconnect()


@asynccontextmanager
async def database_lifespan(app=None):
    """FastAPI lifespan: connect every driver on startup, disconnect on shutdown."""
    manager = DatabaseManager.get_instance()
    await manager.connect_all()
    try:
        yield
    finally:
        await manager.disconnect_all()

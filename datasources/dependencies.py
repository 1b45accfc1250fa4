"""
FastAPI dependencies for routes that use the repositories.

    @router.post("/courses")
    async def create(uow: MySQLUnitOfWork = Depends(get_mysql_unit_of_work)):
        repo = uow.get_repository()
        ...

The unit of work commits when the route returns and rolls back when it raises.
"""

from typing import AsyncGenerator
from datasources.database.manager import DatabaseManager
from datasources.mongo import MongoRepository, MongoUnitOfWork
from datasources.mysql import MySQLRepository, MySQLUnitOfWork


def get_mysql_repository() -> MySQLRepository:
    return DatabaseManager.get_instance().mysql.repository()


def get_mongo_repository() -> MongoRepository:
    return DatabaseManager.get_instance().mongo.repository()


async def get_mysql_unit_of_work() -> AsyncGenerator[MySQLUnitOfWork, None]:
    uow = await get_mysql_repository().begin_transaction()
    async with uow:
        yield uow


async def get_mongo_unit_of_work() -> AsyncGenerator[MongoUnitOfWork, None]:
    uow = await get_mongo_repository().begin_transaction()
    async with uow:
        yield uow

"""Both backends implement the shared repository and executor contracts."""
import pytest
from unittest.mock import MagicMock

from datasources.mongo import DatabaseExecutor, DocumentExecutor, MongoRepository
from datasources.mongo import SessionExecutor as MongoSessionExecutor
from datasources.mysql import EngineExecutor, MySQLRepository, SQLExecutor
from datasources.repository import BaseUnitOfWork, IRepository


class TestRepositoryContract:
    """Test IRepository and the executor capability classes."""

    def test_interfaces_are_abstract(self):
        with pytest.raises(TypeError):
            IRepository()
        with pytest.raises(TypeError):
            DocumentExecutor()
        with pytest.raises(TypeError):
            SQLExecutor()

    @pytest.mark.parametrize("repository_class", [MySQLRepository, MongoRepository])
    def test_repositories_implement_the_interface(self, repository_class):
        assert issubclass(repository_class, IRepository)

    def test_executors_share_a_capability_class(self):
        assert issubclass(DatabaseExecutor, DocumentExecutor)
        assert issubclass(MongoSessionExecutor, DocumentExecutor)
        assert isinstance(EngineExecutor(MagicMock()), SQLExecutor)

    @pytest.mark.asyncio
    async def test_mysql_unit_of_work_hands_out_repositories(self, mysql_repository: MySQLRepository):
        uow = await mysql_repository.begin_transaction()
        try:
            assert isinstance(uow, BaseUnitOfWork)
            assert isinstance(uow.get_repository(), IRepository)
        finally:
            await uow.rollback()

    @pytest.mark.asyncio
    async def test_mongo_unit_of_work_hands_out_repositories(self, mongo_repository: MongoRepository):
        uow = await mongo_repository.begin_transaction()
        try:
            assert isinstance(uow, BaseUnitOfWork)
            repository = uow.get_repository()
            assert isinstance(repository, IRepository)
            assert isinstance(repository.executor, DocumentExecutor)
        finally:
            await uow.rollback()

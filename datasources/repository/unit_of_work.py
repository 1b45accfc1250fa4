"""
Unit of Work: owns one backend transaction and the repositories bound to it.
"""

from abc import ABC, abstractmethod
from datasources.exceptions.errors import BackendOperationError, UnitOfWorkClosedError
from datasources.logging.logger import get_logger
from .base import IRepository

logger = get_logger("unit_of_work")


class BaseUnitOfWork(ABC):
    """
    Exactly one of commit()/rollback() ends the unit of work. The session is
    released on that call whether or not the commit/abort itself succeeded;
    any later terminal call raises UnitOfWorkClosedError.
    """

    backend: str = "unknown"

    def __init__(self):
        self._closed = False
        self._outcome = None

    @property
    def is_active(self) -> bool:
        return not self._closed

    def _ensure_active(self, action: str) -> None:
        if self._closed:
            raise UnitOfWorkClosedError(
                f"unit of work already {self._outcome}",
                operation=action,
                target=self.backend,
            )

    def get_repository(self) -> IRepository:
        """Return a repository bound to this unit of work's transaction (may be called repeatedly)."""
        self._ensure_active("get_repository")
        return self._make_repository()

    async def commit(self) -> None:
        """Commit the transaction and release the session."""
        await self._terminate("commit", self._commit, "committed")

    async def rollback(self) -> None:
        """Abort the transaction and release the session."""
        await self._terminate("rollback", self._rollback, "rolled back")

    async def _terminate(self, action, finish, outcome) -> None:
        self._ensure_active(action)
        self._closed = True
        self._outcome = outcome
        try:
            await finish()
            logger.debug(f"{self.backend} transaction {outcome}")
        except Exception as e:
            logger.error(f"{self.backend} transaction {action} failed: {str(e)}")
            raise BackendOperationError(
                f"failed to {action} transaction",
                original=e,
                operation=action,
                target=self.backend,
            ) from e
        finally:
            await self._release()

    @abstractmethod
    def _make_repository(self) -> IRepository:
        pass

    @abstractmethod
    async def _commit(self) -> None:
        pass

    @abstractmethod
    async def _rollback(self) -> None:
        pass

    @abstractmethod
    async def _release(self) -> None:
        """End the backend session; must not raise for an already-finished transaction."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if not self.is_active:
            return
        if exc_type is not None:
            await self.rollback()
        else:
            await self.commit()

"""
Repository interface and result shapes shared by the relational and document
repositories.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Generic, List, NamedTuple, Optional, Type, TypeVar
from pydantic import BaseModel

if TYPE_CHECKING:
    from .unit_of_work import BaseUnitOfWork

# Backend query builder type
B = TypeVar("B")


class FindManyResult(NamedTuple):
    """Decoded page of records plus the total match count (independent of pagination)."""
    items: List[Any]
    total: int


class MutationResult(BaseModel):
    """Normalized summary of an update, insert or delete."""
    acknowledged: bool = True
    matched_count: Optional[int] = None
    modified_count: Optional[int] = None
    inserted_id: Optional[Any] = None
    deleted_count: Optional[int] = None

    @classmethod
    def for_update(cls, matched: int, modified: int) -> "MutationResult":
        return cls(matched_count=matched, modified_count=modified)

    @classmethod
    def for_insert(cls, inserted_id: Any) -> "MutationResult":
        return cls(inserted_id=inserted_id)

    @classmethod
    def for_delete(cls, deleted: int) -> "MutationResult":
        return cls(deleted_count=deleted)

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape: {acknowledged, matchedCount, modifiedCount, insertedId, deletedCount}."""
        data: Dict[str, Any] = {"acknowledged": self.acknowledged}
        if self.matched_count is not None:
            data["matchedCount"] = self.matched_count
        if self.modified_count is not None:
            data["modifiedCount"] = self.modified_count
        if self.inserted_id is not None:
            data["insertedId"] = self.inserted_id
        if self.deleted_count is not None:
            data["deletedCount"] = self.deleted_count
        return data


class IRepository(ABC, Generic[B]):
    """
    Repository interface shared by the MySQL and MongoDB backends.

    `target` is a table or collection name and `builder` the backend's query
    builder. The same methods run inside and outside a transaction.
    """

    @abstractmethod
    async def find_one(self, target: str, builder: B, model: Optional[Type[Any]] = None) -> Any:
        """Return the first match decoded into model (a dict without one), or None."""
        pass

    @abstractmethod
    async def find_many(self, target: str, builder: B, model: Optional[Type[Any]] = None) -> FindManyResult:
        """Return one page of matches plus the total ignoring pagination."""
        pass

    @abstractmethod
    async def update_one(self, target: str, builder: B) -> MutationResult:
        pass

    @abstractmethod
    async def insert_one(self, target: str, payload: Any) -> MutationResult:
        """Insert one record; payload is a builder (MySQL) or a document (MongoDB)."""
        pass

    @abstractmethod
    async def delete_one(self, target: str, builder: B) -> MutationResult:
        pass

    @abstractmethod
    async def begin_transaction(self) -> "BaseUnitOfWork":
        """Open a transaction; raises TransactionError on a transaction-bound repository."""
        pass

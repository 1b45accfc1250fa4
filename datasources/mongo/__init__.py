"""
Document backend: query builder, repository and unit of work over motor.
"""

from .executor import DatabaseExecutor, DocumentExecutor, SessionExecutor
from .query_builder import MongoQueryBuilder
from .repository import MongoRepository
from .unit_of_work import MongoUnitOfWork

__all__ = [
    "DatabaseExecutor",
    "DocumentExecutor",
    "MongoQueryBuilder",
    "MongoRepository",
    "MongoUnitOfWork",
    "SessionExecutor",
]

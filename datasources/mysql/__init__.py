"""
Relational backend: query builder, field extraction, repository and unit of work.
"""

from .executor import EngineExecutor, SessionExecutor, SQLExecutor, StatementResult
from .fields import ColumnField, ColumnMapping, column_mapping, extract_fields
from .query_builder import JoinOptions, MySQLQueryBuilder
from .repository import MySQLRepository
from .unit_of_work import MySQLUnitOfWork

__all__ = [
    "ColumnField",
    "ColumnMapping",
    "EngineExecutor",
    "JoinOptions",
    "MySQLQueryBuilder",
    "MySQLRepository",
    "MySQLUnitOfWork",
    "SQLExecutor",
    "SessionExecutor",
    "StatementResult",
    "column_mapping",
    "extract_fields",
]

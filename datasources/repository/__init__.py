"""
Repository pattern: backend-agnostic result shapes and the unit-of-work contract
shared by the MySQL and MongoDB repositories.
"""

from .base import FindManyResult, IRepository, MutationResult
from .decoder import decode_many, decode_one
from .unit_of_work import BaseUnitOfWork

__all__ = ["FindManyResult", "IRepository", "MutationResult", "BaseUnitOfWork", "decode_one", "decode_many"]

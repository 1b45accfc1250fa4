"""
Model registration: import every SQLModel table here so SQLModel.metadata knows about it.
"""
from apps.catalog.models import Course, Enrollment

__all__ = ["Course", "Enrollment"]

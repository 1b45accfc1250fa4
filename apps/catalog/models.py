from sqlalchemy import text
from sqlmodel import SQLModel, Field as ColumnField
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timezone
from enum import Enum

COURSES_TABLE = "courses"
ENROLLMENTS_TABLE = "enrollments"

class CourseStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"

class Course(SQLModel, table=True):
    """Course row; also the decode target for course reads."""
    __tablename__ = COURSES_TABLE
    id: Optional[int] = ColumnField(default=None, primary_key=True)
    code: str = ColumnField(unique=True, index=True, max_length=32)
    title: str = ColumnField(max_length=255)
    description: Optional[str] = ColumnField(default=None)
    category: Optional[str] = ColumnField(default=None, index=True, max_length=64)
    seats: int = ColumnField(default=0, sa_column_kwargs={"server_default": "0"})
    status: str = ColumnField(
        default=CourseStatus.DRAFT.value,
        sa_column_kwargs={"server_default": CourseStatus.DRAFT.value}
    )
    created_at: datetime = ColumnField(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")}
    )
    updated_at: Optional[datetime] = ColumnField(default=None)

class Enrollment(SQLModel, table=True):
    __tablename__ = ENROLLMENTS_TABLE
    id: Optional[int] = ColumnField(default=None, primary_key=True)
    course_id: int = ColumnField(foreign_key=f"{COURSES_TABLE}.id", index=True)
    student_email: str = ColumnField(max_length=320)
    created_at: datetime = ColumnField(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")}
    )

class CourseCreate(BaseModel):
    """Insert payload; "db" tags name the columns extract_fields() writes."""
    code: str = Field(json_schema_extra={"db": "code"})
    title: str = Field(json_schema_extra={"db": "title"})
    description: Optional[str] = Field(default=None, json_schema_extra={"db": "description"})
    category: Optional[str] = Field(default=None, json_schema_extra={"db": "category"})
    seats: int = Field(default=0, ge=0, json_schema_extra={"db": "seats"})
    # status is a system column: never inserted, the column default applies
    status: CourseStatus = Field(default=CourseStatus.DRAFT, json_schema_extra={"db": "status"})

class EnrollmentCreate(BaseModel):
    student_emails: list[str] = Field(min_length=1)

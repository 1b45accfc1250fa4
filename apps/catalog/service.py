from typing import List, Optional
from datasources.exceptions.errors import BackendOperationError
from datasources.exceptions.handler import BusinessException
from datasources.logging.logger import get_logger
from datasources.mysql import MySQLQueryBuilder, MySQLRepository
from datasources.repository.base import FindManyResult, MutationResult
from .models import COURSES_TABLE, ENROLLMENTS_TABLE, Course, CourseCreate, CourseStatus

logger = get_logger("catalog_service")

SEARCH_COLUMNS = ["code", "title", "description"]


class CatalogService:
    """Course catalog operations on top of MySQLRepository."""

    def __init__(self, repository: MySQLRepository):
        self.repository = repository

    async def create_course(self, data: CourseCreate) -> MutationResult:
        existing = await self.get_course(data.code)
        if existing:
            raise BusinessException(f"Course code already exists: {data.code}", code=400)

        builder = MySQLQueryBuilder().extract_fields_for_insert(data)
        result = await self.repository.insert_one(COURSES_TABLE, builder)
        logger.info(f"Course {data.code} created with id {result.inserted_id}")
        return result

    async def get_course(self, code: str) -> Optional[Course]:
        builder = MySQLQueryBuilder().where("code = ?", code)
        return await self.repository.find_one(COURSES_TABLE, builder, Course)

    async def list_courses(
        self,
        page: int = 1,
        page_size: int = 20,
        search: Optional[str] = None,
        categories: Optional[List[str]] = None,
        status: Optional[CourseStatus] = None,
    ) -> FindManyResult:
        """List courses newest first; page is 1-based."""
        builder = (
            MySQLQueryBuilder()
            .search(SEARCH_COLUMNS, search or "")
            .where_in("category", categories or [])
            .order_by("created_at DESC")
            .order_by("id DESC")
            .limit(page_size)
            .offset(page)
        )
        if status:
            builder.where("status = ?", status.value)
        return await self.repository.find_many(COURSES_TABLE, builder, Course)

    async def publish_course(self, code: str) -> MutationResult:
        builder = (
            MySQLQueryBuilder()
            .set("status", CourseStatus.PUBLISHED.value)
            .where("code = ?", code)
            .where("status = ?", CourseStatus.DRAFT.value)
        )
        result = await self.repository.update_one(COURSES_TABLE, builder)
        if not result.matched_count:
            raise BusinessException(f"No draft course with code {code}", code=404)
        return result

    async def enroll(self, code: str, student_emails: List[str]) -> int:
        """Enroll students and take seats atomically; returns the remaining seats."""
        uow = await self.repository.begin_transaction()
        async with uow:
            repo = uow.get_repository()
            course = await repo.find_one(
                COURSES_TABLE,
                MySQLQueryBuilder().select(["id", "seats", "status"]).where("code = ?", code),
            )
            if course is None:
                raise BusinessException(f"Course not found: {code}", code=404)
            if course["status"] != CourseStatus.PUBLISHED.value:
                raise BusinessException(f"Course {code} is not open for enrollment", code=400)
            if course["seats"] < len(student_emails):
                raise BusinessException(
                    f"Only {course['seats']} seats left in {code}",
                    code=409,
                    detail={"requested": len(student_emails), "available": course["seats"]},
                )

            for email in student_emails:
                await repo.insert_one(
                    ENROLLMENTS_TABLE,
                    MySQLQueryBuilder()
                    .add_column_value("`course_id`", course["id"])
                    .add_column_value("`student_email`", email),
                )

            remaining = course["seats"] - len(student_emails)
            await uow.get_repository().update_one(
                COURSES_TABLE,
                MySQLQueryBuilder().set("seats", remaining).where("id = ?", course["id"]),
            )

        logger.info(f"{len(student_emails)} student(s) enrolled in {code}, {remaining} seats left")
        return remaining

    async def withdraw_all(self, code: str) -> MutationResult:
        """Remove every enrollment of a course and give the seats back."""
        course = await self.get_course(code)
        if course is None:
            raise BusinessException(f"Course not found: {code}", code=404)

        uow = await self.repository.begin_transaction()
        try:
            repo = uow.get_repository()
            enrolled = await repo.find_many(
                ENROLLMENTS_TABLE, MySQLQueryBuilder().where("course_id = ?", course.id)
            )
            deleted = await repo.delete_many(
                ENROLLMENTS_TABLE, MySQLQueryBuilder().where("course_id = ?", course.id)
            )
            await repo.update_many(
                COURSES_TABLE,
                MySQLQueryBuilder().set("seats", course.seats + enrolled.total).where("id = ?", course.id),
            )
            await uow.commit()
        except BackendOperationError:
            if uow.is_active:
                await uow.rollback()
            raise
        return deleted

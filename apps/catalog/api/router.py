from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from datasources.dependencies import get_mysql_repository
from datasources.mysql import MySQLRepository
from datasources.response import ResponseModel
from ..models import CourseCreate, CourseStatus, EnrollmentCreate
from ..service import CatalogService

router = APIRouter()

def get_catalog_service(
    repository: MySQLRepository = Depends(get_mysql_repository)
) -> CatalogService:
    """Dependency: create CatalogService."""
    return CatalogService(repository)

@router.post("/courses")
async def create_course(
    data: CourseCreate,
    service: CatalogService = Depends(get_catalog_service)
):
    """Create a draft course."""
    result = await service.create_course(data)
    return ResponseModel.success(data=result.to_dict())

@router.get("/courses")
async def list_courses(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    q: Optional[str] = None,
    category: Optional[List[str]] = Query(None),
    status: Optional[CourseStatus] = None,
    service: CatalogService = Depends(get_catalog_service)
):
    """List courses with search, category filter and page-number pagination."""
    result = await service.list_courses(page, page_size, q, category, status)
    items = [course.model_dump(mode="json") for course in result.items]
    return ResponseModel.page(items, result.total, page, page_size)

@router.get("/courses/{code}")
async def get_course(
    code: str,
    service: CatalogService = Depends(get_catalog_service)
):
    """Get one course by code; data is null when it does not exist."""
    course = await service.get_course(code)
    return ResponseModel.success(data=course.model_dump(mode="json") if course else None)

@router.post("/courses/{code}/publish")
async def publish_course(
    code: str,
    service: CatalogService = Depends(get_catalog_service)
):
    result = await service.publish_course(code)
    return ResponseModel.success(data=result.to_dict())

@router.post("/courses/{code}/enrollments")
async def enroll(
    code: str,
    data: EnrollmentCreate,
    service: CatalogService = Depends(get_catalog_service)
):
    """Enroll students; all or nothing."""
    remaining = await service.enroll(code, data.student_emails)
    return ResponseModel.success(data={"remaining_seats": remaining})

@router.delete("/courses/{code}/enrollments")
async def withdraw_all(
    code: str,
    service: CatalogService = Depends(get_catalog_service)
):
    result = await service.withdraw_all(code)
    return ResponseModel.success(data=result.to_dict())

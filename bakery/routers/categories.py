# bakery/routers/categories.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from bakery.core.auth import require_staff
from bakery.database import get_session
from bakery.repositories.category_repo import CategoryRepository
from bakery.schemas.category import (
    CategoryCreate,
    CategoryRead,
    CategoryUpdate,
    CategoryWithCount,
)
from bakery.schemas.common import ApiResponse
from bakery.services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["Categories"])

service = CategoryService(CategoryRepository())


@router.get("", response_model=ApiResponse[list[CategoryRead]])
def list_categories(session: Session = Depends(get_session)):
    return ApiResponse(
        message="Categories retrieved",
        data=service.list_categories(session),
    )


@router.get("/with-count", response_model=ApiResponse[list[CategoryWithCount]])
def list_categories_with_count(session: Session = Depends(get_session)):
    """
    Active categories with the number of available products in each.
    """
    return ApiResponse(
        message="Categories retrieved",
        data=service.list_with_counts(session),
    )


@router.get("/{category_id}", response_model=ApiResponse[CategoryRead])
def get_category(category_id: int, session: Session = Depends(get_session)):
    return ApiResponse(
        message="Category retrieved",
        data=service.get_category(session, category_id),
    )


@router.post(
    "",
    response_model=ApiResponse[CategoryRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_staff)],
)
def create_category(payload: CategoryCreate, session: Session = Depends(get_session)):
    return ApiResponse(
        message="Category created",
        data=service.create_category(session, payload),
    )


@router.put(
    "/{category_id}",
    response_model=ApiResponse[CategoryRead],
    dependencies=[Depends(require_staff)],
)
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    session: Session = Depends(get_session),
):
    return ApiResponse(
        message="Category updated",
        data=service.update_category(session, category_id, payload),
    )


@router.delete(
    "/{category_id}",
    response_model=ApiResponse[None],
    dependencies=[Depends(require_staff)],
)
def delete_category(category_id: int, session: Session = Depends(get_session)):
    """
    Soft delete; refused while the category has available products.
    """
    service.delete_category(session, category_id)
    return ApiResponse(message="Category deleted")

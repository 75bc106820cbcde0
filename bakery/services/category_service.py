# bakery/services/category_service.py
from sqlmodel import Session

from bakery.core.errors import Conflict, EmptyUpdate, NotFound, ReferenceInUse
from bakery.models.category import Category
from bakery.repositories.category_repo import CategoryRepository
from bakery.schemas.category import (
    CategoryCreate,
    CategoryRead,
    CategoryUpdate,
    CategoryWithCount,
)


class CategoryService:
    """
    Business logic for categories.

    Responsibilities:
      - unique category names
      - soft delete (or is_active=false), refused while available products remain
    """

    def __init__(self, repo: CategoryRepository):
        self.repo = repo

    def _ensure_can_deactivate(self, session: Session, category_id: int) -> None:
        product_count = self.repo.count_available_products(session, category_id)
        if product_count > 0:
            raise ReferenceInUse(
                "Category still has available products",
                category_id=category_id,
                product_count=product_count,
            )

    def list_categories(self, session: Session) -> list[CategoryRead]:
        return [
            CategoryRead.model_validate(c, from_attributes=True)
            for c in self.repo.list_active(session)
        ]

    def list_with_counts(self, session: Session) -> list[CategoryWithCount]:
        result: list[CategoryWithCount] = []
        for category, product_count in self.repo.list_active_with_counts(session):
            data = category.model_dump()
            data["product_count"] = int(product_count or 0)
            result.append(CategoryWithCount.model_validate(data))
        return result

    def get_category(self, session: Session, category_id: int) -> CategoryRead:
        category = self.repo.get_active(session, category_id)
        if not category:
            raise NotFound("Category not found", category_id=category_id)
        return CategoryRead.model_validate(category, from_attributes=True)

    def create_category(self, session: Session, payload: CategoryCreate) -> CategoryRead:
        if self.repo.get_by_name(session, payload.name) is not None:
            raise Conflict("Category name already exists", name=payload.name)

        category = self.repo.create(session, Category(**payload.model_dump()))
        return CategoryRead.model_validate(category, from_attributes=True)

    def update_category(
        self,
        session: Session,
        category_id: int,
        payload: CategoryUpdate,
    ) -> CategoryRead:
        changes = payload.model_dump(exclude_unset=True)
        if not changes:
            raise EmptyUpdate("No data to update")

        category = self.repo.get_by_id(session, category_id)
        if not category:
            raise NotFound("Category not found", category_id=category_id)

        new_name = changes.get("name")
        if new_name is not None and new_name != category.name:
            if self.repo.get_by_name(session, new_name) is not None:
                raise Conflict("Category name already exists", name=new_name)

        if category.is_active and changes.get("is_active") is False:
            self._ensure_can_deactivate(session, category_id)

        category = self.repo.update(session, category, changes)
        return CategoryRead.model_validate(category, from_attributes=True)

    def delete_category(self, session: Session, category_id: int) -> None:
        """
        Soft delete. Refused while the category still has available products.
        """
        category = self.repo.get_active(session, category_id)
        if not category:
            raise NotFound("Category not found", category_id=category_id)

        self._ensure_can_deactivate(session, category_id)
        self.repo.update(session, category, {"is_active": False})

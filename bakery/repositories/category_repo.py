# bakery/repositories/category_repo.py
from sqlalchemy import and_, func
from sqlmodel import Session, select

from bakery.models.category import Category
from bakery.models.product import Product
from bakery.repositories.base import Repository


class CategoryRepository(Repository[Category]):
    model = Category

    def get_active(self, session: Session, category_id: int) -> Category | None:
        stmt = select(Category).where(
            Category.id == category_id, Category.is_active == True
        )
        return session.exec(stmt).first()

    def get_by_name(self, session: Session, name: str) -> Category | None:
        stmt = select(Category).where(Category.name == name)
        return session.exec(stmt).first()

    def list_active(self, session: Session) -> list[Category]:
        stmt = (
            select(Category)
            .where(Category.is_active == True)
            .order_by(Category.created_at, Category.id)
        )
        return session.exec(stmt).all()

    def list_active_with_counts(self, session: Session) -> list[tuple[Category, int]]:
        """
        Active categories with their number of available products.
        """
        stmt = (
            select(Category, func.count(Product.id))
            .outerjoin(
                Product,
                and_(Product.category_id == Category.id, Product.is_available == True),
            )
            .where(Category.is_active == True)
            .group_by(Category.id)
            .order_by(Category.created_at, Category.id)
        )
        return list(session.exec(stmt).all())

    def count_available_products(self, session: Session, category_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(Product)
            .where(Product.category_id == category_id, Product.is_available == True)
        )
        return int(session.exec(stmt).one() or 0)

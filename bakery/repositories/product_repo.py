# bakery/repositories/product_repo.py
from sqlalchemy import func, or_
from sqlmodel import Session, col, select

from bakery.models.category import Category
from bakery.models.product import Product
from bakery.repositories.base import Repository


class ProductRepository(Repository[Product]):
    """
    Data access layer for Product.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    - Listing queries return (Product, category_name) rows.
    """

    model = Product

    def get_available(self, session: Session, product_id: int) -> Product | None:
        stmt = select(Product).where(
            Product.id == product_id, Product.is_available == True
        )
        return session.exec(stmt).first()

    def get_with_category(
        self,
        session: Session,
        product_id: int,
        only_available: bool = True,
    ) -> tuple[Product, str | None] | None:
        stmt = self._with_category().where(Product.id == product_id)
        if only_available:
            stmt = stmt.where(Product.is_available == True)
        return session.exec(stmt).first()

    def list_products(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 20,
        search: str | None = None,
        category_id: int | None = None,
        category_name: str | None = None,
        only_available: bool = True,
    ) -> list[tuple[Product, str | None]]:
        stmt = self._filter(
            self._with_category(),
            search=search,
            category_id=category_id,
            category_name=category_name,
            only_available=only_available,
        )
        stmt = stmt.order_by(Product.created_at.desc(), Product.id.desc())
        stmt = stmt.offset(skip).limit(limit)
        return list(session.exec(stmt).all())

    def count(
        self,
        session: Session,
        search: str | None = None,
        category_id: int | None = None,
        category_name: str | None = None,
        only_available: bool = True,
    ) -> int:
        stmt = select(func.count(Product.id)).outerjoin(
            Category, Category.id == Product.category_id
        )
        stmt = self._filter(
            stmt,
            search=search,
            category_id=category_id,
            category_name=category_name,
            only_available=only_available,
        )
        return int(session.exec(stmt).one() or 0)

    # ----- Helpers -----

    @staticmethod
    def _with_category():
        return select(Product, Category.name).outerjoin(
            Category, Category.id == Product.category_id
        )

    @staticmethod
    def _filter(
        stmt,
        search: str | None,
        category_id: int | None,
        category_name: str | None,
        only_available: bool,
    ):
        if only_available:
            stmt = stmt.where(Product.is_available == True)
        if category_id is not None:
            stmt = stmt.where(Product.category_id == category_id)
        if category_name:
            stmt = stmt.where(Category.name == category_name)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    col(Product.name).ilike(pattern),
                    col(Product.description).ilike(pattern),
                )
            )
        return stmt

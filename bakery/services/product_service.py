# bakery/services/product_service.py
import logging

from fastapi import HTTPException, status
from sqlmodel import Session

from bakery.core.config import get_settings
from bakery.core.errors import AppError, EmptyUpdate, InvalidReference, NotFound
from bakery.core.storage_utils import (
    upload_to_storage,
    delete_public_url,
    generate_filename,
)
from bakery.models.product import Product
from bakery.repositories.category_repo import CategoryRepository
from bakery.repositories.product_repo import ProductRepository
from bakery.schemas.common import Pagination
from bakery.schemas.product import ProductCreate, ProductPage, ProductRead, ProductUpdate

logger = logging.getLogger(__name__)


# --- Image config ---

ALLOWED_IMAGE_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}


class ProductService:
    """
    Business logic for products.

    Responsibilities:
      - public catalog reads (available products only)
      - category validation on create/update
      - image upload/replace orchestration with Supabase
      - staff-only operations (enforced at router via require_staff)
    """

    def __init__(self, repo: ProductRepository, category_repo: CategoryRepository):
        self.repo = repo
        self.category_repo = category_repo

    # ----- Helpers -----

    @staticmethod
    def _to_read(product: Product, category_name: str | None) -> ProductRead:
        data = product.model_dump()
        data["price"] = float(product.price)
        data["category"] = category_name
        return ProductRead.model_validate(data)

    def _ensure_category(self, session: Session, category_id: int) -> None:
        if self.category_repo.get_active(session, category_id) is None:
            raise InvalidReference(
                f"Category with ID {category_id} does not exist",
                category_id=category_id,
            )

    def _read_by_id(self, session: Session, product_id: int) -> ProductRead:
        row = self.repo.get_with_category(session, product_id, only_available=False)
        product, category_name = row
        return self._to_read(product, category_name)

    @staticmethod
    def _validate_and_get_ext(content_type: str, file_bytes: bytes) -> str:
        if content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
            raise AppError("Unsupported image type. Allowed: JPEG, PNG, GIF, WEBP.")

        max_bytes = get_settings().MAX_IMAGE_BYTES
        if len(file_bytes) > max_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"Image too large (max {max_bytes // (1024 * 1024)}MB).",
            )

        return ALLOWED_IMAGE_CONTENT_TYPES[content_type]

    # ----- Public reads -----

    def list_products(
        self,
        session: Session,
        page: int = 1,
        limit: int = 12,
        search: str | None = None,
        category_id: int | None = None,
    ) -> ProductPage:
        skip = (page - 1) * limit
        rows = self.repo.list_products(
            session,
            skip=skip,
            limit=limit,
            search=search,
            category_id=category_id,
        )
        total = self.repo.count(session, search=search, category_id=category_id)
        return ProductPage(
            products=[self._to_read(p, name) for p, name in rows],
            pagination=Pagination.build(page, limit, total),
        )

    def admin_list_products(
        self,
        session: Session,
        page: int = 1,
        limit: int = 20,
        category: str | None = None,
        search: str | None = None,
    ) -> ProductPage:
        """
        Back-office listing: includes unavailable products, filter by
        category name.
        """
        skip = (page - 1) * limit
        rows = self.repo.list_products(
            session,
            skip=skip,
            limit=limit,
            search=search,
            category_name=category,
            only_available=False,
        )
        total = self.repo.count(
            session,
            search=search,
            category_name=category,
            only_available=False,
        )
        return ProductPage(
            products=[self._to_read(p, name) for p, name in rows],
            pagination=Pagination.build(page, limit, total),
        )

    def get_product(self, session: Session, product_id: int) -> ProductRead:
        row = self.repo.get_with_category(session, product_id)
        if not row:
            raise NotFound("Product not found", product_id=product_id)
        product, category_name = row
        return self._to_read(product, category_name)

    def list_by_category(self, session: Session, category_id: int) -> list[ProductRead]:
        rows = self.repo.list_products(
            session,
            skip=0,
            limit=1000,
            category_id=category_id,
        )
        return [self._to_read(p, name) for p, name in rows]

    # ----- Staff operations -----

    def create_product(
        self,
        session: Session,
        payload: ProductCreate,
    ) -> ProductRead:
        self._ensure_category(session, payload.category_id)
        product = self.repo.create(session, Product(**payload.model_dump()))
        return self._read_by_id(session, product.id)

    def update_product(
        self,
        session: Session,
        product_id: int,
        payload: ProductUpdate,
    ) -> ProductRead:
        """
        Partial update of a product; only fields sent by the client change.
        """
        changes = payload.model_dump(exclude_unset=True)
        if not changes:
            raise EmptyUpdate("No data to update")

        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise NotFound("Product not found", product_id=product_id)

        if changes.get("category_id") is not None:
            self._ensure_category(session, changes["category_id"])

        self.repo.update(session, product, changes)
        return self._read_by_id(session, product_id)

    def delete_product(
        self,
        session: Session,
        product_id: int,
    ) -> None:
        """
        Soft delete: the product is hidden from the catalog, past order
        items keep their snapshot.
        """
        product = self.repo.get_available(session, product_id)
        if not product:
            raise NotFound("Product not found", product_id=product_id)
        self.repo.update(session, product, {"is_available": False})

    # ----- Image -----

    def set_image(
        self,
        session: Session,
        product_id: int,
        content_type: str,
        file_bytes: bytes,
    ) -> ProductRead:
        """
        Upload or replace the image of a product.

        - Validates content type + size.
        - Uploads to products/<product_id>/<uuid>.<ext>.
        - Deletes the previous image from Storage (best effort).
        """
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise NotFound("Product not found", product_id=product_id)
        ext = self._validate_and_get_ext(content_type, file_bytes)

        path = f"products/{product.id}/{generate_filename(ext)}"
        new_url = upload_to_storage(path, file_bytes, content_type)

        old_url = product.image_url
        self.repo.update(session, product, {"image_url": new_url})

        if old_url and old_url != new_url:
            try:
                delete_public_url(old_url)
            except Exception:
                logger.warning("Could not delete old image %s", old_url, exc_info=True)

        return self._read_by_id(session, product_id)

# bakery/routers/products.py
from fastapi import (
    APIRouter,
    Depends,
    File,
    HTTPException,
    Query,
    UploadFile,
    status,
)
from sqlmodel import Session

from bakery.core.auth import require_staff
from bakery.database import get_session
from bakery.repositories.category_repo import CategoryRepository
from bakery.repositories.product_repo import ProductRepository
from bakery.schemas.common import ApiResponse
from bakery.schemas.product import (
    ProductCreate,
    ProductPage,
    ProductRead,
    ProductUpdate,
)
from bakery.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo, CategoryRepository())


# -------- Public endpoints --------


@router.get("", response_model=ApiResponse[ProductPage])
def list_products(
    session: Session = Depends(get_session),
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    search: str | None = None,
    category_id: int | None = None,
):
    """
    List available products.

    - Public endpoint.
    - `search` matches name or description.
    """
    data = service.list_products(
        session,
        page=page,
        limit=limit,
        search=search,
        category_id=category_id,
    )
    return ApiResponse(message="Products retrieved", data=data)


@router.get("/category/{category_id}", response_model=ApiResponse[list[ProductRead]])
def list_products_by_category(
    category_id: int,
    session: Session = Depends(get_session),
):
    return ApiResponse(
        message="Products retrieved",
        data=service.list_by_category(session, category_id),
    )


@router.get("/{product_id}", response_model=ApiResponse[ProductRead])
def get_product(
    product_id: int,
    session: Session = Depends(get_session),
):
    """
    Get a single available product by id.
    """
    return ApiResponse(
        message="Product retrieved",
        data=service.get_product(session, product_id),
    )


# -------- Staff endpoints --------


@router.post(
    "",
    response_model=ApiResponse[ProductRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_staff)],
)
def create_product(
    payload: ProductCreate,
    session: Session = Depends(get_session),
):
    return ApiResponse(
        message="Product created",
        data=service.create_product(session, payload),
    )


@router.put(
    "/{product_id}",
    response_model=ApiResponse[ProductRead],
    dependencies=[Depends(require_staff)],
)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    session: Session = Depends(get_session),
):
    """
    Partially update a product; omitted fields are left unchanged.
    """
    return ApiResponse(
        message="Product updated",
        data=service.update_product(session, product_id, payload),
    )


@router.delete(
    "/{product_id}",
    response_model=ApiResponse[None],
    dependencies=[Depends(require_staff)],
)
def delete_product(
    product_id: int,
    session: Session = Depends(get_session),
):
    """
    Hide a product from the catalog (soft delete).
    """
    service.delete_product(session, product_id)
    return ApiResponse(message="Product deleted")


@router.post(
    "/{product_id}/image",
    response_model=ApiResponse[ProductRead],
    dependencies=[Depends(require_staff)],
    summary="Upload or replace the image of a product",
)
def upload_product_image(
    product_id: int,
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
):
    """
    Upload a new image for the product.

    - Accepts JPEG, PNG, GIF, WEBP.
    - Replaces any previous image.
    """
    if not file.content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing content-type for uploaded file",
        )

    file_bytes = file.file.read()
    return ApiResponse(
        message="Image uploaded",
        data=service.set_image(
            session=session,
            product_id=product_id,
            content_type=file.content_type,
            file_bytes=file_bytes,
        ),
    )

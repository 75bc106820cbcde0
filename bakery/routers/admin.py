# bakery/routers/admin.py
from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from bakery.core.auth import get_current_admin, require_admin, require_staff
from bakery.database import get_session
from bakery.models.admin_user import AdminUser
from bakery.repositories.admin_repo import AdminUserRepository
from bakery.repositories.stats_repo import StatsRepository
from bakery.routers.orders import service as order_service
from bakery.routers.products import service as product_service
from bakery.schemas.admin import AdminCreate, AdminLogin, AdminRead, LoginResult
from bakery.schemas.common import ApiResponse
from bakery.schemas.order import OrderPage, OrderStatusUpdate, OrderWithItemsRead
from bakery.schemas.product import ProductPage
from bakery.schemas.stats import DashboardStats
from bakery.services.admin_service import AdminService
from bakery.services.stats_service import StatsService

router = APIRouter(prefix="/admin", tags=["Admin"])

service = AdminService(AdminUserRepository())
stats_service = StatsService(StatsRepository())


# -------- Auth --------


@router.post("/login", response_model=ApiResponse[LoginResult])
def login(payload: AdminLogin, session: Session = Depends(get_session)):
    """
    Exchange username (or email) + password for a bearer token.
    """
    return ApiResponse(
        message="Login successful",
        data=service.login(session, payload),
    )


@router.get("/me", response_model=ApiResponse[AdminRead])
def read_me(admin: AdminUser = Depends(get_current_admin)):
    return ApiResponse(
        message="Admin retrieved",
        data=AdminRead.model_validate(admin, from_attributes=True),
    )


# -------- Dashboard --------


@router.get(
    "/dashboard/stats",
    response_model=ApiResponse[DashboardStats],
    dependencies=[Depends(require_staff)],
)
def get_dashboard_stats(session: Session = Depends(get_session)):
    return ApiResponse(
        message="Dashboard statistics retrieved",
        data=stats_service.get_dashboard_stats(session),
    )


# -------- Admin users (role=admin only) --------


@router.get(
    "/users",
    response_model=ApiResponse[list[AdminRead]],
    dependencies=[Depends(require_admin)],
)
def list_admin_users(session: Session = Depends(get_session)):
    return ApiResponse(
        message="Admin users retrieved",
        data=service.list_admins(session),
    )


@router.post(
    "/users",
    response_model=ApiResponse[AdminRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_admin_user(payload: AdminCreate, session: Session = Depends(get_session)):
    return ApiResponse(
        message="Admin user created",
        data=service.create_admin(session, payload),
    )


# -------- Back-office catalog / orders --------


@router.get(
    "/products",
    response_model=ApiResponse[ProductPage],
    dependencies=[Depends(require_staff)],
)
def list_all_products(
    session: Session = Depends(get_session),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    category: str | None = None,
    search: str | None = None,
):
    """
    All products including unavailable ones; `category` filters by name.
    """
    data = product_service.admin_list_products(
        session,
        page=page,
        limit=limit,
        category=category,
        search=search,
    )
    return ApiResponse(message="Products retrieved", data=data)


@router.get(
    "/orders",
    response_model=ApiResponse[OrderPage],
    dependencies=[Depends(require_staff)],
)
def list_all_orders(
    session: Session = Depends(get_session),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: str | None = None,
    branch_id: int | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    search: str | None = None,
):
    data = order_service.list_orders(
        session,
        page=page,
        limit=limit,
        status=status,
        branch_id=branch_id,
        date_from=date_from,
        date_to=date_to,
        search=search,
    )
    return ApiResponse(message="Orders retrieved", data=data)


@router.put(
    "/orders/{order_id}/status",
    response_model=ApiResponse[OrderWithItemsRead],
    dependencies=[Depends(require_staff)],
)
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    session: Session = Depends(get_session),
):
    return ApiResponse(
        message="Order status updated",
        data=order_service.update_status(session, order_id, payload.status),
    )

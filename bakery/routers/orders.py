# bakery/routers/orders.py
from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from bakery.core.auth import require_staff
from bakery.database import get_session
from bakery.repositories.branch_repo import BranchRepository
from bakery.repositories.customer_repo import CustomerRepository
from bakery.repositories.order_repo import OrderRepository
from bakery.repositories.payment_method_repo import PaymentMethodRepository
from bakery.repositories.product_repo import ProductRepository
from bakery.repositories.stats_repo import StatsRepository
from bakery.schemas.common import ApiResponse
from bakery.schemas.order import (
    OrderCreate,
    OrderPage,
    OrderStatusUpdate,
    OrderWithItemsRead,
)
from bakery.schemas.stats import OrderStatistics
from bakery.services.customer_service import CustomerService
from bakery.services.order_service import OrderService
from bakery.services.stats_service import StatsService

router = APIRouter(prefix="/orders", tags=["Orders"])

service = OrderService(
    OrderRepository(),
    ProductRepository(),
    BranchRepository(),
    PaymentMethodRepository(),
    CustomerService(CustomerRepository()),
)
stats_service = StatsService(StatsRepository())


# -------- Public endpoints --------


@router.post(
    "",
    response_model=ApiResponse[OrderWithItemsRead],
    status_code=status.HTTP_201_CREATED,
)
def create_order(
    payload: OrderCreate,
    session: Session = Depends(get_session),
):
    """
    Guest checkout.

    Prices and total are re-checked against the live catalog; the order
    is created with status 'pending'.
    """
    return ApiResponse(
        message="Order placed successfully",
        data=service.create_order(session, payload),
    )


@router.get("/code/{order_code}", response_model=ApiResponse[OrderWithItemsRead])
def get_order_by_code(
    order_code: str,
    session: Session = Depends(get_session),
):
    """
    Track an order by its code (public).
    """
    return ApiResponse(
        message="Order retrieved",
        data=service.get_order_by_code(session, order_code),
    )


# -------- Staff endpoints --------


@router.get(
    "/stats/overview",
    response_model=ApiResponse[OrderStatistics],
    dependencies=[Depends(require_staff)],
)
def get_order_statistics(
    date_from: date | None = None,
    date_to: date | None = None,
    session: Session = Depends(get_session),
):
    return ApiResponse(
        message="Order statistics retrieved",
        data=stats_service.get_order_statistics(session, date_from, date_to),
    )


@router.get(
    "",
    response_model=ApiResponse[OrderPage],
    dependencies=[Depends(require_staff)],
)
def list_orders(
    session: Session = Depends(get_session),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: str | None = None,
    branch_id: int | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    search: str | None = None,
):
    """
    List orders (without items), newest first.

    `search` matches order code, customer name or phone.
    """
    data = service.list_orders(
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


@router.get(
    "/{order_id}",
    response_model=ApiResponse[OrderWithItemsRead],
    dependencies=[Depends(require_staff)],
)
def get_order(
    order_id: int,
    session: Session = Depends(get_session),
):
    return ApiResponse(
        message="Order retrieved",
        data=service.get_order(session, order_id),
    )


@router.put(
    "/{order_id}/status",
    response_model=ApiResponse[OrderWithItemsRead],
    dependencies=[Depends(require_staff)],
)
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    session: Session = Depends(get_session),
):
    """
    Set the status of an order. Any status can be set from any state.
    """
    return ApiResponse(
        message="Order status updated",
        data=service.update_status(session, order_id, payload.status),
    )

# bakery/services/order_service.py
import logging
import time
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from bakery.core.errors import (
    InvalidReference,
    InvalidStatus,
    NotFound,
    PersistenceFailure,
    StalePrice,
    TotalMismatch,
)
from bakery.database import Database
from bakery.models.branch import Branch
from bakery.models.order import Order, OrderItem
from bakery.models.payment_method import PaymentMethod
from bakery.models.product import Product
from bakery.repositories.branch_repo import BranchRepository
from bakery.repositories.order_repo import OrderRepository
from bakery.repositories.payment_method_repo import PaymentMethodRepository
from bakery.repositories.product_repo import ProductRepository
from bakery.schemas.common import Pagination
from bakery.schemas.order import (
    ORDER_STATUSES,
    OrderBranch,
    OrderCreate,
    OrderCustomer,
    OrderItemRead,
    OrderPage,
    OrderPaymentMethod,
    OrderRead,
    OrderWithItemsRead,
)
from bakery.services.customer_service import CustomerService

logger = logging.getLogger(__name__)

ORDER_CODE_PREFIX = "BM"

# Codes repeat every 10^8 ms (~28 hours); the unique constraint on
# orders.order_code catches whatever slips past the existence check.
MAX_ORDER_CODE_ATTEMPTS = 5

# Client and server totals may differ by rounding only
TOTAL_TOLERANCE = Decimal("0.01")


def generate_order_code(now_ms: int | None = None) -> str:
    """
    "BM" followed by the last 8 digits of the epoch-millisecond clock,
    e.g. BM12345678.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return f"{ORDER_CODE_PREFIX}{now_ms % 100_000_000:08d}"


class OrderService:
    """
    Business logic for orders.

    Responsibilities:
      - Validate a guest checkout against the live catalog
        (availability, price, total)
      - Resolve the customer by phone
      - Persist order + items atomically with price snapshots
      - Order reads for tracking and the back office
      - Status updates (staff)
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        branch_repo: BranchRepository,
        payment_repo: PaymentMethodRepository,
        customer_service: CustomerService,
    ):
        self.order_repo = order_repo
        self.product_repo = product_repo
        self.branch_repo = branch_repo
        self.payment_repo = payment_repo
        self.customer_service = customer_service

    # -------- Checkout --------

    def create_order(
        self,
        session: Session,
        payload: OrderCreate,
    ) -> OrderWithItemsRead:
        """
        Place an order.

        Steps:
          1. Each product must exist and be available.
          2. Submitted price must equal the live price.
          3. Server total = sum(live price * quantity).
          4. Submitted total must match within 0.01.
          5. Branch and payment method must be active.
          6. Generate an order code.
          7-8. In one transaction: upsert customer, insert order
               (pending, server total) and items.
          9. Return the full order.

        Nothing is written before steps 1-5 pass.
        """
        # 1-3) Price every line against the catalog
        lines: list[tuple[Product, int, Decimal]] = []
        server_total = Decimal("0")

        for item in payload.items:
            product = self.product_repo.get_available(session, item.product.id)
            if product is None:
                raise InvalidReference(
                    f"Product with ID {item.product.id} does not exist",
                    product_id=item.product.id,
                )

            if product.price != item.product.price:
                raise StalePrice(
                    f"Price of {product.name} has changed, please refresh your cart",
                    product_id=product.id,
                    current_price=float(product.price),
                    submitted_price=float(item.product.price),
                )

            subtotal = product.price * item.quantity
            server_total += subtotal
            lines.append((product, item.quantity, subtotal))

        # 4) Compare totals
        if abs(server_total - payload.total_amount) > TOTAL_TOLERANCE:
            raise TotalMismatch(
                "Order total does not match",
                expected=float(server_total),
                received=float(payload.total_amount),
            )

        # 5) Branch / payment method
        branch = self.branch_repo.get_active(session, payload.branch_id)
        if branch is None:
            raise InvalidReference(
                "Branch does not exist",
                branch_id=payload.branch_id,
            )

        payment_method = self.payment_repo.get_active(session, payload.payment_method_id)
        if payment_method is None:
            raise InvalidReference(
                "Payment method does not exist",
                payment_method_id=payload.payment_method_id,
            )

        # 6) Order code
        order_code = self._next_order_code(session)

        # 7-8) Write everything or nothing
        info = payload.customer_info
        try:
            with Database.transaction(session):
                customer_id = self.customer_service.resolve(session, info)

                order = Order(
                    order_code=order_code,
                    customer_id=customer_id,
                    branch_id=branch.id,
                    payment_method_id=payment_method.id,
                    total_amount=server_total,
                    status="pending",
                    customer_name=info.name,
                    customer_phone=info.phone,
                    customer_email=str(info.email) if info.email else None,
                    delivery_address=info.address,
                    notes=payload.notes,
                )
                order = self.order_repo.create_order(session, order)

                self.order_repo.create_items(
                    session,
                    [
                        OrderItem(
                            order_id=order.id,
                            product_id=product.id,
                            product_name=product.name,
                            product_price=product.price,
                            quantity=quantity,
                            subtotal=subtotal,
                        )
                        for product, quantity, subtotal in lines
                    ],
                )
                order_id = order.id
        except SQLAlchemyError as exc:
            logger.exception("Failed to persist order %s", order_code)
            raise PersistenceFailure(
                "Could not create the order, please try again",
            ) from exc

        logger.info(
            "Order %s created (id=%s, total=%s)", order_code, order_id, server_total
        )

        # 9) Reconstructed view
        return self.get_order(session, order_id)

    def _next_order_code(self, session: Session) -> str:
        now_ms = time.time_ns() // 1_000_000
        for attempt in range(MAX_ORDER_CODE_ATTEMPTS):
            code = generate_order_code(now_ms + attempt)
            if self.order_repo.get_by_code(session, code) is None:
                return code
        raise PersistenceFailure("Could not generate a unique order code")

    # -------- Reads --------

    def get_order(self, session: Session, order_id: int) -> OrderWithItemsRead:
        row = self.order_repo.get_row(session, order_id)
        if not row:
            raise NotFound("Order not found", order_id=order_id)
        return self._build_order_with_items_dto(session, *row)

    def get_order_by_code(self, session: Session, order_code: str) -> OrderWithItemsRead:
        """
        Public order tracking by code.
        """
        order = self.order_repo.get_by_code(session, order_code.strip().upper())
        if not order:
            raise NotFound("Order not found", order_code=order_code)
        return self.get_order(session, order.id)

    def list_orders(
        self,
        session: Session,
        page: int = 1,
        limit: int = 20,
        status: str | None = None,
        branch_id: int | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        search: str | None = None,
    ) -> OrderPage:
        """
        Back-office listing (without items), newest first.
        """
        if status is not None and status not in ORDER_STATUSES:
            raise InvalidStatus(f"Invalid status: {status}", allowed=list(ORDER_STATUSES))

        filters = dict(
            status=status,
            branch_id=branch_id,
            date_from=date_from,
            date_to=date_to,
            search=search,
        )
        rows = self.order_repo.list_rows(
            session,
            skip=(page - 1) * limit,
            limit=limit,
            **filters,
        )
        total = self.order_repo.count(session, **filters)

        return OrderPage(
            orders=[self._build_order_dto(*row) for row in rows],
            pagination=Pagination.build(page, limit, total),
        )

    # -------- Staff operations --------

    def update_status(
        self,
        session: Session,
        order_id: int,
        new_status: str,
    ) -> OrderWithItemsRead:
        """
        Set the order status.

        Any of the six statuses can be set from any state; there is no
        transition table.
        """
        if new_status not in ORDER_STATUSES:
            raise InvalidStatus(
                f"Invalid status: {new_status}",
                allowed=list(ORDER_STATUSES),
            )

        order = self.order_repo.get_by_id(session, order_id)
        if not order:
            raise NotFound("Order not found", order_id=order_id)

        order_code = order.order_code
        previous = order.status
        try:
            with Database.transaction(session):
                order.status = new_status
                order.updated_at = datetime.now(timezone.utc)
                self.order_repo.update_order(session, order)
        except SQLAlchemyError as exc:
            logger.exception("Failed to update status of order %s", order_code)
            raise PersistenceFailure(
                "Could not update the order status, please try again",
            ) from exc

        logger.info("Order %s status %s -> %s", order_code, previous, new_status)
        return self.get_order(session, order_id)

    # -------- Helper DTO builders --------

    @staticmethod
    def _build_order_dto(
        order: Order,
        branch: Branch | None,
        payment_method: PaymentMethod | None,
    ) -> OrderRead:
        return OrderRead(
            id=order.id,
            order_code=order.order_code,
            customer=OrderCustomer(
                id=order.customer_id,
                name=order.customer_name,
                phone=order.customer_phone,
                email=order.customer_email,
                address=order.delivery_address,
            ),
            branch=OrderBranch(
                id=order.branch_id,
                name=branch.name if branch else None,
                address=branch.address if branch else None,
                phone=branch.phone if branch else None,
            ),
            payment_method=OrderPaymentMethod(
                id=order.payment_method_id,
                name=payment_method.name if payment_method else None,
                code=payment_method.code if payment_method else None,
            ),
            total_amount=float(order.total_amount),
            status=order.status,
            notes=order.notes,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )

    def _build_order_with_items_dto(
        self,
        session: Session,
        order: Order,
        branch: Branch | None,
        payment_method: PaymentMethod | None,
    ) -> OrderWithItemsRead:
        item_dtos = [
            OrderItemRead(
                id=it.id,
                product_id=it.product_id,
                product_name=it.product_name,
                product_price=float(it.product_price),
                quantity=it.quantity,
                subtotal=float(it.subtotal),
                product_image=image_url,
            )
            for it, image_url in self.order_repo.list_items_for_order(session, order.id)
        ]
        base = self._build_order_dto(order, branch, payment_method)
        return OrderWithItemsRead(**base.model_dump(), items=item_dtos)

# bakery/repositories/payment_method_repo.py
from sqlalchemy import func
from sqlmodel import Session, select

from bakery.models.order import Order
from bakery.models.payment_method import PaymentMethod
from bakery.repositories.base import Repository


class PaymentMethodRepository(Repository[PaymentMethod]):
    model = PaymentMethod

    def get_active(self, session: Session, method_id: int) -> PaymentMethod | None:
        stmt = select(PaymentMethod).where(
            PaymentMethod.id == method_id, PaymentMethod.is_active == True
        )
        return session.exec(stmt).first()

    def get_by_code(
        self,
        session: Session,
        code: str,
        only_active: bool = False,
    ) -> PaymentMethod | None:
        stmt = select(PaymentMethod).where(PaymentMethod.code == code)
        if only_active:
            stmt = stmt.where(PaymentMethod.is_active == True)
        return session.exec(stmt).first()

    def list_active(self, session: Session) -> list[PaymentMethod]:
        stmt = (
            select(PaymentMethod)
            .where(PaymentMethod.is_active == True)
            .order_by(PaymentMethod.created_at, PaymentMethod.id)
        )
        return session.exec(stmt).all()

    def count_orders(self, session: Session, method_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(Order)
            .where(Order.payment_method_id == method_id)
        )
        return int(session.exec(stmt).one() or 0)

# bakery/services/payment_method_service.py
from sqlmodel import Session

from bakery.core.errors import Conflict, EmptyUpdate, NotFound, ReferenceInUse
from bakery.models.payment_method import PaymentMethod
from bakery.repositories.payment_method_repo import PaymentMethodRepository
from bakery.schemas.payment_method import (
    PaymentMethodCreate,
    PaymentMethodRead,
    PaymentMethodUpdate,
)


class PaymentMethodService:
    def __init__(self, repo: PaymentMethodRepository):
        self.repo = repo

    def _ensure_can_deactivate(self, session: Session, method_id: int) -> None:
        order_count = self.repo.count_orders(session, method_id)
        if order_count > 0:
            raise ReferenceInUse(
                "Payment method is used by existing orders",
                payment_method_id=method_id,
                order_count=order_count,
            )

    def list_methods(self, session: Session) -> list[PaymentMethodRead]:
        return [
            PaymentMethodRead.model_validate(m, from_attributes=True)
            for m in self.repo.list_active(session)
        ]

    def get_method(self, session: Session, method_id: int) -> PaymentMethodRead:
        method = self.repo.get_active(session, method_id)
        if not method:
            raise NotFound("Payment method not found", payment_method_id=method_id)
        return PaymentMethodRead.model_validate(method, from_attributes=True)

    def get_method_by_code(self, session: Session, code: str) -> PaymentMethodRead:
        method = self.repo.get_by_code(session, code.strip().lower(), only_active=True)
        if not method:
            raise NotFound("Payment method not found", code=code)
        return PaymentMethodRead.model_validate(method, from_attributes=True)

    def create_method(
        self,
        session: Session,
        payload: PaymentMethodCreate,
    ) -> PaymentMethodRead:
        if self.repo.get_by_code(session, payload.code) is not None:
            raise Conflict("Payment method code already exists", code=payload.code)

        method = self.repo.create(session, PaymentMethod(**payload.model_dump()))
        return PaymentMethodRead.model_validate(method, from_attributes=True)

    def update_method(
        self,
        session: Session,
        method_id: int,
        payload: PaymentMethodUpdate,
    ) -> PaymentMethodRead:
        changes = payload.model_dump(exclude_unset=True)
        if not changes:
            raise EmptyUpdate("No data to update")

        method = self.repo.get_by_id(session, method_id)
        if not method:
            raise NotFound("Payment method not found", payment_method_id=method_id)

        new_code = changes.get("code")
        if new_code is not None and new_code != method.code:
            if self.repo.get_by_code(session, new_code) is not None:
                raise Conflict("Payment method code already exists", code=new_code)

        if method.is_active and changes.get("is_active") is False:
            self._ensure_can_deactivate(session, method_id)

        method = self.repo.update(session, method, changes)
        return PaymentMethodRead.model_validate(method, from_attributes=True)

    def delete_method(self, session: Session, method_id: int) -> None:
        method = self.repo.get_active(session, method_id)
        if not method:
            raise NotFound("Payment method not found", payment_method_id=method_id)

        self._ensure_can_deactivate(session, method_id)
        self.repo.update(session, method, {"is_active": False})

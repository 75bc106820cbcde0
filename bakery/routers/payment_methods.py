# bakery/routers/payment_methods.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from bakery.core.auth import require_staff
from bakery.database import get_session
from bakery.repositories.payment_method_repo import PaymentMethodRepository
from bakery.schemas.common import ApiResponse
from bakery.schemas.payment_method import (
    PaymentMethodCreate,
    PaymentMethodRead,
    PaymentMethodUpdate,
)
from bakery.services.payment_method_service import PaymentMethodService

router = APIRouter(prefix="/payment-methods", tags=["Payment Methods"])

service = PaymentMethodService(PaymentMethodRepository())


@router.get("", response_model=ApiResponse[list[PaymentMethodRead]])
def list_payment_methods(session: Session = Depends(get_session)):
    return ApiResponse(
        message="Payment methods retrieved",
        data=service.list_methods(session),
    )


@router.get("/code/{code}", response_model=ApiResponse[PaymentMethodRead])
def get_payment_method_by_code(code: str, session: Session = Depends(get_session)):
    """
    Look up an active payment method by its code (case-insensitive).
    """
    return ApiResponse(
        message="Payment method retrieved",
        data=service.get_method_by_code(session, code),
    )


@router.get("/{method_id}", response_model=ApiResponse[PaymentMethodRead])
def get_payment_method(method_id: int, session: Session = Depends(get_session)):
    return ApiResponse(
        message="Payment method retrieved",
        data=service.get_method(session, method_id),
    )


@router.post(
    "",
    response_model=ApiResponse[PaymentMethodRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_staff)],
)
def create_payment_method(
    payload: PaymentMethodCreate,
    session: Session = Depends(get_session),
):
    return ApiResponse(
        message="Payment method created",
        data=service.create_method(session, payload),
    )


@router.put(
    "/{method_id}",
    response_model=ApiResponse[PaymentMethodRead],
    dependencies=[Depends(require_staff)],
)
def update_payment_method(
    method_id: int,
    payload: PaymentMethodUpdate,
    session: Session = Depends(get_session),
):
    return ApiResponse(
        message="Payment method updated",
        data=service.update_method(session, method_id, payload),
    )


@router.delete(
    "/{method_id}",
    response_model=ApiResponse[None],
    dependencies=[Depends(require_staff)],
)
def delete_payment_method(method_id: int, session: Session = Depends(get_session)):
    service.delete_method(session, method_id)
    return ApiResponse(message="Payment method deleted")

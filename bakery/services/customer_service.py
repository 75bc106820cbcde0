# bakery/services/customer_service.py
from sqlmodel import Session

from bakery.repositories.customer_repo import CustomerRepository
from bakery.schemas.order import CustomerInfo


class CustomerService:
    """
    Guest customers keyed by phone number.

    There is no customer login: the phone identifies the customer and the
    latest order overwrites name, email and address.
    """

    def __init__(self, repo: CustomerRepository):
        self.repo = repo

    def resolve(self, session: Session, info: CustomerInfo) -> int:
        """
        Return the id of the customer owning `info.phone`, creating or
        refreshing the row. Does not commit.
        """
        return self.repo.upsert_by_phone(
            session,
            name=info.name,
            phone=info.phone,
            email=str(info.email) if info.email else None,
            address=info.address,
        )

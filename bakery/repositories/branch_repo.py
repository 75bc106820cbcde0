# bakery/repositories/branch_repo.py
from sqlalchemy import func
from sqlmodel import Session, select

from bakery.models.branch import Branch
from bakery.models.order import Order
from bakery.repositories.base import Repository


class BranchRepository(Repository[Branch]):
    model = Branch

    def get_active(self, session: Session, branch_id: int) -> Branch | None:
        stmt = select(Branch).where(Branch.id == branch_id, Branch.is_active == True)
        return session.exec(stmt).first()

    def list_active(self, session: Session) -> list[Branch]:
        stmt = (
            select(Branch)
            .where(Branch.is_active == True)
            .order_by(Branch.created_at, Branch.id)
        )
        return session.exec(stmt).all()

    def count_orders(self, session: Session, branch_id: int) -> int:
        stmt = select(func.count()).select_from(Order).where(Order.branch_id == branch_id)
        return int(session.exec(stmt).one() or 0)

# bakery/services/branch_service.py
from sqlmodel import Session

from bakery.core.errors import EmptyUpdate, NotFound, ReferenceInUse
from bakery.models.branch import Branch
from bakery.repositories.branch_repo import BranchRepository
from bakery.schemas.branch import BranchCreate, BranchRead, BranchUpdate


class BranchService:
    """
    Business logic for branches.

    A branch that has received orders can never be deactivated (neither by
    DELETE nor by an update setting is_active=false); historical orders
    keep pointing at it.
    """

    def __init__(self, repo: BranchRepository):
        self.repo = repo

    def _ensure_can_deactivate(self, session: Session, branch_id: int) -> None:
        order_count = self.repo.count_orders(session, branch_id)
        if order_count > 0:
            raise ReferenceInUse(
                "Branch has related orders and cannot be deleted",
                branch_id=branch_id,
                order_count=order_count,
            )

    def list_branches(self, session: Session) -> list[BranchRead]:
        return [
            BranchRead.model_validate(b, from_attributes=True)
            for b in self.repo.list_active(session)
        ]

    def get_branch(self, session: Session, branch_id: int) -> BranchRead:
        branch = self.repo.get_active(session, branch_id)
        if not branch:
            raise NotFound("Branch not found", branch_id=branch_id)
        return BranchRead.model_validate(branch, from_attributes=True)

    def create_branch(self, session: Session, payload: BranchCreate) -> BranchRead:
        branch = self.repo.create(session, Branch(**payload.model_dump()))
        return BranchRead.model_validate(branch, from_attributes=True)

    def update_branch(
        self,
        session: Session,
        branch_id: int,
        payload: BranchUpdate,
    ) -> BranchRead:
        changes = payload.model_dump(exclude_unset=True)
        if not changes:
            raise EmptyUpdate("No data to update")

        branch = self.repo.get_by_id(session, branch_id)
        if not branch:
            raise NotFound("Branch not found", branch_id=branch_id)

        if branch.is_active and changes.get("is_active") is False:
            self._ensure_can_deactivate(session, branch_id)

        branch = self.repo.update(session, branch, changes)
        return BranchRead.model_validate(branch, from_attributes=True)

    def delete_branch(self, session: Session, branch_id: int) -> None:
        branch = self.repo.get_active(session, branch_id)
        if not branch:
            raise NotFound("Branch not found", branch_id=branch_id)

        self._ensure_can_deactivate(session, branch_id)
        self.repo.update(session, branch, {"is_active": False})

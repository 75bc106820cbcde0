# bakery/routers/branches.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from bakery.core.auth import require_staff
from bakery.database import get_session
from bakery.repositories.branch_repo import BranchRepository
from bakery.schemas.branch import BranchCreate, BranchRead, BranchUpdate
from bakery.schemas.common import ApiResponse
from bakery.services.branch_service import BranchService

router = APIRouter(prefix="/branches", tags=["Branches"])

service = BranchService(BranchRepository())


@router.get("", response_model=ApiResponse[list[BranchRead]])
def list_branches(session: Session = Depends(get_session)):
    return ApiResponse(
        message="Branches retrieved",
        data=service.list_branches(session),
    )


@router.get("/{branch_id}", response_model=ApiResponse[BranchRead])
def get_branch(branch_id: int, session: Session = Depends(get_session)):
    return ApiResponse(
        message="Branch retrieved",
        data=service.get_branch(session, branch_id),
    )


@router.post(
    "",
    response_model=ApiResponse[BranchRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_staff)],
)
def create_branch(payload: BranchCreate, session: Session = Depends(get_session)):
    return ApiResponse(
        message="Branch created",
        data=service.create_branch(session, payload),
    )


@router.put(
    "/{branch_id}",
    response_model=ApiResponse[BranchRead],
    dependencies=[Depends(require_staff)],
)
def update_branch(
    branch_id: int,
    payload: BranchUpdate,
    session: Session = Depends(get_session),
):
    return ApiResponse(
        message="Branch updated",
        data=service.update_branch(session, branch_id, payload),
    )


@router.delete(
    "/{branch_id}",
    response_model=ApiResponse[None],
    dependencies=[Depends(require_staff)],
)
def delete_branch(branch_id: int, session: Session = Depends(get_session)):
    """
    Soft delete; refused once the branch has orders.
    """
    service.delete_branch(session, branch_id)
    return ApiResponse(message="Branch deleted")

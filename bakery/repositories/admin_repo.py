# bakery/repositories/admin_repo.py
from sqlalchemy import func, or_
from sqlmodel import Session, select

from bakery.models.admin_user import AdminUser
from bakery.repositories.base import Repository


class AdminUserRepository(Repository[AdminUser]):
    """
    Data access layer for back-office accounts.
    """

    model = AdminUser

    def get_active(self, session: Session, admin_id: int) -> AdminUser | None:
        stmt = select(AdminUser).where(
            AdminUser.id == admin_id, AdminUser.is_active == True
        )
        return session.exec(stmt).first()

    def get_active_by_login(self, session: Session, login: str) -> AdminUser | None:
        """Match `login` against username or email."""
        stmt = select(AdminUser).where(
            or_(AdminUser.username == login, AdminUser.email == login),
            AdminUser.is_active == True,
        )
        return session.exec(stmt).first()

    def exists_with(self, session: Session, username: str, email: str) -> bool:
        stmt = select(AdminUser).where(
            or_(AdminUser.username == username, AdminUser.email == email)
        )
        return session.exec(stmt).first() is not None

    def list_all(self, session: Session) -> list[AdminUser]:
        stmt = select(AdminUser).order_by(AdminUser.created_at.desc(), AdminUser.id.desc())
        return session.exec(stmt).all()

    def count(self, session: Session) -> int:
        stmt = select(func.count(AdminUser.id))
        return int(session.exec(stmt).one() or 0)

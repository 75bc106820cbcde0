# bakery/services/admin_service.py
import logging
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlmodel import Session

from bakery.core.auth import create_access_token, hash_password, verify_password
from bakery.core.errors import Conflict
from bakery.models.admin_user import AdminUser
from bakery.repositories.admin_repo import AdminUserRepository
from bakery.schemas.admin import AdminCreate, AdminLogin, AdminRead, LoginResult

logger = logging.getLogger(__name__)


class AdminService:
    """
    Back-office accounts: login, listing and creation.
    """

    def __init__(self, repo: AdminUserRepository):
        self.repo = repo

    def login(self, session: Session, payload: AdminLogin) -> LoginResult:
        """
        Exchange username (or email) + password for a bearer token.

        Unknown login, wrong password and inactive accounts all fail with
        the same 401 so the response does not reveal which accounts exist.
        """
        admin = self.repo.get_active_by_login(session, payload.username.strip())
        if admin is None or not verify_password(payload.password, admin.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid username or password",
            )

        admin.last_login = datetime.now(timezone.utc)
        admin = self.repo.save(session, admin)

        return LoginResult(
            token=create_access_token(admin),
            admin=AdminRead.model_validate(admin, from_attributes=True),
        )

    def list_admins(self, session: Session) -> list[AdminRead]:
        return [
            AdminRead.model_validate(a, from_attributes=True)
            for a in self.repo.list_all(session)
        ]

    def create_admin(self, session: Session, payload: AdminCreate) -> AdminRead:
        email = str(payload.email).lower()
        if self.repo.exists_with(session, payload.username, email):
            raise Conflict(
                "Username or email already exists",
                username=payload.username,
                email=email,
            )

        admin = AdminUser(
            username=payload.username,
            email=email,
            password_hash=hash_password(payload.password),
            full_name=payload.full_name,
            role=payload.role,
        )
        admin = self.repo.create(session, admin)
        logger.info("Admin user %s created (role=%s)", admin.username, admin.role)
        return AdminRead.model_validate(admin, from_attributes=True)

    def ensure_initial_admin(
        self,
        session: Session,
        username: str | None,
        email: str | None,
        password: str | None,
    ) -> AdminUser | None:
        """
        Create the first admin account when the table is empty.

        Returns None when nothing was created (credentials not configured,
        or an admin already exists).
        """
        if not (username and email and password):
            return None
        if self.repo.count(session) > 0:
            return None

        admin = AdminUser(
            username=username,
            email=email.lower(),
            password_hash=hash_password(password),
            full_name=username,
            role="admin",
        )
        return self.repo.create(session, admin)

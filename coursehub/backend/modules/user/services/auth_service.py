import logging
from typing import Optional

from pymongo.errors import DuplicateKeyError

from backend.auth.tokens import create_access_token, get_password_hash, verify_password
from backend.modules.user.models.user_model import UserModel
from backend.modules.user.schemas.auth_schemas import LoginRequest, LoginResponse
from shared.modules.user.enums.user_role_enum import UserRole
from shared.modules.user.models.user import User

logger = logging.getLogger(__name__)


class AuthService:

    def login(self, credentials: LoginRequest) -> Optional[LoginResponse]:
        """
        Returns a bearer token for valid admin credentials, None otherwise.
        Non-admin users cannot sign in to the admin panel.
        """
        user = UserModel.find_by_email(credentials.email)
        if not user or not verify_password(credentials.password, user.hashed_password):
            logger.info(f"Failed admin login for {credentials.email}")
            return None
        if not user.is_admin():
            logger.info(f"Rejected admin login for non-admin user {user.email}")
            return None

        token = create_access_token({
            "sub": user.email,
            "role": user.role,
            "user_id": user.user_id,
        })
        return LoginResponse(access_token=token, name=user.name)

    def bootstrap_admin(self, email: Optional[str], password: Optional[str], name: str = "Administrator") -> bool:
        """
        Create the initial admin account from configuration if it does not exist yet.
        Returns True when an account was created.
        """
        if not email or not password:
            logger.debug("No admin bootstrap credentials configured")
            return False

        email = email.strip().lower()
        if UserModel.find_by_email(email):
            return False

        admin = User(
            name=name,
            email=email,
            hashed_password=get_password_hash(password),
            role=UserRole.ADMIN,
        )
        try:
            UserModel.create(admin)
        except DuplicateKeyError:
            # Another worker bootstrapped the same account first
            return False
        logger.info(f"Bootstrapped admin account {email}")
        return True

"""User accounts: registration, credential checks and self-service profile edits."""
from typing import Optional
import logging

import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from taskdesk.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from taskdesk.models.user import User
from taskdesk.services.ownership import OwnershipPolicy, enforce_ownership
from taskdesk.utils.timeutil import utcnow

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.warning("Malformed password hash encountered")
        return False


class UserService:
    """Service class for user accounts."""

    def __init__(self, session: Session):
        self.session = session

    def _commit_unique_email(self, user: User) -> None:
        """Commit a user row; a concurrent registration of the same email is a conflict."""
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.info("Email collision detected on commit")
            raise ConflictError("Email already in use")
        self.session.refresh(user)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.email == email)).first()

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.session.get(User, user_id)

    def register(self, email: str, password: str, display_name: Optional[str] = None) -> User:
        """
        Create a user account.

        Raises:
            ConflictError: if the email is already registered
        """
        if self.get_by_email(email):
            raise ConflictError("Email already in use")

        now = utcnow()
        user = User(
            email=email,
            display_name=display_name,
            password_hash=hash_password(password),
            created_at=now,
            updated_at=now,
        )
        self._commit_unique_email(user)
        logger.info("Registered user %s", user.id)
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Return the user for valid credentials, else raise AuthenticationError."""
        user = self.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid credentials")
        return user

    def get_owned(
        self,
        caller_id: str,
        user_id: str,
        policy: OwnershipPolicy = OwnershipPolicy.FORBID,
    ) -> User:
        """Load a profile the caller is allowed to act on (403 before 404)."""
        enforce_ownership(user_id, caller_id, policy, resource="User")
        user = self.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def update_profile(
        self,
        user: User,
        email: Optional[str] = None,
        display_name: Optional[str] = None,
        current_password: Optional[str] = None,
        new_password: Optional[str] = None,
    ) -> User:
        """
        Update email, display name and/or password.

        Raises:
            ConflictError: if the new email belongs to another account
            ValidationError: if the current password does not match
        """
        if email and email != user.email:
            if self.get_by_email(email):
                raise ConflictError("Email already in use")
            user.email = email

        if display_name is not None:
            user.display_name = display_name

        if new_password:
            if not verify_password(current_password or "", user.password_hash):
                raise ValidationError("Current password is incorrect")
            user.password_hash = hash_password(new_password)

        user.updated_at = utcnow()
        self._commit_unique_email(user)
        return user

    def delete(self, user: User) -> None:
        """Delete a user; owned tasks go with it."""
        self.session.delete(user)
        self.session.commit()
        logger.info("Deleted user %s", user.id)

"""Repository for store users.

Users are never hard-deleted here; accounts are switched off with
``enabled=False`` instead.
"""

from typing import List, Optional, Union

from ..exceptions import DuplicateEmailError
from ..store_schema import (
    EntityKind,
    User,
    UserCreate,
    UserRole,
    UserUpdate,
    changed_fields,
    now_iso,
)
from ..utils import get_logger
from .base import BaseRepository, find_by_id, index_of

logger = get_logger(__name__)


class UserRepository(BaseRepository):
    """Repository for User records."""

    def get(self, user_id: int) -> Optional[User]:
        return find_by_id(self.snapshot.users, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive lookup by email address."""
        wanted = email.strip().lower()
        return next((u for u in self.snapshot.users if u.email.lower() == wanted), None)

    def list(self, role: Optional[Union[UserRole, str]] = None) -> List[User]:
        users = list(self.snapshot.users)
        if role is not None:
            role = UserRole(role)
            users = [u for u in users if u.role == role]
        return users

    def list_collaborators(self) -> List[User]:
        return self.list(role=UserRole.COLLABORATOR)

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """
        Match credentials against the stored users.

        Returns:
            The user, or None for an unknown email, wrong password, or a
            disabled account
        """
        user = self.get_by_email(email)
        if user is None or user.password != password:
            return None
        if not user.enabled:
            return None
        return user

    def register(self, user_data: UserCreate) -> User:
        """Create a new user.

        Args:
            user_data: Registration data (role defaults to customer)

        Returns:
            Created User

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        if self.get_by_email(user_data.email) is not None:
            raise DuplicateEmailError(f"Email already registered: {user_data.email}")

        now = now_iso()
        with self.store.transaction("user.register") as snapshot:
            user = User(
                id=self.store.allocator(snapshot).next_id(EntityKind.USER),
                created_at=now,
                updated_at=now,
                **user_data.model_dump(),
            )
            snapshot.users.append(user)

        logger.info(f"Registered user: {user.id} ({user.email}, {user.role.value})")
        return user

    def create_collaborator(self, user_data: UserCreate) -> User:
        """Register a user whose role is always collaborator."""
        return self.register(user_data.model_copy(update={"role": UserRole.COLLABORATOR}))

    def update(self, user_id: int, user_data: UserUpdate) -> Optional[User]:
        """Update an existing user.

        Args:
            user_id: User ID
            user_data: Fields to change

        Returns:
            Updated User or None if not found
        """
        idx = index_of(self.snapshot.users, user_id)
        if idx == -1:
            return None

        changes = changed_fields(user_data, User)
        new_email = changes.get("email")
        if new_email is not None:
            owner = self.get_by_email(new_email)
            if owner is not None and owner.id != user_id:
                raise DuplicateEmailError(f"Email already registered: {new_email}")

        with self.store.transaction("user.update") as snapshot:
            updated = snapshot.users[idx].model_copy(update={**changes, "updated_at": now_iso()})
            snapshot.users[idx] = updated

        logger.info(f"Updated user: {user_id}")
        return updated

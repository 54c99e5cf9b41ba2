from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for the user directory.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def list_users(self, *, role: Optional[Role] = None, user_id: Optional[int] = None) -> Sequence[User]:
        """Active users ordered by name."""
        raise NotImplementedError

    def create_user(self, *, name: str, email: str, password_hash: str, role: Role) -> int:
        raise NotImplementedError

    def update_name(self, user_id: int, *, name: str) -> bool:
        raise NotImplementedError

    def update_user(self, user_id: int, *, name: str, email: str, password_hash: Optional[str] = None) -> bool:
        """Overwrite the directory entry; the password hash only when given."""
        raise NotImplementedError

    def delete_user(self, user_id: int) -> bool:
        """Remove the user together with their attendance and permission rows."""
        raise NotImplementedError

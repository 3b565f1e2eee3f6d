from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        name: str,
        role: Role,
        is_test_account: bool = False,
    ) -> int:
        raise NotImplementedError

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        raise NotImplementedError

    def is_test_account(self, user_id: int) -> bool:
        raise NotImplementedError

    def list_roster(self) -> Sequence[User]:
        """Every non-test account, ordered by id."""

        raise NotImplementedError

    def list_test_account_ids(self) -> set[int]:
        raise NotImplementedError

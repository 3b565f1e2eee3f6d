from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a volunteer account.

    Plain data object (no DB access code). Test accounts can log in and use the
    app, but nothing they submit is persisted or aggregated.
    """

    user_id: int
    username: str
    password_hash: str
    name: str
    role: Role
    is_test_account: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "username": self.username,
            "name": self.name,
            "role": self.role.value,
            "isTestAccount": self.is_test_account,
        }

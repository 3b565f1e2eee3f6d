from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .model import User
from .repository import UserRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    name: str
    role: Role


@dataclass(frozen=True)
class VolunteerRoster:
    """Names allowed to register; names on ``admin_names`` register as admins."""

    volunteer_names: frozenset[str] = field(default_factory=frozenset)
    admin_names: frozenset[str] = field(default_factory=frozenset)
    reserved_usernames: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def build(
        cls,
        *,
        volunteer_names: Iterable[str] = (),
        admin_names: Iterable[str] = (),
        reserved_usernames: Iterable[str] = (),
    ) -> "VolunteerRoster":
        def clean(values: Iterable[str]) -> frozenset[str]:
            return frozenset(v.strip() for v in values if v and v.strip())

        return cls(clean(volunteer_names), clean(admin_names), clean(reserved_usernames))

    def role_for(self, name: str) -> Optional[Role]:
        if name in self.admin_names:
            return Role.ADMIN
        if name in self.volunteer_names:
            return Role.VOLUNTEER
        return None


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")

        return SessionUser(user_id=user.user_id, name=user.name, role=user.role)

    def current_user(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise AuthenticationError("Session user no longer exists")
        return user


class AccountService:
    """Use case: self-registration against the volunteer roster, password changes."""

    def __init__(self, users: UserRepository, roster: VolunteerRoster):
        self._users = users
        self._roster = roster

    def register(self, *, username: str, password: str, name: str) -> User:
        username = require_non_empty(username, "Username")
        name = require_non_empty(name, "Name")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if username in self._roster.reserved_usernames:
            raise ValidationError("This username is reserved")
        if self._users.get_by_username(username):
            raise ValidationError("Username is already taken")

        role = self._roster.role_for(name)
        if role is None:
            raise ValidationError("Name is not on the volunteer roster")

        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            name=name,
            role=role,
        )
        return User(
            user_id=user_id,
            username=username,
            password_hash="",
            name=name,
            role=role,
        )

    def change_password(self, user_id: int, *, current_password: str, new_password: str) -> None:
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("User does not exist")
        if not check_password_hash(user.password_hash, current_password or ""):
            raise AuthenticationError("Current password is incorrect")
        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)

        if not self._users.update_password(user_id, password_hash=generate_password_hash(new_password)):
            raise ValidationError("Password update failed")

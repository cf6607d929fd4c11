"""UserService: identity sign-up and user lookup.

Pipeline: PARSE → VALIDATE → UNIQUENESS → HASH → PERSIST → RESPOND

Passwords are stored only as salted PBKDF2-SHA256 hashes in the form
``pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>``.
"""

from __future__ import annotations

import hashlib
import secrets
from typing import TYPE_CHECKING

from sqlalchemy import insert, or_, select

from musdis.domain.models import User, UserInfo
from musdis.infrastructure.database.schema import users
from musdis.results import ConflictError, NotFoundError, ValueResult
from musdis.services._helpers import new_id, now_iso, rejected
from musdis.services.base import BaseService
from musdis.services.tracing import logged

if TYPE_CHECKING:
    from sqlalchemy import Connection

    from musdis.domain.requests import SignUpRequest

_HASH_ALGORITHM = "pbkdf2_sha256"


def hash_password(password: str, *, iterations: int) -> str:
    """Salted PBKDF2-SHA256 hash of *password*."""
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{_HASH_ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"


class UserService(BaseService):
    """Handles user registration and implements :class:`IdentityUserService`."""

    @logged
    def sign_up(self, request: SignUpRequest) -> ValueResult[User]:
        """Register a new user. All validation messages are reported together."""
        identity = self._settings.identity
        vr = request.check(password_min_length=identity.password_min_length)
        if not vr.valid:
            return rejected("Cannot sign up, incorrect data!", vr).to_value_result()

        def _sign_up(conn: Connection) -> ValueResult[User]:
            taken = conn.execute(
                select(users.c.normalized_user_name, users.c.normalized_email).where(
                    or_(
                        users.c.normalized_user_name == request.user_name.upper(),
                        users.c.normalized_email == request.email.upper(),
                    )
                )
            ).first()
            if taken is not None:
                field = (
                    "UserName"
                    if taken.normalized_user_name == request.user_name.upper()
                    else "Email"
                )
                return ConflictError(f"{field} is already taken.").to_value_result()

            user = User(id=new_id(), user_name=request.user_name, email=request.email)
            conn.execute(
                insert(users).values(
                    id=user.id,
                    user_name=user.user_name,
                    normalized_user_name=user.user_name.upper(),
                    email=user.email,
                    normalized_email=user.email.upper(),
                    password_hash=hash_password(
                        request.password, iterations=identity.hash_iterations
                    ),
                    created=now_iso(),
                )
            )
            return ValueResult.success(user)

        return self._catalog.atomic(_sign_up)

    @logged
    def get_user_info(self, user_id: str) -> ValueResult[UserInfo]:
        """Public information of *user_id*."""
        with self._catalog.read() as conn:
            row = conn.execute(
                select(users.c.id, users.c.user_name, users.c.email).where(users.c.id == user_id)
            ).first()
        if row is None:
            return NotFoundError(f"User with Id = {user_id} is not found.").to_value_result()
        return ValueResult.success(UserInfo(id=row.id, user_name=row.user_name, email=row.email))

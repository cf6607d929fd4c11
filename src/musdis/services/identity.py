"""Identity contract consumed by the music catalog services.

The catalog never reads the users table. It asks an
:class:`IdentityUserService` and propagates its failures unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from musdis.domain.models import UserInfo
    from musdis.results import ValueResult


class IdentityUserService(Protocol):
    """Source of user information for other services."""

    def get_user_info(self, user_id: str) -> ValueResult[UserInfo]:
        """Return the user's public information, or a NotFoundError failure."""
        ...

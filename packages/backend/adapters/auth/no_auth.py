"""No-authentication provider.

Every caller is the same local user. Used for single-user installs where
saved configurations need an owner but no login.
"""

from core.interfaces import IAuthProvider, User

DEFAULT_USER_ID = "default-user"


class NoAuthProvider(IAuthProvider):
    """Always resolves to the default local user, with or without a token."""

    def __init__(self):
        self._default_user = User(
            id=DEFAULT_USER_ID,
            username="local",
            metadata={"provider": "no_auth"},
        )

    async def validate_token(self, token: str | None) -> User:
        return self._default_user

    def requires_auth(self) -> bool:
        return False

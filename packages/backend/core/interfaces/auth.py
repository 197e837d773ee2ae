"""Authentication provider interface definitions.

Saved configurations are owned by a user. Providers resolve a bearer
token to that user; the basic deployment uses a single local user.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class User:
    """Authenticated user entity."""

    id: str
    username: str
    metadata: dict[str, Any] = field(default_factory=dict)


class IAuthProvider(ABC):
    """Interface for authentication providers."""

    @abstractmethod
    async def validate_token(self, token: str | None) -> User:
        """Resolve a bearer token to a user.

        Raises:
            AuthError: Token missing, unknown or expired.
        """
        ...

    @abstractmethod
    def requires_auth(self) -> bool:
        """Whether callers must present a token."""
        ...

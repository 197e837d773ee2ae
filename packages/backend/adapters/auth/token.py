"""Static bearer-token provider.

Tokens are configured as a mapping of token to user id
(INFRALENS_API_TOKENS='{"secret": "alice"}').
"""

import hmac
import logging

from core.exceptions import AuthError
from core.interfaces import IAuthProvider, User

logger = logging.getLogger(__name__)


class TokenAuthProvider(IAuthProvider):
    """Resolves configured bearer tokens to user ids."""

    def __init__(self, tokens: dict[str, str]):
        self._tokens = dict(tokens)

    async def validate_token(self, token: str | None) -> User:
        if not token:
            raise AuthError("Missing bearer token")

        for known, user_id in self._tokens.items():
            if hmac.compare_digest(known.encode(), token.encode()):
                return User(id=user_id, username=user_id, metadata={"provider": "token"})

        logger.warning("Rejected unknown bearer token")
        raise AuthError("Invalid bearer token")

    def requires_auth(self) -> bool:
        return True

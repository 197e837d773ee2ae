"""Authentication provider adapter implementations.

AUTH_ENABLED=false: NoAuthProvider (single local user, no login required)
AUTH_ENABLED=true: TokenAuthProvider (static bearer tokens)
"""

from .no_auth import NoAuthProvider
from .token import TokenAuthProvider

__all__ = ["NoAuthProvider", "TokenAuthProvider"]

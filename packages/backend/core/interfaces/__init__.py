"""Core interfaces for the adapter pattern.

These interfaces define contracts that allow swapping implementations
of the catalog tiers, the language model, and authentication.
"""

from .ai import (
    ChatMessage,
    ChatOptions,
    ChatResponse,
    IAIService,
)
from .auth import (
    IAuthProvider,
    User,
)
from .catalog import (
    CatalogQuery,
    ICatalogSource,
    SourceResult,
    TaskModels,
)

__all__ = [
    # Catalog
    "ICatalogSource",
    "CatalogQuery",
    "SourceResult",
    "TaskModels",
    # AI
    "IAIService",
    "ChatMessage",
    "ChatOptions",
    "ChatResponse",
    # Auth
    "IAuthProvider",
    "User",
]

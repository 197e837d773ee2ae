"""Core configuration, interfaces, and adapter factory.

- Settings: Application configuration
- Interfaces: Contracts for swappable implementations
- Factory: Builds catalog tiers, AI and auth adapters from settings
"""

from .config import Settings, settings
from .factory import (
    AdapterConfig,
    AdapterFactory,
    create_factory_from_settings,
    get_factory,
)

__all__ = [
    # Configuration
    "Settings",
    "settings",
    # Factory
    "AdapterConfig",
    "AdapterFactory",
    "create_factory_from_settings",
    "get_factory",
]

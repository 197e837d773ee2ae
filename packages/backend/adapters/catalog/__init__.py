"""Catalog source implementations.

Tier order: Hugging Face Hub (live), application database, static table.
"""

from .database import DatabaseCatalogSource
from .huggingface import HuggingFaceCatalogSource
from .static import StaticCatalogSource

__all__ = [
    "DatabaseCatalogSource",
    "HuggingFaceCatalogSource",
    "StaticCatalogSource",
]

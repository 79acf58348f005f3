"""Content sources and the per-category provider registry."""

from .registry import Provider, ProviderRegistry, build_default_registry
from .wikipedia import CatFactSource, WikipediaSource

__all__ = [
    "Provider",
    "ProviderRegistry",
    "build_default_registry",
    "WikipediaSource",
    "CatFactSource",
]

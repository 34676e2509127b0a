"""Per-source-type handlers and their registry."""

from sifflet_sources.handlers.base import (
    FieldConverter,
    FieldShape,
    FieldSpec,
    VariantHandler,
)
from sifflet_sources.handlers.registry import VariantRegistry, default_registry

__all__ = [
    "FieldConverter",
    "FieldShape",
    "FieldSpec",
    "VariantHandler",
    "VariantRegistry",
    "default_registry",
]

"""Variant registry - the table of supported source types.

The registry is built once and never mutated. Every lookup returns a fresh
handler; unknown tags raise :class:`UnsupportedSourceTypeError`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from functools import lru_cache
from types import MappingProxyType

from sifflet_sources.domain.tags import to_schema_tag
from sifflet_sources.errors import UnsupportedSourceTypeError
from sifflet_sources.handlers.base import VariantHandler

HandlerFactory = Callable[[], VariantHandler]


class VariantRegistry:
    """Immutable mapping from schema tag to handler factory.

    Args:
        factories: Schema tag -> zero-argument callable building a handler
    """

    def __init__(self, factories: Mapping[str, HandlerFactory]) -> None:
        self._factories = MappingProxyType(dict(factories))

    @classmethod
    def build(cls, handler_classes: Iterable[type[VariantHandler]]) -> VariantRegistry:
        """Build a registry from handler classes, keyed by their schema tag.

        Raises:
            ValueError: If two handlers declare the same tag
        """
        factories: dict[str, HandlerFactory] = {}
        for handler_cls in handler_classes:
            tag = handler_cls.parameters_model.SCHEMA_TAG
            if tag in factories:
                raise ValueError(f"Duplicate source type tag: {tag}")
            factories[tag] = handler_cls
        return cls(factories)

    def lookup(self, tag: str) -> VariantHandler:
        """Return a handler for a schema (lowercase) tag."""
        factory = self._factories.get(tag)
        if factory is None:
            raise UnsupportedSourceTypeError(tag)
        return factory()

    def lookup_wire(self, wire_tag: str) -> VariantHandler:
        """Return a handler for a wire (uppercase) tag."""
        tag = to_schema_tag(wire_tag)
        if tag not in self._factories:
            raise UnsupportedSourceTypeError(wire_tag)
        return self.lookup(tag)

    def all_tags(self) -> frozenset[str]:
        return frozenset(self._factories)

    def handlers(self) -> Iterator[VariantHandler]:
        """Yield one fresh handler per tag, sorted by tag."""
        for tag in sorted(self._factories):
            yield self._factories[tag]()

    def __contains__(self, tag: object) -> bool:
        return tag in self._factories

    def __len__(self) -> int:
        return len(self._factories)


@lru_cache(maxsize=1)
def default_registry() -> VariantRegistry:
    """Registry of every supported source type, built once per process."""
    from sifflet_sources.handlers.variants import ALL_HANDLERS

    return VariantRegistry.build(ALL_HANDLERS)

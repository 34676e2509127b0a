"""Resolve which source type a flat parameters block describes."""

from __future__ import annotations

from sifflet_sources.domain.parameters import ParametersModel, VariantParameters
from sifflet_sources.errors import UnresolvableParametersError
from sifflet_sources.handlers.base import VariantHandler
from sifflet_sources.handlers.registry import VariantRegistry


class ParametersResolver:
    """Find the single handler whose slot is populated.

    ``source_type`` is never consulted: it may be stale or unknown until the
    block has been resolved once.
    """

    def __init__(self, registry: VariantRegistry) -> None:
        self.registry = registry

    def resolve(self, container: ParametersModel) -> VariantHandler:
        """Return the handler of the populated slot.

        Raises:
            UnresolvableParametersError: If zero or several slots are set
        """
        matches = [h for h in self.registry.handlers() if h.matches_container(container)]
        if len(matches) != 1:
            raise UnresolvableParametersError(h.schema_tag() for h in matches)
        return matches[0]

    def resolve_parameters(self, container: ParametersModel) -> VariantParameters:
        """Return the populated parameter record itself."""
        handler = self.resolve(container)
        return getattr(container, handler.schema_tag())

    def with_source_type(self, container: ParametersModel) -> ParametersModel:
        """Copy of ``container`` with ``source_type`` set from the populated slot."""
        return container.with_source_type(self.resolve(container).schema_tag())

"""Type-change planner.

The API rejects changing the type of an existing source, so a change of source
type between the stored and the planned parameters forces a replacement.
When either side cannot be resolved the planner warns and replaces anyway.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sifflet_sources.diagnostics import Diagnostics
from sifflet_sources.domain.parameters import ParametersModel
from sifflet_sources.errors import SourceParametersError
from sifflet_sources.handlers.registry import VariantRegistry
from sifflet_sources.resolver import ParametersResolver

logger = logging.getLogger(__name__)

REPLACE_DESCRIPTION = "If the source type changes, the resource must be replaced."


@dataclass
class ReplacementPlan:
    """Outcome of comparing two parameter blocks.

    Attributes:
        requires_replace: True when the source must be destroyed and recreated
        previous_type: Resolved tag of the stored block, if any
        next_type: Resolved tag of the planned block, if any
        diagnostics: Warnings raised while resolving
    """

    requires_replace: bool
    previous_type: str | None = None
    next_type: str | None = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


class TypeChangePlanner:
    """Decide whether a parameters change requires replacing the source."""

    def __init__(self, registry: VariantRegistry) -> None:
        self.resolver = ParametersResolver(registry)

    def plan(
        self,
        previous: ParametersModel | None,
        next: ParametersModel | None,
    ) -> ReplacementPlan:
        """Compare the stored block with the planned block.

        Args:
            previous: Parameters currently stored (None when unknown)
            next: Parameters about to be applied (None when unknown)

        Returns:
            ReplacementPlan, replacing whenever either type is unknown
        """
        result = ReplacementPlan(requires_replace=True)

        result.previous_type = self._resolve(
            previous, "Unable to determine source type from state", result.diagnostics
        )
        if result.previous_type is None:
            return result

        result.next_type = self._resolve(
            next, "Unable to determine next source type from plan", result.diagnostics
        )
        if result.next_type is None:
            return result

        result.requires_replace = result.previous_type != result.next_type
        if result.requires_replace:
            logger.info(
                "Source type changes from %s to %s, replacement required",
                result.previous_type,
                result.next_type,
            )
        return result

    def _resolve(
        self,
        container: ParametersModel | None,
        summary: str,
        diagnostics: Diagnostics,
    ) -> str | None:
        if container is None:
            detail = "no parameters available"
        else:
            try:
                return self.resolver.resolve(container).schema_tag()
            except SourceParametersError as e:
                detail = str(e)
        logger.warning("%s: %s", summary, detail)
        diagnostics.add_warning(summary, detail)
        return None

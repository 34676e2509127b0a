"""Source service - request assembly and response decoding.

Ties the resolver, handlers and decoder together for whole sources:

    service = SourceService(default_registry())
    body = service.build_create_request(source)    # CreateSourceDto
    source = service.read_source(response.content)  # SourceModel
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from pydantic import ValidationError

from sifflet_sources.diagnostics import Diagnostics
from sifflet_sources.domain.enums import parse_tag_kind, tag_kind_to_string
from sifflet_sources.domain.source import SourceFilter, SourceModel, TagReference
from sifflet_sources.domain.tags import to_schema_tag
from sifflet_sources.errors import CredentialError, SourceParametersError
from sifflet_sources.handlers.base import VariantHandler
from sifflet_sources.handlers.registry import VariantRegistry
from sifflet_sources.resolver import ParametersResolver
from sifflet_sources.wire.decoder import OneOfDecoder
from sifflet_sources.wire.dtos import (
    CreateSourceDto,
    SourceDto,
    SourceFilterDto,
    SourcePage,
    TagDto,
    UpdateSourceDto,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class SourcePageResult:
    """Decoded page of sources."""

    total_elements: int
    sources: list[SourceModel] = field(default_factory=list)


class SourceService:
    """Build API requests from sources and sources from API responses."""

    def __init__(self, registry: VariantRegistry) -> None:
        self.registry = registry
        self.resolver = ParametersResolver(registry)
        self.decoder = OneOfDecoder.from_registry(registry)

    def check_credentials(self, source: SourceModel, handler: VariantHandler) -> None:
        """Enforce the credential rule of the source type.

        Raises:
            CredentialError: If a credential is missing but required, or set
                but ignored by the source type
        """
        if handler.requires_credential() and not source.credentials:
            raise CredentialError(
                "Unable to create source",
                "Credentials are required for this source type, but got an empty string",
            )
        if not handler.requires_credential() and source.credentials is not None:
            raise CredentialError(
                "Invalid credential",
                "Credentials are not required for this source type and would be "
                "ignored, but got a non-null string",
            )

    def build_create_request(self, source: SourceModel) -> CreateSourceDto:
        handler = self.resolver.resolve(source.parameters)
        self.check_credentials(source, handler)
        body = handler.to_create_dto(source.parameters)
        return CreateSourceDto(
            name=source.name,
            description=source.description,
            credentials=source.credentials,
            schedule=source.schedule,
            timezone=source.timezone,
            tags=[_tag_to_dto(t) for t in source.tags],
            parameters=body.shape,
        )

    def build_update_request(self, source: SourceModel) -> UpdateSourceDto:
        handler = self.resolver.resolve(source.parameters)
        self.check_credentials(source, handler)
        body = handler.to_update_dto(source.parameters)
        return UpdateSourceDto(
            name=source.name,
            description=source.description,
            credentials=source.credentials,
            schedule=source.schedule,
            timezone=source.timezone,
            tags=[_tag_to_dto(t) for t in source.tags],
            parameters=body.shape,
        )

    def build_search_filter(self, search: SourceFilter) -> SourceFilterDto:
        """Convert search criteria to the filter of a search request.

        Raises:
            UnsupportedSourceTypeError: If a filtered source type is unknown
        """
        wire_types = [
            self.registry.lookup(to_schema_tag(t)).wire_tag() for t in search.types
        ]
        return SourceFilterDto(
            text_search=search.text_search,
            types=wire_types or None,
            tags=[_tag_to_dto(t) for t in search.tags] or None,
        )

    def read_source(self, raw: bytes | str | dict[str, Any]) -> SourceModel:
        """Decode a source returned by the API.

        Args:
            raw: JSON bytes/text, or an already parsed object

        Raises:
            pydantic.ValidationError: If the envelope is malformed
            SourceParametersError: If the parameters cannot be discriminated
        """
        if isinstance(raw, dict):
            dto = SourceDto.model_validate(raw)
        else:
            dto = SourceDto.model_validate_json(raw)

        decoded = self.decoder.decode_object(dto.parameters)
        handler = self.registry.lookup(decoded.tag)
        params = handler.from_dto(decoded.dto)
        logger.debug("Read source %s as %s", dto.id, handler.wire_tag())

        return SourceModel(
            id=dto.id,
            name=dto.name,
            description=dto.description,
            credentials=dto.credentials,
            schedule=dto.schedule,
            timezone=dto.timezone,
            tags=[_tag_from_dto(t) for t in dto.tags or []],
            parameters=handler.to_parameters_model(params),
        )

    def read_page(self, raw: bytes | str | dict[str, Any]) -> SourcePageResult:
        """Decode a page of sources, each item independently."""
        if isinstance(raw, dict):
            page = SourcePage.model_validate(raw)
        else:
            page = SourcePage.model_validate_json(raw)
        return SourcePageResult(
            total_elements=page.total_elements,
            sources=[self.read_source(item) for item in page.data],
        )

    def diagnose(
        self, summary: str, operation: Callable[[], T]
    ) -> tuple[T | None, Diagnostics]:
        """Run ``operation`` and report failures as diagnostics.

        Returns:
            (result, diagnostics); result is None when an error was recorded
        """
        diagnostics = Diagnostics()
        try:
            return operation(), diagnostics
        except CredentialError as e:
            diagnostics.add_exception(e.summary, e)
        except (SourceParametersError, ValidationError) as e:
            diagnostics.add_exception(summary, e)
        return None, diagnostics


def _tag_to_dto(tag: TagReference) -> TagDto:
    return TagDto(
        id=tag.id,
        name=tag.name,
        kind=tag_kind_to_string(tag.kind) if tag.kind is not None else None,
    )


def _tag_from_dto(tag: TagDto) -> TagReference:
    # The API echoes id, name and kind; the id alone identifies the tag
    if tag.id is not None:
        return TagReference(id=tag.id)
    return TagReference(
        name=tag.name,
        kind=parse_tag_kind(tag.kind) if tag.kind is not None else None,
    )

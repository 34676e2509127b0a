"""Discriminating decoder for oneOf parameter payloads.

A raw parameters payload is tried against every candidate DTO shape. A
candidate survives when the payload decodes into it, the decoded value is not
empty, its required fields are present and its ``type`` equals the candidate's
expected wire tag. Exactly one survivor is required.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from sifflet_sources.errors import (
    AmbiguousMatchError,
    MalformedShapeError,
    NoMatchError,
)
from sifflet_sources.wire.dtos import ParametersDto

if TYPE_CHECKING:
    from sifflet_sources.handlers.registry import VariantRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Decoded:
    """Result of a successful discrimination."""

    tag: str
    dto: ParametersDto


class OneOfDecoder:
    """Decode a parameters payload into exactly one candidate shape.

    Args:
        candidates: Schema tag -> DTO class to try, usually built from the
            registry with :meth:`from_registry`
    """

    def __init__(self, candidates: Mapping[str, type[ParametersDto]]) -> None:
        self._candidates = MappingProxyType(dict(candidates))

    @classmethod
    def from_registry(cls, registry: VariantRegistry) -> OneOfDecoder:
        return cls({h.schema_tag(): h.dto_model for h in registry.handlers()})

    @property
    def candidates(self) -> Mapping[str, type[ParametersDto]]:
        return self._candidates

    def decode(self, raw: bytes | str) -> Decoded:
        """Decode raw JSON bytes or text.

        Raises:
            NoMatchError: No candidate matched (including invalid JSON)
            AmbiguousMatchError: More than one candidate matched
            MalformedShapeError: The payload names a known type but its fields
                are invalid for that type
        """
        try:
            obj = json.loads(raw)
        except ValueError as e:
            raise NoMatchError(f"data is not valid JSON: {e}") from e
        return self.decode_object(obj)

    def decode_object(self, obj: Any) -> Decoded:
        """Decode an already-parsed JSON value (e.g. a page item)."""
        if not isinstance(obj, dict):
            raise NoMatchError(
                f"data matches no known shape (expected an object, got "
                f"{type(obj).__name__})"
            )

        declared_type = obj.get("type")
        survivors: list[Decoded] = []
        # Rejection reason of a candidate whose expected type was declared
        typed_rejection: MalformedShapeError | None = None

        for tag, dto_model in self._candidates.items():
            expected = dto_model.wire_type()
            try:
                dto = dto_model.model_validate(obj)
            except ValidationError as e:
                logger.debug("Candidate %s rejected: %s", tag, e)
                if declared_type == expected and typed_rejection is None:
                    typed_rejection = MalformedShapeError(expected, _first_error(e))
                continue

            if not dto.model_fields_set:
                logger.debug("Candidate %s rejected: empty decode", tag)
                continue

            try:
                dto.validate_shape()
            except MalformedShapeError as e:
                logger.debug("Candidate %s rejected: %s", tag, e)
                if declared_type == expected and typed_rejection is None:
                    typed_rejection = e
                continue

            if dto.type != expected:
                logger.debug(
                    "Candidate %s rejected: type %r != %r", tag, dto.type, expected
                )
                continue

            survivors.append(Decoded(tag, dto))

        if len(survivors) == 1:
            return survivors[0]
        if len(survivors) > 1:
            raise AmbiguousMatchError(d.tag for d in survivors)
        if typed_rejection is not None:
            raise typed_rejection
        raise NoMatchError()


def _first_error(exc: ValidationError) -> str:
    """Readable summary of a pydantic validation error."""
    errors = exc.errors()
    if not errors:
        return str(exc)
    err = errors[0]
    location = ".".join(str(part) for part in err.get("loc", ()))
    message = err.get("msg", "invalid value")
    if location:
        return f"{location}: {message}"
    return message

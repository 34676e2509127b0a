"""Variant handler - conversions for one source type.

A handler is declared, not coded: subclasses name their parameter record, their
DTO, whether they need a credential, and any fields whose values need
converting between the two sides. Fields without a converter are copied as is.
"""

from __future__ import annotations

import logging
import types
import typing
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel

from sifflet_sources.domain.parameters import ParametersModel, VariantParameters
from sifflet_sources.domain.tags import to_wire_tag
from sifflet_sources.errors import ContractViolationError, ParametersParseError
from sifflet_sources.wire.dtos import (
    CreateParametersBody,
    ParametersDto,
    UpdateParametersBody,
)

logger = logging.getLogger(__name__)


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class FieldConverter:
    """Value conversion for one field, in both directions."""

    to_wire: Callable[[Any], Any] = _identity
    from_wire: Callable[[Any], Any] = _identity


IDENTITY = FieldConverter()


@dataclass(frozen=True)
class FieldSpec:
    """Description of one configuration field.

    Attributes:
        name: Configuration (snake_case) name
        wire_name: API (camelCase) name
        kind: One of string, int, bool, enum, list
        required: Whether the field must be set
        description: Human-readable description
        choices: Allowed values for enum fields
        children: Nested fields for lists of objects
    """

    name: str
    wire_name: str
    kind: str
    required: bool
    description: str = ""
    choices: tuple[str, ...] = ()
    children: tuple[FieldSpec, ...] = ()


@dataclass(frozen=True)
class FieldShape:
    """Field layout of one source type."""

    source_type: str
    fields: tuple[FieldSpec, ...] = field(default_factory=tuple)

    @property
    def required(self) -> list[str]:
        return [f.name for f in self.fields if f.required]

    @property
    def optional(self) -> list[str]:
        return [f.name for f in self.fields if not f.required]


def _unwrap_optional(annotation: Any) -> Any:
    """Strip ``None`` from ``X | None``."""
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _describe(
    model: type[BaseModel], wire_model: type[BaseModel] | None
) -> tuple[FieldSpec, ...]:
    specs = []
    for name, info in model.model_fields.items():
        annotation = _unwrap_optional(info.annotation)
        wire_info = wire_model.model_fields.get(name) if wire_model else None
        wire_name = (wire_info.alias if wire_info else None) or name
        choices: tuple[str, ...] = ()
        children: tuple[FieldSpec, ...] = ()

        if typing.get_origin(annotation) is list:
            kind = "list"
            (item,) = typing.get_args(annotation)
            if isinstance(item, type) and issubclass(item, BaseModel):
                wire_item = None
                if wire_info is not None:
                    wire_list = _unwrap_optional(wire_info.annotation)
                    (wire_item,) = typing.get_args(wire_list)
                children = _describe(item, wire_item)
        elif isinstance(annotation, type) and issubclass(annotation, Enum):
            kind = "enum"
            choices = tuple(str(m.value) for m in annotation)
        elif annotation is bool:
            kind = "bool"
        elif annotation is int:
            kind = "int"
        else:
            kind = "string"

        specs.append(
            FieldSpec(
                name=info.alias or name,
                wire_name=wire_name,
                kind=kind,
                required=info.is_required(),
                description=info.description or "",
                choices=choices,
                children=children,
            )
        )
    return tuple(specs)


class VariantHandler:
    """Conversions between the configuration and the wire for one source type.

    Subclasses set the class attributes below. Handlers hold no state.
    """

    parameters_model: ClassVar[type[VariantParameters]]
    dto_model: ClassVar[type[ParametersDto]]
    requires_credential_flag: ClassVar[bool] = True
    converters: ClassVar[Mapping[str, FieldConverter]] = {}

    def schema_tag(self) -> str:
        return self.parameters_model.SCHEMA_TAG

    def wire_tag(self) -> str:
        return to_wire_tag(self.schema_tag())

    def requires_credential(self) -> bool:
        return self.requires_credential_flag

    def field_shape(self) -> FieldShape:
        """Describe the configuration fields of this source type."""
        return FieldShape(
            source_type=self.schema_tag(),
            fields=_describe(self.parameters_model, self.dto_model),
        )

    def matches_container(self, container: ParametersModel) -> bool:
        """True when this source type's slot is populated."""
        return container.slot(self.schema_tag()) is not None

    def to_create_dto(self, container: ParametersModel) -> CreateParametersBody:
        """Build the parameters section of a create request.

        Raises:
            ContractViolationError: If this source type's slot is empty
            MalformedShapeError: If the built DTO misses required fields
        """
        return CreateParametersBody(self._build_dto(container))

    def to_update_dto(self, container: ParametersModel) -> UpdateParametersBody:
        """Build the parameters section of an update request."""
        return UpdateParametersBody(self._build_dto(container))

    def from_dto(self, dto: ParametersDto) -> VariantParameters:
        """Convert a decoded DTO back into the parameter record.

        Raises:
            ParametersParseError: If ``dto`` is not this source type's shape
            MalformedShapeError: If required fields are missing
        """
        if not isinstance(dto, self.dto_model):
            raise ParametersParseError(self.schema_tag(), type(dto).__name__)
        if dto.type is not None and dto.type != self.wire_tag():
            raise ParametersParseError(self.schema_tag(), dto.type)
        dto.validate_shape()

        values = {}
        for name in self.parameters_model.model_fields:
            value = getattr(dto, name, None)
            if value is None:
                continue
            values[name] = self._converter(name).from_wire(value)
        return self.parameters_model(**values)

    def to_parameters_model(self, params: VariantParameters) -> ParametersModel:
        """Wrap a parameter record into a flat container."""
        if not isinstance(params, self.parameters_model):
            raise ContractViolationError(
                f"{type(params).__name__} is not a {self.schema_tag()} parameters record"
            )
        return ParametersModel.from_parameters(params)

    def _converter(self, name: str) -> FieldConverter:
        return self.converters.get(name, IDENTITY)

    def _build_dto(self, container: ParametersModel) -> ParametersDto:
        params = container.slot(self.schema_tag())
        if params is None:
            raise ContractViolationError(
                f"{self.schema_tag()} parameters are not set"
            )
        logger.debug("Building %s parameters DTO", self.wire_tag())

        values = {}
        for name in self.parameters_model.model_fields:
            value = getattr(params, name)
            if value is None:
                continue
            values[name] = self._converter(name).to_wire(value)
        dto = self.dto_model(type=self.wire_tag(), **values)
        dto.validate_shape()
        return dto

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.schema_tag()!r})"

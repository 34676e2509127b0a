"""Domain models for source parameters."""

from sifflet_sources.domain.enums import (
    GitConnectionAuthType,
    MysqlTlsVersion,
    TagKind,
)
from sifflet_sources.domain.parameters import (
    GitConnection,
    ParametersModel,
    SourceParameters,
    VariantParameters,
)
from sifflet_sources.domain.source import SourceModel, TagReference
from sifflet_sources.domain.tags import to_schema_tag, to_wire_tag

__all__ = [
    "GitConnection",
    "GitConnectionAuthType",
    "MysqlTlsVersion",
    "ParametersModel",
    "SourceModel",
    "SourceParameters",
    "TagKind",
    "TagReference",
    "VariantParameters",
    "to_schema_tag",
    "to_wire_tag",
]

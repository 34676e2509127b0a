"""Wire-side DTOs and the oneOf decoder."""

from sifflet_sources.wire.decoder import Decoded, OneOfDecoder
from sifflet_sources.wire.dtos import (
    CreateParametersBody,
    CreateSourceDto,
    ParametersBody,
    ParametersDto,
    SourceDto,
    SourcePage,
    TagDto,
    UpdateParametersBody,
    UpdateSourceDto,
)

__all__ = [
    "CreateParametersBody",
    "CreateSourceDto",
    "Decoded",
    "OneOfDecoder",
    "ParametersBody",
    "ParametersDto",
    "SourceDto",
    "SourcePage",
    "TagDto",
    "UpdateParametersBody",
    "UpdateSourceDto",
]

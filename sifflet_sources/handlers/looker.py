"""Looker handler - the one source type with nested parameters."""

from __future__ import annotations

from sifflet_sources.domain.enums import (
    git_connection_auth_type_to_string,
    parse_git_connection_auth_type,
)
from sifflet_sources.domain.parameters import GitConnection, LookerParameters
from sifflet_sources.errors import MalformedShapeError
from sifflet_sources.handlers.base import FieldConverter, VariantHandler
from sifflet_sources.wire.dtos import GitConnectionDto, LookerParametersDto


def git_connections_to_wire(connections: list[GitConnection]) -> list[GitConnectionDto]:
    """Convert Git connections to their DTOs, preserving order."""
    return [
        GitConnectionDto(
            auth_type=git_connection_auth_type_to_string(c.auth_type),
            branch=c.branch,
            secret_id=c.secret_id,
            url=c.url,
        )
        for c in connections
    ]


def git_connections_from_wire(dtos: list[GitConnectionDto]) -> list[GitConnection]:
    """Convert Git connection DTOs back, preserving order.

    Raises:
        MalformedShapeError: If an auth type is missing
        EnumMappingError: If an auth type is unknown
    """
    connections = []
    for i, d in enumerate(dtos):
        if d.auth_type is None:
            raise MalformedShapeError(
                LookerParametersDto.wire_type(),
                f"missing required fields: gitConnections[{i}].authType",
            )
        connections.append(
            GitConnection(
                auth_type=parse_git_connection_auth_type(d.auth_type),
                branch=d.branch,
                secret_id=d.secret_id,
                url=d.url,
            )
        )
    return connections


class LookerHandler(VariantHandler):
    parameters_model = LookerParameters
    dto_model = LookerParametersDto
    converters = {
        "git_connections": FieldConverter(
            to_wire=git_connections_to_wire,
            from_wire=git_connections_from_wire,
        ),
    }

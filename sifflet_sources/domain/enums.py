"""Closed enumerations used inside source parameters.

Parsing a string into one of these enums is partial and raises
:class:`EnumMappingError` on unknown input; rendering an enum back to a string
never fails.
"""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from sifflet_sources.errors import EnumMappingError

E = TypeVar("E", bound=Enum)


class GitConnectionAuthType(str, Enum):
    """How Looker authenticates against a LookML Git repository."""

    HTTP_AUTHORIZATION_HEADER = "HTTP_AUTHORIZATION_HEADER"
    USER_PASSWORD = "USER_PASSWORD"
    SSH = "SSH"


class MysqlTlsVersion(str, Enum):
    """TLS version used for MySQL connections."""

    TLS_V_1_2 = "TLS_V_1_2"
    TLS_V_1_3 = "TLS_V_1_3"


class TagKind(str, Enum):
    """Disambiguates regular tags from automatic classification tags."""

    TAG = "Tag"
    CLASSIFICATION = "Classification"


def parse_enum(enum_cls: type[E], value: str, field: str) -> E:
    """Map a string onto ``enum_cls``.

    Args:
        enum_cls: Target enumeration
        value: String to convert (case-sensitive)
        field: Field name reported in the error

    Raises:
        EnumMappingError: If ``value`` is not a member value
    """
    for member in enum_cls:
        if member.value == value:
            return member
    raise EnumMappingError(field, value, [m.value for m in enum_cls])


def enum_to_string(member: Enum) -> str:
    return str(member.value)


def parse_git_connection_auth_type(value: str) -> GitConnectionAuthType:
    return parse_enum(GitConnectionAuthType, value, "Git connection auth type")


def git_connection_auth_type_to_string(member: GitConnectionAuthType) -> str:
    return enum_to_string(member)


def parse_mysql_tls_version(value: str) -> MysqlTlsVersion:
    return parse_enum(MysqlTlsVersion, value, "MySQL TLS version")


def mysql_tls_version_to_string(member: MysqlTlsVersion) -> str:
    return enum_to_string(member)


def parse_tag_kind(value: str) -> TagKind:
    return parse_enum(TagKind, value, "tag kind")


def tag_kind_to_string(member: TagKind) -> str:
    return enum_to_string(member)

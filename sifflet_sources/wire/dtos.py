"""Wire DTOs - the camelCase JSON shapes exchanged with the Sifflet API.

Parameter DTOs decode structurally: every field is optional so that a payload
can be tried against every shape. Required-field rules are applied afterwards
by :meth:`ParametersDto.validate_shape`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar
from uuid import UUID

from pydantic import (
    BaseModel,
    Field,
    SerializeAsAny,
    StrictBool,
    StrictInt,
    StrictStr,
    field_validator,
)
from pydantic.alias_generators import to_camel

from sifflet_sources.domain.enums import (
    parse_git_connection_auth_type,
    parse_mysql_tls_version,
)
from sifflet_sources.domain.tags import to_wire_tag
from sifflet_sources.errors import MalformedShapeError

WIRE_CONFIG = {
    "frozen": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
    "extra": "ignore",
}


class ParametersDto(BaseModel):
    """Base class for per-source-type parameter DTOs."""

    SCHEMA_TAG: ClassVar[str] = ""
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ()

    type: StrictStr | None = None

    model_config = WIRE_CONFIG

    @classmethod
    def wire_type(cls) -> str:
        """The ``type`` constant a payload of this shape carries."""
        return to_wire_tag(cls.SCHEMA_TAG)

    @classmethod
    def wire_name(cls, field_name: str) -> str:
        return cls.model_fields[field_name].alias or field_name

    def missing_fields(self) -> list[str]:
        """Wire names of required fields that are absent."""
        return [
            self.wire_name(name)
            for name in self.REQUIRED_FIELDS
            if getattr(self, name) is None
        ]

    def validate_shape(self) -> None:
        """Check required fields.

        Raises:
            MalformedShapeError: If a required field is missing
        """
        missing = self.missing_fields()
        if missing:
            raise MalformedShapeError(
                self.wire_type(), "missing required fields: " + ", ".join(missing)
            )


class AirflowParametersDto(ParametersDto):
    SCHEMA_TAG: ClassVar[str] = "airflow"
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("host", "port")

    host: StrictStr | None = None
    port: StrictInt | None = None


class AthenaParametersDto(ParametersDto):
    SCHEMA_TAG: ClassVar[str] = "athena"
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "database",
        "datasource",
        "region",
        "role_arn",
        "s3_output_location",
        "workgroup",
    )

    database: StrictStr | None = None
    datasource: StrictStr | None = None
    region: StrictStr | None = None
    role_arn: StrictStr | None = None
    s3_output_location: StrictStr | None = None
    vpc_url: StrictStr | None = None
    workgroup: StrictStr | None = None


class BigQueryParametersDto(ParametersDto):
    SCHEMA_TAG: ClassVar[str] = "bigquery"
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("project_id", "dataset_id")

    project_id: StrictStr | None = None
    billing_project_id: StrictStr | None = None
    dataset_id: StrictStr | None = None


class DatabricksParametersDto(ParametersDto):
    SCHEMA_TAG: ClassVar[str] = "databricks"
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "catalog",
        "host",
        "http_path",
        "port",
        "schema_name",
    )

    catalog: StrictStr | None = None
    host: StrictStr | None = None
    http_path: StrictStr | None = None
    port: StrictInt | None = None
    schema_name: StrictStr | None = Field(None, alias="schema")


class DbtParametersDto(ParametersDto):
    SCHEMA_TAG: ClassVar[str] = "dbt"
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("project_name", "target")

    project_name: StrictStr | None = None
    target: StrictStr | None = None


class DbtCloudParametersDto(ParametersDto):
    SCHEMA_TAG: ClassVar[str] = "dbt_cloud"
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "account_id",
        "base_url",
        "project_id",
    )

    account_id: StrictStr | None = None
    base_url: StrictStr | None = None
    project_id: StrictStr | None = None
    job_definition_id: StrictStr | None = None


class FivetranParametersDto(ParametersDto):
    SCHEMA_TAG: ClassVar[str] = "fivetran"

    host: StrictStr | None = None


class HiveParametersDto(ParametersDto):
    SCHEMA_TAG: ClassVar[str] = "hive"
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "database",
        "jdbc_url",
        "krb5_conf",
        "principal",
    )

    atlas_base_url: StrictStr | None = None
    atlas_principal: StrictStr | None = None
    database: StrictStr | None = None
    jdbc_url: StrictStr | None = None
    krb5_conf: StrictStr | None = None
    principal: StrictStr | None = None


class GitConnectionDto(BaseModel):
    """Git connection as sent inside Looker parameters."""

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("auth_type", "secret_id", "url")

    auth_type: StrictStr | None = None
    branch: StrictStr | None = None
    secret_id: StrictStr | None = None
    url: StrictStr | None = None

    model_config = WIRE_CONFIG

    @field_validator("auth_type")
    @classmethod
    def validate_auth_type(cls, v: str | None) -> str | None:
        """Reject auth types outside the known set."""
        if v is not None:
            parse_git_connection_auth_type(v)
        return v

    def missing_fields(self) -> list[str]:
        return [
            type(self).model_fields[name].alias or name
            for name in self.REQUIRED_FIELDS
            if getattr(self, name) is None
        ]


class LookerParametersDto(ParametersDto):
    SCHEMA_TAG: ClassVar[str] = "looker"
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("host", "git_connections")

    host: StrictStr | None = None
    git_connections: list[GitConnectionDto] | None = None

    def missing_fields(self) -> list[str]:
        missing = super().missing_fields()
        for i, connection in enumerate(self.git_connections or []):
            missing.extend(
                f"gitConnections[{i}].{name}" for name in connection.missing_fields()
            )
        return missing


class MssqlParametersDto(ParametersDto):
    SCHEMA_TAG: ClassVar[str] = "mssql"
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "host",
        "database",
        "port",
        "schema_name",
    )

    host: StrictStr | None = None
    database: StrictStr | None = None
    port: StrictInt | None = None
    schema_name: StrictStr | None = Field(None, alias="schema")
    ssl: StrictBool | None = None


class MysqlParametersDto(ParametersDto):
    SCHEMA_TAG: ClassVar[str] = "mysql"
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "host",
        "database",
        "port",
        "mysql_tls_version",
    )

    host: StrictStr | None = None
    database: StrictStr | None = None
    port: StrictInt | None = None
    mysql_tls_version: StrictStr | None = None

    @field_validator("mysql_tls_version")
    @classmethod
    def validate_tls_version(cls, v: str | None) -> str | None:
        """Reject TLS versions outside the known set."""
        if v is not None:
            parse_mysql_tls_version(v)
        return v


class OracleParametersDto(ParametersDto):
    SCHEMA_TAG: ClassVar[str] = "oracle"
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "host",
        "database",
        "port",
        "schema_name",
    )

    host: StrictStr | None = None
    database: StrictStr | None = None
    port: StrictInt | None = None
    schema_name: StrictStr | None = Field(None, alias="schema")


class PostgresqlParametersDto(ParametersDto):
    SCHEMA_TAG: ClassVar[str] = "postgresql"
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "host",
        "database",
        "port",
        "schema_name",
    )

    host: StrictStr | None = None
    database: StrictStr | None = None
    port: StrictInt | None = None
    schema_name: StrictStr | None = Field(None, alias="schema")


class PowerBiParametersDto(ParametersDto):
    SCHEMA_TAG: ClassVar[str] = "power_bi"
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "client_id",
        "tenant_id",
        "workspace_id",
    )

    client_id: StrictStr | None = None
    tenant_id: StrictStr | None = None
    workspace_id: StrictStr | None = None


class QuicksightParametersDto(ParametersDto):
    SCHEMA_TAG: ClassVar[str] = "quicksight"
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("account_id", "aws_region", "role_arn")

    account_id: StrictStr | None = None
    aws_region: StrictStr | None = None
    role_arn: StrictStr | None = None


class RedshiftParametersDto(ParametersDto):
    SCHEMA_TAG: ClassVar[str] = "redshift"
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "host",
        "database",
        "port",
        "schema_name",
    )

    host: StrictStr | None = None
    database: StrictStr | None = None
    port: StrictInt | None = None
    schema_name: StrictStr | None = Field(None, alias="schema")
    ssl: StrictBool | None = None


class SnowflakeParametersDto(ParametersDto):
    SCHEMA_TAG: ClassVar[str] = "snowflake"
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "account_identifier",
        "database",
        "schema_name",
        "warehouse",
    )

    account_identifier: StrictStr | None = None
    database: StrictStr | None = None
    schema_name: StrictStr | None = Field(None, alias="schema")
    warehouse: StrictStr | None = None


class SynapseParametersDto(ParametersDto):
    SCHEMA_TAG: ClassVar[str] = "synapse"
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "database",
        "host",
        "port",
        "schema_name",
    )

    database: StrictStr | None = None
    host: StrictStr | None = None
    port: StrictInt | None = None
    schema_name: StrictStr | None = Field(None, alias="schema")


class TableauParametersDto(ParametersDto):
    SCHEMA_TAG: ClassVar[str] = "tableau"
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("host",)

    host: StrictStr | None = None
    site: StrictStr | None = None


@dataclass(frozen=True)
class ParametersBody:
    """Parameters section of a request: exactly one parameter DTO.

    Marshals to the embedded DTO's JSON with no wrapper.
    """

    shape: ParametersDto

    def as_dict(self) -> dict[str, Any]:
        return self.shape.model_dump(mode="json", by_alias=True, exclude_none=True)

    def marshal(self) -> bytes:
        return self.shape.model_dump_json(by_alias=True, exclude_none=True).encode(
            "utf-8"
        )


@dataclass(frozen=True)
class CreateParametersBody(ParametersBody):
    """Parameters section of a create request."""


@dataclass(frozen=True)
class UpdateParametersBody(ParametersBody):
    """Parameters section of an update request."""


class TagDto(BaseModel):
    """Tag reference as exchanged with the API."""

    id: UUID | None = None
    name: str | None = None
    kind: str | None = None

    model_config = WIRE_CONFIG


class SourceDto(BaseModel):
    """Source as returned by the API. ``parameters`` is left undecoded."""

    id: UUID
    name: str
    description: str | None = None
    credentials: str | None = None
    schedule: str | None = None
    timezone: str | None = None
    tags: list[TagDto] | None = None
    parameters: dict[str, Any]

    model_config = WIRE_CONFIG


class SourcePage(BaseModel):
    """One page of a source search. Items are left undecoded."""

    total_elements: int
    data: list[dict[str, Any]] = Field(default_factory=list)

    model_config = WIRE_CONFIG


class CreateSourceDto(BaseModel):
    """Request body of a source creation."""

    name: str
    description: str | None = None
    credentials: str | None = None
    schedule: str | None = None
    timezone: str | None = None
    tags: list[TagDto] | None = None
    parameters: SerializeAsAny[ParametersDto]

    model_config = WIRE_CONFIG

    def marshal(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


class UpdateSourceDto(CreateSourceDto):
    """Request body of a source update."""


class SourceFilterDto(BaseModel):
    """Filter section of a source search request."""

    text_search: str | None = None
    types: list[str] | None = None
    tags: list[TagDto] | None = None

    model_config = WIRE_CONFIG


class PaginationDto(BaseModel):
    page: int
    items_per_page: int

    model_config = WIRE_CONFIG


class SourceSearchCriteriaDto(BaseModel):
    """Request body of a source search: filter plus the requested page."""

    filter: SourceFilterDto = Field(default_factory=SourceFilterDto)
    pagination: PaginationDto

    model_config = WIRE_CONFIG

    def marshal(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")

"""Source parameters - the typed, configuration-facing side of a source.

Every source type has one frozen parameter record below. Field names are the
snake_case names users write in configuration; the camelCase wire names live
in :mod:`sifflet_sources.wire.dtos`.

The flat :class:`ParametersModel` is what a configuration block looks like:
one optional slot per source type, of which at most one may be set.
"""

from __future__ import annotations

from typing import ClassVar, Union

from pydantic import BaseModel, Field, model_validator
from typing_extensions import Self

from sifflet_sources.domain.enums import GitConnectionAuthType, MysqlTlsVersion
from sifflet_sources.errors import UnsupportedSourceTypeError


class VariantParameters(BaseModel):
    """Base class for per-source-type parameter records."""

    SCHEMA_TAG: ClassVar[str] = ""

    model_config = {"frozen": True, "extra": "forbid", "populate_by_name": True}


class AirflowParameters(VariantParameters):
    SCHEMA_TAG: ClassVar[str] = "airflow"

    host: str = Field(..., description="Airflow API host")
    port: int = Field(..., description="Airflow API port")


class AthenaParameters(VariantParameters):
    SCHEMA_TAG: ClassVar[str] = "athena"

    database: str = Field(..., description="Athena database name")
    datasource: str = Field(..., description="Athena datasource name")
    region: str = Field(
        ..., description="AWS region in which the Athena database is located"
    )
    role_arn: str = Field(..., description="AWS IAM role ARN to use for Athena queries")
    s3_output_location: str = Field(
        ..., description="S3 location to store Athena query results"
    )
    vpc_url: str | None = Field(None, description="VPC URL for Athena queries")
    workgroup: str = Field(..., description="Athena workgroup name")


class BigQueryParameters(VariantParameters):
    SCHEMA_TAG: ClassVar[str] = "bigquery"

    project_id: str = Field(
        ..., description="GCP project ID containing the BigQuery dataset"
    )
    billing_project_id: str | None = Field(None, description="GCP billing project ID")
    dataset_id: str = Field(..., description="BigQuery dataset ID")


class DatabricksParameters(VariantParameters):
    SCHEMA_TAG: ClassVar[str] = "databricks"

    catalog: str = Field(..., description="Databricks catalog name")
    host: str = Field(..., description="Databricks host")
    http_path: str = Field(..., description="Databricks HTTP path")
    port: int = Field(..., description="Databricks server port")
    schema_name: str = Field(..., alias="schema", description="Databricks schema")


class DbtParameters(VariantParameters):
    SCHEMA_TAG: ClassVar[str] = "dbt"

    project_name: str = Field(..., description="dbt project name")
    target: str = Field(
        ..., description="dbt target name (the 'target' value in profiles.yml)"
    )


class DbtCloudParameters(VariantParameters):
    SCHEMA_TAG: ClassVar[str] = "dbt_cloud"

    account_id: str = Field(..., description="dbt Cloud account ID")
    base_url: str = Field(..., description="dbt Cloud base URL")
    project_id: str = Field(..., description="dbt Cloud project ID")
    job_definition_id: str | None = Field(
        None, description="dbt Cloud job definition ID"
    )


class FivetranParameters(VariantParameters):
    SCHEMA_TAG: ClassVar[str] = "fivetran"

    host: str | None = Field(
        None, description="Fivetran host. Defaults to https://api.fivetran.com."
    )


class HiveParameters(VariantParameters):
    SCHEMA_TAG: ClassVar[str] = "hive"

    atlas_base_url: str | None = Field(None, description="Atlas server base URL")
    atlas_principal: str | None = Field(None, description="Atlas server principal")
    database: str = Field(..., description="Hive database name")
    jdbc_url: str = Field(..., description="Hive server JDBC URL")
    krb5_conf: str = Field(..., description="Kerberos configuration file (krb5.conf)")
    principal: str = Field(..., description="Hive server principal")


class GitConnection(BaseModel):
    """A repository holding LookML code."""

    auth_type: GitConnectionAuthType = Field(
        ..., description="Authentication type for the Git connection"
    )
    branch: str | None = Field(
        None, description="Branch to use. If omitted, the default branch is used."
    )
    secret_id: str = Field(
        ..., description="Secret (credential) ID to use for authentication"
    )
    url: str = Field(..., description="URL of the Git repository")

    model_config = {"frozen": True, "extra": "forbid"}


class LookerParameters(VariantParameters):
    SCHEMA_TAG: ClassVar[str] = "looker"

    host: str = Field(..., description="URL of the Looker API for your instance")
    git_connections: list[GitConnection] = Field(
        ...,
        description=(
            "Repositories storing LookML code. Pass an empty list if LookML "
            "is not used."
        ),
    )


class MssqlParameters(VariantParameters):
    SCHEMA_TAG: ClassVar[str] = "mssql"

    host: str = Field(..., description="Microsoft SQL Server hostname")
    database: str = Field(..., description="Database name")
    port: int = Field(..., description="Microsoft SQL Server port number")
    schema_name: str = Field(..., alias="schema", description="Schema name")
    ssl: bool = Field(True, description="Use TLS to connect to Microsoft SQL Server")


class MysqlParameters(VariantParameters):
    SCHEMA_TAG: ClassVar[str] = "mysql"

    host: str = Field(..., description="MySQL server hostname")
    database: str = Field(..., description="Database name")
    port: int = Field(..., description="MySQL port number")
    mysql_tls_version: MysqlTlsVersion = Field(
        ..., description="TLS version to use for MySQL connection"
    )


class OracleParameters(VariantParameters):
    SCHEMA_TAG: ClassVar[str] = "oracle"

    host: str = Field(..., description="Oracle server hostname")
    database: str = Field(..., description="Database name")
    port: int = Field(..., description="Oracle server port number")
    schema_name: str = Field(..., alias="schema", description="Schema name")


class PostgresqlParameters(VariantParameters):
    SCHEMA_TAG: ClassVar[str] = "postgresql"

    host: str = Field(..., description="PostgreSQL server hostname")
    database: str = Field(..., description="Database name")
    port: int = Field(..., description="PostgreSQL server port number")
    schema_name: str = Field(..., alias="schema", description="Schema name")


class PowerBiParameters(VariantParameters):
    SCHEMA_TAG: ClassVar[str] = "power_bi"

    client_id: str = Field(..., description="Azure AD client ID")
    tenant_id: str = Field(..., description="Azure AD tenant ID")
    workspace_id: str = Field(..., description="Power BI workspace ID")


class QuicksightParameters(VariantParameters):
    SCHEMA_TAG: ClassVar[str] = "quicksight"

    account_id: str = Field(..., description="AWS account ID")
    aws_region: str = Field(..., description="AWS region")
    role_arn: str = Field(
        ..., description="AWS IAM role ARN used to access QuickSight"
    )


class RedshiftParameters(VariantParameters):
    SCHEMA_TAG: ClassVar[str] = "redshift"

    host: str = Field(..., description="Redshift server hostname")
    database: str = Field(..., description="Database name")
    port: int = Field(..., description="Redshift server port number")
    schema_name: str = Field(..., alias="schema", description="Schema name")
    ssl: bool = Field(True, description="Use TLS to connect to Redshift")


class SnowflakeParameters(VariantParameters):
    SCHEMA_TAG: ClassVar[str] = "snowflake"

    account_identifier: str = Field(..., description="Snowflake account identifier")
    database: str = Field(..., description="Database name")
    schema_name: str = Field(..., alias="schema", description="Schema name")
    warehouse: str = Field(
        ..., description="Warehouse name, used by Sifflet to run queries"
    )


class SynapseParameters(VariantParameters):
    SCHEMA_TAG: ClassVar[str] = "synapse"

    database: str = Field(..., description="Database name")
    host: str = Field(..., description="Azure Synapse server hostname")
    port: int = Field(..., description="Azure Synapse server port number")
    schema_name: str = Field(..., alias="schema", description="Schema name")


class TableauParameters(VariantParameters):
    SCHEMA_TAG: ClassVar[str] = "tableau"

    host: str = Field(..., description="Tableau Server hostname")
    site: str | None = Field(
        None, description="Tableau Server site. Omit for the Default site."
    )


SourceParameters = Union[
    AirflowParameters,
    AthenaParameters,
    BigQueryParameters,
    DatabricksParameters,
    DbtParameters,
    DbtCloudParameters,
    FivetranParameters,
    HiveParameters,
    LookerParameters,
    MssqlParameters,
    MysqlParameters,
    OracleParameters,
    PostgresqlParameters,
    PowerBiParameters,
    QuicksightParameters,
    RedshiftParameters,
    SnowflakeParameters,
    SynapseParameters,
    TableauParameters,
]


class ParametersModel(BaseModel):
    """Flat parameters block: one optional slot per source type.

    ``source_type`` is informational and derived from whichever slot is set.
    It is never used to decide which slot is populated.
    """

    source_type: str | None = Field(
        None,
        description=(
            "Source type (e.g. bigquery, dbt, ...). Set automatically from the "
            "populated parameters block."
        ),
    )

    airflow: AirflowParameters | None = None
    athena: AthenaParameters | None = None
    bigquery: BigQueryParameters | None = None
    databricks: DatabricksParameters | None = None
    dbt: DbtParameters | None = None
    dbt_cloud: DbtCloudParameters | None = None
    fivetran: FivetranParameters | None = None
    hive: HiveParameters | None = None
    looker: LookerParameters | None = None
    mssql: MssqlParameters | None = None
    mysql: MysqlParameters | None = None
    oracle: OracleParameters | None = None
    postgresql: PostgresqlParameters | None = None
    power_bi: PowerBiParameters | None = None
    quicksight: QuicksightParameters | None = None
    redshift: RedshiftParameters | None = None
    snowflake: SnowflakeParameters | None = None
    synapse: SynapseParameters | None = None
    tableau: TableauParameters | None = None

    model_config = {"frozen": True, "extra": "forbid"}

    @model_validator(mode="after")
    def validate_at_most_one_slot(self) -> Self:
        """Reject blocks that set parameters for more than one source type."""
        populated = self.populated_tags()
        if len(populated) > 1:
            raise ValueError(
                "Provide only one parameters block, got: " + ", ".join(populated)
            )
        return self

    @classmethod
    def slot_names(cls) -> tuple[str, ...]:
        """Names of the per-source-type slots, in declaration order."""
        return tuple(name for name in cls.model_fields if name != "source_type")

    def slot(self, tag: str) -> VariantParameters | None:
        """Return the record in slot ``tag`` (None when unset)."""
        if tag not in self.slot_names():
            raise UnsupportedSourceTypeError(tag)
        return getattr(self, tag)

    def populated_tags(self) -> list[str]:
        """Tags of every non-null slot."""
        return [name for name in self.slot_names() if getattr(self, name) is not None]

    def with_source_type(self, tag: str) -> ParametersModel:
        """Copy with ``source_type`` set to ``tag``."""
        return self.model_copy(update={"source_type": tag})

    @classmethod
    def from_parameters(cls, params: VariantParameters) -> ParametersModel:
        """Build a container holding ``params`` in its own slot."""
        tag = params.SCHEMA_TAG
        return cls.model_validate({"source_type": tag, tag: params})

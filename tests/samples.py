"""Valid parameters blocks for every source type."""

from typing import Any

from sifflet_sources.domain.parameters import ParametersModel

SAMPLE_PARAMETERS: dict[str, dict[str, Any]] = {
    "airflow": {"host": "airflow.example.com", "port": 8080},
    "athena": {
        "database": "analytics",
        "datasource": "AwsDataCatalog",
        "region": "eu-west-1",
        "role_arn": "arn:aws:iam::123456789012:role/sifflet",
        "s3_output_location": "s3://bucket/athena-results/",
        "workgroup": "primary",
    },
    "bigquery": {"project_id": "my-project", "dataset_id": "analytics"},
    "databricks": {
        "catalog": "main",
        "host": "dbc-1234.cloud.databricks.com",
        "http_path": "/sql/1.0/warehouses/abc",
        "port": 443,
        "schema": "default",
    },
    "dbt": {"project_name": "jaffle_shop", "target": "prod"},
    "dbt_cloud": {
        "account_id": "70403103970000",
        "base_url": "https://cloud.getdbt.com",
        "project_id": "70403103980000",
    },
    "fivetran": {"host": "https://api.fivetran.com"},
    "hive": {
        "database": "default",
        "jdbc_url": "jdbc:hive2://hive.example.com:10000",
        "krb5_conf": "[libdefaults]\n default_realm = EXAMPLE.COM",
        "principal": "hive/_HOST@EXAMPLE.COM",
    },
    "looker": {
        "host": "https://mycompany.looker.com/api/4.0",
        "git_connections": [
            {
                "auth_type": "SSH",
                "secret_id": "ssh-key",
                "url": "git@github.com:acme/lookml.git",
            },
            {
                "auth_type": "HTTP_AUTHORIZATION_HEADER",
                "branch": "main",
                "secret_id": "gh-token",
                "url": "https://github.com/acme/lookml-2.git",
            },
        ],
    },
    "mssql": {
        "host": "mssql.example.com",
        "database": "sales",
        "port": 1433,
        "schema": "dbo",
    },
    "mysql": {
        "host": "mysql.example.com",
        "database": "shop",
        "port": 3306,
        "mysql_tls_version": "TLS_V_1_2",
    },
    "oracle": {
        "host": "oracle.example.com",
        "database": "ORCL",
        "port": 1521,
        "schema": "SALES",
    },
    "postgresql": {
        "host": "pg.example.com",
        "database": "app",
        "port": 5432,
        "schema": "public",
    },
    "power_bi": {
        "client_id": "client",
        "tenant_id": "tenant",
        "workspace_id": "workspace",
    },
    "quicksight": {
        "account_id": "123456789012",
        "aws_region": "us-east-1",
        "role_arn": "arn:aws:iam::123456789012:role/quicksight",
    },
    "redshift": {
        "host": "redshift.example.com",
        "database": "dev",
        "port": 5439,
        "schema": "public",
        "ssl": False,
    },
    "snowflake": {
        "account_identifier": "xy12345.eu-west-1",
        "database": "ANALYTICS",
        "schema": "PUBLIC",
        "warehouse": "COMPUTE_WH",
    },
    "synapse": {
        "database": "dw",
        "host": "ws.sql.azuresynapse.net",
        "port": 1433,
        "schema": "dbo",
    },
    "tableau": {"host": "tableau.example.com", "site": "marketing"},
}


def make_container(tag: str, **overrides: Any) -> ParametersModel:
    """Parameters block with only ``tag`` set."""
    return ParametersModel.model_validate(
        {tag: {**SAMPLE_PARAMETERS[tag], **overrides}}
    )

"""Handler declarations for every supported source type."""

from __future__ import annotations

from sifflet_sources.domain import parameters as p
from sifflet_sources.domain.enums import (
    mysql_tls_version_to_string,
    parse_mysql_tls_version,
)
from sifflet_sources.handlers.base import FieldConverter, VariantHandler
from sifflet_sources.handlers.looker import LookerHandler
from sifflet_sources.wire import dtos as d


class AirflowHandler(VariantHandler):
    parameters_model = p.AirflowParameters
    dto_model = d.AirflowParametersDto


class AthenaHandler(VariantHandler):
    parameters_model = p.AthenaParameters
    dto_model = d.AthenaParametersDto
    requires_credential_flag = False


class BigQueryHandler(VariantHandler):
    parameters_model = p.BigQueryParameters
    dto_model = d.BigQueryParametersDto


class DatabricksHandler(VariantHandler):
    parameters_model = p.DatabricksParameters
    dto_model = d.DatabricksParametersDto


class DbtHandler(VariantHandler):
    parameters_model = p.DbtParameters
    dto_model = d.DbtParametersDto
    requires_credential_flag = False


class DbtCloudHandler(VariantHandler):
    parameters_model = p.DbtCloudParameters
    dto_model = d.DbtCloudParametersDto


class FivetranHandler(VariantHandler):
    parameters_model = p.FivetranParameters
    dto_model = d.FivetranParametersDto


class HiveHandler(VariantHandler):
    parameters_model = p.HiveParameters
    dto_model = d.HiveParametersDto


class MssqlHandler(VariantHandler):
    parameters_model = p.MssqlParameters
    dto_model = d.MssqlParametersDto


class MysqlHandler(VariantHandler):
    parameters_model = p.MysqlParameters
    dto_model = d.MysqlParametersDto
    converters = {
        "mysql_tls_version": FieldConverter(
            to_wire=mysql_tls_version_to_string,
            from_wire=parse_mysql_tls_version,
        ),
    }


class OracleHandler(VariantHandler):
    parameters_model = p.OracleParameters
    dto_model = d.OracleParametersDto


class PostgresqlHandler(VariantHandler):
    parameters_model = p.PostgresqlParameters
    dto_model = d.PostgresqlParametersDto


class PowerBiHandler(VariantHandler):
    parameters_model = p.PowerBiParameters
    dto_model = d.PowerBiParametersDto


class QuicksightHandler(VariantHandler):
    parameters_model = p.QuicksightParameters
    dto_model = d.QuicksightParametersDto
    requires_credential_flag = False


class RedshiftHandler(VariantHandler):
    parameters_model = p.RedshiftParameters
    dto_model = d.RedshiftParametersDto


class SnowflakeHandler(VariantHandler):
    parameters_model = p.SnowflakeParameters
    dto_model = d.SnowflakeParametersDto


class SynapseHandler(VariantHandler):
    parameters_model = p.SynapseParameters
    dto_model = d.SynapseParametersDto


class TableauHandler(VariantHandler):
    parameters_model = p.TableauParameters
    dto_model = d.TableauParametersDto


ALL_HANDLERS: tuple[type[VariantHandler], ...] = (
    AirflowHandler,
    AthenaHandler,
    BigQueryHandler,
    DatabricksHandler,
    DbtHandler,
    DbtCloudHandler,
    FivetranHandler,
    HiveHandler,
    LookerHandler,
    MssqlHandler,
    MysqlHandler,
    OracleHandler,
    PostgresqlHandler,
    PowerBiHandler,
    QuicksightHandler,
    RedshiftHandler,
    SnowflakeHandler,
    SynapseHandler,
    TableauHandler,
)

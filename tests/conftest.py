"""Shared fixtures for the sifflet-sources test suite."""

import pytest
from samples import make_container

from sifflet_sources.domain.parameters import ParametersModel
from sifflet_sources.handlers.registry import VariantRegistry, default_registry
from sifflet_sources.sources import SourceService


@pytest.fixture
def registry() -> VariantRegistry:
    return default_registry()


@pytest.fixture
def service(registry: VariantRegistry) -> SourceService:
    return SourceService(registry)


@pytest.fixture
def bigquery_container() -> ParametersModel:
    return make_container("bigquery")

"""Tests for the variant registry."""

import pytest

from sifflet_sources.domain.parameters import ParametersModel
from sifflet_sources.errors import UnsupportedSourceTypeError
from sifflet_sources.handlers.registry import VariantRegistry, default_registry
from sifflet_sources.handlers.variants import ALL_HANDLERS, BigQueryHandler


class TestDefaultRegistry:
    """Tests for the built-in registry."""

    def test_has_every_source_type(self, registry: VariantRegistry) -> None:
        """Test the registry covers exactly the container slots."""
        assert len(registry) == 19
        assert registry.all_tags() == frozenset(ParametersModel.slot_names())

    def test_all_tags_is_frozen(self, registry: VariantRegistry) -> None:
        assert isinstance(registry.all_tags(), frozenset)

    def test_built_once(self) -> None:
        """Test the default registry is shared."""
        assert default_registry() is default_registry()

    def test_lookup_returns_fresh_handler(self, registry: VariantRegistry) -> None:
        """Test handlers are not shared between lookups."""
        first = registry.lookup("bigquery")
        second = registry.lookup("bigquery")

        assert isinstance(first, BigQueryHandler)
        assert first is not second

    def test_lookup_unknown(self, registry: VariantRegistry) -> None:
        """Test unknown tags are reported with their name."""
        with pytest.raises(UnsupportedSourceTypeError) as exc_info:
            registry.lookup("teradata")

        assert str(exc_info.value) == "unsupported source type: teradata"

    def test_lookup_is_case_sensitive(self, registry: VariantRegistry) -> None:
        """Test the schema side only accepts lowercase tags."""
        with pytest.raises(UnsupportedSourceTypeError):
            registry.lookup("BIGQUERY")

    def test_lookup_wire(self, registry: VariantRegistry) -> None:
        """Test wire tags resolve through the case transform."""
        assert registry.lookup_wire("DBT_CLOUD").schema_tag() == "dbt_cloud"
        assert registry.lookup_wire("POWER_BI").schema_tag() == "power_bi"

    def test_lookup_wire_unknown(self, registry: VariantRegistry) -> None:
        with pytest.raises(UnsupportedSourceTypeError, match="TERADATA"):
            registry.lookup_wire("TERADATA")

    def test_tags_agree(self, registry: VariantRegistry) -> None:
        """Test schema and wire tags round-trip for every handler."""
        for handler in registry.handlers():
            assert handler.wire_tag() == handler.schema_tag().upper()
            assert registry.lookup_wire(handler.wire_tag()).schema_tag() == (
                handler.schema_tag()
            )
            assert handler.dto_model.wire_type() == handler.wire_tag()

    def test_handlers_sorted(self, registry: VariantRegistry) -> None:
        tags = [h.schema_tag() for h in registry.handlers()]
        assert tags == sorted(tags)

    def test_credential_free_types(self, registry: VariantRegistry) -> None:
        """Test only athena, dbt and quicksight run without a credential."""
        free = {h.schema_tag() for h in registry.handlers() if not h.requires_credential()}
        assert free == {"athena", "dbt", "quicksight"}


class TestRegistryBuild:
    """Tests for building registries."""

    def test_duplicate_tag_rejected(self) -> None:
        """Test two handlers cannot claim the same tag."""
        with pytest.raises(ValueError, match="bigquery"):
            VariantRegistry.build([BigQueryHandler, BigQueryHandler])

    def test_custom_registry(self) -> None:
        """Test registries can be built from a subset of handlers."""
        registry = VariantRegistry.build([BigQueryHandler])

        assert registry.all_tags() == frozenset({"bigquery"})
        assert "bigquery" in registry
        with pytest.raises(UnsupportedSourceTypeError):
            registry.lookup("snowflake")

    def test_registry_is_read_only(self) -> None:
        """Test the factories table cannot be modified after construction."""
        factories = {"bigquery": BigQueryHandler}
        registry = VariantRegistry(factories)
        factories["snowflake"] = BigQueryHandler

        assert registry.all_tags() == frozenset({"bigquery"})

    def test_all_handler_classes_registered(self) -> None:
        assert len(ALL_HANDLERS) == 19

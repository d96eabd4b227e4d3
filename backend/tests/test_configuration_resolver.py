"""
Unit Tests: Configuration Resolver
==================================

Tests for ConfigurationResolver covering:
1. Absent definitions (no file I/O)
2. Mandatory channels resolution
3. Optional condition files and blank references
4. Variable substitution in loaded files
"""

import pytest
from unittest.mock import Mock

from nrbroker.broker import ConfigurationResolver
from nrbroker.core.exceptions import (
    ConfigurationFileNotFoundException,
    ResolutionException,
    VariableNotFoundException,
)
from nrbroker.models.broker_models import NewRelicConfiguration
from nrbroker.services import FileUtil, MappingPropertyHandler


class TestAbsentDefinition:
    """Tests for a missing configuration definition"""

    def test_returns_none_without_file_access(self):
        """Test no definition yields no configuration and touches no collaborator"""
        file_util = Mock(spec=FileUtil)
        property_handler = Mock(spec=MappingPropertyHandler)
        resolver = ConfigurationResolver(property_handler, file_util)

        assert resolver.resolve(None) is None
        file_util.find_file.assert_not_called()
        property_handler.map_in_properties.assert_not_called()


class TestConfigurationResolver:
    """Tests for resolving file references"""

    def test_resolves_all_files(self, resolver):
        """Test every referenced file is loaded and substituted"""
        definition = NewRelicConfiguration(
            channels="newrelic/channels.json",
            db_name="orders-db",
            conditions="newrelic/conditions.json",
            rds_plugins_conditions="newrelic/rds.json",
            nrql_conditions="newrelic/nrql.json",
            apdex=0.5
        )

        resolved = resolver.resolve(definition)

        assert resolved.channels == '[{"name": "ops-prod", "type": "email"}]'
        assert resolved.conditions == '[{"name": "Error rate", "threshold": 5}]'
        assert resolved.rds_plugins_conditions == '[{"name": "CPU"}]'
        assert "env = 'prod'" in resolved.nrql_conditions
        assert resolved.db_name == "orders-db"
        assert resolved.apdex == 0.5

    @pytest.mark.parametrize("blank", [None, "", "   "])
    def test_blank_optional_fields_stay_absent(self, resolver, blank):
        """Test blank condition references resolve to None, not empty strings"""
        definition = NewRelicConfiguration(
            channels="newrelic/channels.json",
            conditions=blank,
            rds_plugins_conditions=blank,
            nrql_conditions=blank
        )

        resolved = resolver.resolve(definition)

        assert resolved.conditions is None
        assert resolved.rds_plugins_conditions is None
        assert resolved.nrql_conditions is None
        assert resolved.db_name is None
        assert resolved.apdex is None

    def test_blank_fields_are_not_looked_up(self, property_handler):
        """Test only channels is loaded when the other references are blank"""
        file_util = Mock(spec=FileUtil)
        file_util.find_file.return_value = "[]"
        resolver = ConfigurationResolver(property_handler, file_util)

        resolver.resolve(NewRelicConfiguration(channels="channels.json", conditions=" "))

        file_util.find_file.assert_called_once_with("channels.json", optional=False)

    def test_missing_channels_file_is_fatal(self, resolver):
        """Test a missing channels file raises a resolution error"""
        definition = NewRelicConfiguration(channels="newrelic/missing.json")

        with pytest.raises(ConfigurationFileNotFoundException) as exc_info:
            resolver.resolve(definition)

        assert exc_info.value.file_name == "newrelic/missing.json"
        assert isinstance(exc_info.value, ResolutionException)

    def test_missing_channels_reference_is_fatal(self, resolver):
        """Test a definition without channels cannot be resolved"""
        with pytest.raises(ResolutionException) as exc_info:
            resolver.resolve(NewRelicConfiguration(db_name="orders-db"))

        assert exc_info.value.context["field"] == "channels"

    def test_missing_optional_file_is_fatal_when_referenced(self, resolver):
        """Test a referenced conditions file must exist"""
        definition = NewRelicConfiguration(
            channels="newrelic/channels.json",
            conditions="newrelic/nope.json"
        )

        with pytest.raises(ConfigurationFileNotFoundException):
            resolver.resolve(definition)

    def test_undefined_variable_in_file_is_fatal(self, file_util):
        """Test substitution fails on a variable the pipeline does not define"""
        resolver = ConfigurationResolver(MappingPropertyHandler({}), file_util)

        with pytest.raises(VariableNotFoundException) as exc_info:
            resolver.resolve(NewRelicConfiguration(channels="newrelic/channels.json"))

        assert exc_info.value.variable_name == "environment"

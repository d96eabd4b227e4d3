"""
New Relic Broker - Test Configuration & Fixtures
================================================

Shared fixtures:
- build log, pipeline variables and deployment bundle
- in-memory invocation channel
- fully wired broker
"""

import json
import pytest
from typing import Any, Dict, List, Optional

from nrbroker.broker import (
    BrokerClient,
    ConfigurationResolver,
    InMemoryInvocationChannel,
    NewRelicBroker,
    RequestBuilder,
    ResponseInterpreter,
)
from nrbroker.core.config import BrokerSettings
from nrbroker.models.broker_models import InvocationOutcome
from nrbroker.services import BuildLogger, FileUtil, MappingPropertyHandler


BROKER_TARGET = "nr-broker-lambda"
ACCOUNT_ID = "999"
LICENSE_KEY = "0123456789abcdef0123456789abcdef01234567"


def make_outcome(
    application_id: Optional[str] = None,
    updates: Optional[List[Dict[str, Any]]] = None,
    status_code: int = 200,
    function_error: Optional[str] = None
) -> InvocationOutcome:
    """Build a transport outcome wrapping a well-formed broker response"""
    body: Dict[str, Any] = {"updates": updates or []}
    if application_id is not None:
        body["applicationId"] = application_id
    return InvocationOutcome(
        status_code=status_code,
        function_error=function_error,
        raw_payload=json.dumps(body)
    )


def update_lines(build_logger: BuildLogger) -> List[str]:
    """Build log lines produced by the update scan"""
    return [e for e in build_logger.entries if e.startswith("... New Relic Broker: [")]


# ==================== Collaborators ====================

@pytest.fixture
def build_logger():
    return BuildLogger()


@pytest.fixture
def pipeline_variables():
    return {
        "bamboo.planRepository.revision": "a1b2c3d",
        "bamboo.deploy.version": "release-42",
        "environment": "prod",
    }


@pytest.fixture
def property_handler(pipeline_variables):
    return MappingPropertyHandler(pipeline_variables)


@pytest.fixture
def bundle_dir(tmp_path):
    """Deployment bundle with New Relic configuration files"""
    (tmp_path / "newrelic").mkdir()
    (tmp_path / "newrelic" / "channels.json").write_text(
        '[{"name": "ops-${environment}", "type": "email"}]', encoding="utf-8"
    )
    (tmp_path / "newrelic" / "conditions.json").write_text(
        '[{"name": "Error rate", "threshold": 5}]', encoding="utf-8"
    )
    (tmp_path / "newrelic" / "rds.json").write_text(
        '[{"name": "CPU"}]', encoding="utf-8"
    )
    (tmp_path / "newrelic" / "nrql.json").write_text(
        '[{"query": "SELECT count(*) FROM Transaction WHERE env = \'${environment}\'"}]',
        encoding="utf-8"
    )
    return tmp_path


@pytest.fixture
def file_util(bundle_dir):
    return FileUtil(bundle_dir)


# ==================== Broker ====================

@pytest.fixture
def settings(bundle_dir):
    return BrokerSettings(
        NR_LAMBDA=BROKER_TARGET,
        NR_ACCOUNT_ID=ACCOUNT_ID,
        BUNDLE_DIR=str(bundle_dir),
        _env_file=None
    )


@pytest.fixture
def channel():
    return InMemoryInvocationChannel()


@pytest.fixture
def resolver(property_handler, file_util):
    return ConfigurationResolver(property_handler, file_util)


@pytest.fixture
def request_builder(property_handler):
    return RequestBuilder(property_handler)


@pytest.fixture
def broker_client(channel, build_logger):
    return BrokerClient(channel, BROKER_TARGET, build_logger)


@pytest.fixture
def interpreter(build_logger):
    return ResponseInterpreter(build_logger, ACCOUNT_ID, target=BROKER_TARGET)


@pytest.fixture
def broker(settings, build_logger, property_handler, file_util, channel):
    return NewRelicBroker.from_settings(
        settings,
        build_logger=build_logger,
        property_handler=property_handler,
        file_util=file_util,
        channel=channel
    )

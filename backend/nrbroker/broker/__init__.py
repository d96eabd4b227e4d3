"""
New Relic Broker Module

Usage:
    from nrbroker.broker import NewRelicBroker
    from nrbroker.core.config import get_settings

    broker = NewRelicBroker.from_settings(get_settings())
    broker.broker_new_relic_application_deployment(
        definition, "my-policy", "my-app", license_key
    )

    # For testing
    from nrbroker.broker import InMemoryInvocationChannel
    channel = InMemoryInvocationChannel()
    broker = NewRelicBroker.from_settings(settings, channel=channel)
"""

from .channels import InvocationChannel, LambdaInvocationChannel, InMemoryInvocationChannel
from .client import BrokerClient
from .configuration_resolver import ConfigurationResolver
from .request_builder import RequestBuilder
from .response_interpreter import ResponseInterpreter
from .newrelic_broker import NewRelicBroker

__all__ = [
    # Channels
    "InvocationChannel",
    "LambdaInvocationChannel",
    "InMemoryInvocationChannel",
    # Stages
    "ConfigurationResolver",
    "RequestBuilder",
    "BrokerClient",
    "ResponseInterpreter",
    # Entry point
    "NewRelicBroker",
]

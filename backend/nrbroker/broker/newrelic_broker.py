"""
New Relic Broker

Entry point for brokering a New Relic application configuration during a
deployment. One call is one complete, synchronous conversation with the
broker function.
"""

import logging
from typing import Optional

from ..core.config import BrokerSettings
from ..core.exceptions import BrokerException
from ..models.broker_models import BrokerResult, NewRelicConfiguration
from ..services.build_logger import BuildLogger
from ..services.file_util import FileUtil
from ..services.property_handler import MappingPropertyHandler, PropertyHandler
from .channels import InvocationChannel, LambdaInvocationChannel
from .client import BrokerClient
from .configuration_resolver import ConfigurationResolver
from .request_builder import RequestBuilder
from .response_interpreter import ResponseInterpreter


class NewRelicBroker:
    """Sequences resolution, request building, invocation and interpretation"""

    def __init__(
        self,
        resolver: ConfigurationResolver,
        request_builder: RequestBuilder,
        client: BrokerClient,
        interpreter: ResponseInterpreter,
        build_logger: BuildLogger
    ):
        self.resolver = resolver
        self.request_builder = request_builder
        self.client = client
        self.interpreter = interpreter
        self.build_logger = build_logger
        self.logger = logging.getLogger(self.__class__.__name__)

    @classmethod
    def from_settings(
        cls,
        settings: BrokerSettings,
        build_logger: Optional[BuildLogger] = None,
        property_handler: Optional[PropertyHandler] = None,
        file_util: Optional[FileUtil] = None,
        channel: Optional[InvocationChannel] = None
    ) -> "NewRelicBroker":
        """Wire a broker from settings, defaulting to the environment and AWS Lambda"""
        build_logger = build_logger or BuildLogger()
        property_handler = property_handler or MappingPropertyHandler.from_environ()
        file_util = file_util or FileUtil(settings.BUNDLE_DIR)
        channel = channel or LambdaInvocationChannel(region_name=settings.AWS_REGION)

        return cls(
            resolver=ConfigurationResolver(property_handler, file_util),
            request_builder=RequestBuilder(
                property_handler,
                revision_variable=settings.REVISION_VARIABLE,
                version_variable=settings.VERSION_VARIABLE
            ),
            client=BrokerClient(channel, settings.NR_LAMBDA, build_logger),
            interpreter=ResponseInterpreter(
                build_logger, settings.NR_ACCOUNT_ID, target=settings.NR_LAMBDA
            ),
            build_logger=build_logger
        )

    def broker_new_relic_application_deployment(
        self,
        configuration_definition: Optional[NewRelicConfiguration],
        policy_name: str,
        application_name: str,
        license_key: str
    ) -> BrokerResult:
        """
        Broker the New Relic configuration for one application deployment

        Args:
            configuration_definition: File-referencing definition, or None for no configuration block
            policy_name: Deployment policy under which the configuration is applied
            application_name: New Relic application name
            license_key: New Relic license key passed through to the broker

        Returns:
            BrokerResult with the application id and UI link, when known

        Raises:
            BrokerException: on any resolution, serialization, transport, parse or broker error
        """
        self.build_logger.add_build_log_entry("\n")
        self.build_logger.add_build_log_entry("Brokering New Relic configuration")

        try:
            configuration = self.resolver.resolve(configuration_definition)
            request = self.request_builder.build(
                policy_name, application_name, license_key, configuration
            )
        except BrokerException as e:
            self.build_logger.add_error_log_entry(f"... Error getting NR Broker payload: {e}")
            raise

        invocation = self.client.send(request)
        result = self.interpreter.interpret(invocation.outcome, invocation.payload)

        self.logger.info(
            f"New Relic configuration brokered for {application_name} "
            f"(application id: {result.application_id})"
        )
        return result

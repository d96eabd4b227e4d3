"""Builds the request sent to the New Relic broker"""

from typing import Optional

from ..models.broker_models import (
    NewRelicApplicationDeployment,
    NewRelicBrokerRequest,
    NewRelicConfiguration,
)
from ..services.property_handler import PropertyHandler

DEFAULT_REVISION_VARIABLE = "bamboo.planRepository.revision"
DEFAULT_VERSION_VARIABLE = "bamboo.deploy.version"


class RequestBuilder:
    """Combines a resolved configuration with the deployment identity"""

    def __init__(
        self,
        property_handler: PropertyHandler,
        revision_variable: str = DEFAULT_REVISION_VARIABLE,
        version_variable: str = DEFAULT_VERSION_VARIABLE
    ):
        self.property_handler = property_handler
        self.revision_variable = revision_variable
        self.version_variable = version_variable

    def build(
        self,
        policy_name: str,
        application_name: str,
        license_key: str,
        configuration: Optional[NewRelicConfiguration]
    ) -> NewRelicBrokerRequest:
        """
        Build the broker request

        Raises:
            VariableNotFoundException: if the revision or version variable is undefined
        """
        deployment = NewRelicApplicationDeployment(
            revision=self.property_handler.lookup_variable(self.revision_variable),
            version=self.property_handler.lookup_variable(self.version_variable)
        )

        return NewRelicBrokerRequest(
            policy_name=policy_name,
            new_relic_application_name=application_name,
            configuration=configuration,
            deployment=deployment,
            nr_license_key=license_key
        )

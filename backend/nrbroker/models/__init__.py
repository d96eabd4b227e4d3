from .broker_models import (
    BrokerStatus,
    NewRelicConfiguration,
    NewRelicApplicationDeployment,
    NewRelicBrokerRequest,
    BrokerUpdate,
    NewRelicBrokerResponse,
    InvocationOutcome,
    BrokerInvocation,
    BrokerResult,
)

__all__ = [
    "BrokerStatus",
    "NewRelicConfiguration",
    "NewRelicApplicationDeployment",
    "NewRelicBrokerRequest",
    "BrokerUpdate",
    "NewRelicBrokerResponse",
    "InvocationOutcome",
    "BrokerInvocation",
    "BrokerResult",
]

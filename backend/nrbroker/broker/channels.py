"""
Invocation channels for the broker function

Available channels:
- LambdaInvocationChannel: synchronous AWS Lambda invocation through boto3
- InMemoryInvocationChannel: local test double returning canned outcomes
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple, Union, runtime_checkable

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..core.exceptions import BrokerTransportException
from ..models.broker_models import InvocationOutcome


@runtime_checkable
class InvocationChannel(Protocol):
    """Synchronous, name-addressed request/response call"""

    def invoke(self, target: str, payload: str) -> InvocationOutcome:
        ...


class LambdaInvocationChannel:
    """Invokes the broker as an AWS Lambda function with RequestResponse semantics"""

    def __init__(self, lambda_client: Any = None, region_name: Optional[str] = None):
        self.lambda_client = lambda_client or self._create_lambda_client(region_name)
        self.logger = logging.getLogger(self.__class__.__name__)

    @staticmethod
    def _create_lambda_client(region_name: Optional[str]):
        if region_name:
            return boto3.client("lambda", region_name=region_name)
        return boto3.client("lambda")

    def invoke(self, target: str, payload: str) -> InvocationOutcome:
        try:
            response = self.lambda_client.invoke(
                FunctionName=target,
                InvocationType="RequestResponse",
                Payload=payload.encode("utf-8")
            )
        except (BotoCoreError, ClientError) as e:
            self.logger.error(f"Lambda invocation of {target} failed: {e}")
            raise BrokerTransportException(
                message=f"Error invoking the New Relic Broker: {e}",
                target=target
            ) from e

        body = response.get("Payload")
        if body is None:
            raw_payload = ""
        elif isinstance(body, (bytes, bytearray)):
            raw_payload = bytes(body).decode("utf-8")
        else:
            raw_payload = body.read().decode("utf-8")

        return InvocationOutcome(
            status_code=response.get("StatusCode", 0),
            function_error=response.get("FunctionError"),
            raw_payload=raw_payload
        )


Responder = Union[InvocationOutcome, Callable[[str], InvocationOutcome]]


class InMemoryInvocationChannel:
    """
    In-memory invocation channel for development and testing.
    Targets are registered with either a fixed outcome or a callable taking the payload.
    """

    def __init__(self):
        self._responders: Dict[str, Responder] = {}
        self.calls: List[Tuple[str, str]] = []
        self.logger = logging.getLogger(self.__class__.__name__)

    def register(self, target: str, responder: Responder) -> None:
        self._responders[target] = responder

    def invoke(self, target: str, payload: str) -> InvocationOutcome:
        self.calls.append((target, payload))
        responder = self._responders.get(target)
        if responder is None:
            # Lambda answers an unknown function with ResourceNotFoundException (404)
            self.logger.warning(f"No responder registered for {target}")
            return InvocationOutcome(
                status_code=404,
                function_error=None,
                raw_payload=f'{{"errorMessage": "Function not found: {target}"}}'
            )
        if callable(responder):
            return responder(payload)
        return responder

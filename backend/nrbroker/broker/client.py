"""Sends broker requests over an invocation channel"""

import logging

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from ..core.exceptions import BrokerTransportException, SerializationException
from ..models.broker_models import BrokerInvocation, NewRelicBrokerRequest
from ..services.build_logger import BuildLogger
from .channels import InvocationChannel


class BrokerClient:
    """
    Single-shot client for the broker function.

    There is no retry and no timeout override: the conversation already runs
    inside a time-bounded deployment step.
    """

    def __init__(self, channel: InvocationChannel, target: str, build_logger: BuildLogger):
        self.channel = channel
        self.target = target
        self.build_logger = build_logger
        self.logger = logging.getLogger(self.__class__.__name__)

    def serialize(self, request: NewRelicBrokerRequest) -> str:
        """Encode the request as canonical JSON using wire field names"""
        try:
            return request.model_dump_json(by_alias=True)
        except (PydanticSerializationError, ValidationError, TypeError, ValueError) as e:
            self.build_logger.add_error_log_entry(f"... Unable to encode the NR Broker payload: {e}")
            raise SerializationException(f"Error getting NR Broker payload: {e}") from e

    def send(self, request: NewRelicBrokerRequest) -> BrokerInvocation:
        payload = self.serialize(request)

        self.build_logger.add_build_log_entry(
            f"... Invoke request sent to the broker: {self.target}"
        )
        try:
            outcome = self.channel.invoke(self.target, payload)
        except BrokerTransportException:
            self.build_logger.add_error_log_entry(
                f"... Error thrown by the NR Broker given payload: {payload}"
            )
            raise
        self.logger.debug(
            f"Broker {self.target} answered with status {outcome.status_code}"
        )
        return BrokerInvocation(payload=payload, outcome=outcome)

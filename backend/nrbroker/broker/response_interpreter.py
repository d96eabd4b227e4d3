"""Interprets the broker's answer and escalates failures"""

import logging
from typing import Optional

from pydantic import ValidationError

from ..core.exceptions import (
    BrokerBusinessException,
    BrokerResponseParseException,
    BrokerTransportException,
)
from ..models.broker_models import (
    BrokerResult,
    BrokerStatus,
    InvocationOutcome,
    NewRelicBrokerResponse,
)
from ..services.build_logger import BuildLogger

NEW_RELIC_APPLICATION_URL = "https://rpm.newrelic.com/accounts/{account_id}/applications/{application_id}"
LINK_SECTION_TITLE = "New Relic UI"


class ResponseInterpreter:
    """
    Evaluates an invocation outcome in a fixed order:

    1. transport status (the body is not parsed on failure)
    2. response parsing
    3. update scan, stopping at the first ERROR
    4. UI link for the application, when the broker returned an id
    """

    def __init__(self, build_logger: BuildLogger, account_id: str, target: str = ""):
        self.build_logger = build_logger
        self.account_id = account_id
        self.target = target
        self.logger = logging.getLogger(self.__class__.__name__)

    def interpret(self, outcome: InvocationOutcome, request_payload: str) -> BrokerResult:
        if not outcome.is_successful:
            self.build_logger.add_error_log_entry(
                f"... Error thrown by the NR Broker given payload: {request_payload}"
            )
            self.build_logger.add_error_log_entry(
                f"... NR Broker response (status {outcome.status_code}, "
                f"function error {outcome.function_error}): {outcome.raw_payload}"
            )
            raise BrokerTransportException(
                message=(
                    f"Error invoking the New Relic Broker: status={outcome.status_code}, "
                    f"functionError={outcome.function_error}, payload={outcome.raw_payload}"
                ),
                target=self.target,
                status_code=outcome.status_code,
                function_error=outcome.function_error,
                raw_response=outcome.raw_payload
            )

        response = self.parse(outcome.raw_payload)

        for update in response.updates:
            self.build_logger.add_build_log_entry(
                f"... New Relic Broker: [{update.status.value}] {update.message}"
            )
            if update.status == BrokerStatus.ERROR:
                self.build_logger.add_error_log_entry(
                    f"... Error returned by the NR Broker given payload: {request_payload}"
                )
                raise BrokerBusinessException(update.message, request_payload)

        link = self.add_new_relic_link_to_logs(response.application_id)
        return BrokerResult(
            application_id=response.application_id,
            link=link,
            updates=list(response.updates)
        )

    def parse(self, raw_payload: str) -> NewRelicBrokerResponse:
        try:
            return NewRelicBrokerResponse.model_validate_json(raw_payload)
        except ValidationError as e:
            self.logger.debug(f"Broker response failed validation: {e}")
            self.build_logger.add_error_log_entry(
                f"... Unable to parse NR broker response: {raw_payload}"
            )
            raise BrokerResponseParseException(raw_payload) from e

    def build_link(self, application_id: str) -> str:
        return NEW_RELIC_APPLICATION_URL.format(
            account_id=self.account_id, application_id=application_id
        )

    def add_new_relic_link_to_logs(self, application_id: Optional[str]) -> Optional[str]:
        """Log the UI link for an application; a blank id is treated as absent"""
        if application_id is None or not application_id.strip():
            return None
        link = self.build_link(application_id.strip())
        self.build_logger.log_section(LINK_SECTION_TITLE, link)
        return link

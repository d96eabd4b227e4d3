"""
New Relic Broker Standalone Runner
==================================

Brokers the New Relic configuration for one application deployment.

Usage:
    python -m nrbroker.run --policy-name my-policy --application-name my-app \
        --config newrelic.json --var bamboo.deploy.version=1.2.3
"""

import os
import sys
import json
import logging
import argparse
from typing import Dict, List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from nrbroker.broker import NewRelicBroker
from nrbroker.core.config import get_settings
from nrbroker.core.exceptions import BrokerException
from nrbroker.models.broker_models import NewRelicConfiguration
from nrbroker.services.property_handler import MappingPropertyHandler
from nrbroker.utils.logging_filter import setup_secure_logging

logger = logging.getLogger("NewRelicBrokerRunner")


def parse_variables(pairs: List[str]) -> Dict[str, str]:
    """Parse repeated ``NAME=VALUE`` arguments"""
    variables = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got: {pair}")
        variables[name] = value
    return variables


def load_definition(path: Optional[str]) -> Optional[NewRelicConfiguration]:
    """Load a configuration definition from a JSON file; no path means no configuration block"""
    if not path:
        return None
    with open(path, "r", encoding="utf-8") as f:
        return NewRelicConfiguration.model_validate(json.load(f))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="New Relic configuration broker")
    parser.add_argument("--policy-name", required=True, help="Deployment policy name")
    parser.add_argument("--application-name", required=True, help="New Relic application name")
    parser.add_argument(
        "--license-key",
        default=os.getenv("NEW_RELIC_LICENSE_KEY"),
        help="New Relic license key (defaults to NEW_RELIC_LICENSE_KEY)"
    )
    parser.add_argument("--config", help="JSON file with the New Relic configuration definition")
    parser.add_argument(
        "--var",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Pipeline variable, may be repeated"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.license_key:
        parser.error("--license-key or NEW_RELIC_LICENSE_KEY is required")

    try:
        variables = parse_variables(args.var)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Invalid broker configuration:\n{e}", file=sys.stderr)
        return 2

    setup_secure_logging("DEBUG" if args.verbose else settings.LOG_LEVEL)

    try:
        definition = load_definition(args.config)
    except (OSError, ValueError) as e:
        logger.error(f"Unable to load configuration definition {args.config}: {e}")
        return 2

    broker = NewRelicBroker.from_settings(
        settings,
        property_handler=MappingPropertyHandler.from_environ(variables)
    )

    try:
        result = broker.broker_new_relic_application_deployment(
            definition,
            args.policy_name,
            args.application_name,
            args.license_key
        )
    except BrokerException as e:
        logger.error(f"Brokering failed: {e}", extra=e.to_log_dict())
        return 1

    logger.info(f"Brokering complete for {args.application_name}")
    if result.link:
        logger.info(f"New Relic UI: {result.link}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

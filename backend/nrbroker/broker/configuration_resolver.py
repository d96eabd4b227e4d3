"""Resolves a New Relic configuration definition into file contents"""

import logging
from typing import Optional

from ..core.exceptions import ResolutionException
from ..models.broker_models import NewRelicConfiguration
from ..services.file_util import FileUtil
from ..services.property_handler import PropertyHandler


class ConfigurationResolver:
    """
    Turns file references in a configuration definition into their
    variable-substituted contents.

    ``channels`` is always resolved and must exist. The condition files are
    resolved only when their reference is non-blank; otherwise they stay None.
    """

    def __init__(self, property_handler: PropertyHandler, file_util: FileUtil):
        self.property_handler = property_handler
        self.file_util = file_util
        self.logger = logging.getLogger(self.__class__.__name__)

    def resolve(self, definition: Optional[NewRelicConfiguration]) -> Optional[NewRelicConfiguration]:
        if definition is None:
            return None

        if _is_blank(definition.channels):
            raise ResolutionException(
                "A channels file is required when a New Relic configuration is supplied",
                context={"field": "channels"}
            )

        return NewRelicConfiguration(
            db_name=definition.db_name,
            channels=self._load(definition.channels),
            conditions=self._load_if_present(definition.conditions),
            rds_plugins_conditions=self._load_if_present(definition.rds_plugins_conditions),
            nrql_conditions=self._load_if_present(definition.nrql_conditions),
            apdex=definition.apdex
        )

    def _load_if_present(self, file_name: Optional[str]) -> Optional[str]:
        if _is_blank(file_name):
            return None
        return self._load(file_name)

    def _load(self, file_name: str) -> str:
        self.logger.debug(f"Resolving configuration file {file_name}")
        content = self.file_util.find_file(file_name, optional=False)
        return self.property_handler.map_in_properties(content)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()

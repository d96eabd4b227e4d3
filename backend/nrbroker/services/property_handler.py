"""
Pipeline variable lookup and substitution

Configuration files in a deployment bundle may reference pipeline variables
as ``${name}``. Variables are looked up by exact name first, then by the
underscore form the build agent exports to the environment
(``bamboo.deploy.version`` -> ``bamboo_deploy_version``).
"""

import os
import re
import logging
from typing import Dict, Mapping, Optional, Protocol, runtime_checkable

from ..core.exceptions import VariableNotFoundException

logger = logging.getLogger(__name__)

VARIABLE_PATTERN = re.compile(r"\$\{([^}\s]+)\}")


@runtime_checkable
class PropertyHandler(Protocol):
    """Read-only view over ambient pipeline variables"""

    def lookup_variable(self, name: str) -> str:
        ...

    def map_in_properties(self, text: Optional[str]) -> Optional[str]:
        ...


class MappingPropertyHandler:
    """PropertyHandler backed by a plain mapping"""

    def __init__(self, variables: Optional[Mapping[str, str]] = None):
        self._variables: Dict[str, str] = dict(variables or {})

    @classmethod
    def from_environ(cls, extra: Optional[Mapping[str, str]] = None) -> "MappingPropertyHandler":
        """Build a handler over the process environment, overlaid with ``extra``"""
        variables = dict(os.environ)
        if extra:
            variables.update(extra)
        return cls(variables)

    def _find(self, name: str) -> Optional[str]:
        if name in self._variables:
            return self._variables[name]
        return self._variables.get(name.replace(".", "_"))

    def lookup_variable(self, name: str) -> str:
        """
        Look up a single variable

        Raises:
            VariableNotFoundException: if the variable is not defined
        """
        value = self._find(name)
        if value is None:
            raise VariableNotFoundException(name)
        return value

    def map_in_properties(self, text: Optional[str]) -> Optional[str]:
        """Replace every ``${name}`` token in ``text`` with its variable value"""
        if text is None:
            return None

        def _replace(match: re.Match) -> str:
            return self.lookup_variable(match.group(1))

        mapped = VARIABLE_PATTERN.sub(_replace, text)
        if mapped != text:
            logger.debug("Substituted pipeline variables into configuration text")
        return mapped

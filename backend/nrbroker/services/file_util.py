"""File lookup inside a deployment bundle"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..core.exceptions import ConfigurationFileNotFoundException


class FileUtil:
    """Loads text files relative to the root of a deployment bundle"""

    def __init__(self, root_dir: Union[str, Path] = "."):
        self.root_dir = Path(root_dir)
        self.logger = logging.getLogger(self.__class__.__name__)

    def find_file(self, file_name: str, optional: bool = False) -> Optional[str]:
        """
        Read a bundle file as UTF-8 text

        Args:
            file_name: Path of the file, relative to the bundle root
            optional: When True a missing file yields None instead of an error

        Returns:
            The file content, or None for a missing optional file

        Raises:
            ConfigurationFileNotFoundException: if a required file is missing or unreadable
        """
        path = self.root_dir / file_name
        if not path.is_file():
            if optional:
                self.logger.debug(f"Optional file not present: {path}")
                return None
            raise ConfigurationFileNotFoundException(file_name, str(self.root_dir))

        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            if optional:
                self.logger.warning(f"Ignoring unreadable optional file {path}: {e}")
                return None
            raise ConfigurationFileNotFoundException(
                file_name, str(self.root_dir), reason=str(e)
            ) from e

"""
Build log sink

The build log is the operator-facing record of a deployment step. Entries are
kept in order and mirrored to Python logging so they also reach the process
log stream.
"""

import logging
from typing import List, Optional

SECTION_RULE = "-" * 60


class BuildLogger:
    """Append-only build log"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("BuildLog")
        self._entries: List[str] = []

    @property
    def entries(self) -> List[str]:
        return list(self._entries)

    def add_build_log_entry(self, text: str) -> None:
        self._entries.append(text)
        self.logger.info(text)

    def add_error_log_entry(self, text: str) -> None:
        """Record an entry that precedes a fatal error"""
        self._entries.append(text)
        self.logger.error(text)

    def log_section(self, title: str, body: str) -> None:
        """Emit a framed block so a link or summary stands out in the log"""
        for line in ("", SECTION_RULE, title, SECTION_RULE, body, SECTION_RULE):
            self.add_build_log_entry(line)

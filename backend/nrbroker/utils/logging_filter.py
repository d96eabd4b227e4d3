"""
Secure logging filter to prevent license key and credential exposure
"""

import re
import logging
from typing import List


class SensitiveDataFilter(logging.Filter):
    """
    Logging filter that masks sensitive information in log records

    Broker payloads carry the New Relic license key; failure diagnostics log
    those payloads, so the key is masked before it reaches any handler.
    """

    SENSITIVE_PATTERNS: List[str] = [
        r'("nrLicenseKey"\s*:\s*")[^"]+',
        r'((?:license[_-]?key)["\']?\s*[:=]\s*["\']?)[\w-]{10,}',
        r'((?:aws[_-]?secret[_-]?access[_-]?key)["\']?\s*[:=]\s*["\']?)[\w/+=-]{20,}',
        r'()(?:AKIA|ASIA)[A-Z0-9]{16}',  # AWS access key id format
    ]

    COMPILED_PATTERNS = [re.compile(p, re.IGNORECASE) for p in SENSITIVE_PATTERNS]

    def filter(self, record: logging.LogRecord) -> bool:
        """Render the message once and mask it; the record is always kept"""
        record.msg = mask_sensitive(record.getMessage())
        record.args = None
        return True


def mask_sensitive(text: str) -> str:
    """Replace license keys and AWS credentials in text with a marker"""
    for pattern in SensitiveDataFilter.COMPILED_PATTERNS:
        text = pattern.sub(r"\1***REDACTED***", text)
    return text


def setup_secure_logging(level: str = "INFO") -> None:
    """
    Configure logging with sensitive data filtering

    Should be called once at process startup, before the broker runs
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    sensitive_filter = SensitiveDataFilter()
    for handler in logging.getLogger().handlers:
        handler.addFilter(sensitive_filter)

    for logger_name in ("BuildLog", "botocore", "boto3"):
        logging.getLogger(logger_name).addFilter(sensitive_filter)

    logging.getLogger(__name__).info("Secure logging filter configured")

"""
Standardized exception handling for the New Relic broker client
Provides consistent error types, formatting, and diagnostic context for every fatal path
"""

from typing import Dict, Any, Optional, List
from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel


class ErrorSeverity(str, Enum):
    """Error severity levels for consistent categorization"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Error categories matching the stages of a broker conversation"""
    RESOLUTION = "resolution"
    SERIALIZATION = "serialization"
    TRANSPORT = "transport"
    PARSE = "parse"
    BUSINESS_LOGIC = "business_logic"
    SYSTEM = "system"


class ErrorDetails(BaseModel):
    """Standardized error details structure"""
    code: str
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    timestamp: datetime
    context: Dict[str, Any] = {}
    suggestions: List[str] = []
    recoverable: bool = False


class BrokerException(Exception):
    """
    Base exception class for all broker client errors

    Every failure of a broker conversation is surfaced as a subclass of this
    exception; there is no partial-success return value.
    """

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        recoverable: bool = False
    ):
        super().__init__(message)
        self.details = ErrorDetails(
            code=code,
            message=message,
            category=category,
            severity=severity,
            timestamp=datetime.now(timezone.utc),
            context=context or {},
            suggestions=suggestions or [],
            recoverable=recoverable
        )

    @property
    def code(self) -> str:
        return self.details.code

    @property
    def context(self) -> Dict[str, Any]:
        return self.details.context

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for reports"""
        return {
            "error": {
                "code": self.details.code,
                "message": self.details.message,
                "category": self.details.category.value,
                "severity": self.details.severity.value,
                "timestamp": self.details.timestamp.isoformat(),
                "context": self.details.context,
                "suggestions": self.details.suggestions,
                "recoverable": self.details.recoverable
            }
        }

    def to_log_dict(self) -> Dict[str, Any]:
        """Convert exception to structured logging format"""
        return {
            "error_code": self.details.code,
            "error_message": self.details.message,
            "error_category": self.details.category.value,
            "error_severity": self.details.severity.value,
            "context": self.details.context,
            "recoverable": self.details.recoverable
        }


# Resolution errors: raised before any network call

class ResolutionException(BrokerException):
    """Raised when the broker request cannot be assembled from its inputs"""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None, **kwargs):
        kwargs.setdefault("suggestions", [
            "Check the configuration definition",
            "Verify the deployment bundle contents"
        ])
        super().__init__(
            message=message,
            code=kwargs.pop("code", "RESOLUTION_ERROR"),
            category=ErrorCategory.RESOLUTION,
            severity=ErrorSeverity.HIGH,
            context=context,
            **kwargs
        )


class ConfigurationFileNotFoundException(ResolutionException):
    """Raised when a required configuration file is missing or unreadable"""

    def __init__(self, file_name: str, search_root: str, reason: Optional[str] = None):
        message = f"Required file not found: {file_name}"
        if reason:
            message = f"Unable to read required file {file_name}: {reason}"
        super().__init__(
            message=message,
            code="FILE_NOT_FOUND",
            context={"file_name": file_name, "search_root": search_root},
            suggestions=["Check that the file is packaged with the deployment"]
        )
        self.file_name = file_name


class VariableNotFoundException(ResolutionException):
    """Raised when a pipeline variable is undefined"""

    def __init__(self, variable_name: str):
        super().__init__(
            message=f"Variable not defined: {variable_name}",
            code="VARIABLE_NOT_FOUND",
            context={"variable_name": variable_name},
            suggestions=["Define the variable in the pipeline or environment"]
        )
        self.variable_name = variable_name


class SerializationException(BrokerException):
    """Raised when the broker request cannot be encoded"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            code="SERIALIZATION_ERROR",
            category=ErrorCategory.SERIALIZATION,
            severity=ErrorSeverity.HIGH,
            **kwargs
        )


# Invocation errors: raised after the broker has been called

class BrokerTransportException(BrokerException):
    """Raised when the invocation channel itself reports a failure"""

    def __init__(
        self,
        message: str,
        target: str,
        status_code: Optional[int] = None,
        function_error: Optional[str] = None,
        raw_response: Optional[str] = None
    ):
        super().__init__(
            message=message,
            code="TRANSPORT_ERROR",
            category=ErrorCategory.TRANSPORT,
            severity=ErrorSeverity.CRITICAL,
            context={
                "target": target,
                "status_code": status_code,
                "function_error": function_error,
                "raw_response": raw_response
            },
            suggestions=[
                "Check that the broker function exists and is reachable",
                "Review the broker function logs"
            ]
        )
        self.status_code = status_code
        self.function_error = function_error
        self.raw_response = raw_response


class BrokerResponseParseException(BrokerException):
    """Raised when the broker answered with a body of unexpected shape"""

    def __init__(self, raw_response: str):
        super().__init__(
            message=f"Unable to parse NR broker response from: {raw_response}",
            code="PARSE_ERROR",
            category=ErrorCategory.PARSE,
            severity=ErrorSeverity.HIGH,
            context={"raw_response": raw_response}
        )
        self.raw_response = raw_response


class BrokerBusinessException(BrokerException):
    """Raised when the broker reports an ERROR update"""

    def __init__(self, update_message: str, request_payload: str):
        super().__init__(
            message="New Relic broker error. See logs.",
            code="BROKER_ERROR",
            category=ErrorCategory.BUSINESS_LOGIC,
            severity=ErrorSeverity.HIGH,
            context={
                "update_message": update_message,
                "request_payload": request_payload
            },
            suggestions=["Inspect the request payload in the build log and replay it"]
        )
        self.update_message = update_message
        self.request_payload = request_payload

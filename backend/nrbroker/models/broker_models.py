"""New Relic Broker Protocol Data Models"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BrokerStatus(str, Enum):
    """Outcome kind of a single broker update"""
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"
    WARNING = "WARNING"
    NOTICE = "NOTICE"
    INFO = "INFO"


class NewRelicConfiguration(BaseModel):
    """
    Monitoring configuration for a New Relic application.

    The same shape is used for the caller's definition (file references) and
    for the resolved configuration (file contents). Unset fields stay None so
    "not configured" never collapses into "configured but empty".
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    db_name: Optional[str] = Field(None, alias="dbName")
    channels: Optional[str] = Field(None, description="Notification channels file")
    conditions: Optional[str] = Field(None, description="APM alert conditions file")
    rds_plugins_conditions: Optional[str] = Field(None, alias="rdsPluginsConditions")
    nrql_conditions: Optional[str] = Field(None, alias="nrqlConditions")
    apdex: Optional[float] = Field(None, ge=0.0, description="Apdex T threshold in seconds")


class NewRelicApplicationDeployment(BaseModel):
    """Deployment identity recorded against the application"""
    model_config = ConfigDict(frozen=True)

    revision: str
    version: str


class NewRelicBrokerRequest(BaseModel):
    """Payload sent to the broker function"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    policy_name: str = Field(..., alias="policyName")
    new_relic_application_name: str = Field(..., alias="newRelicApplicationName")
    configuration: Optional[NewRelicConfiguration] = None
    deployment: NewRelicApplicationDeployment
    nr_license_key: str = Field(..., alias="nrLicenseKey")


class BrokerUpdate(BaseModel):
    """One per-resource outcome reported by the broker"""
    status: BrokerStatus
    message: str = ""

    @field_validator("message", mode="before")
    @classmethod
    def null_message_as_empty(cls, v):
        return "" if v is None else v


class NewRelicBrokerResponse(BaseModel):
    """Payload returned by the broker function"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    application_id: Optional[str] = Field(None, alias="applicationId")
    updates: List[BrokerUpdate] = Field(default_factory=list)


@dataclass
class InvocationOutcome:
    """Transport-level result of invoking the broker function"""
    status_code: int
    function_error: Optional[str] = None
    raw_payload: str = ""

    @property
    def is_successful(self) -> bool:
        # 2xx and no function-level error
        return 200 <= self.status_code < 300 and not self.function_error


@dataclass
class BrokerInvocation:
    """The exact payload sent to the broker together with what came back"""
    payload: str
    outcome: InvocationOutcome


@dataclass
class BrokerResult:
    """Successful completion of a broker conversation"""
    application_id: Optional[str] = None
    link: Optional[str] = None
    updates: List[BrokerUpdate] = field(default_factory=list)

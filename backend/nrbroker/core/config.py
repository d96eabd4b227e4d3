"""Broker client settings loaded from the environment and .env"""

import os
import logging
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class BrokerSettings(BaseSettings):
    """
    New Relic broker client configuration
    Manages all environment variables with validation and type safety
    """

    # Broker function
    NR_LAMBDA: str = Field(
        ...,
        min_length=1,
        description="Name or ARN of the New Relic broker Lambda function"
    )
    NR_ACCOUNT_ID: str = Field(
        ...,
        min_length=1,
        description="New Relic account id used to build the UI link"
    )

    # AWS
    AWS_REGION: Optional[str] = Field(
        default=None,
        description="AWS region for the Lambda client (falls back to the boto3 default chain)"
    )

    # Pipeline variables
    REVISION_VARIABLE: str = Field(
        default="bamboo.planRepository.revision",
        description="Pipeline variable holding the deployed revision"
    )
    VERSION_VARIABLE: str = Field(
        default="bamboo.deploy.version",
        description="Pipeline variable holding the deployed version"
    )

    # Deployment bundle
    BUNDLE_DIR: str = Field(
        default=".",
        description="Root directory for configuration file lookup"
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Python logging level"
    )

    model_config = SettingsConfigDict(
        env_file=os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True
    )

    @field_validator("NR_ACCOUNT_ID")
    @classmethod
    def validate_account_id(cls, v):
        v = v.strip()
        if not v.isdigit():
            raise ValueError("NR_ACCOUNT_ID must be a numeric New Relic account id")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Invalid LOG_LEVEL: {v}")
        return level


_settings: Optional[BrokerSettings] = None


def get_settings() -> BrokerSettings:
    """Get the settings instance, loading it from the environment on first use"""
    global _settings
    if _settings is None:
        _settings = BrokerSettings()
    return _settings

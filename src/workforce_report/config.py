"""Configuration management for the workforce report builder.

This module provides centralized configuration using pydantic-settings.
All configuration options can be set via environment variables with the
WFR_ prefix, or via a .env file in the project root.

Environment Variables:
    WFR_CONTRACT_BASE: Contracted headcount used as the participation
        denominator (default: 531)
    WFR_PREPARED_BY: Preparer name printed on every report
    WFR_ORGANISATION_NAME: Data provider named in the disclaimer
    WFR_DEPARTMENT_NAME: Department the report is prepared for
    WFR_EXECUTIVE_DISCLAIMER: Initial executive summary text (default: built
        from the organisation and department names)
    WFR_MAX_FILE_SIZE_MB: Maximum workbook upload size in MB (default: 10)
    WFR_LOG_LEVEL: Logging level (default: INFO)
    WFR_DEBUG: Enable debug mode (default: false)
    WFR_CORS_ORIGINS: Comma-separated CORS origins (default: *)
    WFR_SERVER_HOST: Server bind host (default: 127.0.0.1)
    WFR_SERVER_PORT: Server bind port (default: 8000)
"""

import logging
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DISCLAIMER_TEMPLATE = (
    "Executive Summary\n\n"
    "The information presented herein is based on data provided by "
    "{organisation}. The data has not been audited or approved by the "
    "{department} and is provided for guidance purposes only and "
    "remains subject to review, amendment, and change."
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Example .env file:
        WFR_CONTRACT_BASE=540
        WFR_PREPARED_BY=Jane Doe
        WFR_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="WFR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # =========================================================================
    # Report Settings
    # =========================================================================

    contract_base: int = 531
    """Total contracted headcount; denominator for monthly participation."""

    prepared_by: str = "Layla Alotaibi"
    """Name printed as the report preparer."""

    organisation_name: str = "Safari Company"
    """Organisation that supplied the workforce data."""

    department_name: str = "Environmental Services Department"
    """Department the reports are prepared for."""

    executive_disclaimer: str | None = None
    """Override for the initial executive summary; built from
    DISCLAIMER_TEMPLATE when unset."""

    # =========================================================================
    # Upload Settings
    # =========================================================================

    max_file_size_mb: int = 10
    """Maximum workbook upload size in megabytes."""

    # =========================================================================
    # Logging Settings
    # =========================================================================

    log_level: str = "INFO"
    """Logging level: DEBUG, INFO, WARNING, ERROR, or CRITICAL."""

    debug: bool = False
    """Enable debug mode with additional logging and error details."""

    # =========================================================================
    # Server Settings
    # =========================================================================

    cors_origins: str = "*"
    """Comma-separated list of allowed CORS origins, or * for all."""

    server_host: str = "127.0.0.1"
    """Host address for the local server to bind to."""

    server_port: int = 8000
    """Port for the server to listen on."""

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of: {', '.join(valid_levels)}"
            )
        return upper_v

    @field_validator("contract_base")
    @classmethod
    def validate_contract_base(cls, v: int) -> int:
        """Validate the contract base can be used as a denominator."""
        if v < 1:
            raise ValueError(f"contract_base must be at least 1, got {v}")
        return v

    @field_validator("prepared_by")
    @classmethod
    def validate_prepared_by(cls, v: str) -> str:
        """Validate the preparer name is non-empty."""
        if not v.strip():
            raise ValueError("prepared_by must be a non-empty string")
        return v.strip()

    @field_validator("max_file_size_mb")
    @classmethod
    def validate_file_size(cls, v: int) -> int:
        """Validate file size is positive and reasonable."""
        if not 1 <= v <= 500:
            raise ValueError(f"max_file_size_mb must be between 1 and 500, got {v}")
        return v

    @field_validator("server_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in valid range."""
        if not 1 <= v <= 65535:
            raise ValueError(f"server_port must be between 1 and 65535, got {v}")
        return v

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return self.max_file_size_mb * 1024 * 1024

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def disclaimer_text(self) -> str:
        """Get the initial executive summary of every report."""
        if self.executive_disclaimer:
            return self.executive_disclaimer
        return DISCLAIMER_TEMPLATE.format(
            organisation=self.organisation_name,
            department=self.department_name,
        )

    @property
    def log_level_int(self) -> int:
        """Get log level as integer for logging module."""
        level: int = getattr(logging, self.log_level)
        return level

    def to_safe_dict(self) -> dict[str, Any]:
        """Convert settings to a dictionary suitable for logging.

        Returns:
            Dictionary representation with the disclaimer abbreviated.
        """
        return {
            "contract_base": self.contract_base,
            "prepared_by": self.prepared_by,
            "organisation_name": self.organisation_name,
            "department_name": self.department_name,
            "executive_disclaimer": f"{len(self.disclaimer_text)} chars",
            "max_file_size_mb": self.max_file_size_mb,
            "log_level": self.log_level,
            "debug": self.debug,
            "cors_origins": self.cors_origins,
            "server_host": self.server_host,
            "server_port": self.server_port,
        }


def validate_settings_on_startup(s: Settings) -> None:
    """Validate settings on application startup.

    Args:
        s: Settings instance to validate.
    """
    logger = logging.getLogger(__name__)

    if s.server_host not in {"127.0.0.1", "localhost"}:
        logger.warning(
            f"Server is configured to bind to {s.server_host}. Reports are held "
            "in a single in-memory session without authentication."
        )

    if s.cors_origins == "*" and not s.debug:
        logger.warning(
            "CORS is configured to allow all origins (*). "
            "Consider restricting this in production."
        )

    logger.info(
        f"Configuration loaded: log_level={s.log_level}, debug={s.debug}, "
        f"contract_base={s.contract_base}, "
        f"max_file_size_mb={s.max_file_size_mb}"
    )


# Create the global settings instance
settings = Settings()

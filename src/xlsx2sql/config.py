"""Configuration management for xlsx2sql.

This module provides centralized configuration using pydantic-settings.
All configuration options can be set via environment variables with the
XLSX2SQL_ prefix, or via a .env file in the working directory.

Environment Variables:
    XLSX2SQL_LOG_LEVEL: Logging level (default: WARNING)
    XLSX2SQL_DEBUG: Enable debug mode (default: false)
    XLSX2SQL_ATOMIC: Abort the whole run on a malformed sheet (default: true)
    XLSX2SQL_SUPPORTED_EXTENSIONS: Comma-separated workbook extensions
        (default: xlsx,xlsm,xls)
    XLSX2SQL_OUTPUT_ENCODING: Encoding of the written SQL file (default: utf-8)
    XLSX2SQL_OUTPUT_SUFFIX: Suffix of the default output file (default: .sql)
"""

import codecs
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Example .env file:
        XLSX2SQL_LOG_LEVEL=DEBUG
        XLSX2SQL_ATOMIC=false
    """

    model_config = SettingsConfigDict(
        env_prefix="XLSX2SQL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # =========================================================================
    # Conversion Settings
    # =========================================================================

    atomic: bool = True
    """Abort the whole conversion when any sheet is malformed.

    When false, malformed sheets are skipped and reported instead.
    """

    supported_extensions: str = "xlsx,xlsm,xls"
    """Comma-separated list of accepted workbook file extensions."""

    # =========================================================================
    # Output Settings
    # =========================================================================

    output_encoding: str = "utf-8"
    """Text encoding used when writing SQL files."""

    output_suffix: str = ".sql"
    """Suffix replacing the workbook extension for the default output path."""

    # =========================================================================
    # Logging Settings
    # =========================================================================

    log_level: str = "WARNING"
    """Logging level: DEBUG, INFO, WARNING, ERROR, or CRITICAL."""

    debug: bool = False
    """Enable debug mode with tracebacks on failure."""

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

    @field_validator("supported_extensions")
    @classmethod
    def validate_extensions(cls, v: str) -> str:
        """Normalize extensions to lowercase without leading dots."""
        parts = [p.strip().lstrip(".").lower() for p in v.split(",")]
        parts = [p for p in parts if p]
        if not parts:
            raise ValueError("supported_extensions must list at least one extension")
        return ",".join(parts)

    @field_validator("output_encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Validate the output encoding is known to Python."""
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown output encoding: {v}") from e
        return v

    @field_validator("output_suffix")
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        """Ensure the suffix starts with a dot."""
        v = v.strip()
        if not v or v == ".":
            raise ValueError("output_suffix must be a non-empty suffix like .sql")
        return v if v.startswith(".") else f".{v}"

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def supported_extensions_list(self) -> list[str]:
        """Get accepted extensions as a list, e.g. ["xlsx", "xlsm"]."""
        return self.supported_extensions.split(",")

    def to_safe_dict(self) -> dict[str, Any]:
        """Convert settings to a dictionary for logging."""
        return {
            "atomic": self.atomic,
            "supported_extensions": self.supported_extensions,
            "output_encoding": self.output_encoding,
            "output_suffix": self.output_suffix,
            "log_level": self.log_level,
            "debug": self.debug,
        }


# Create the global settings instance
settings = Settings()

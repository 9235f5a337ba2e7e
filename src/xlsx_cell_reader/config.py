"""Configuration management for the spreadsheet reader.

This module provides centralized configuration using pydantic-settings.
All configuration options can be set via environment variables with the
XLSX_READER_ prefix, or via a .env file in the working directory.

Environment Variables:
    XLSX_READER_LOG_LEVEL: Logging level (default: INFO)
    XLSX_READER_DEBUG: Enable debug mode (default: false)
    XLSX_READER_MAX_PART_SIZE_MB: Largest uncompressed part to read (default: 100)
    XLSX_READER_RELATIONSHIP_SCOPE: "global" or "part" (default: global)
"""

import logging
from typing import Any, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

RelationshipScope = Literal["global", "part"]


class Settings(BaseSettings):
    """Reader settings loaded from environment variables.

    Example .env file:
        XLSX_READER_LOG_LEVEL=DEBUG
        XLSX_READER_MAX_PART_SIZE_MB=250
    """

    model_config = SettingsConfigDict(
        env_prefix="XLSX_READER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # =========================================================================
    # Archive Settings
    # =========================================================================

    max_part_size_mb: int = 100
    """Maximum uncompressed size of a single archive part in megabytes."""

    # =========================================================================
    # Resolution Settings
    # =========================================================================

    relationship_scope: RelationshipScope = "global"
    """How worksheet relationship ids are resolved.

    ``global`` looks ids up in one flat table built from every ``.rels`` part
    (last write wins). ``part`` looks them up only in the relationships
    declared by the workbook part's own ``.rels`` part.
    """

    # =========================================================================
    # Logging Settings
    # =========================================================================

    log_level: str = "INFO"
    """Logging level: DEBUG, INFO, WARNING, ERROR, or CRITICAL."""

    debug: bool = False
    """Enable debug mode with additional logging."""

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

    @field_validator("max_part_size_mb")
    @classmethod
    def validate_part_size(cls, v: int) -> int:
        """Validate part size is positive and reasonable."""
        if not 1 <= v <= 2048:
            raise ValueError(f"max_part_size_mb must be between 1 and 2048, got {v}")
        return v

    @field_validator("relationship_scope", mode="before")
    @classmethod
    def normalize_relationship_scope(cls, v: Any) -> Any:
        """Accept the scope name in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def max_part_size_bytes(self) -> int:
        """Get max part size in bytes."""
        return self.max_part_size_mb * 1024 * 1024

    @property
    def log_level_int(self) -> int:
        """Get log level as integer for logging module."""
        level: int = getattr(logging, self.log_level)
        return level

    def to_safe_dict(self) -> dict[str, Any]:
        """Convert settings to a plain dictionary for logging."""
        return {
            "max_part_size_mb": self.max_part_size_mb,
            "relationship_scope": self.relationship_scope,
            "log_level": self.log_level,
            "debug": self.debug,
        }


# Create the global settings instance
settings = Settings()

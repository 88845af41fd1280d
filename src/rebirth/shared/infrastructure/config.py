"""
Application configuration using Pydantic Settings.

Loads configuration from REBIRTH_* environment variables and .env file.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="REBIRTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = Field(default="development", description="Environment (development/production)")
    log_level: str = Field(default="WARNING", description="Logging level")

    # Tree storage
    database_url: str = Field(
        default="sqlite:///rebirth.db",
        description="SQLAlchemy URL of the content tree database",
    )
    node_types_file: str = Field(
        default="node_types.yaml",
        description="YAML file with node type definitions, merged over the built-in types",
    )

    # Node types
    document_node_type: str = Field(
        default="Neos.Neos:Document",
        description="Supertype of all document nodes (default type filter, valid restore targets)",
    )
    restore_target_node_type: str = Field(
        default="Rebirth:RestoreContainer",
        description="Node type of the restore container looked up or created under a site",
    )
    restore_container_title: str = Field(
        default="Restored documents",
        description="Title given to an auto-created restore container",
    )

    @field_validator("document_node_type", "restore_target_node_type")
    @classmethod
    def _require_node_type(cls, value: str) -> str:
        """Fail fast on empty node type names."""
        if not value or not value.strip():
            raise ValueError("node type names must not be empty")
        return value.strip()

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env.lower() == "development"


# Global settings instance
settings = Settings()

"""Configuration management using Pydantic Settings."""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden using environment variables or .env file.
    """

    # Neo4j Database Configuration
    neo4j_uri: str = Field(
        default="bolt://localhost:7687",
        description="Neo4j database connection URI"
    )
    neo4j_user: str = Field(
        default="neo4j",
        description="Neo4j username"
    )
    neo4j_password: str = Field(
        ...,
        description="Neo4j password (required)"
    )

    # API Configuration
    api_key: Optional[str] = Field(
        default=None,
        description="API key for authentication. If not set, authentication is disabled (dev mode)"
    )

    # Application Settings
    app_name: str = Field(
        default="CCR Compliance Review API",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode flag"
    )

    # Report Branding
    organization_name: str = Field(
        default="Sunrise Territory Village Homeowners Association",
        description="Organization named on the document title page and trailer"
    )
    community_name: str = Field(
        default="Sunrise Territory Village",
        description="Community named in the HTML and text report titles"
    )
    system_name: str = Field(
        default="CCR Compliance Review System",
        description="System name printed in report footers"
    )

    # Email Delivery
    report_recipient: str = Field(
        default="board@stvha.org",
        description="Default recipient for emailed violation reports"
    )
    smtp_host: str = Field(
        default="localhost",
        description="SMTP server hostname"
    )
    smtp_port: int = Field(
        default=587,
        description="SMTP server port"
    )
    smtp_user: Optional[str] = Field(
        default=None,
        description="SMTP username. Email delivery is disabled when unset"
    )
    smtp_password: Optional[str] = Field(
        default=None,
        description="SMTP password"
    )
    smtp_start_tls: bool = Field(
        default=True,
        description="Upgrade the SMTP connection with STARTTLS"
    )
    email_from: str = Field(
        default="noreply@stvha.org",
        description="Sender address for report emails"
    )
    email_from_name: str = Field(
        default="CCR Compliance Review",
        description="Sender display name for report emails"
    )

    # Photo Handling
    embed_photos: bool = Field(
        default=False,
        description="Embed photo previews in the downloadable document in addition to links"
    )
    photo_fetch_timeout: float = Field(
        default=10.0,
        description="Timeout in seconds for fetching a single photo"
    )
    photo_max_width_px: int = Field(
        default=600,
        description="Maximum preview width in pixels for embedded photos"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_file: str = Field(
        default="logs/api.log",
        description="Path to log file"
    )

    class Config:
        """Pydantic config."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

        # Allow extra fields from environment
        extra = "ignore"

        # Example values for documentation
        json_schema_extra = {
            "example": {
                "neo4j_uri": "bolt://localhost:7687",
                "neo4j_user": "neo4j",
                "neo4j_password": "secure_password",
                "api_key": "your_api_key_here",
                "smtp_user": "reports@stvha.org",
                "embed_photos": False,
                "log_level": "INFO"
            }
        }


# Create a singleton instance
settings = Settings()

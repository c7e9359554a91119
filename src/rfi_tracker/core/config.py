"""Application configuration management."""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Database Configuration
    postgres_host: str = Field(default="localhost", description="PostgreSQL host")
    postgres_port: int = Field(default=5432, description="PostgreSQL port")
    postgres_db: str = Field(default="rfi_db", description="PostgreSQL database name")
    postgres_user: str = Field(default="rfi_user", description="PostgreSQL username")
    postgres_password: str = Field(default="", description="PostgreSQL password")
    custom_database_url: Optional[str] = Field(
        default=None,
        description="Full database URL, overrides the PostgreSQL components (e.g. sqlite:///./rfi.db)"
    )
    sql_echo: bool = Field(default=False, description="Echo SQL statements")
    
    # Attachment storage
    upload_dir: str = Field(default="uploads", description="Directory holding RFI attachment files")
    
    # Application Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    environment: str = Field(default="development", description="Environment name")
    
    @property
    def database_url(self) -> str:
        """Construct database URL from components."""
        if self.custom_database_url:
            return self.custom_database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )
    
    @property
    def is_sqlite(self) -> bool:
        """Whether the configured database is SQLite."""
        return self.database_url.startswith("sqlite")


# Global settings instance
settings = Settings()

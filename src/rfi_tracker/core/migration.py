"""Database migration utilities."""

import os
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config
import structlog

logger = structlog.get_logger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent.parent


class MigrationManager:
    """Manages database migrations using Alembic."""

    def __init__(self, alembic_cfg_path: str = "alembic.ini", database_url: Optional[str] = None) -> None:
        """Initialize migration manager.

        Args:
            alembic_cfg_path: Path to alembic.ini configuration file
            database_url: Database to migrate, defaults to the configured one
        """
        self.alembic_cfg_path = alembic_cfg_path
        self.database_url = database_url
        self.config = None

    def _get_alembic_config(self) -> Config:
        """Get Alembic configuration.

        Returns:
            Alembic configuration object

        Raises:
            FileNotFoundError: If alembic.ini is not found
        """
        if self.config is None:
            if not os.path.exists(self.alembic_cfg_path):
                raise FileNotFoundError(f"Alembic config file not found: {self.alembic_cfg_path}")

            self.config = Config(self.alembic_cfg_path)

            script_location = self.config.get_main_option("script_location")
            if script_location:
                self.config.set_main_option("script_location", str(PROJECT_ROOT / script_location))
            if self.database_url:
                self.config.set_main_option("sqlalchemy.url", self.database_url)

        return self.config

    def run_migrations(self, revision: str = "head") -> None:
        """Upgrade the database to ``revision``."""
        try:
            command.upgrade(self._get_alembic_config(), revision)
            logger.info("Database migrations completed successfully", revision=revision)
        except Exception as e:
            logger.error("Failed to run database migrations", error=str(e))
            raise

    def downgrade(self, revision: str = "-1") -> None:
        """Downgrade database to specified revision.

        Args:
            revision: Target revision (default: previous revision)
        """
        try:
            command.downgrade(self._get_alembic_config(), revision)
            logger.info("Database downgraded", revision=revision)
        except Exception as e:
            logger.error("Failed to downgrade database", revision=revision, error=str(e))
            raise


migration_manager = MigrationManager()


def run_migrations() -> None:
    """Run all pending database migrations."""
    migration_manager.run_migrations()


def init_database() -> None:
    """Initialize database connection and bring the schema up to date."""
    from .database import db_manager

    logger.info("Initializing database...")
    db_manager.initialize()
    run_migrations()

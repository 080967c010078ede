"""Database migrations module."""

from src.infrastructure.storage.sqlite.migrations.migrator import (
    MIGRATIONS_DIR,
    MigrationInfo,
    MigrationResult,
    apply_migration,
    discover_migrations,
    get_applied_migrations,
    get_migration_status,
    initialize_database,
    run_migrations,
)

__all__ = [
    "MIGRATIONS_DIR",
    "MigrationInfo",
    "MigrationResult",
    "apply_migration",
    "discover_migrations",
    "get_applied_migrations",
    "get_migration_status",
    "initialize_database",
    "run_migrations",
]

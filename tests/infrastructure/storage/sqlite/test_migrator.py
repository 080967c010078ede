"""Unit tests for the schema migrator."""

from pathlib import Path

import aiosqlite
import pytest

from src.infrastructure.storage.sqlite.migrations.migrator import (
    MigrationInfo,
    discover_migrations,
    get_applied_migrations,
    get_migration_status,
    initialize_database,
)


class TestMigrationInfo:
    def test_from_file_parses_filename(self, tmp_path: Path):
        migration_file = tmp_path / "v001_initial_schema.sql"
        migration_file.write_text("SELECT 1;")

        info = MigrationInfo.from_file(migration_file)

        assert info.version == "001"
        assert info.name == "initial_schema"
        assert info.path == migration_file
        assert len(info.checksum) == 16

    def test_different_content_different_checksum(self, tmp_path: Path):
        file1 = tmp_path / "v001_a.sql"
        file1.write_text("SELECT 1;")
        file2 = tmp_path / "v002_b.sql"
        file2.write_text("SELECT 2;")

        assert MigrationInfo.from_file(file1).checksum != MigrationInfo.from_file(file2).checksum

    def test_invalid_filename_raises(self, tmp_path: Path):
        invalid_file = tmp_path / "invalid_migration.sql"
        invalid_file.write_text("SELECT 1;")

        with pytest.raises(ValueError, match="Invalid migration filename"):
            MigrationInfo.from_file(invalid_file)


class TestDiscover:
    def test_bundled_migrations(self):
        versions = [m.version for m in discover_migrations()]
        assert versions[0] == "001"
        assert versions == sorted(versions)

    def test_bundled_migrations_leave_bookkeeping_to_migrator(self):
        for migration in discover_migrations():
            assert "schema_migrations" not in migration.path.read_text()

    def test_skips_invalid_files(self, tmp_path: Path):
        (tmp_path / "v002_second.sql").write_text("SELECT 2;")
        (tmp_path / "v001_first.sql").write_text("SELECT 1;")
        (tmp_path / "v_bad.sql").write_text("SELECT 3;")

        assert [m.name for m in discover_migrations(tmp_path)] == ["first", "second"]


class TestInitializeDatabase:
    async def test_creates_tables(self, temp_db_path: Path):
        results = await initialize_database(temp_db_path)

        assert results and all(r.success for r in results)
        async with aiosqlite.connect(temp_db_path) as conn:
            cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
            tables = {row[0] for row in await cursor.fetchall()}
        assert {"market_item", "sale", "schema_migrations"} <= tables

    async def test_second_run_is_noop(self, temp_db_path: Path):
        await initialize_database(temp_db_path)
        assert await initialize_database(temp_db_path) == []

    async def test_records_applied_versions(self, temp_db_path: Path):
        await initialize_database(temp_db_path)

        async with aiosqlite.connect(temp_db_path) as conn:
            applied = await get_applied_migrations(conn)
        assert "001" in applied

    async def test_failed_migration_stops(self, tmp_path: Path, temp_db_path: Path):
        (tmp_path / "v001_ok.sql").write_text("CREATE TABLE a (v INTEGER);")
        (tmp_path / "v002_broken.sql").write_text("CREATE TABLE oops (;")
        (tmp_path / "v003_never.sql").write_text("CREATE TABLE c (v INTEGER);")

        results = await initialize_database(temp_db_path, migrations_dir=tmp_path)

        assert [r.success for r in results] == [True, False]
        assert results[1].error


class TestMigrationStatus:
    async def test_fresh_database(self, tmp_path: Path):
        status = await get_migration_status(tmp_path / "missing.db")
        assert status["applied"] == []
        assert "001" in status["pending"]
        assert status["current_version"] is None

    async def test_after_initialize(self, temp_db_path: Path):
        await initialize_database(temp_db_path)
        status = await get_migration_status(temp_db_path)
        assert status["pending"] == []
        assert status["current_version"] == "001"

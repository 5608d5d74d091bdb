# tests/test_init_db.py
"""Tests for the schema bootstrap script."""

from sqlalchemy import create_engine, inspect, text

from loop_forum.scripts.init_db import main


def test_init_db_creates_schema_and_seeds(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'forum.db'}"

    assert main(["--database-url", url]) == 0
    # Running twice must not duplicate categories.
    assert main(["--database-url", url]) == 0

    engine = create_engine(url)
    try:
        assert {"users", "posts", "replies", "follows"} <= set(inspect(engine).get_table_names())
        with engine.connect() as conn:
            assert conn.execute(text("SELECT COUNT(*) FROM categories")).scalar() == 6
    finally:
        engine.dispose()

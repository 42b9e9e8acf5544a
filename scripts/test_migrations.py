"""Test Alembic migration pipeline."""

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from backend.db import Base

ROOT = Path(__file__).resolve().parent.parent


def _alembic_config(db_url: str) -> Config:
    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "backend" / "alembic"))
    cfg.set_main_option("sqlalchemy.url", db_url)
    return cfg


def test_upgrade_creates_every_model_table(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'migrate.db'}"
    cfg = _alembic_config(db_url)

    command.upgrade(cfg, "head")

    engine = create_engine(db_url)
    tables = set(inspect(engine).get_table_names())
    assert set(Base.metadata.tables) <= tables

    columns = {c["name"] for c in inspect(engine).get_columns("profiles")}
    assert set(Base.metadata.tables["profiles"].columns.keys()) == columns
    engine.dispose()


def test_downgrade_drops_everything(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'migrate.db'}"
    cfg = _alembic_config(db_url)

    command.upgrade(cfg, "head")
    command.downgrade(cfg, "base")

    engine = create_engine(db_url)
    assert set(inspect(engine).get_table_names()) <= {"alembic_version"}
    engine.dispose()

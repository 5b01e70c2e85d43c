import importlib.util
from pathlib import Path
from unittest.mock import Mock

import sqlalchemy as sa

from app import models  # noqa: F401
from app.db.base import Base

VERSIONS_DIR = Path(__file__).resolve().parents[1] / "migrations" / "versions"


def _replay_upgrades() -> Mock:
    op = Mock()
    for path in sorted(VERSIONS_DIR.glob("*.py")):
        spec = importlib.util.spec_from_file_location(path.stem, path)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        module.op = op
        module.upgrade()
    return op


def _calls(op: Mock, name: str):
    return [c for c in op.method_calls if c[0] == name]


def test_revisions_form_a_single_chain():
    revisions = {}
    for path in sorted(VERSIONS_DIR.glob("*.py")):
        spec = importlib.util.spec_from_file_location(path.stem, path)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        revisions[module.revision] = module.down_revision

    heads = set(revisions) - set(revisions.values())
    assert len(heads) == 1
    assert sum(1 for down in revisions.values() if down is None) == 1


def test_migrations_create_the_model_tables_and_columns():
    op = _replay_upgrades()

    migrated = set()
    for _, args, _ in _calls(op, "create_table"):
        table, *items = args
        migrated.update((table, item.name) for item in items if isinstance(item, sa.Column))
    for _, args, _ in _calls(op, "add_column"):
        migrated.add((args[0], args[1].name))

    modelled = {(table.name, column.name) for table in Base.metadata.sorted_tables for column in table.columns}
    assert migrated == modelled


def test_migration_indexes_match_models():
    op = _replay_upgrades()

    migrated = {(args[0], args[1], kwargs.get("unique", False)) for _, args, kwargs in _calls(op, "create_index")}
    modelled = {
        (index.name, table.name, bool(index.unique))
        for table in Base.metadata.sorted_tables
        for index in table.indexes
    }
    assert migrated == modelled

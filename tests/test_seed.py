"""Tests for catalog loading, export and the seed CLI."""

import json

import pytest

from catalog_api.config import Settings
from catalog_api.data.loader import clear_catalog, export_catalog, load_catalog
from catalog_api.data.sample_catalog import SAMPLE_CATALOG, ensure_sample_catalog
from catalog_api.models.attribute import Attribute
from catalog_api.models.category import Category
from catalog_api.models.database import Database
from catalog_api.scripts import seed


@pytest.fixture
def database():
    database = Database("sqlite://")
    database.create_tables()
    yield database
    database.dispose()


@pytest.fixture
def session(database):
    db = database.session()
    try:
        yield db
    finally:
        db.close()


def test_sample_catalog_loads_every_table(session):
    stats = load_catalog(session, SAMPLE_CATALOG)

    assert stats == {
        "categories": 8,
        "attributes": 8,
        "category_attributes": 7,
        "products": 6,
        "product_attribute_values": 7,
        "skipped": 0,
    }


def test_loading_twice_skips_existing_rows(session):
    load_catalog(session, SAMPLE_CATALOG)
    stats = load_catalog(session, SAMPLE_CATALOG)

    assert stats["categories"] == 0
    assert stats["skipped"] == 8 + 8 + 7 + 6 + 7


def test_clear_existing_replaces_data(session):
    load_catalog(session, SAMPLE_CATALOG)
    stats = load_catalog(session, {"categories": [{"id": 1, "name": "Only"}]}, clear_existing=True)

    assert stats["categories"] == 1
    assert [c.name for c in session.query(Category).all()] == ["Only"]
    assert session.query(Attribute).count() == 0


def test_paths_are_derived_from_parents(session):
    load_catalog(
        session,
        {
            "categories": [
                {"id": 1, "name": "Root"},
                {"id": 2, "name": "Child", "parent_id": 1},
                {"id": 3, "name": "Grandchild", "parent_id": 2},
            ]
        },
    )

    grandchild = session.get(Category, 3)
    assert grandchild.path == "/1/2/3"
    assert grandchild.level == 2


def test_unknown_parent_is_rejected(session):
    with pytest.raises(ValueError, match="unknown parent"):
        load_catalog(session, {"categories": [{"id": 2, "name": "Child", "parent_id": 1}]})


def test_unknown_attribute_type_is_rejected(session):
    with pytest.raises(ValueError, match="unknown type"):
        load_catalog(session, {"attributes": [{"id": 1, "name": "X", "type": "json"}]})


def test_unknown_link_type_is_rejected(session):
    seed_data = {
        "categories": [{"id": 1, "name": "Root"}],
        "attributes": [{"id": 1, "name": "X", "type": "text"}],
        "category_attributes": [{"category_id": 1, "attribute_id": 1, "link_type": "cousin"}],
    }

    with pytest.raises(ValueError, match="Unknown link type"):
        load_catalog(session, seed_data)


def test_export_round_trips_sample(session):
    load_catalog(session, SAMPLE_CATALOG)
    exported = export_catalog(session)

    assert [c["path"] for c in exported["categories"]][:2] == ["/1", "/2"]
    assert exported["attributes"][0]["options"] == SAMPLE_CATALOG["attributes"][0]["options"]
    assert len(exported["product_attribute_values"]) == 7

    clear_catalog(session)
    assert load_catalog(session, exported)["skipped"] == 0


def test_ensure_sample_catalog_only_seeds_empty_database(session):
    assert ensure_sample_catalog(session) is True
    assert ensure_sample_catalog(session) is False


def test_cli_sample_then_export(tmp_path, monkeypatch, capsys):
    db_path = tmp_path / "catalog.db"
    monkeypatch.setattr(seed, "settings", Settings(database_url=f"sqlite:///{db_path}"))
    out = tmp_path / "seed.json"

    seed.main(["sample"])
    seed.main(["export", str(out)])

    exported = json.loads(out.read_text())
    assert len(exported["categories"]) == 8
    assert exported["version"] == "1.0"
    assert "Exported seed data" in capsys.readouterr().out


def test_cli_load_with_clear(tmp_path, monkeypatch):
    db_path = tmp_path / "catalog.db"
    monkeypatch.setattr(seed, "settings", Settings(database_url=f"sqlite:///{db_path}"))
    seed_file = tmp_path / "seed.json"
    seed_file.write_text(json.dumps({"categories": [{"id": 5, "name": "Solo"}]}))

    seed.main(["sample"])
    seed.main(["load", str(seed_file), "--clear"])

    database = Database(f"sqlite:///{db_path}")
    db = database.session()
    try:
        assert [c.path for c in db.query(Category).all()] == ["/5"]
    finally:
        db.close()
        database.dispose()


def test_cli_missing_file_exits(tmp_path, monkeypatch):
    monkeypatch.setattr(seed, "settings", Settings(database_url=f"sqlite:///{tmp_path / 'c.db'}"))

    with pytest.raises(SystemExit):
        seed.main(["load", str(tmp_path / "missing.json")])


def test_cli_unknown_command_exits(tmp_path, monkeypatch):
    monkeypatch.setattr(seed, "settings", Settings(database_url=f"sqlite:///{tmp_path / 'c.db'}"))

    with pytest.raises(SystemExit):
        seed.main(["frobnicate"])

import pytest

from tuxchannels.database import (
    FIRST_DB_VERSION,
    DBSync,
    DBSyncError,
    compare_db_version,
    default_db_path,
)


@pytest.fixture
def db(tmp_path):
    sync = DBSync(tmp_path / "conf" / "freetuxtv.db")
    sync.open()
    yield sync
    sync.close()


@pytest.mark.parametrize(
    "first, second, expected",
    [
        ("0.1.0.1", "0.1.0.1", 0),
        ("0.2.0.0", "0.1.9.9", 1),
        ("0.1.9.9", "0.2.0.0", -1),
        ("1.0.0.0", "0.9.9.9", 1),
        ("0.1.0.2", "0.1.0.10", -1),
    ],
)
def test_compare_db_version(first, second, expected):
    assert compare_db_version(first, second) == expected


def test_compare_is_antisymmetric():
    assert compare_db_version("0.3.1.0", "0.3.0.5") == -compare_db_version(
        "0.3.0.5", "0.3.1.0"
    )


def test_default_db_path_uses_config_home(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert default_db_path() == tmp_path / "FreetuxTV" / "freetuxtv.db"


def test_open_creates_directory_and_file(tmp_path):
    sync = DBSync(tmp_path / "conf" / "freetuxtv.db")
    assert not sync.exists()
    with sync:
        sync.create_schema()
    assert sync.exists()
    assert (tmp_path / "conf").is_dir()


def test_context_manager_closes(tmp_path):
    with DBSync(tmp_path / "x.db") as sync:
        assert sync.connection is not None
    assert sync.connection is None


def test_open_on_directory_fails(tmp_path):
    target = tmp_path / "adir"
    target.mkdir()
    with pytest.raises(DBSyncError):
        DBSync(target).open()


def test_version_of_empty_database_is_first(db):
    assert db.get_current_db_version() == FIRST_DB_VERSION


def test_schema_creates_all_tables(db):
    db.create_schema()
    names = {
        row[0]
        for row in db.connection.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        )
    }
    assert {
        "config",
        "tvchannel",
        "label_tvchannel",
        "channels_group",
        "channel",
        "recording",
    } <= names
    assert db.get_current_db_version() == FIRST_DB_VERSION


def test_set_and_get_version_round_trip(db):
    db.create_schema()
    db.set_current_db_version("0.2.0.0")
    assert db.get_current_db_version() == "0.2.0.0"


def test_first_version_is_not_stored(db):
    db.create_schema()
    db.set_current_db_version(FIRST_DB_VERSION)
    count = db.connection.execute("SELECT COUNT(*) FROM config").fetchone()[0]
    assert count == 0


def test_new_channel_counts_as_updated(db):
    db.create_schema()
    db.execute_script("INSERT INTO channel (name, position) VALUES ('One', 1);")
    updated = db.connection.execute("SELECT updated FROM channel").fetchone()[0]
    assert updated == 1


def test_execute_script_reports_errors(db):
    with pytest.raises(DBSyncError, match="migrating"):
        db.execute_script("THIS IS NOT SQL;")


def test_closed_database_raises(tmp_path):
    sync = DBSync(tmp_path / "x.db")
    with pytest.raises(DBSyncError):
        sync.execute_script("SELECT 1;")
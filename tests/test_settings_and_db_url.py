from creditledger.db import get_database_url, sql_mode_enabled
from creditledger.settings import get_settings


def test_settings_use_env_data_dir_and_create_it(tmp_path, monkeypatch):
    data_dir = tmp_path / "ledger-data"
    monkeypatch.setenv("CREDITLEDGER_DATA_DIR", str(data_dir))
    monkeypatch.setenv("CREDITLEDGER_CREDITS_FILE", " shop.json ")

    s = get_settings()

    assert s.data_dir == data_dir
    assert data_dir.is_dir()
    assert s.credits_path == data_dir / "shop.json"


def test_blank_credits_file_falls_back_to_default(tmp_path, monkeypatch):
    monkeypatch.setenv("CREDITLEDGER_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("CREDITLEDGER_CREDITS_FILE", "   ")

    assert get_settings().credits_path == tmp_path / "credits.json"


def test_database_url_defaults_to_sqlite_in_data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("CREDITLEDGER_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("CREDITLEDGER_DATABASE_URL", raising=False)

    assert get_database_url() == f"sqlite:///{(tmp_path / 'creditledger.db').as_posix()}"
    assert sql_mode_enabled() is False


def test_explicit_database_url_enables_sql_mode(monkeypatch):
    monkeypatch.setenv("CREDITLEDGER_DATABASE_URL", "  sqlite:///x.db ")

    assert get_database_url() == "sqlite:///x.db"
    assert sql_mode_enabled() is True

import os

import pytest

from pg_bulk_import.config import ImportConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # load_dotenv writes into os.environ; every test gets a private copy
    env = {k: v for k, v in os.environ.items() if not k.startswith("PG_IMPORT_")}
    monkeypatch.setattr(os, "environ", env)


def test_defaults(tmp_path):
    config = ImportConfig.from_env(str(tmp_path / "missing.env"))
    assert config == ImportConfig()
    assert config.rel_columns == ("src", "dest", "type")


def test_environment_variables(monkeypatch, tmp_path):
    monkeypatch.setenv("PG_IMPORT_DELIMITER", ";")
    monkeypatch.setenv("PG_IMPORT_PROGRESS_EVERY", "10")
    monkeypatch.setenv("PG_IMPORT_VERBOSE", "no")

    config = ImportConfig.from_env(str(tmp_path / "missing.env"))

    assert config.delimiter == ";"
    assert config.progress_every == 10
    assert config.verbose is False


def test_dotenv_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("PG_IMPORT_ENCODING=latin-1\n", encoding="utf-8")

    config = ImportConfig.from_env(str(env_file))

    assert config.encoding == "latin-1"
    assert os.environ["PG_IMPORT_ENCODING"] == "latin-1"


def test_dotenv_values_do_not_leak_between_tests():
    assert "PG_IMPORT_ENCODING" not in os.environ
    assert ImportConfig.from_env("/nonexistent/.env").encoding == "utf-8-sig"


def test_overrides_win(monkeypatch, tmp_path):
    monkeypatch.setenv("PG_IMPORT_DELIMITER", ";")
    config = ImportConfig.from_env(str(tmp_path / "missing.env"), delimiter="\t", encoding=None)
    assert config.delimiter == "\t"
    assert config.encoding == "utf-8-sig"

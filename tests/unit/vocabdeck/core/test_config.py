from pathlib import Path

import pytest
from pydantic import ValidationError

from vocabdeck.core.config import CoreSettings, get_settings, reset_settings
from vocabdeck.core.config.config import DEFAULT_JWT_SECRET, load_ini_as_dict


def test_packaged_defaults(monkeypatch):
    monkeypatch.delenv("VOCABDECK_DIR_PATHS__LOGGER_DIR", raising=False)
    settings = CoreSettings()

    assert settings.VOCABDECK_SERVER.PORT == 4001
    assert settings.VOCABDECK_AUTH.TOKEN_TTL_DAYS == 7
    assert settings.VOCABDECK_AUTH.BCRYPT_ROUNDS == 10
    assert settings.VOCABDECK_AUTH.JWT_ALGORITHM == "HS256"
    assert settings.VOCABDECK_LOGGER.USE_STRUCTLOG is False
    assert not settings.VOCABDECK_DIR_PATHS.ROOT.startswith("~")
    assert settings.VOCABDECK_DIR_PATHS.DATA_DIR == f"{settings.VOCABDECK_DIR_PATHS.ROOT}/store"


def test_env_overrides_ini(monkeypatch, tmp_path):
    monkeypatch.setenv("VOCABDECK_SERVER__PORT", "5050")
    monkeypatch.setenv("VOCABDECK_DIR_PATHS__DATA_DIR", str(tmp_path / "elsewhere"))

    settings = CoreSettings()

    assert settings.VOCABDECK_SERVER.PORT == 5050
    assert settings.data_dir == tmp_path / "elsewhere"


def test_init_overrides_env(monkeypatch):
    monkeypatch.setenv("VOCABDECK_SERVER__PORT", "5050")
    settings = CoreSettings(VOCABDECK_SERVER={"PORT": 6060})
    assert settings.VOCABDECK_SERVER.PORT == 6060


def test_env_tilde_is_expanded(monkeypatch):
    monkeypatch.setenv("VOCABDECK_DIR_PATHS__DATA_DIR", "~/vocab-data")
    settings = CoreSettings()
    assert settings.VOCABDECK_DIR_PATHS.DATA_DIR == str(Path("~/vocab-data").expanduser())


def test_derived_paths(settings, tmp_path):
    assert settings.data_dir == tmp_path / "store"
    assert settings.users_path == tmp_path / "store" / "users.json"
    assert settings.documents_dir == tmp_path / "store" / "data"


def test_secret_is_not_rendered(settings):
    assert settings.VOCABDECK_AUTH.JWT_SECRET.get_secret_value() not in repr(settings)


def test_bcrypt_rounds_minimum():
    with pytest.raises(ValidationError):
        CoreSettings(VOCABDECK_AUTH={"JWT_SECRET": "x" * 32, "BCRYPT_ROUNDS": 9})


def test_cors_origins_are_split():
    settings = CoreSettings(VOCABDECK_SERVER={"CORS_ORIGINS": "http://a.test, http://b.test,"})
    assert settings.VOCABDECK_SERVER.cors_origins == ["http://a.test", "http://b.test"]


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
    first = get_settings()
    reset_settings()
    assert get_settings() is not first


def test_default_secret_warns(monkeypatch):
    monkeypatch.delenv("VOCABDECK_AUTH__JWT_SECRET")
    with pytest.warns(UserWarning, match="default JWT secret"):
        settings = get_settings()
    assert settings.VOCABDECK_AUTH.JWT_SECRET.get_secret_value() == DEFAULT_JWT_SECRET


def test_load_ini_as_dict(tmp_path):
    ini = tmp_path / "config.ini"
    ini.write_text("[paths]\nroot = ~/x\nchild = ${root}/y\n", encoding="utf-8")

    config = load_ini_as_dict(ini)

    home = str(Path.home())
    assert config == {"PATHS": {"ROOT": f"{home}/x", "CHILD": f"{home}/x/y"}}


def test_load_ini_as_dict_missing_file(tmp_path):
    assert load_ini_as_dict(tmp_path / "absent.ini") == {}

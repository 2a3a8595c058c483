import configparser
import os
import warnings
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "dev-secret-change-me"


class VOCABDECK_DIR_PATHS(BaseModel):
    ROOT: str
    DATA_DIR: str
    LOGGER_DIR: str


class VOCABDECK_AUTH(BaseModel):
    JWT_SECRET: SecretStr
    JWT_ALGORITHM: str = "HS256"
    TOKEN_TTL_DAYS: int = Field(default=7, gt=0)
    BCRYPT_ROUNDS: int = Field(default=10, ge=10, le=31)


class VOCABDECK_SERVER(BaseModel):
    HOST: str = "0.0.0.0"
    PORT: int = 4001
    CORS_ORIGINS: str = "*"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


class VOCABDECK_LOGGER(BaseModel):
    USE_STRUCTLOG: bool = False
    STREAM_LEVEL: str = "ERROR"


def _expand_home(value: Any) -> Any:
    """Expand a leading ``~`` in every string of a (possibly nested) settings mapping."""
    if isinstance(value, str):
        return os.path.expanduser(value) if value.startswith("~") else value
    if isinstance(value, dict):
        return {key: _expand_home(item) for key, item in value.items()}
    return value


def load_ini_as_dict(ini_path: Path) -> Dict[str, Any]:
    """Read an INI file into ``{SECTION: {KEY: value}}`` with upper-cased names.

    ``${KEY}`` references are resolved with ``ExtendedInterpolation`` before a leading ``~`` is expanded, so
    ``DATA_DIR = ${ROOT}/store`` follows whatever ``ROOT`` points to. A missing file yields an empty dict.

    Example:
        .. code-block:: ini

            [VOCABDECK_DIR_PATHS]
            ROOT = ~/.cache/vocabdeck
            DATA_DIR = ${ROOT}/store

        .. code-block:: python

            paths = load_ini_as_dict(Path("config.ini"))["VOCABDECK_DIR_PATHS"]
            paths["DATA_DIR"]  # "/home/me/.cache/vocabdeck/store"
    """
    if not ini_path.exists():
        return {}

    parser = configparser.ConfigParser(interpolation=configparser.ExtendedInterpolation())
    parser.optionxform = str
    parser.read(ini_path, encoding="utf-8")
    return {
        section.upper(): {key.upper(): _expand_home(value) for key, value in parser[section].items()}
        for section in parser.sections()
    }


def load_ini_settings() -> Dict[str, Any]:
    """Defaults shipped with the package in ``config.ini``."""
    return load_ini_as_dict(Path(__file__).with_name("config.ini"))


class CoreSettings(BaseSettings):
    """Process-wide VocabDeck settings.

    Each section can be overridden through the environment using ``__`` between section and key, e.g.
    ``VOCABDECK_AUTH__JWT_SECRET=...`` or ``VOCABDECK_SERVER__PORT=8080``. Precedence, highest first: constructor
    arguments, environment, ``.env``, the packaged ``config.ini``, secret files.
    """

    VOCABDECK_DIR_PATHS: VOCABDECK_DIR_PATHS
    VOCABDECK_AUTH: VOCABDECK_AUTH
    VOCABDECK_SERVER: VOCABDECK_SERVER
    VOCABDECK_LOGGER: VOCABDECK_LOGGER

    model_config = {
        "env_nested_delimiter": "__",
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        def from_init():
            return _expand_home(init_settings())

        def from_env():
            return _expand_home(env_settings())

        return (
            from_init,
            from_env,
            dotenv_settings,
            load_ini_settings,
            file_secret_settings,
        )

    @property
    def data_dir(self) -> Path:
        return Path(self.VOCABDECK_DIR_PATHS.DATA_DIR)

    @property
    def users_path(self) -> Path:
        """The identity document holding every registered account."""
        return self.data_dir / "users.json"

    @property
    def documents_dir(self) -> Path:
        """Directory of the per-account documents, one ``<account_id>.json`` each."""
        return self.data_dir / "data"


_settings: Optional[CoreSettings] = None


def get_settings() -> CoreSettings:
    """Load cached settings with VOCABDECK_* env override support."""
    global _settings
    if _settings is None:
        _settings = CoreSettings()
        if _settings.VOCABDECK_AUTH.JWT_SECRET.get_secret_value() == DEFAULT_JWT_SECRET:
            warnings.warn(
                "Using the default JWT secret. Set VOCABDECK_AUTH__JWT_SECRET for anything but local development.",
                UserWarning,
                stacklevel=2,
            )
    return _settings


def reset_settings() -> None:
    """Reset the settings cache (useful in tests)."""
    global _settings
    _settings = None

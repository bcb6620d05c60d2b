import json
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_CONFIG_PATH = 'config.json'
DEFAULT_MIRROR_DIR = 'content_repo'
DEFAULT_PORT = 3000


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class Config:
    repo_url: str
    username: str = None
    password: str = None
    update_interval_minutes: int = 0
    port: int = DEFAULT_PORT
    host: str = '0.0.0.0'
    mirror_dir: Path = Path(DEFAULT_MIRROR_DIR)

    @property
    def has_credentials(self):
        return bool(self.username and self.password)


def _as_int(data, key, default):
    value = data.get(key, default)
    if isinstance(value, bool):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}")
    # int() would truncate 0.5 to 0
    if isinstance(value, float):
        if not value.is_integer():
            raise ConfigError(f"'{key}' must be a whole number, got {value!r}")
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}")


def config_path_from_env():
    return os.environ.get('DOCS_READER_CONFIG', DEFAULT_CONFIG_PATH)


def load_config(path=None, environ=None):
    """Load the JSON config file and apply environment overrides.

    Credentials can be left out of the file and supplied through
    DOCS_READER_USERNAME / DOCS_READER_PASSWORD instead.
    """
    if environ is None:
        environ = os.environ
    if path is None:
        path = config_path_from_env()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a JSON object")

    data = dict(data)
    for env_key, key in (('DOCS_READER_USERNAME', 'username'),
                         ('DOCS_READER_PASSWORD', 'password'),
                         ('DOCS_READER_PORT', 'port')):
        if environ.get(env_key):
            data[key] = environ[env_key]

    repo_url = data.get('repoUrl')
    if not isinstance(repo_url, str) or not repo_url.strip():
        raise ConfigError(f"'repoUrl' is required in {path}")

    mirror_dir = Path(data.get('mirrorDir') or DEFAULT_MIRROR_DIR)

    return Config(
        repo_url=repo_url.strip(),
        username=data.get('username') or None,
        password=data.get('password') or None,
        update_interval_minutes=_as_int(data, 'updateIntervalMinutes', 0),
        port=_as_int(data, 'port', DEFAULT_PORT),
        host=data.get('host') or '0.0.0.0',
        mirror_dir=mirror_dir.absolute(),
    )

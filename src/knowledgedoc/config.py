"""Settings loaded from the YAML config file and the environment."""

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from knowledgedoc.markdown import DEFAULT_SECTION_LEVEL

# Default paths relative to project root
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "knowledgedoc.yaml"
DEFAULT_DOCUMENT_PATH = Path("knowledge.md")

ENV_DOCUMENT = "KNOWLEDGEDOC_FILE"
ENV_SECTION_LEVEL = "KNOWLEDGEDOC_SECTION_LEVEL"


@dataclass
class Settings:
    """Resolved configuration for the CLI and the web API."""

    document: Path = DEFAULT_DOCUMENT_PATH
    section_level: int = DEFAULT_SECTION_LEVEL
    host: str = "127.0.0.1"
    port: int = 8000


def _parse_level(value) -> int:
    try:
        level = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"section_level must be an integer, got {value!r}") from None
    if not 1 <= level <= 6:
        raise ValueError(f"section_level must be between 1 and 6, got {level}")
    return level


def _parse_port(value) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"server.port must be an integer, got {value!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"server.port out of range: {port}")
    return port


def load_config(config_path: Path | None = None) -> dict:
    """Load raw configuration from a YAML file.

    Args:
        config_path: Path to config file, defaults to config/knowledgedoc.yaml

    Returns:
        Configuration dictionary, empty if the file does not exist
    """
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}

    with open(path) as f:
        config = yaml.safe_load(f)

    if not config:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return config


def load_settings(config_path: Path | None = None, environ: dict | None = None) -> Settings:
    """Build settings from the config file, then apply environment overrides.

    Relative document paths in the config file resolve against the
    directory holding the config file.

    Args:
        config_path: Path to config file, defaults to config/knowledgedoc.yaml
        environ: Environment mapping, defaults to os.environ

    Raises:
        ValueError: If a configured value is invalid
    """
    path = config_path or DEFAULT_CONFIG_PATH
    config = load_config(path)
    environ = os.environ if environ is None else environ
    settings = Settings()

    if config.get("document"):
        document = Path(config["document"])
        if not document.is_absolute():
            document = path.parent / document
        settings.document = document
    if "section_level" in config:
        settings.section_level = _parse_level(config["section_level"])

    server = config.get("server") or {}
    if "host" in server:
        settings.host = str(server["host"])
    if "port" in server:
        settings.port = _parse_port(server["port"])

    if environ.get(ENV_DOCUMENT):
        settings.document = Path(environ[ENV_DOCUMENT])
    if environ.get(ENV_SECTION_LEVEL):
        settings.section_level = _parse_level(environ[ENV_SECTION_LEVEL])

    return settings

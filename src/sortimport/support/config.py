"""
Configuration management for sortimport.
"""

from dataclasses import dataclass, field
import logging
from pathlib import Path
import sys

# Compat for Python < 3.11
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

LOG = logging.getLogger(__name__)

CONFIG_FILENAME = ".sortimport.toml"


@dataclass
class SortImportConfig:
    """Configuration settings for sortimport."""

    local: str = ""  # comma-separated local prefixes
    second: str = ""  # comma-separated second-party prefixes
    cache_dir: str | None = None  # defaults to ~/.cache/sortimport
    go_binary: str = "go"
    exclude_dirs: list[str] = field(
        default_factory=lambda: [
            "vendor",
            "testdata",
            "node_modules",
            ".git",
        ]
    )


def load_config(path: Path | None = None) -> SortImportConfig:
    """
    Load configuration.
    Args:
        path: Path to a config file OR a directory containing .sortimport.toml.
              If None, the current working directory is used.
    """
    if path is None:
        path = Path.cwd()

    if path.is_dir():
        config_path = path / CONFIG_FILENAME
    else:
        config_path = path

    if not config_path.exists():
        return SortImportConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        LOG.warning("ignoring unreadable config %s: %s", config_path, e)
        return SortImportConfig()

    # Settings may live under [sortimport] or at the top level
    config_data = data.get("sortimport", data)

    valid_keys = SortImportConfig.__annotations__.keys()
    filtered_data = {k: v for k, v in config_data.items() if k in valid_keys}

    return SortImportConfig(**filtered_data)

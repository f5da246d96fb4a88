#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for astwalk.

This module handles automatic discovery of configuration files, loading
configs from TOML, YAML or JSON, and turning them into
:class:`~astwalk.options.TraverserOptions`.

Traverser settings live either in a ``[traverser]`` table or at the root of a
dedicated config file, or in the ``[tool.astwalk]`` (optionally
``[tool.astwalk.traverser]``) table of ``pyproject.toml``::

    [tool.astwalk.traverser]
    single_slot_removal = "clear"
    max_depth = 2000
"""

import json
import logging
import os
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from astwalk.constants import CONFIG_ENV_VAR, CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION, TRAVERSER_CONFIG_SECTION
from astwalk.exceptions import ConfigurationError, ValidationError
from astwalk.options import TraverserOptions

logger = logging.getLogger(__name__)

_DEDICATED_CONFIG_FILENAMES = [name for name in CONFIG_FILENAMES if name != "pyproject.toml"]


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load [tool.astwalk] section from pyproject.toml file.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        Configuration dictionary from [tool.astwalk] section, or empty dict if not found

    Raises
    ------
    ConfigurationError
        If pyproject.toml cannot be parsed

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}", str(pyproject_path), e) from e
    except OSError as e:
        raise ConfigurationError(f"Error reading pyproject.toml {pyproject_path}: {e}", str(pyproject_path), e) from e

    config = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION)
    if config is None:
        return {}

    if not isinstance(config, dict):
        raise ConfigurationError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, "
            f"got {type(config).__name__}",
            str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find configuration file by searching parent directories.

    Walks up the directory tree from start_dir to the filesystem root,
    checking each directory for configuration files in priority order:
    1. .astwalk.toml
    2. .astwalk.yaml / .astwalk.yml
    3. .astwalk.json
    4. pyproject.toml (with [tool.astwalk] section)

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        for filename in _DEDICATED_CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigurationError as e:
                # A broken pyproject.toml belonging to another project must not stop discovery
                logger.debug(f"Skipping unreadable {pyproject_path}: {e}")

        parent = current.parent
        if parent == current:
            break

        current = parent

    return None


def discover_config_file() -> Optional[Path]:
    """Discover configuration file in standard locations.

    Search order:

    1. The path named by the ``ASTWALK_CONFIG`` environment variable
    2. Parent directory search from the current working directory
    3. Dedicated config files in the user's home directory

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    Raises
    ------
    ConfigurationError
        If ``ASTWALK_CONFIG`` names a file that does not exist

    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        if not path.is_file():
            raise ConfigurationError(f"{CONFIG_ENV_VAR} points to a missing file: {env_path}", env_path)
        return path

    config_in_parents = find_config_in_parents()
    if config_in_parents:
        return config_in_parents

    home = Path.home()
    for filename in _DEDICATED_CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from TOML, YAML, JSON, or pyproject.toml file.

    Auto-detects format based on file extension and name.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    ConfigurationError
        If the file cannot be read, parsed, or has invalid format

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file does not exist: {config_path}", str(config_path))

    if not config_path.is_file():
        raise ConfigurationError(f"Configuration path is not a file: {config_path}", str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_section(config_path)
    if ext == ".toml":
        return _load_toml_config(config_path)
    if ext in (".yaml", ".yml"):
        return _load_yaml_config(config_path)
    if ext == ".json":
        return _load_json_config(config_path)

    raise ConfigurationError(
        f"Unsupported config file format: {ext}. Use .toml, .yaml or .json", str(config_path)
    )


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigurationError(f"Error reading TOML config {config_path}: {e}", str(config_path), e) from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigurationError(f"Error reading JSON config {config_path}: {e}", str(config_path), e) from e

    if not isinstance(config, dict):
        raise ConfigurationError(
            f"JSON config file must contain an object, got {type(config).__name__}", str(config_path)
        )
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigurationError(f"Error reading YAML config {config_path}: {e}", str(config_path), e) from e

    # An empty YAML document loads as None
    if config is None:
        return {}

    if not isinstance(config, dict):
        raise ConfigurationError(
            f"YAML config file must contain a mapping, got {type(config).__name__}", str(config_path)
        )
    return config


def options_from_config(config: Dict[str, Any], config_path: Optional[str] = None) -> TraverserOptions:
    """Build traverser options from a loaded configuration dictionary.

    Parameters
    ----------
    config : dict
        Configuration dictionary; settings are read from its ``traverser``
        table when present, otherwise from the root
    config_path : str, optional
        Source file, for error messages

    Returns
    -------
    TraverserOptions
        Options with the configured values applied over the defaults

    Raises
    ------
    ConfigurationError
        If the settings contain unknown keys or invalid values

    Examples
    --------
    >>> options_from_config({"traverser": {"max_depth": 100}}).max_depth
    100

    """
    settings = config.get(TRAVERSER_CONFIG_SECTION, config)
    if not isinstance(settings, dict):
        raise ConfigurationError(
            f"[{TRAVERSER_CONFIG_SECTION}] must be a table, got {type(settings).__name__}", config_path
        )

    known = set(TraverserOptions.field_names())
    unknown = sorted(key for key in settings if key not in known)
    if unknown:
        raise ConfigurationError(
            f"Unknown traverser option(s): {', '.join(unknown)}. Valid options: {', '.join(sorted(known))}",
            config_path,
        )

    try:
        return TraverserOptions(**settings)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid traverser configuration: {e.message}", config_path, e) from e


def load_options(config_path: Path | str | None = None) -> TraverserOptions:
    """Load traverser options from an explicit or discovered config file.

    Parameters
    ----------
    config_path : Path, str or None
        Explicit config file. When None, :func:`discover_config_file` is used.

    Returns
    -------
    TraverserOptions
        Configured options, or defaults when no config file is found

    """
    path = Path(config_path) if config_path is not None else discover_config_file()
    if path is None:
        logger.debug("No astwalk config file found, using default traverser options")
        return TraverserOptions()

    logger.debug(f"Loading traverser options from {path}")
    return options_from_config(load_config_file(path), str(path))

"""Load Forth configuration"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import toml

from .config_classes import InterpreterConfig
from .exceptions import UserResolvableError

LOG = logging.getLogger(__name__)

DEFAULT_CONFIG_FILEPATH = Path("forth.toml")


class ConfigError(UserResolvableError):
    """Error loading configuration"""


@dataclass
class Config:
    config_file: Union[Path, None]
    interpreter: InterpreterConfig


def load(config_file: Union[str, Path, None] = None) -> Config:
    """Load the configuration.

    Without an explicit file, forth.toml in the working directory is used if
    it exists, and defaults otherwise.
    """
    if config_file:
        config_file = Path(config_file)
        if not config_file.exists():
            raise ConfigError(
                f"{config_file} not found", "Check the path given with --config."
            )
    elif DEFAULT_CONFIG_FILEPATH.exists():
        config_file = DEFAULT_CONFIG_FILEPATH
    else:
        LOG.debug("No %s, using defaults", DEFAULT_CONFIG_FILEPATH)
        return Config(config_file=None, interpreter=InterpreterConfig())

    try:
        data = toml.load(config_file)
    except toml.TomlDecodeError as exc:
        raise ConfigError(f"Can't parse {config_file}", str(exc)) from exc

    section = data.pop("interpreter", {})
    if data:
        LOG.warning("Ignoring unknown sections in %s: %s", config_file, list(data))

    try:
        interpreter = InterpreterConfig(**section)
    except TypeError as exc:
        raise ConfigError(
            f"Bad [interpreter] section in {config_file}",
            "Supported keys: stack_size, stack_file, preserve_stack_on.",
        ) from exc
    except ValueError as exc:
        raise ConfigError(f"Bad [interpreter] section in {config_file}", str(exc)) from exc

    LOG.info("Loaded %s", config_file)
    return Config(config_file=config_file, interpreter=interpreter)

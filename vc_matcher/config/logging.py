"""Logging setup for applications embedding the matcher."""

import io
import logging
import os
from importlib import resources
from logging.config import dictConfig, fileConfig
from typing import IO, Optional, Tuple, Union

import yaml
from pythonjsonlogger import jsonlogger

from .base import SettingsLike
from .settings import Settings

DEFAULT_LOGGING_CONFIG_PATH_INI = "vc_matcher.config:default_logging_config.ini"
LOG_FORMAT_JSON_PATTERN = "%(asctime)s %(levelname)s %(name)s %(message)s"
YAML_SUFFIXES = (".yml", ".yaml")


def load_resource(path: str, encoding: str = None) -> Optional[IO]:
    """
    Open a config file from disk or from inside an installed package.

    Args:
        path: `some/file.ini`, or `package.name:file.ini` for packaged data
        encoding: text encoding; the stream is binary when omitted

    Returns:
        An open stream, or None when the file cannot be opened

    """
    package, sep, resource = path.rpartition(":")
    try:
        if not sep:
            return open(path, encoding=encoding)
        stream = resources.files(package).joinpath(resource).open("rb")
    except (OSError, ModuleNotFoundError):
        return None
    return io.TextIOWrapper(stream, encoding=encoding) if encoding else stream


class LoggingConfigurator:
    """Configure the root logger from a config file and a few overrides."""

    default_config_path_ini = DEFAULT_LOGGING_CONFIG_PATH_INI

    @classmethod
    def configure(
        cls,
        log_config_path: str = None,
        log_level: str = None,
        log_file: str = None,
        log_json: bool = False,
    ):
        """Configure logger.

        :param log_config_path: INI or YAML logging config; the packaged
            default when omitted
        :param log_level: root level, else the LOG_LEVEL environment variable
        :param log_file: also append records to this file
        :param log_json: emit records as JSON objects
        """
        cls._apply_config(log_config_path or cls.default_config_path_ini)

        root = logging.getLogger()
        if log_file:
            root.addHandler(logging.FileHandler(log_file, encoding="utf-8"))
        if log_json:
            formatter = jsonlogger.JsonFormatter(LOG_FORMAT_JSON_PATTERN)
            for handler in root.handlers:
                handler.setFormatter(formatter)

        level = log_level or os.getenv("LOG_LEVEL")
        if level:
            root.setLevel(level.upper())

    @classmethod
    def configure_from_settings(cls, settings: SettingsLike):
        """Configure logging from the `log.*` settings."""
        settings = Settings.coerce(settings)
        cls.configure(
            log_config_path=settings.get_str("log.config"),
            log_level=settings.get_str("log.level"),
            log_file=settings.get_str("log.file"),
            log_json=settings.get_bool("log.json", default=False),
        )

    @classmethod
    def _apply_config(cls, log_config_path: str):
        config, is_dict_config = cls._read_config(log_config_path)
        if config is None:
            logging.basicConfig(level=logging.WARNING)
            logging.getLogger().warning(
                "Logging config file not found: %s", log_config_path
            )
        elif is_dict_config:
            dictConfig(config)
        else:
            with config:
                fileConfig(config, disable_existing_loggers=False)

    @classmethod
    def _read_config(cls, log_config_path: str) -> Tuple[Union[dict, IO, None], bool]:
        if log_config_path.endswith(YAML_SUFFIXES):
            with open(log_config_path, "r") as stream:
                return yaml.safe_load(stream), True
        return load_resource(log_config_path, "utf-8"), False
